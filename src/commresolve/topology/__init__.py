"""Cluster topology snapshots and reachability oracles."""

from commresolve.topology.bitset import BitIndexSet
from commresolve.topology.models import Node, TopologySnapshot
from commresolve.topology.oracle import (
    CallableOracle,
    CountingOracle,
    GraphOracle,
    ProbeOracle,
    ReachabilityOracle,
)
from commresolve.topology.scenario import Scenario, load_scenario, parse_scenario

__all__ = [
    "BitIndexSet",
    "CallableOracle",
    "CountingOracle",
    "GraphOracle",
    "Node",
    "ProbeOracle",
    "ReachabilityOracle",
    "Scenario",
    "TopologySnapshot",
    "load_scenario",
    "parse_scenario",
]
