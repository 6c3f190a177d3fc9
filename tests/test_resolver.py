"""Tests for component discovery, selection, validation and planning."""

from __future__ import annotations

import random

import networkx as nx
import pytest

from commresolve.exceptions import TopologyError
from commresolve.resolver.components import Component, find_components
from commresolve.resolver.models import ValidationPolicy
from commresolve.resolver.planner import plan_evictions
from commresolve.resolver.selector import pick_largest
from commresolve.resolver.validator import is_fully_connected
from commresolve.topology.bitset import BitIndexSet
from commresolve.topology.models import Node
from commresolve.topology.oracle import CallableOracle, CountingOracle, GraphOracle


def _random_topology(seed: int, size: int, density: float) -> tuple[list[Node], nx.DiGraph]:
    rng = random.Random(seed)
    nodes = [Node(id=f"n{i}", is_client=rng.random() < 0.3) for i in range(size)]
    graph = nx.DiGraph()
    graph.add_nodes_from(n.id for n in nodes)
    for a in nodes:
        for b in nodes:
            if a is not b and rng.random() < density:
                graph.add_edge(a.id, b.id)
    return nodes, graph


def _component(size: int, nodes: list[Node], indices: list[int]) -> Component:
    comp = Component(members=BitIndexSet(size), start_index=min(indices))
    for idx in indices:
        comp.add(idx, nodes[idx])
    return comp


class TestFindComponents:
    def test_full_mesh_is_one_component(self, five_nodes, full_mesh):
        comps = find_components(five_nodes, full_mesh)
        assert len(comps) == 1
        assert comps[0].indices() == [0, 1, 2, 3, 4]
        assert comps[0].node_count == 5
        assert comps[0].server_count == 3

    def test_split_groups(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 1), (1, 2)])
        comps = find_components(five_nodes, oracle)

        assert [c.indices() for c in comps] == [[0, 1, 2], [3], [4]]
        assert [c.server_count for c in comps] == [2, 1, 0]
        assert [c.node_count for c in comps] == [3, 1, 1]

    def test_one_way_link_merges(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, directed=[(4, 3)])
        comps = find_components(five_nodes, oracle)
        assert [3, 4] in [c.indices() for c in comps]

    def test_transitive_grouping(self, five_nodes, make_oracle):
        # 0 -> 4 -> 2 -> 3 chain; 1 isolated
        oracle = make_oracle(five_nodes, directed=[(0, 4), (2, 4), (3, 2)])
        comps = find_components(five_nodes, oracle)
        assert [c.indices() for c in comps] == [[0, 2, 3, 4], [1]]

    def test_discovery_order_is_ascending(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(1, 4), (0, 3)])
        comps = find_components(five_nodes, oracle)
        assert [c.start_index for c in comps] == [0, 1, 2]
        assert [c.indices() for c in comps] == [[0, 3], [1, 4], [2]]

    def test_isolated_nodes_are_singletons(self, five_nodes, make_oracle):
        comps = find_components(five_nodes, make_oracle(five_nodes))
        assert [c.indices() for c in comps] == [[0], [1], [2], [3], [4]]

    def test_empty_topology(self, make_oracle):
        with pytest.raises(TopologyError):
            find_components([], make_oracle([]))

    def test_large_chain_does_not_recurse(self):
        size = 1500
        nodes = [Node(id=str(i)) for i in range(size)]
        oracle = CallableOracle(lambda a, b: int(b.id) == int(a.id) + 1)
        comps = find_components(nodes, oracle)
        assert len(comps) == 1
        assert comps[0].node_count == size

    def test_fresh_state_per_call(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 1)])
        first = find_components(five_nodes, oracle)
        second = find_components(five_nodes, oracle)
        assert [c.indices() for c in first] == [c.indices() for c in second]

    @pytest.mark.parametrize("seed", range(8))
    def test_partition_property(self, seed):
        nodes, graph = _random_topology(seed, size=30, density=0.03)
        comps = find_components(nodes, GraphOracle(graph))

        seen: set[int] = set()
        for comp in comps:
            indices = set(comp.indices())
            assert not indices & seen
            seen |= indices
            assert comp.server_count <= comp.node_count
            assert comp.node_count == len(indices)
        assert seen == set(range(len(nodes)))

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_weak_components(self, seed):
        nodes, graph = _random_topology(seed, size=25, density=0.04)
        comps = find_components(nodes, GraphOracle(graph))

        found = {frozenset(nodes[i].id for i in c.indices()) for c in comps}
        expected = {frozenset(c) for c in nx.weakly_connected_components(graph)}
        assert found == expected

    def test_each_pair_queried_once_per_direction_at_most(self, five_nodes, full_mesh):
        counting = CountingOracle(full_mesh)
        find_components(five_nodes, counting)
        assert counting.queries <= len(five_nodes) * (len(five_nodes) - 1)


class TestPickLargest:
    def test_most_servers_wins(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 2), (1, 3)])
        comps = find_components(five_nodes, oracle)
        # {0,2}: 1 server, {1,3}: 2 servers, {4}: 0 servers
        assert pick_largest(comps).indices() == [1, 3]

    def test_clients_do_not_count(self, five_nodes, make_oracle):
        # {0}: 1 server vs {2,3,4}: 1 server + 2 clients -> tie, first wins
        oracle = make_oracle(five_nodes, mutual=[(2, 3), (3, 4)])
        comps = find_components(five_nodes, oracle)
        assert pick_largest(comps).indices() == [0]

    def test_tie_goes_to_lowest_index(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 2), (3, 4)])
        comps = find_components(five_nodes, oracle)
        selected = pick_largest(comps)
        assert selected.start_index == 0
        assert selected.indices() == [0, 2]

    def test_tie_break_ignores_list_order(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 2), (3, 4)])
        comps = find_components(five_nodes, oracle)
        assert pick_largest(list(reversed(comps))).start_index == 0

    def test_selection_is_a_discovered_component(self, five_nodes, make_oracle):
        comps = find_components(five_nodes, make_oracle(five_nodes, mutual=[(3, 4)]))
        assert any(c is pick_largest(comps) for c in comps)

    def test_empty(self):
        with pytest.raises(TopologyError):
            pick_largest([])


class TestIsFullyConnected:
    def test_full_mesh(self, five_nodes, full_mesh):
        comp = _component(5, five_nodes, [0, 1, 2, 3, 4])
        assert is_fully_connected(comp, five_nodes, full_mesh)

    def test_singleton_always_connected(self, five_nodes):
        comp = _component(5, five_nodes, [3])
        never = CallableOracle(lambda a, b: False)
        assert is_fully_connected(comp, five_nodes, never)
        assert is_fully_connected(comp, five_nodes, never, ValidationPolicy.LENIENT)

    def test_missing_direction_fails(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 1), (0, 2)], directed=[(1, 2)])
        comp = _component(5, five_nodes, [0, 1, 2])
        assert not is_fully_connected(comp, five_nodes, oracle)

    def test_lenient_accepts_one_way(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 1), (0, 2)], directed=[(1, 2)])
        comp = _component(5, five_nodes, [0, 1, 2])
        assert is_fully_connected(comp, five_nodes, oracle, ValidationPolicy.LENIENT)

    def test_policy_accepts_string_values(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, mutual=[(0, 1), (0, 2)], directed=[(1, 2)])
        comp = _component(5, five_nodes, [0, 1, 2])
        assert is_fully_connected(comp, five_nodes, oracle, "lenient")
        assert not is_fully_connected(comp, five_nodes, oracle, "directed")

    def test_unknown_policy_string(self, five_nodes, full_mesh):
        comp = _component(5, five_nodes, [0, 1])
        with pytest.raises(ValueError):
            is_fully_connected(comp, five_nodes, full_mesh, "sometimes")

    def test_transitive_only_fails_both_policies(self, five_nodes, make_oracle):
        # 0 <-> 1 <-> 2 but no direct 0 - 2 link
        oracle = make_oracle(five_nodes, mutual=[(0, 1), (1, 2)])
        comp = _component(5, five_nodes, [0, 1, 2])
        assert not is_fully_connected(comp, five_nodes, oracle)
        assert not is_fully_connected(comp, five_nodes, oracle, ValidationPolicy.LENIENT)

    def test_sparse_selection_uses_absolute_indices(self, five_nodes, make_oracle):
        # Members 3 and 4 only; index 0 and 1 are outside and unreachable.
        oracle = make_oracle(five_nodes, mutual=[(3, 4)])
        comp = _component(5, five_nodes, [3, 4])
        assert is_fully_connected(comp, five_nodes, oracle)

    def test_sparse_selection_detects_missing_link(self, five_nodes, make_oracle):
        oracle = make_oracle(five_nodes, directed=[(3, 4)])
        comp = _component(5, five_nodes, [3, 4])
        assert not is_fully_connected(comp, five_nodes, oracle)

    def test_only_members_are_queried(self, five_nodes):
        asked: list[tuple[str, str]] = []

        def answer(a: Node, b: Node) -> bool:
            asked.append((a.id, b.id))
            return True

        comp = _component(5, five_nodes, [1, 3])
        assert is_fully_connected(comp, five_nodes, CallableOracle(answer))
        assert sorted(asked) == [("n1", "n3"), ("n3", "n1")]


class TestPlanEvictions:
    def test_strict_subset_validated(self, five_nodes):
        comp = _component(5, five_nodes, [0, 1, 2])
        evicted = plan_evictions(comp, five_nodes, fully_connected=True)
        assert [n.id for n in evicted] == ["n3", "n4"]

    def test_not_validated(self, five_nodes):
        comp = _component(5, five_nodes, [0, 1, 2])
        assert plan_evictions(comp, five_nodes, fully_connected=False) == []

    def test_whole_cluster(self, five_nodes):
        comp = _component(5, five_nodes, [0, 1, 2, 3, 4])
        assert plan_evictions(comp, five_nodes, fully_connected=True) == []

    def test_sparse_complement(self, five_nodes):
        comp = _component(5, five_nodes, [1, 4])
        evicted = plan_evictions(comp, five_nodes, fully_connected=True)
        assert [n.id for n in evicted] == ["n0", "n2", "n3"]

    def test_evictions_are_snapshot_nodes(self, five_nodes):
        comp = _component(5, five_nodes, [2])
        evicted = plan_evictions(comp, five_nodes, fully_connected=True)
        assert all(n is five_nodes[i] for n, i in zip(evicted, [0, 1, 3, 4]))
