#!/usr/bin/env python3
"""Demo: Using CommResolve as a Python library.

This shows how to plug the resolver into a cluster of your own, not just
run it over scenario files from the CLI.
"""

from pathlib import Path

from commresolve.resolver import CommunicationProblemResolver, RecordingSink, SimpleProblemContext
from commresolve.topology import CallableOracle, Node, load_scenario


def main():
    # 1. A hand-built topology: a 3-node island cut off from two others
    nodes = [
        Node(id="server-a"),
        Node(id="server-b"),
        Node(id="client-c", is_client=True),
        Node(id="server-d"),
        Node(id="client-e", is_client=True),
    ]
    island = {"server-a", "server-b", "client-c"}

    def can_connect(a: Node, b: Node) -> bool:
        return a.id in island and b.id in island

    print("--- Hand-built topology ---")
    sink = RecordingSink()
    ctx = SimpleProblemContext(nodes, CallableOracle(can_connect), sink)
    result = CommunicationProblemResolver().resolve(ctx)

    for comp in result.components:
        print(f"  component {comp.node_ids} servers={comp.server_count}")
    print(f"  {result.render()}")
    print(f"  evicted: {[n.id for n in sink.evicted]}")

    # 2. The same decision from a scenario file, without evicting anything
    print("\n--- Scenario file (dry run) ---")
    scenario = load_scenario(Path(__file__).parent / "split_brain.json")
    resolver = CommunicationProblemResolver(dry_run=True)
    result = resolver.evaluate(scenario.snapshot, scenario.oracle())
    print(f"  {scenario.name}: {result.render()}")


if __name__ == "__main__":
    main()
