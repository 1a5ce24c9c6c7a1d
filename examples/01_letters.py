#!/usr/bin/env python3
"""
🔤 Example 01: The Letters Graph

Build a small DAG of letter records and query it. This example teaches:
- Adding edges between plain dict records
- How the root moves when the root gets a parent
- Descendants, ancestors and branch-point paths
- Removing a vertex and watching its parents adopt its children

Run: python examples/01_letters.py
"""

from dagweave import CycleDetectedError, DirectedAcyclicGraph

LETTERS = {
    "a": {"letter": "a", "text": "b is my child"},
    "b": {"letter": "b", "text": "a is my parent and c and d are my children"},
    "c": {"letter": "c", "text": "b is my parent"},
    "d": {"letter": "d", "text": "b is my parent"},
    "e": {"letter": "e", "text": "a is my parent and f and g are my children"},
    "f": {"letter": "f", "text": "e is my parent"},
    "g": {"letter": "g", "text": "e is my parent"},
    "z": {"letter": "z", "text": "a is my child"},
}


def upper(record: dict) -> str:
    return record["letter"].upper()


def main() -> None:
    """Walk through the letters graph."""
    print("🔤 Example 01: The Letters Graph")
    print("=" * 50)

    graph = DirectedAcyclicGraph(unique_key="letter", description_key="text", check_cycles=True)
    for parent, child in ("ab", "bc", "bd", "ae", "ef", "eg"):
        graph.add_edge(LETTERS[parent], LETTERS[child])
    print(f"\n📊 Root after the first edges: {graph.root}")

    graph.add_edge(LETTERS["z"], LETTERS["a"])
    print(f"📊 Root after z -> a: {graph.root}\n")
    print(graph)

    print(f"⬇️  Descendants of b: {graph.descendants_of(LETTERS['b'], upper)}")
    print(f"⬆️  Ancestors of g:   {graph.ancestors_of(LETTERS['g'], upper)}")
    print(f"🧭 Path z -> g:      {graph.find_edge(LETTERS['z'], LETTERS['g'], upper)}")

    try:
        graph.add_edge(LETTERS["g"], LETTERS["z"])
    except CycleDetectedError as e:
        print(f"\n🚫 {e}")

    graph.add_edge(LETTERS["d"], LETTERS["g"])
    print("\n➕ Added d -> g; g is now listed under both of its parents:\n")
    print(graph)

    graph.remove_vertex(LETTERS["e"])
    print("➖ Removed e; a adopts f and g:\n")
    print(graph)


if __name__ == "__main__":
    main()
