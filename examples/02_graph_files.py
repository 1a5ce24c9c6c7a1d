#!/usr/bin/env python3
"""
📄 Example 02: Graph Files and Configuration

Load a graph from YAML and draw it with Rich. This example teaches:
- Reading a graph file with load_graph_file/build_graph
- Overriding the file's graph settings with a GraphConfig
- Turning on diagnostic logging with configure_logging and debug=True

Run: python examples/02_graph_files.py
"""

from pathlib import Path

from rich.console import Console

from dagweave import GraphConfig
from dagweave.core.logging import configure_logging
from dagweave.io import build_graph, load_graph_file
from dagweave.visualization import build_tree

GRAPH_FILE = Path(__file__).with_name("letters.yaml")


def main() -> None:
    """Load, draw and mutate the letters graph."""
    console = Console()
    console.print("[bold]📄 Example 02: Graph Files and Configuration[/bold]")

    document = load_graph_file(GRAPH_FILE)
    graph = build_graph(document, source=GRAPH_FILE)
    console.print(build_tree(graph, title=GRAPH_FILE.name))

    # Same file, keyed the same way but labelled by key and with diagnostics on
    configure_logging(level="INFO", format="rich")
    config = GraphConfig(unique_key="letter", description_key="letter", debug=True)
    graph = build_graph(document, config=config, source=GRAPH_FILE)
    graph.remove_vertex({"letter": "b"})
    graph.remove_edge({"letter": "b"}, {"letter": "c"})
    console.print(build_tree(graph, title="after removing b"))


if __name__ == "__main__":
    main()
