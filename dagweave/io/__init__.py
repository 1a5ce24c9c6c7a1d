"""Reading graphs from definition files."""

from dagweave.io.graph_file import EdgeSpec, GraphDocument, build_graph, load_graph_file

__all__ = ["EdgeSpec", "GraphDocument", "build_graph", "load_graph_file"]
