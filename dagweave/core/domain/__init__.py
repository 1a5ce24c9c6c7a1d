"""Graph domain model: nodes, adjacency, traversal and the DAG facade."""

from dagweave.core.domain.adjacency import AdjacencyIndex
from dagweave.core.domain.dag import DirectedAcyclicGraph
from dagweave.core.domain.node import Node
from dagweave.core.domain.traversal import Direction, depth_first_search

__all__ = [
    "AdjacencyIndex",
    "Direction",
    "DirectedAcyclicGraph",
    "Node",
    "depth_first_search",
]
