"""Rich tree view of a DirectedAcyclicGraph.

The tree follows the same pre-order walk as ``str(graph)``: a vertex reached
along several paths appears under each of them.
"""

from collections.abc import Mapping
from typing import Any

from rich.text import Text
from rich.tree import Tree

from dagweave.core.domain.dag import DirectedAcyclicGraph
from dagweave.core.domain.node import Node
from dagweave.core.domain.traversal import depth_first_search


def node_label(graph: DirectedAcyclicGraph, node: Node) -> Text:
    """``<key> (<description>)`` with the key in bold."""
    label = Text(str(node.key), style="bold cyan")
    label.append(f" ({node.data.get(graph.description_key)})", style="dim")
    return label


def build_tree(
    graph: DirectedAcyclicGraph,
    start: Mapping[str, Any] | None = None,
    title: str = "DAG",
) -> Tree:
    """Build a :class:`rich.tree.Tree` rooted at ``start`` (the graph root by default).

    An empty graph, or an unknown ``start``, yields a tree with only the title.
    """
    tree = Tree(Text(title, style="bold"), guide_style="dim")

    if start is None:
        first = graph.lookup(graph.root)
    else:
        first = graph.lookup(start.get(graph.unique_key))
    if first is None:
        return tree

    # branches[d] is the parent branch for nodes at depth d
    branches: list[Tree] = [tree]

    def attach(node: Node, depth: int) -> None:
        del branches[depth + 1 :]
        branches.append(branches[depth].add(node_label(graph, node)))

    depth_first_search(first, visitor=attach)
    return tree
