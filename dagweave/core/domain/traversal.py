"""Depth-first traversal shared by every read-only graph query.

The search keeps no visited set. A node reachable along several paths is
visited once per path, and lineage queries rely on that multiplicity.
The walk uses an explicit stack, so graph depth is not bounded by the
interpreter recursion limit. Termination depends on the graph being acyclic;
on a cyclic graph (possible only when cycle checking is disabled) the walk
never ends.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dagweave.core.domain.node import Node


class Direction(str, Enum):
    """Which adjacency list the search follows."""

    DOWN = "down"  # via children
    UP = "up"  # via parents


NodeVisitor = Callable[["Node", int], Any]


def depth_first_search(
    node: "Node",
    *,
    direction: Direction = Direction.DOWN,
    query: Mapping[str, Any] | None = None,
    visitor: NodeVisitor | None = None,
    depth: int = 0,
) -> Mapping[str, Any] | None:
    """Visit ``node`` and everything reachable from it in pre-order.

    Parameters
    ----------
    node : Node
        Where the search starts
    direction : Direction, default=Direction.DOWN
        Follow children (DOWN) or parents (UP)
    query : Mapping[str, Any] | None
        Field values to look for; the first node whose record matches ends
        the search
    visitor : NodeVisitor | None
        Called as ``visitor(node, depth)`` for each visit, before the node is
        tested against the query
    depth : int, default=0
        Distance of ``node`` from the start of the search

    Returns
    -------
    Mapping[str, Any] | None
        The matching record, or None when there is no query or no match

    Examples
    --------
    >>> from dagweave.core.domain.dag import DirectedAcyclicGraph
    >>> graph = DirectedAcyclicGraph()
    >>> _ = graph.add_edge({"id": "a"}, {"id": "b"}).add_edge({"id": "b"}, {"id": "c"})
    >>> seen = []
    >>> depth_first_search(graph.lookup("a"), visitor=lambda n, d: seen.append((n.key, d)))
    >>> seen
    [('a', 0), ('b', 1), ('c', 2)]
    >>> depth_first_search(graph.lookup("c"), direction=Direction.UP, query={"id": "a"})
    {'id': 'a'}
    """
    # Neighbours are pushed in reverse so they pop in list order (pre-order)
    stack: list[tuple["Node", int]] = [(node, depth)]
    while stack:
        current, current_depth = stack.pop()
        if visitor is not None:
            visitor(current, current_depth)

        if query and current.matches(query):
            return current.data

        neighbours = list(current.adjacent(direction))
        stack.extend((neighbour, current_depth + 1) for neighbour in reversed(neighbours))

    return None
