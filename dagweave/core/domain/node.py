"""Node: one application record held by a DirectedAcyclicGraph."""

from collections.abc import Hashable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from dagweave.core.domain.traversal import Direction

if TYPE_CHECKING:
    from dagweave.core.domain.dag import DirectedAcyclicGraph

Record = Mapping[str, Any]

_MISSING = object()


class Node:
    """A vertex wrapping the caller's record.

    The node keeps no edges of its own; :meth:`children` and :meth:`parents`
    read the owning graph's adjacency index. The record is stored by reference.
    """

    __slots__ = ("data", "graph")

    def __init__(self, data: Record, graph: "DirectedAcyclicGraph") -> None:
        self.data = data
        self.graph = graph

    @property
    def key(self) -> Hashable:
        """Value of the graph's unique-key field in the record."""
        return self.data[self.graph.unique_key]

    def children(self) -> tuple[Hashable, ...]:
        """Child keys in insertion order."""
        return self.graph.children_of(self.key)

    def parents(self) -> tuple[Hashable, ...]:
        """Parent keys in insertion order."""
        return self.graph.parents_of(self.key)

    def adjacent(self, direction: Direction) -> Iterator["Node"]:
        """Yield neighbouring nodes, children for DOWN and parents for UP.

        Keys without a stored vertex are skipped.
        """
        keys = self.parents() if direction is Direction.UP else self.children()
        for key in keys:
            if (node := self.graph.lookup(key)) is not None:
                yield node

    def matches(self, query: Record | None) -> bool:
        """Check whether every field of ``query`` equals the record's field.

        An empty or missing query never matches.

        Examples
        --------
        >>> from dagweave.core.domain.dag import DirectedAcyclicGraph
        >>> graph = DirectedAcyclicGraph(unique_key="letter")
        >>> graph.add_vertex({"letter": "a", "text": "root"})
        >>> node = graph.lookup("a")
        >>> node.matches({"letter": "a"}), node.matches({"letter": "b"}), node.matches({})
        (True, False, False)
        """
        if not query:
            return False
        return all(self.data.get(field, _MISSING) == value for field, value in query.items())

    def same_record(self, other: "Node") -> bool:
        """Compare records field by field against ``other``'s record."""
        return self.matches(other.data)

    def __repr__(self) -> str:
        return f"Node({self.key!r})"
