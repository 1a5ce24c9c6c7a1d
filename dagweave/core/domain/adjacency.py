"""Edge storage for the DAG: ordered parent and child lists per key."""

from collections.abc import Hashable, Iterator

Key = Hashable


class AdjacencyIndex:
    """Two ordered multimaps holding the edge set.

    ``children[p]`` lists the child keys of ``p`` and ``parents[c]`` the parent
    keys of ``c``, both in insertion order. The same pair may appear more than
    once: every :meth:`link` appends, and every :meth:`unlink` removes a single
    occurrence from each side.

    Examples
    --------
    >>> index = AdjacencyIndex()
    >>> index.link("a", "b")
    >>> index.link("a", "b")
    >>> index.children_of("a")
    ('b', 'b')
    >>> index.unlink("a", "b")
    True
    >>> index.children_of("a"), index.parents_of("b")
    (('b',), ('a',))
    """

    __slots__ = ("_children", "_parents")

    def __init__(self) -> None:
        self._children: dict[Key, list[Key]] = {}
        self._parents: dict[Key, list[Key]] = {}

    def children_of(self, key: Key) -> tuple[Key, ...]:
        """Child keys of ``key`` in insertion order (empty if none)."""
        return tuple(self._children.get(key, ()))

    def parents_of(self, key: Key) -> tuple[Key, ...]:
        """Parent keys of ``key`` in insertion order (empty if none)."""
        return tuple(self._parents.get(key, ()))

    def link(self, parent_key: Key, child_key: Key) -> None:
        """Append one ``parent_key -> child_key`` occurrence."""
        self._children.setdefault(parent_key, []).append(child_key)
        self._parents.setdefault(child_key, []).append(parent_key)

    def unlink(self, parent_key: Key, child_key: Key) -> bool:
        """Remove the first ``parent_key -> child_key`` occurrence.

        Returns
        -------
        bool
            False if no such occurrence was recorded
        """
        children = self._children.get(parent_key)
        parents = self._parents.get(child_key)
        if not children or not parents or child_key not in children:
            return False

        children.remove(child_key)
        parents.remove(parent_key)
        return True

    def detach(self, key: Key) -> tuple[tuple[Key, ...], tuple[Key, ...]]:
        """Drop every edge touching ``key``.

        Each neighbour loses one entry per occurrence, so parallel edges are
        removed as well.

        Returns
        -------
        tuple
            The former ``(parents, children)`` of ``key``, in list order
        """
        former_parents = tuple(self._parents.pop(key, ()))
        former_children = tuple(self._children.pop(key, ()))

        for parent_key in former_parents:
            siblings = self._children.get(parent_key)
            if siblings and key in siblings:
                siblings.remove(key)

        for child_key in former_children:
            co_parents = self._parents.get(child_key)
            if co_parents and key in co_parents:
                co_parents.remove(key)

        return former_parents, former_children

    def edges(self) -> Iterator[tuple[Key, Key]]:
        """Yield every ``(parent, child)`` occurrence, grouped by parent."""
        for parent_key, children in self._children.items():
            for child_key in children:
                yield parent_key, child_key

    def __len__(self) -> int:
        """Number of edge occurrences."""
        return sum(len(children) for children in self._children.values())
