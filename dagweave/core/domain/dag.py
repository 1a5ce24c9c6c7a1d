"""DirectedAcyclicGraph: an in-memory DAG over caller-supplied records.

Records are plain mappings identified by a configurable unique-key field.
Vertices are created the first time a record is used as an edge endpoint (or
explicitly with :meth:`DirectedAcyclicGraph.add_vertex`) and live until
removed. Edges are ordered and not deduplicated: adding the same pair twice
yields two parallel edges.

Read-only queries all go through :func:`depth_first_search`, which keeps no
visited set. Lineage listings therefore repeat a node once for every path
that reaches it.
"""

from collections.abc import Callable, Hashable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from dagweave.core.domain.adjacency import AdjacencyIndex
from dagweave.core.domain.node import Node, Record
from dagweave.core.domain.traversal import Direction, depth_first_search
from dagweave.core.exceptions import CycleDetectedError, ValidationError
from dagweave.core.logging import get_logger

if TYPE_CHECKING:
    from dagweave.core.config.models import GraphConfig

Transform = Callable[[Record], Any]


class DirectedAcyclicGraph:
    """A directed acyclic graph of keyed records.

    Provides:
    - Vertex and edge mutation with optional cycle prevention
    - Vertex removal that reattaches former parents to former children
    - Depth-first search with query matching, upward or downward
    - Ancestor/descendant listings and branch-point path discovery
    - A plain-text rendering from the root

    Examples
    --------
    >>> graph = DirectedAcyclicGraph(unique_key="letter", check_cycles=True)
    >>> a, b, c = ({"letter": x, "text": f"node {x}"} for x in "abc")
    >>> _ = graph.add_edge(a, b).add_edge(b, c)
    >>> print(graph, end="")
    - a (node a)
    -- b (node b)
    --- c (node c)
    >>> graph.find_edge(a, c, lambda v: v["letter"])
    ['a', 'b', 'c']
    """

    def __init__(
        self,
        unique_key: str = "id",
        description_key: str = "text",
        check_cycles: bool = False,
        debug: bool = False,
    ) -> None:
        """Initialize an empty graph.

        Args
        ----
            unique_key: Record field holding each vertex's unique key
            description_key: Record field shown by the text rendering
            check_cycles: If True, :meth:`add_edge` rejects edges that would
                close a cycle
            debug: If True, diagnostics are logged at INFO instead of DEBUG

        Raises
        ------
        ValidationError
            If either field name is empty.
        """
        if not unique_key:
            raise ValidationError("unique_key", "cannot be empty")
        if not description_key:
            raise ValidationError("description_key", "cannot be empty")

        self.unique_key = unique_key
        self.description_key = description_key
        self.check_cycles = check_cycles
        self.debug = debug

        self._nodes: dict[Hashable, Node] = {}
        self._adjacency = AdjacencyIndex()
        self._root: Hashable | None = None
        self._logger = get_logger(__name__)

    @classmethod
    def from_config(cls, config: "GraphConfig") -> "DirectedAcyclicGraph":
        """Create an empty graph from a :class:`GraphConfig`."""
        return cls(
            unique_key=config.unique_key,
            description_key=config.description_key,
            check_cycles=config.check_cycles,
            debug=config.debug,
        )

    # ------------------------------------------------------------------
    # Vertex store
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> Mapping[Hashable, Node]:
        """Live read-only view of key -> Node."""
        return MappingProxyType(self._nodes)

    @property
    def root(self) -> Hashable | None:
        """Key of the default traversal start, or None."""
        return self._root

    def lookup(self, key: Hashable | None) -> Node | None:
        """Return the node stored under ``key``, if any."""
        if key is None:
            return None
        return self._nodes.get(key)

    def children_of(self, key: Hashable) -> tuple[Hashable, ...]:
        """Child keys of ``key`` in insertion order, duplicates included."""
        return self._adjacency.children_of(key)

    def parents_of(self, key: Hashable) -> tuple[Hashable, ...]:
        """Parent keys of ``key`` in insertion order, duplicates included."""
        return self._adjacency.parents_of(key)

    def edges(self) -> Iterator[tuple[Hashable, Hashable]]:
        """Yield every ``(parent_key, child_key)`` edge, parallel edges included."""
        return self._adjacency.edges()

    def add_vertex(self, record: Record) -> None:
        """Store ``record`` under its unique key unless the key is taken.

        Records without the unique-key field are ignored.
        """
        key = self._key_of(record)
        if key is None:
            self._log("Ignoring record without a '{field}' value", field=self.unique_key)
            return

        if key not in self._nodes:
            self._nodes[key] = Node(record, self)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_edge(self, parent: Record, child: Record) -> "DirectedAcyclicGraph":
        """Add an edge ``parent -> child``, creating either vertex if new.

        The edge is appended even if the pair already exists. If no root is
        set, or ``child`` is the current root, ``parent`` becomes the root.

        Args
        ----
            parent: Record of the parent vertex
            child: Record of the child vertex

        Returns
        -------
            Self for method chaining

        Raises
        ------
        CycleDetectedError
            If cycle checking is enabled and the edge would close a cycle.
            Nothing is modified in that case.
        """
        parent_key = self._key_of(parent)
        child_key = self._key_of(child)
        if parent_key is None or child_key is None:
            self._log("Ignoring edge with an endpoint missing '{field}'", field=self.unique_key)
            return self

        if self.check_cycles:
            self._check_cycles_in_edge(parent_key, child_key)

        if self._root is None or child_key == self._root:
            self._root = parent_key
            self._log("Added new root node '{root}'", root=parent_key)

        self._adjacency.link(parent_key, child_key)

        self.add_vertex(parent)
        self.add_vertex(child)

        return self

    def remove_edge(self, parent: Record, child: Record) -> None:
        """Remove one ``parent -> child`` edge, leaving both vertices in place.

        Parallel edges between the same pair are kept. Removing an edge that
        does not exist only logs a diagnostic.
        """
        parent_key = self._key_of(parent)
        child_key = self._key_of(child)

        if parent_key is None or child_key is None or not self._adjacency.unlink(
            parent_key, child_key
        ):
            self._log(
                "Attempted to remove an edge that does not exist: '{parent}' -> '{child}'",
                parent=parent_key,
                child=child_key,
            )
            return

        self._log("Removed edge between '{parent}' and '{child}'", parent=parent_key, child=child_key)

    def remove_vertex(self, record: Record) -> None:
        """Remove a vertex and reconnect its parents to its children.

        Every former parent gets an edge to every former child, added through
        :meth:`add_edge` so cycle checking and the root rule apply as usual.
        Removing a vertex that does not exist only logs a diagnostic.
        """
        key = self._key_of(record)
        if self.lookup(key) is None:
            self._log("Attempted to remove vertex '{key}' that does not exist", key=key)
            return

        former_parents, former_children = self._adjacency.detach(key)
        del self._nodes[key]
        if key == self._root:
            self._root = None

        for parent_key in former_parents:
            for child_key in former_children:
                parent_node = self._nodes.get(parent_key)
                child_node = self._nodes.get(child_key)
                if parent_node is None or child_node is None:
                    continue
                self._log(
                    "Adding edge between '{parent}' and '{child}'",
                    parent=parent_key,
                    child=child_key,
                )
                self.add_edge(parent_node.data, child_node.data)

        self._log("Removed vertex '{key}'", key=key)

    def _check_cycles_in_edge(self, parent_key: Hashable, child_key: Hashable) -> None:
        """Raise if ``parent_key -> child_key`` would close a cycle.

        Looks for a path from the child down to the parent. Self-edges are
        rejected outright.
        """
        if parent_key == child_key:
            raise CycleDetectedError(parent_key, child_key)

        parent_node = self._nodes.get(parent_key)
        child_node = self._nodes.get(child_key)
        if parent_node is None or child_node is None:
            return

        if len(self._find_edge(child_node, parent_node)) > 1:
            raise CycleDetectedError(parent_key, child_key)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def dfs(
        self,
        start: Record | None = None,
        query: Record | None = None,
        direction: Direction | str = Direction.DOWN,
        visitor: Callable[[Record], Any] | None = None,
    ) -> Record | None:
        """Depth-first search from ``start`` (the root by default).

        Args
        ----
            start: Record to start from; None starts at the root
            query: Field values to search for; the first match ends the search
            direction: "up" follows parents; any other value follows children
            visitor: Called with each visited record, once per path

        Returns
        -------
            The first record matching ``query``, or None

        Examples
        --------
        >>> graph = DirectedAcyclicGraph()
        >>> _ = graph.add_edge({"id": 1}, {"id": 2}).add_edge({"id": 1}, {"id": 3})
        >>> visited = []
        >>> graph.dfs(visitor=lambda record: visited.append(record["id"]))
        >>> visited
        [1, 2, 3]
        >>> graph.dfs(query={"id": 3})
        {'id': 3}
        """
        node = self.lookup(self._root) if start is None else self.lookup(self._key_of(start))
        if node is None:
            return None

        def visit(visited: Node, _depth: int) -> None:
            if visitor is not None:
                visitor(visited.data)

        return depth_first_search(
            node,
            direction=Direction.UP if direction == Direction.UP else Direction.DOWN,
            query=query,
            visitor=visit,
        )

    def find_edge(
        self, source: Record, target: Record, transform: Transform | None = None
    ) -> list[Any]:
        """List the branch points on downward paths from ``source`` to ``target``.

        Every node at or below ``source`` from which ``target`` is reachable is
        included once, in pre-order. For a single path this is the path itself.

        Args
        ----
            source: Record where paths start
            target: Record where paths end
            transform: Optional function applied to each record

        Returns
        -------
            The (transformed) records; empty if either vertex is missing or
            ``target`` is unreachable
        """
        source_node = self.lookup(self._key_of(source))
        target_node = self.lookup(self._key_of(target))
        if source_node is None or target_node is None:
            return []
        return self._find_edge(source_node, target_node, transform)

    def _find_edge(
        self, source: Node, target: Node, transform: Transform | None = None
    ) -> list[Any]:
        query = {self.unique_key: target.key}
        edge: list[Any] = []

        def collect(node: Node, _depth: int) -> None:
            if depth_first_search(node, query=query) is not None:
                edge.append(transform(node.data) if transform else node.data)

        depth_first_search(source, visitor=collect)
        return edge

    def descendants_of(self, record: Record, transform: Transform | None = None) -> list[Any]:
        """Records below ``record`` in visiting order, repeated once per path."""
        return self._relatives_of(record, Direction.DOWN, transform)

    def ancestors_of(self, record: Record, transform: Transform | None = None) -> list[Any]:
        """Records above ``record`` in visiting order, repeated once per path.

        Examples
        --------
        >>> graph = DirectedAcyclicGraph()
        >>> a, b, c, e = ({"id": x} for x in "abce")
        >>> _ = graph.add_edge(a, b).add_edge(b, c).add_edge(b, e).add_edge(c, e)
        >>> graph.ancestors_of(e, lambda v: v["id"].upper())
        ['B', 'A', 'C', 'B', 'A']
        """
        return self._relatives_of(record, Direction.UP, transform)

    def _relatives_of(
        self, record: Record, direction: Direction, transform: Transform | None
    ) -> list[Any]:
        start = self.lookup(self._key_of(record))
        if start is None:
            return []

        relatives: list[Any] = []

        def collect(relative: Node, _depth: int) -> None:
            if not relative.same_record(start):
                relatives.append(transform(relative.data) if transform else relative.data)

        depth_first_search(start, direction=direction, visitor=collect)
        return relatives

    def render(self) -> str:
        """Render the graph from the root, one line per visit.

        Each line reads ``<dashes> <key> (<description>)`` with ``depth + 1``
        dashes. Nodes reached along several paths appear several times.
        """
        root = self.lookup(self._root)
        if root is None:
            return ""

        lines: list[str] = []

        def draw(node: Node, depth: int) -> None:
            description = node.data.get(self.description_key)
            lines.append(f"{'-' * (depth + 1)} {node.key} ({description})\n")

        depth_first_search(root, visitor=draw)
        return "".join(lines)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _key_of(self, record: Record | None) -> Hashable | None:
        if not isinstance(record, Mapping):
            return None
        return record.get(self.unique_key)

    def _log(self, message: str, **context: Any) -> None:
        self._logger.log("INFO" if self.debug else "DEBUG", message, **context)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"DirectedAcyclicGraph(nodes={len(self._nodes)}, "
            f"edges={len(self._adjacency)}, root={self._root!r})"
        )

    def __len__(self) -> int:
        """Return the number of vertices in the graph."""
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())
