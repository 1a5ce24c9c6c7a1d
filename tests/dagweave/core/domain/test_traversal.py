"""Tests for depth_first_search and Node."""

import pytest

from dagweave.core.domain.dag import DirectedAcyclicGraph
from dagweave.core.domain.traversal import Direction, depth_first_search


@pytest.fixture
def diamond() -> DirectedAcyclicGraph:
    """Graph a -> b, a -> c, b -> d, c -> d."""
    graph = DirectedAcyclicGraph(unique_key="name", check_cycles=True)
    a, b, c, d = ({"name": name, "kind": "leaf" if name == "d" else "inner"} for name in "abcd")
    graph.add_edge(a, b).add_edge(a, c).add_edge(b, d).add_edge(c, d)
    return graph


class TestDepthFirstSearch:
    """Test the shared traversal."""

    def test_visits_once_per_path(self, diamond):
        """Test a converging node is visited for every path."""
        seen = []
        depth_first_search(diamond.lookup("a"), visitor=lambda node, depth: seen.append(node.key))
        assert seen == ["a", "b", "d", "c", "d"]

    def test_depths(self, diamond):
        """Test the visitor receives the distance from the start."""
        seen = []
        depth_first_search(
            diamond.lookup("a"), visitor=lambda node, depth: seen.append((node.key, depth))
        )
        assert seen == [("a", 0), ("b", 1), ("d", 2), ("c", 1), ("d", 2)]

    def test_upward_traversal(self, diamond):
        """Test following parents."""
        seen = []
        depth_first_search(
            diamond.lookup("d"),
            direction=Direction.UP,
            visitor=lambda node, depth: seen.append(node.key),
        )
        assert seen == ["d", "b", "a", "c", "a"]

    def test_first_match_stops_search(self, diamond):
        """Test nothing is visited after the first match."""
        seen = []
        match = depth_first_search(
            diamond.lookup("a"),
            query={"kind": "leaf"},
            visitor=lambda node, depth: seen.append(node.key),
        )
        assert match == {"name": "d", "kind": "leaf"}
        assert seen == ["a", "b", "d"]

    def test_start_node_can_match(self, diamond):
        """Test the start node is tested against the query."""
        assert depth_first_search(diamond.lookup("a"), query={"name": "a"})["name"] == "a"

    def test_no_query_returns_none(self, diamond):
        """Test a plain walk returns None."""
        assert depth_first_search(diamond.lookup("a")) is None
        assert depth_first_search(diamond.lookup("a"), query={}) is None

    def test_direction_values(self):
        """Test directions accept their string values."""
        assert Direction("down") is Direction.DOWN
        assert Direction("up") is Direction.UP


class TestNode:
    """Test Node accessors and matching."""

    def test_key_and_neighbours(self, diamond):
        """Test a node reads edges from its graph."""
        node = diamond.lookup("d")
        assert node.key == "d"
        assert node.parents() == ("b", "c")
        assert node.children() == ()
        assert [n.key for n in diamond.lookup("a").adjacent(Direction.DOWN)] == ["b", "c"]
        assert [n.key for n in node.adjacent(Direction.UP)] == ["b", "c"]

    def test_data_is_stored_by_reference(self):
        """Test the node wraps the caller's record."""
        record = {"id": 1}
        graph = DirectedAcyclicGraph()
        graph.add_vertex(record)
        assert graph.lookup(1).data is record

    def test_matches(self, diamond):
        """Test field-by-field matching."""
        node = diamond.lookup("b")
        assert node.matches({"name": "b"})
        assert node.matches({"name": "b", "kind": "inner"})
        assert not node.matches({"name": "b", "kind": "leaf"})
        assert not node.matches({"missing": None})
        assert not node.matches({})
        assert not node.matches(None)

    def test_same_record(self, diamond):
        """Test comparison against another node's record."""
        b = diamond.lookup("b")
        c = diamond.lookup("c")
        assert b.same_record(b)
        assert not b.same_record(c)

    def test_repr(self, diamond):
        """Test repr shows the key."""
        assert repr(diamond.lookup("a")) == "Node('a')"
