"""Tests for the Graph engine."""

from dataclasses import dataclass

import pytest

from gengraph import (
    Edge,
    EdgeExistsError,
    EdgeId,
    Graph,
    Node,
    NodeId,
    NodeNotFoundError,
)


@dataclass
class Foo:
    value: str


@dataclass
class Bar:
    x: str
    y: str


@pytest.fixture
def abc() -> tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]:
    """Three nodes a, b, c with edges a -> b, b -> c and a -> c."""
    g = Graph[Foo, Bar]()
    a = g.add_node(Foo("This is node a"))
    b = g.add_node(Foo("This is node b"))
    c = g.add_node(Foo("This is node c"))
    g.add_edge(a, b, Bar("from a...", "...to b"))
    g.add_edge(b, c, Bar("from b...", "...to c"))
    g.add_edge(a, c, Bar("from a...", "...to c"))
    return g, a, b, c


def assert_consistent(g: Graph[object, object]) -> None:
    """Check that the edge collection and both adjacency views agree."""
    edge_ids = {edge.id for edge in g.edges()}
    outgoing = {EdgeId(node.id, target) for node in g.nodes() for target in node.outgoing}
    incoming = {EdgeId(source, node.id) for node in g.nodes() for source in node.incoming}
    assert edge_ids == outgoing == incoming
    node_ids = {node.id for node in g.nodes()}
    for source, target in edge_ids:
        assert source in node_ids
        assert target in node_ids


class TestNodes:
    """Tests for adding, looking up and removing nodes."""

    def test_empty_graph(self) -> None:
        g = Graph[str, str]()
        assert len(g) == 0
        assert g.nodes() == []
        assert g.edges() == []

    def test_add_node_returns_increasing_ids(self) -> None:
        g = Graph[str, str]()
        ids = [g.add_node(str(i)) for i in range(10)]
        assert ids == list(range(10))

    def test_ids_are_not_reused_after_removal(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.remove_node(b)
        g.remove_node(a)
        c = g.add_node("c")
        assert c == 2
        assert len(g) == 1

    def test_get_node(self) -> None:
        g = Graph[Foo, Bar]()
        a = g.add_node(Foo("a"))
        node = g.get_node(a)
        assert isinstance(node, Node)
        assert node.id == a
        assert node.data == Foo("a")
        assert dict(node.incoming) == {}
        assert dict(node.outgoing) == {}

    def test_get_unknown_node_returns_none(self) -> None:
        g = Graph[str, str]()
        assert g.get_node(NodeId(0)) is None
        g.add_node("a")
        assert g.get_node(NodeId(1)) is None

    def test_contains(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        assert a in g
        assert NodeId(1) not in g

    def test_remove_unknown_node_raises(self) -> None:
        g = Graph[str, str]()
        with pytest.raises(NodeNotFoundError, match="not found to remove") as excinfo:
            g.remove_node(NodeId(3))
        assert excinfo.value.node_id == 3

    def test_remove_node_twice_raises(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        g.remove_node(a)
        assert g.get_node(a) is None
        with pytest.raises(NodeNotFoundError):
            g.remove_node(a)

    def test_not_found_is_a_lookup_error(self) -> None:
        g = Graph[str, str]()
        with pytest.raises(LookupError):
            g.remove_node(NodeId(0))

    def test_adjacency_views_are_read_only(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, a, b, _ = abc
        node = g.get_node(a)
        assert node is not None
        with pytest.raises(TypeError):
            node.outgoing[b] = None  # type: ignore[index]


class TestEdges:
    """Tests for adding, looking up and removing edges."""

    def test_add_edge_returns_ordered_pair(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        edge_id = g.add_edge(a, b, "ab")
        assert edge_id == EdgeId(a, b)
        assert edge_id == (0, 1)
        assert edge_id.source == a
        assert edge_id.target == b

    def test_edge_installed_in_all_views(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.add_edge(a, b, "ab")

        edge = g.get_edge(a, b)
        assert isinstance(edge, Edge)
        assert edge.data == "ab"
        assert edge.source == a
        assert edge.target == b

        a_node, b_node = g.get_node(a), g.get_node(b)
        assert a_node is not None
        assert b_node is not None
        assert a_node.outgoing[b] is edge
        assert b_node.incoming[a] is edge
        assert dict(a_node.incoming) == {}
        assert dict(b_node.outgoing) == {}
        assert_consistent(g)

    def test_edge_is_directed(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.add_edge(a, b, "ab")
        assert g.get_edge(b, a) is None
        g.add_edge(b, a, "ba")
        assert g.edge_count == 2

    def test_duplicate_edge_raises_and_keeps_state(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.add_edge(a, b, "first")
        before = str(g)

        with pytest.raises(EdgeExistsError, match="already exists") as excinfo:
            g.add_edge(a, b, "second")

        assert excinfo.value.edge_id == EdgeId(a, b)
        edge = g.get_edge(a, b)
        assert edge is not None
        assert edge.data == "first"
        assert g.edge_count == 1
        assert str(g) == before
        assert_consistent(g)

    def test_duplicate_edge_is_a_value_error(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        g.add_edge(a, a, "loop")
        with pytest.raises(ValueError, match="already exists"):
            g.add_edge(a, a, "loop again")

    @pytest.mark.parametrize(("source", "target"), [(0, 5), (5, 0), (5, 6)])
    def test_add_edge_to_unknown_node_raises(self, source: int, target: int) -> None:
        g = Graph[str, str]()
        g.add_node("a")
        with pytest.raises(NodeNotFoundError, match="not found"):
            g.add_edge(NodeId(source), NodeId(target), "x")
        assert g.edge_count == 0

    def test_add_edge_to_removed_node_raises(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.remove_node(b)
        with pytest.raises(NodeNotFoundError) as excinfo:
            g.add_edge(a, b, "ab")
        assert excinfo.value.node_id == b

    def test_get_missing_edge_returns_none(self) -> None:
        g = Graph[str, str]()
        assert g.get_edge(NodeId(0), NodeId(1)) is None

    def test_remove_edge(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.add_edge(a, b, "ab")
        g.remove_edge(a, b)
        assert g.get_edge(a, b) is None
        assert g.edge_count == 0
        assert g.successors(a) == []
        assert g.predecessors(b) == []
        assert_consistent(g)

    def test_remove_missing_edge_between_existing_nodes_is_noop(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        g.remove_edge(a, b)
        g.remove_edge(b, a)
        assert g.edge_count == 0
        assert len(g) == 2

    def test_remove_edge_with_unknown_node_raises(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        with pytest.raises(NodeNotFoundError):
            g.remove_edge(a, NodeId(9))
        with pytest.raises(NodeNotFoundError):
            g.remove_edge(NodeId(9), a)

    def test_self_loop(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        g.add_edge(a, a, "loop")
        node = g.get_node(a)
        assert node is not None
        assert list(node.incoming) == [a]
        assert list(node.outgoing) == [a]
        g.remove_node(a)
        assert g.edge_count == 0


class TestRemoveNodeCascade:
    """Tests for removing nodes with incident edges."""

    def test_scenario_remove_middle_node(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, a, b, c = abc
        a_node, c_node = g.get_node(a), g.get_node(c)
        assert a_node is not None
        assert c_node is not None
        assert len(a_node.outgoing) == 2
        assert len(c_node.incoming) == 2

        g.remove_node(b)

        assert len(a_node.outgoing) == 1
        assert len(c_node.incoming) == 1
        assert {edge.id for edge in g.edges()} == {EdgeId(a, c)}
        assert g.get_node(b) is None
        assert_consistent(g)

    def test_remove_node_removes_edges_in_both_directions(self) -> None:
        g = Graph[str, str]()
        hub = g.add_node("hub")
        others = [g.add_node(str(i)) for i in range(4)]
        for other in others[:2]:
            g.add_edge(hub, other, "out")
        for other in others[2:]:
            g.add_edge(other, hub, "in")

        g.remove_node(hub)

        assert g.edge_count == 0
        for edge in g.edges():
            assert hub not in edge.id
        for other in others:
            node = g.get_node(other)
            assert node is not None
            assert hub not in node.incoming
            assert hub not in node.outgoing


class TestQueries:
    """Tests for read-only helpers."""

    def test_successors_and_predecessors(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, a, b, c = abc
        assert sorted(g.successors(a)) == [b, c]
        assert g.successors(c) == []
        assert sorted(g.predecessors(c)) == [a, b]
        assert g.predecessors(a) == []

    def test_successors_of_unknown_node_raises(self) -> None:
        g = Graph[str, str]()
        with pytest.raises(NodeNotFoundError):
            g.successors(NodeId(0))
        with pytest.raises(NodeNotFoundError):
            g.predecessors(NodeId(0))

    def test_roots_and_leaves(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, a, _, c = abc
        isolated = g.add_node(Foo("isolated"))
        assert sorted(g.roots()) == [a, isolated]
        assert sorted(g.leaves()) == [c, isolated]

    def test_counts(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, *_ = abc
        assert g.node_count == 3
        assert len(g) == 3
        assert g.edge_count == 3

    def test_nodes_in_identity_order(self) -> None:
        g = Graph[str, str]()
        for label in "abcd":
            g.add_node(label)
        g.remove_node(NodeId(1))
        assert [node.id for node in g.nodes()] == [0, 2, 3]
        assert [node.data for node in g.nodes()] == ["a", "c", "d"]


class TestFromData:
    """Tests for Graph.from_data."""

    def test_positions_become_identities(self) -> None:
        g = Graph.from_data(["a", "b", "c"], {(0, 1): "ab", (1, 2): "bc"})
        assert [node.data for node in g.nodes()] == ["a", "b", "c"]
        assert [node.id for node in g.nodes()] == [0, 1, 2]
        edge = g.get_edge(NodeId(1), NodeId(2))
        assert edge is not None
        assert edge.data == "bc"
        assert_consistent(g)

    def test_accepts_edge_id_keys(self) -> None:
        g = Graph.from_data(["a", "b"], {EdgeId(NodeId(0), NodeId(1)): "ab"})
        assert g.get_edge(NodeId(0), NodeId(1)) is not None

    def test_accepts_pairs(self) -> None:
        g = Graph.from_data(["a", "b"], [((0, 1), "ab"), ((1, 0), "ba")])
        assert g.edge_count == 2

    def test_nodes_only(self) -> None:
        g = Graph.from_data(["a", "b"])
        assert len(g) == 2
        assert g.edge_count == 0

    def test_out_of_range_position_raises(self) -> None:
        with pytest.raises(NodeNotFoundError) as excinfo:
            Graph.from_data(["a", "b"], {(0, 2): "bad"})
        assert excinfo.value.node_id == 2

    def test_negative_position_raises(self) -> None:
        with pytest.raises(NodeNotFoundError):
            Graph.from_data(["a"], {(-1, 0): "bad"})

    def test_duplicate_pair_raises(self) -> None:
        with pytest.raises(EdgeExistsError):
            Graph.from_data(["a", "b"], [((0, 1), "first"), ((0, 1), "second")])


class TestClone:
    """Tests for Graph.clone."""

    def test_clone_has_same_structure(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, *_ = abc
        copy = g.clone()
        assert [node.data for node in copy.nodes()] == [node.data for node in g.nodes()]
        assert {edge.id: edge.data for edge in copy.edges()} == {edge.id: edge.data for edge in g.edges()}
        assert_consistent(copy)

    def test_clone_is_independent(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, a, b, c = abc
        copy = g.clone()

        copy.remove_node(b)
        copy.add_edge(c, a, Bar("c", "a"))
        assert g.edge_count == 3
        assert g.get_node(b) is not None
        assert g.get_edge(c, a) is None

        g.remove_edge(a, c)
        assert copy.get_edge(a, c) is not None

    def test_clone_renumbers_in_ascending_order(self) -> None:
        g = Graph[str, str]()
        a = g.add_node("a")
        b = g.add_node("b")
        c = g.add_node("c")
        g.add_edge(a, c, "ac")
        g.add_edge(c, b, "cb")
        g.remove_node(b)
        d = g.add_node("d")
        g.add_edge(c, d, "cd")

        copy = g.clone()

        assert [(node.id, node.data) for node in copy.nodes()] == [(0, "a"), (1, "c"), (2, "d")]
        assert {edge.id: edge.data for edge in copy.edges()} == {(0, 1): "ac", (1, 2): "cd"}
        assert_consistent(copy)

    def test_clone_shares_payloads(self) -> None:
        g = Graph[list[int], dict[str, int]]()
        payload: list[int] = []
        a = g.add_node(payload)
        copy = g.clone()
        node = copy.get_node(a)
        assert node is not None
        assert node.data is payload

    def test_clone_of_empty_graph(self) -> None:
        copy = Graph[str, str]().clone()
        assert len(copy) == 0
        assert copy.add_node("a") == 0


class TestRendering:
    """Tests for string rendering."""

    def test_str_lists_nodes_and_edges(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, *_ = abc
        text = str(g)
        assert text.startswith("Nodes:\n")
        assert "Edges:\n" in text
        assert "  0 = Foo(value='This is node a')" in text
        assert "  0 -> 1 = Bar(x='from a...', y='...to b')" in text
        assert text.count("\n") == 8

    def test_str_of_empty_graph(self) -> None:
        assert str(Graph[str, str]()) == "Nodes:\nEdges:\n"

    def test_repr(self, abc: tuple[Graph[Foo, Bar], NodeId, NodeId, NodeId]) -> None:
        g, *_ = abc
        assert repr(g) == "Graph(nodes=3, edges=3)"

    def test_edge_id_str(self) -> None:
        assert str(EdgeId(NodeId(2), NodeId(5))) == "2 -> 5"
