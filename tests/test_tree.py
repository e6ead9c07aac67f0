"""
Tests for breadth-first spanning trees.
"""

import networkx as nx
import pytest

from factor_graph import (
    FactorGraph,
    InternalInconsistency,
    Shape,
    SpanningTree,
    UnknownRoot,
    build_ising_grid,
    build_spanning_tree,
)


def dummy_potential(args):
    return len(args)


@pytest.fixture
def chain_graph():
    graph = FactorGraph()
    graph.add_variable("A", [0, 1])
    graph.add_variable("B", [0, 1])
    graph.add_variable("C", [0, 1])
    graph.add_factor(["A", "B"], dummy_potential)
    graph.add_factor(["B", "C"], dummy_potential)
    return graph


@pytest.fixture
def triangle_graph():
    graph = FactorGraph()
    for name in ("A", "B", "C"):
        graph.add_variable(name, [0, 1])
    graph.add_factor(["A", "B"], dummy_potential)
    graph.add_factor(["B", "C"], dummy_potential)
    graph.add_factor(["C", "A"], dummy_potential)
    return graph


def assert_is_spanning_tree(tree: SpanningTree):
    roots = [n for n in tree if n.parent is None]
    assert roots == [tree.root]
    assert len(set(tree.source_ids())) == len(tree)

    for node in tree:
        # Acyclic: walking up always reaches the root without repeats
        seen = set()
        cur = node
        while cur is not None:
            assert cur.source_id not in seen
            seen.add(cur.source_id)
            cur = cur.parent
        assert tree.root.source_id in seen

        for child in node.children:
            assert child.parent is node

    assert nx.is_arborescence(tree.to_networkx())


class TestChain:
    def test_chain_shape(self, chain_graph):
        tree = build_spanning_tree(chain_graph, "A")

        assert len(tree) == 5
        assert tree.root.source_id == 0
        assert tree.children_of(0) == [3]
        assert tree.children_of(3) == [1]
        assert tree.children_of(1) == [4]
        assert tree.children_of(4) == [2]
        assert tree.children_of(2) == []
        assert tree.parent_of(0) is None
        assert tree.parent_of(2) == 4

    def test_discovery_order_and_depth(self, chain_graph):
        tree = chain_graph.spanning_tree("A")

        assert tree.source_ids() == [0, 3, 1, 4, 2]
        assert [n.depth for n in tree] == [0, 1, 2, 3, 4]
        assert [n.index for n in tree] == [0, 1, 2, 3, 4]

    def test_root_in_middle(self, chain_graph):
        tree = chain_graph.spanning_tree("B")

        assert tree.source_ids() == [1, 3, 4, 0, 2]
        assert tree.children_of(1) == [3, 4]
        assert_is_spanning_tree(tree)

    def test_names_and_kinds(self, chain_graph):
        tree = chain_graph.spanning_tree("A")

        assert [n.name for n in tree] == ["A", "factor<[A, B]>", "B", "factor<[B, C]>", "C"]
        assert [n.is_factor for n in tree] == [False, True, False, True, False]

    def test_orders(self, chain_graph):
        tree = chain_graph.spanning_tree("A")

        assert tree.preorder() == [0, 3, 1, 4, 2]
        assert tree.postorder() == [2, 4, 1, 3, 0]


class TestDisconnected:
    def test_unreached_variable(self, chain_graph):
        chain_graph.add_variable("D", [0, 1])
        tree = chain_graph.spanning_tree("A")

        assert 5 in chain_graph.all_ids()
        assert 5 not in tree
        assert tree.node_ids() == frozenset({0, 1, 2, 3, 4})

    def test_isolated_root(self, chain_graph):
        chain_graph.add_variable("D", [0, 1])
        tree = chain_graph.spanning_tree("D")

        assert len(tree) == 1
        assert tree.root.source_id == 5
        assert tree.edges() == []

    def test_two_components(self, chain_graph):
        chain_graph.add_variable("D", [0, 1])
        chain_graph.add_variable("E", [0, 1])
        chain_graph.add_factor(["D", "E"], dummy_potential)

        tree = chain_graph.spanning_tree("E")

        assert tree.source_ids() == [6, 7, 5]


class TestCycles:
    def test_triangle(self, triangle_graph):
        tree = triangle_graph.spanning_tree("A")

        assert tree.source_ids() == [0, 3, 5, 1, 2, 4]
        assert tree.parent_of(1) == 3
        assert tree.parent_of(2) == 5
        assert tree.parent_of(4) == 1
        assert_is_spanning_tree(tree)

    def test_tie_broken_by_scope_order(self):
        graph = FactorGraph()
        for name in ("A", "B", "C"):
            graph.add_variable(name, [0, 1])
        graph.add_factor(["A", "C", "B"], dummy_potential)

        tree = graph.spanning_tree("A")

        # C (id 2) is listed before B (id 1) in the scope
        assert tree.children_of(3) == [2, 1]

    def test_first_discoverer_is_parent(self):
        graph = FactorGraph()
        graph.add_variable("A", [0, 1])
        graph.add_variable("B", [0, 1])
        graph.add_factor(["B", "A"], dummy_potential)
        graph.add_factor(["A", "B"], dummy_potential)

        tree = graph.spanning_tree("A")

        assert tree.children_of(0) == [2, 3]
        assert tree.parent_of(1) == 2
        assert tree.children_of(3) == []

    @pytest.mark.parametrize("root", ["X0_0", "X1_2", "X3_3"])
    def test_grid_visits_every_id_once(self, root):
        graph = build_ising_grid(4, 4, field=0.2)
        tree = graph.spanning_tree(root)

        assert sorted(tree.source_ids()) == list(graph.all_ids())
        assert len(tree.edges()) == len(graph) - 1
        assert_is_spanning_tree(tree)

    @pytest.mark.parametrize("periodic", [False, True])
    def test_bfs_layering(self, periodic):
        graph = build_ising_grid(4, 5, periodic=periodic)
        tree = graph.spanning_tree("X2_2")
        dist = nx.single_source_shortest_path_length(graph.to_networkx(), tree.root.source_id)

        order = [dist[nid] for nid in tree.source_ids()]
        assert order == sorted(order)
        for node in tree:
            assert node.depth == dist[node.source_id]


class TestErrors:
    def test_unknown_root(self, chain_graph):
        with pytest.raises(UnknownRoot) as exc:
            chain_graph.spanning_tree("Z")

        assert exc.value.name == "Z"

    def test_factor_label_is_not_a_root(self, chain_graph):
        with pytest.raises(UnknownRoot):
            build_spanning_tree(chain_graph, "factor<[A, B]>")

    def test_dangling_incident_id(self, chain_graph):
        chain_graph.variable_by_name("C").incident_factor_ids.append(42)

        with pytest.raises(InternalInconsistency):
            chain_graph.spanning_tree("A")

    def test_unknown_tree_node(self, chain_graph):
        tree = chain_graph.spanning_tree("A")

        with pytest.raises(InternalInconsistency):
            tree.node_for(17)


class TestSnapshot:
    def test_independent_of_later_mutation(self, chain_graph):
        tree = chain_graph.spanning_tree("A")
        chain_graph.add_variable("D", [0, 1])
        chain_graph.add_factor(["C", "D"], dummy_potential)

        assert len(tree) == 5
        assert tree.children_of(2) == []
        assert len(chain_graph.spanning_tree("A")) == 7

    def test_render_contract(self, chain_graph):
        tree = chain_graph.spanning_tree("A")

        assert tree.edges() == [(0, 3), (3, 1), (1, 4), (4, 2)]
        assert tree.label(3) == "factor<[A, B]>"
        assert tree.shape(3) is Shape.BOX
        assert tree.shape(2) is Shape.CIRCLE
        assert repr(tree) == "SpanningTree(root='A', nodes=5)"
