import copy

import networkx as nx

from conftest import as_sets, make_edges, make_nodes
from workflow_graph import find_cycles, find_orphaned_nodes, find_source_nodes, validate_workflow
from workflow_graph.builder import build_workflow_graph


class TestValidWorkflows:

    def test_empty_graph(self):
        result = validate_workflow([], [])
        assert result.valid
        assert result.cycles == []
        assert result.orphaned_node_ids == []

    def test_single_isolated_node_is_orphaned(self):
        result = validate_workflow(make_nodes("1"), [])
        assert result.cycles == []
        assert result.orphaned_node_ids == ["1"]
        assert not result.valid

    def test_linear_chain(self):
        result = validate_workflow(make_nodes("a", "b", "c"), make_edges(("a", "b"), ("b", "c")))
        assert result.valid
        assert result.cycles == []
        assert result.orphaned_node_ids == []

    def test_diamond(self, diamond):
        result = validate_workflow(*diamond)
        assert result.valid
        assert result.orphaned_node_ids == []

    def test_independent_sources_converging(self):
        nodes = make_nodes("t1", "t2", "sink")
        result = validate_workflow(nodes, make_edges(("t1", "sink"), ("t2", "sink")))
        assert result.valid


class TestCycles:

    def test_self_loop(self):
        result = validate_workflow(make_nodes("1"), make_edges(("1", "1")))
        assert not result.valid
        assert result.cycles == [["1"]]

    def test_two_node_cycle(self):
        result = validate_workflow(make_nodes("a", "b"), make_edges(("a", "b"), ("b", "a")))
        assert not result.valid
        assert len(result.cycles) == 1
        assert set(result.cycles[0]) == {"a", "b"}

    def test_three_node_cycle(self):
        edges = make_edges(("1", "2"), ("2", "3"), ("3", "1"))
        result = validate_workflow(make_nodes("1", "2", "3"), edges)
        assert len(result.cycles) == 1
        assert sorted(result.cycles[0]) == ["1", "2", "3"]

    def test_cycle_members_in_pop_order(self):
        g = build_workflow_graph(make_nodes("a", "b"), make_edges(("a", "b"), ("b", "a")))
        assert find_cycles(g) == [["b", "a"]]

    def test_disconnected_cycles_all_reported(self):
        nodes = make_nodes("a", "b", "c", "d", "e")
        edges = make_edges(("a", "b"), ("b", "a"), ("c", "d"), ("d", "c"), ("e", "e"))
        result = validate_workflow(nodes, edges)
        assert as_sets(result.cycles) == {frozenset("ab"), frozenset("cd"), frozenset("e")}

    def test_singleton_without_self_loop_is_not_a_cycle(self):
        result = validate_workflow(make_nodes("a", "b"), make_edges(("a", "b")))
        assert result.cycles == []

    def test_cycle_reached_from_trigger(self):
        nodes = make_nodes("t", "a", "b", "c")
        edges = make_edges(("t", "a"), ("a", "b"), ("b", "c"), ("c", "a"))
        result = validate_workflow(nodes, edges)
        assert as_sets(result.cycles) == {frozenset("abc")}
        # reachable from t, so not orphaned
        assert result.orphaned_node_ids == []

    def test_long_chain_does_not_recurse(self):
        ids = [f"n{i}" for i in range(10_000)]
        edges = make_edges(*zip(ids, ids[1:]), (ids[-1], ids[0]))
        result = validate_workflow(make_nodes(*ids), edges)
        assert len(result.cycles) == 1
        assert len(result.cycles[0]) == len(ids)


class TestOrphans:

    def test_nodes_without_edges(self):
        result = validate_workflow(make_nodes("a", "b"), [])
        assert "a" in result.orphaned_node_ids
        assert "b" in result.orphaned_node_ids
        assert not result.valid

    def test_node_not_connected_to_any_source(self):
        result = validate_workflow(make_nodes("a", "b", "c"), make_edges(("a", "b")))
        assert result.orphaned_node_ids == ["c"]

    def test_pure_cycle_without_inbound_edge_is_orphaned(self):
        nodes = make_nodes("t", "x", "a", "b")
        edges = make_edges(("t", "x"), ("a", "b"), ("b", "a"))
        result = validate_workflow(nodes, edges)
        assert set(result.orphaned_node_ids) == {"a", "b"}

    def test_self_loop_only_node_is_orphaned(self):
        result = validate_workflow(make_nodes("a"), make_edges(("a", "a")))
        assert result.orphaned_node_ids == ["a"]

    def test_source_with_outgoing_edge_is_never_orphaned(self):
        g = build_workflow_graph(make_nodes("s", "t"), make_edges(("s", "t")))
        assert find_source_nodes(g) == ["s"]
        assert find_orphaned_nodes(g) == []


class TestDanglingEdges:

    def test_missing_target_is_ignored(self):
        nodes = make_nodes("a", "b")
        edges = make_edges(("a", "b"), ("b", "ghost"))
        assert validate_workflow(nodes, edges).valid

    def test_missing_source_does_not_hide_a_source(self):
        nodes = make_nodes("a", "b")
        edges = make_edges(("ghost", "a"), ("a", "b"))
        result = validate_workflow(nodes, edges)
        assert result.valid

    def test_dangling_edge_does_not_connect_isolated_node(self):
        result = validate_workflow(make_nodes("a"), make_edges(("a", "ghost")))
        assert result.orphaned_node_ids == ["a"]

    def test_malformed_edges_are_ignored(self):
        nodes = make_nodes("a", "b")
        edges = make_edges(("a", "b")) + [{"source": "a"}, {"source": 1, "target": "b"}]
        assert validate_workflow(nodes, edges).valid

    def test_dangling_edge_never_adds_nodes(self):
        g = build_workflow_graph(make_nodes("a"), make_edges(("a", "ghost"), ("ghost", "a")))
        assert list(g.nodes()) == ["a"]
        assert g.number_of_edges() == 0


def test_inputs_are_not_mutated(diamond):
    nodes, edges = diamond
    before = copy.deepcopy((nodes, edges))
    validate_workflow(nodes, edges)
    assert (nodes, edges) == before


def test_accepts_objects_with_attributes():
    class N:
        def __init__(self, id):
            self.id = id

    class E:
        def __init__(self, source, target):
            self.source, self.target = source, target

    result = validate_workflow([N("a"), N("b")], [E("a", "b")])
    assert result.valid


def test_node_order_is_caller_order():
    g = build_workflow_graph(make_nodes("z", "a", "m"), [])
    assert isinstance(g, nx.DiGraph)
    assert list(g.nodes()) == ["z", "a", "m"]
