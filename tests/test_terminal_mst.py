"""Tests for the terminal MST builder and the connection-order planner."""
from piperoute.algorithms.steiner import MSTEdge, build_connection_order, build_terminal_mst
from piperoute.domain.models import GridCoordinate
from piperoute.domain.services import TieBreaker


def _c(row, column):
    return GridCoordinate(row, column)


class TestBuildTerminalMST:
    """Dense Prim's algorithm over Manhattan distances."""
    
    def test_single_terminal_has_no_edges(self, tie_breaker):
        assert build_terminal_mst([_c(3, 3)], tie_breaker) == []
    
    def test_two_terminals(self, tie_breaker):
        edges = build_terminal_mst([_c(0, 0), _c(2, 3)], tie_breaker)
        assert edges == [MSTEdge(u=0, v=1, weight=5)]
    
    def test_colinear_chain(self, tie_breaker):
        terminals = [_c(0, 0), _c(0, 2), _c(0, 5)]
        edges = build_terminal_mst(terminals, tie_breaker)
        assert edges == [MSTEdge(0, 1, 2), MSTEdge(1, 2, 3)]
    
    def test_spans_every_terminal(self, tie_breaker):
        terminals = [_c(5, 5), _c(0, 0), _c(0, 9), _c(9, 0), _c(9, 9), _c(4, 6)]
        edges = build_terminal_mst(terminals, tie_breaker)
        assert len(edges) == len(terminals) - 1
        reached = {0} | {edge.v for edge in edges}
        assert reached == set(range(len(terminals)))
        for edge in edges:
            assert edge.weight == terminals[edge.u].manhattan_distance(terminals[edge.v])
    
    def test_total_weight_is_minimal(self, tie_breaker):
        # Star around the source: every consumer is closest to the source
        terminals = [_c(5, 5), _c(5, 3), _c(3, 5), _c(5, 8), _c(8, 5)]
        edges = build_terminal_mst(terminals, tie_breaker)
        assert sum(edge.weight for edge in edges) == 2 + 2 + 3 + 3
    
    def test_equal_weights_break_by_pair_key(self):
        terminals = [_c(5, 5), _c(5, 3), _c(5, 7)]
        for seed in (1, 2, 3, 0xD15EA5E5):
            tie_breaker = TieBreaker(seed)
            edges = build_terminal_mst(terminals, tie_breaker)
            first_pick = min(
                (1, 2), key=lambda v: (tie_breaker.pair_key(terminals[0], terminals[v]), v)
            )
            assert edges[0] == MSTEdge(0, first_pick, 2)
            assert len(edges) == 2
    
    def test_in_tree_endpoint_is_u(self, tie_breaker):
        terminals = [_c(0, 0), _c(0, 4), _c(0, 5)]
        edges = build_terminal_mst(terminals, tie_breaker)
        assert edges == [MSTEdge(0, 1, 4), MSTEdge(1, 2, 1)]


class TestBuildConnectionOrder:
    """Breadth-first order over the MST."""
    
    def test_empty_tree(self, tie_breaker):
        assert build_connection_order([_c(0, 0)], [], tie_breaker) == []
    
    def test_chain_is_visited_in_tree_order(self, tie_breaker):
        terminals = [_c(0, 0), _c(0, 2), _c(0, 5)]
        edges = build_terminal_mst(terminals, tie_breaker)
        assert build_connection_order(terminals, edges, tie_breaker) == [1, 2]
    
    def test_children_sorted_by_weight(self, tie_breaker):
        terminals = [_c(5, 5), _c(5, 8), _c(5, 4), _c(1, 5)]
        edges = [MSTEdge(0, 2, 1), MSTEdge(0, 1, 3), MSTEdge(0, 3, 4)]
        assert build_connection_order(terminals, edges, tie_breaker) == [2, 1, 3]
    
    def test_equal_weight_children_sorted_by_key(self, tie_breaker):
        terminals = [_c(5, 5), _c(5, 3), _c(5, 7), _c(3, 5)]
        edges = [MSTEdge(0, 1, 2), MSTEdge(0, 2, 2), MSTEdge(0, 3, 2)]
        order = build_connection_order(terminals, edges, tie_breaker)
        assert order == sorted([1, 2, 3], key=lambda i: tie_breaker.key(terminals[i]))
    
    def test_parent_precedes_child(self, tie_breaker):
        terminals = [_c(0, 0), _c(9, 9), _c(0, 1), _c(8, 9), _c(5, 5), _c(0, 8)]
        edges = build_terminal_mst(terminals, tie_breaker)
        order = build_connection_order(terminals, edges, tie_breaker)
        assert sorted(order) == list(range(1, len(terminals)))
        position = {index: i for i, index in enumerate(order)}
        position[0] = -1
        for edge in edges:
            # The in-tree endpoint u is always attached before v
            assert position[edge.u] < position[edge.v]
    
    def test_breadth_first_levels(self, tie_breaker):
        terminals = [_c(0, 0), _c(0, 1), _c(0, 2), _c(1, 0)]
        edges = [MSTEdge(0, 1, 1), MSTEdge(1, 2, 1), MSTEdge(0, 3, 1)]
        order = build_connection_order(terminals, edges, tie_breaker)
        # Both children of the root come before the grandchild
        assert order[-1] == 2
        assert set(order[:2]) == {1, 3}
