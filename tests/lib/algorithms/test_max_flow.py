import random
from collections import defaultdict

import networkx as nx
import pytest
from pytest import approx

from augflow.errors import InvalidArgumentError, MaxRoundsExceededError
from augflow.lib.algorithms.bfs import BreadthFirstSearch
from augflow.lib.algorithms.max_flow import MaxFlowSolver, calc_max_flow
from tests.lib.algorithms.sample_graphs import EXAMPLE8_EDGES, STRATEGIES, build


def assert_valid_flow(solver):
    """Capacity respect, residual consistency and conservation on a solved graph."""
    balance = defaultdict(int)
    for edges in solver.get_residual_graph():
        for edge in edges:
            assert edge.flow == -edge.residual.flow
            assert edge.residual.residual is edge
            if edge.is_residual():
                continue
            assert 0 <= edge.flow <= edge.capacity
            balance[edge.src] -= edge.flow
            balance[edge.dst] += edge.flow

    for node in range(solver.node_count):
        if node in (solver.source, solver.sink):
            continue
        assert balance[node] == approx(0)
    assert balance[solver.sink] == approx(solver.get_max_flow())
    assert balance[solver.source] == approx(-solver.get_max_flow())


class TestMaxFlowScenarios:
    """
    Known max-flow values, run once per search strategy.
    """

    def test_example8(self, example8):
        assert example8.get_max_flow() == 26
        assert_valid_flow(example8)

    def test_single_edge(self, single_edge):
        assert single_edge.get_max_flow() == 5
        (edge,) = single_edge.graph.edges()
        assert edge.flow == 5
        assert edge.remaining_capacity() == 0
        assert edge.residual.flow == -5
        assert edge.residual.remaining_capacity() == 5

    def test_disconnected(self, disconnected):
        assert disconnected.get_max_flow() == 0
        assert disconnected.rounds == 0
        assert all(e.flow == 0 for e in disconnected.graph.edges())

    def test_no_edges(self, strategy):
        solver = MaxFlowSolver(2, 0, 1, strategy=strategy)
        assert solver.get_max_flow() == 0
        assert solver.get_residual_graph() == ((), ())

    def test_zigzag_needs_residual_edge(self, zigzag):
        assert zigzag.get_max_flow() == 2000
        assert_valid_flow(zigzag)

    def test_parallel_edges_tracked_separately(self, parallel):
        assert parallel.get_max_flow() == approx(32.0)
        direct = [e for e in parallel.graph.edges() if (e.src, e.dst) == (0, 2)]
        assert len(direct) == 3
        assert [e.flow for e in direct] == [10.0, 5.0, 15.0]
        assert_valid_flow(parallel)

    def test_sink_with_outgoing_edges(self, strategy):
        # Flow leaving the sink must not count toward the total.
        solver = build(3, 0, 1, [(0, 1, 3), (1, 2, 10), (2, 1, 10)], strategy)
        assert solver.get_max_flow() == 3

    def test_edges_into_source_are_ignored(self, strategy):
        solver = build(3, 1, 2, [(0, 1, 7), (1, 2, 4), (2, 0, 9)], strategy)
        assert solver.get_max_flow() == 4


class TestStrategyBehavior:
    def test_bfs_uses_fewer_rounds_on_zigzag(self):
        edges = [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)]
        dfs = build(4, 0, 3, edges, "dfs")
        bfs = build(4, 0, 3, edges, "bfs")
        assert dfs.get_max_flow() == bfs.get_max_flow() == 2000
        assert dfs.rounds == 4
        assert bfs.rounds == 2

    def test_recorded_paths(self):
        solver = build(8, 6, 7, EXAMPLE8_EDGES, "bfs", record_paths=True)
        solver.solve()
        assert len(solver.paths) == solver.rounds
        assert solver.paths[0] == [6, 0, 3, 7]
        assert all(p[0] == 6 and p[-1] == 7 for p in solver.paths)

    def test_paths_not_recorded_by_default(self, example8):
        example8.solve()
        assert example8.paths == []

    def test_custom_strategy_plugin(self):
        class CountingSearch:
            name = "counting"

            def __init__(self):
                self.calls = 0
                self._inner = BreadthFirstSearch()

            def find_path(self, graph, source, sink, visited):
                self.calls += 1
                return self._inner.find_path(graph, source, sink, visited)

        search = CountingSearch()
        solver = build(8, 6, 7, EXAMPLE8_EDGES, search)
        assert solver.strategy == "counting"
        assert solver.get_max_flow() == 26
        # One extra call discovers that no path remains.
        assert search.calls == solver.rounds + 1

    @pytest.mark.parametrize("seed", range(25))
    def test_strategies_agree_with_networkx(self, seed):
        rng = random.Random(seed)
        n = rng.randint(2, 9)
        edges = []
        for _ in range(rng.randint(0, 30)):
            u, v = rng.randrange(n), rng.randrange(n)
            if u != v:
                edges.append((u, v, rng.randint(1, 20)))

        expected_graph = nx.DiGraph()
        expected_graph.add_nodes_from(range(n))
        for u, v, cap in edges:
            if expected_graph.has_edge(u, v):
                expected_graph[u][v]["capacity"] += cap
            else:
                expected_graph.add_edge(u, v, capacity=cap)
        expected = nx.maximum_flow_value(expected_graph, 0, n - 1)

        for strategy in STRATEGIES:
            solver = build(n, 0, n - 1, edges, strategy)
            assert solver.get_max_flow() == expected
            assert_valid_flow(solver)


class TestMemoization:
    def test_repeated_queries_do_not_recompute(self, example8):
        first = example8.get_max_flow()
        rounds = example8.rounds
        graph = example8.get_residual_graph()
        flows = [e.flow for edges in graph for e in edges]

        assert example8.get_max_flow() == first
        assert example8.solve() == first
        assert example8.rounds == rounds
        assert [e.flow for edges in example8.get_residual_graph() for e in edges] == flows

    def test_residual_graph_first_then_max_flow(self, example8):
        assert not example8.is_solved
        example8.get_residual_graph()
        assert example8.is_solved
        assert example8.get_max_flow() == 26

    def test_add_edge_after_solve_rejected(self, single_edge):
        single_edge.get_max_flow()
        with pytest.raises(RuntimeError):
            single_edge.add_edge(0, 1, 3)
        assert single_edge.get_max_flow() == 5


class TestSummary:
    def test_min_cut_matches_flow(self, example8):
        summary = example8.summary()
        assert summary.total_flow == 26
        assert summary.strategy == example8.strategy
        assert summary.rounds == example8.rounds
        assert 6 in summary.reachable and 7 not in summary.reachable

        cut_capacity = sum(
            summary.edge_flow[ref] + summary.residual_cap[ref]
            for ref in summary.min_cut
        )
        assert cut_capacity == 26
        assert all(summary.residual_cap[ref] == 0 for ref in summary.min_cut)

    def test_summary_keys_cover_real_edges_only(self, example8):
        summary = example8.summary()
        assert len(summary.edge_flow) == len(EXAMPLE8_EDGES)
        assert set(summary.edge_flow) == {
            (src, dst, key) for key, (src, dst, _) in enumerate(EXAMPLE8_EDGES)
        }

    def test_min_cut_edges(self, single_edge):
        (edge,) = single_edge.min_cut()
        assert (edge.src, edge.dst) == (0, 1)
        assert single_edge.reachable() == {0}

    def test_to_dict(self, single_edge):
        data = single_edge.summary().to_dict()
        assert data["total_flow"] == 5
        assert data["edge_flow"] == {"0->1#0": 5}
        assert data["min_cut"] == ["0->1#0"]
        assert data["reachable"] == [0]


class TestMaxRounds:
    def test_round_limit_raises_and_keeps_partial_flow(self):
        edges = [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)]
        solver = build(4, 0, 3, edges, "bfs", max_rounds=1)
        with pytest.raises(MaxRoundsExceededError) as exc_info:
            solver.solve()
        assert exc_info.value.max_rounds == 1
        assert exc_info.value.flow == 1000
        assert not solver.is_solved

        # A later call resumes from the partial flow with a fresh budget.
        assert solver.get_max_flow() == 2000
        assert solver.is_solved

    def test_dfs_round_limit_applies_exactly_limit_paths(self):
        solver = build(8, 6, 7, EXAMPLE8_EDGES, "dfs", max_rounds=1)
        with pytest.raises(MaxRoundsExceededError) as exc_info:
            solver.solve()
        # First depth-first path is 6-0-3-4-5-7, limited by 3->4.
        assert solver.rounds == 1
        assert exc_info.value.flow == 1

        balance = defaultdict(int)
        for edge in solver.graph.edges():
            assert edge.flow == -edge.residual.flow
            assert 0 <= edge.flow <= edge.capacity
            balance[edge.src] -= edge.flow
            balance[edge.dst] += edge.flow
        assert balance[7] == 1
        assert balance[6] == -1
        assert all(balance[node] == 0 for node in range(6))

        assert solver.get_max_flow() == 26
        assert_valid_flow(solver)

    def test_round_limit_same_for_every_strategy(self, strategy):
        edges = [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)]
        solver = build(4, 0, 3, edges, strategy, max_rounds=1)
        with pytest.raises(MaxRoundsExceededError) as exc_info:
            solver.solve()
        assert solver.rounds == 1
        assert exc_info.value.flow == sum(
            e.flow for e in solver.graph.edges() if e.src == 0
        )

    @pytest.mark.parametrize("strategy, needed", [("dfs", 4), ("bfs", 2)])
    def test_limit_equal_to_needed_rounds_succeeds(self, strategy, needed):
        edges = [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)]
        solver = build(4, 0, 3, edges, strategy, max_rounds=needed)
        assert solver.get_max_flow() == 2000
        assert solver.rounds == needed

    def test_round_limit_not_hit(self):
        solver = build(8, 6, 7, EXAMPLE8_EDGES, "bfs", max_rounds=100)
        assert solver.get_max_flow() == 26

    def test_non_positive_limit_rejected(self):
        with pytest.raises(InvalidArgumentError):
            MaxFlowSolver(2, 0, 1, max_rounds=0)


class TestSolverValidation:
    @pytest.mark.parametrize(
        "node_count, source, sink",
        [
            (4, 0, 0),
            (4, -1, 3),
            (4, 0, 4),
            (4, 1.0, 3),
            (-1, 0, 1),
            (1, 0, 0),
        ],
    )
    def test_invalid_construction(self, node_count, source, sink):
        with pytest.raises(InvalidArgumentError):
            MaxFlowSolver(node_count, source, sink)

    @pytest.mark.parametrize("capacity", [0, -1, -0.5, float("nan"), float("inf")])
    def test_invalid_capacity(self, capacity):
        solver = MaxFlowSolver(2, 0, 1)
        with pytest.raises(InvalidArgumentError):
            solver.add_edge(0, 1, capacity)
        assert solver.graph.edge_count == 0

    def test_unknown_strategy(self):
        with pytest.raises(InvalidArgumentError):
            MaxFlowSolver(2, 0, 1, strategy="dinic")


class TestCalcMaxFlow:
    def test_scalar_return(self, strategy):
        assert calc_max_flow(8, 6, 7, EXAMPLE8_EDGES, strategy=strategy) == 26

    def test_with_summary(self):
        flow, summary = calc_max_flow(
            3, 0, 2, [(0, 1, 10), (1, 2, 5)], return_summary=True
        )
        assert flow == 5
        assert summary.total_flow == 5
        assert summary.min_cut == [(1, 2, 1)]

    def test_invalid_edge_propagates(self):
        with pytest.raises(InvalidArgumentError):
            calc_max_flow(2, 0, 1, [(0, 1, 0)])
