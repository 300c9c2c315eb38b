from __future__ import annotations

from typing import Iterable, List, Literal, Optional, Set, Tuple, Union, overload

from augflow.config import SOLVER_CONFIG
from augflow.errors import InvalidArgumentError, MaxRoundsExceededError
from augflow.lib.algorithms.base import (
    AugmentingPathSearch,
    SearchStrategy,
    VisitTracker,
)
from augflow.lib.algorithms.bfs import BreadthFirstSearch
from augflow.lib.algorithms.dfs import DepthFirstSearch
from augflow.lib.algorithms.types import FlowSummary
from augflow.lib.edge import Edge, Flow
from augflow.lib.graph import Adjacency, FlowGraph
from augflow.logging import get_logger

logger = get_logger(__name__)

StrategyLike = Union[SearchStrategy, str, AugmentingPathSearch]

#: (src, dst, capacity) triple accepted by ``calc_max_flow``.
EdgeSpec = Tuple[int, int, Flow]


def get_search(strategy: Optional[StrategyLike] = None) -> AugmentingPathSearch:
    """
    Resolve a strategy selector to a search object.

    Args:
        strategy: A ``SearchStrategy`` member, its name (case-insensitive), an
            object implementing ``AugmentingPathSearch``, or None for the
            configured default.

    Returns:
        AugmentingPathSearch: The search to run each round.

    Raises:
        InvalidArgumentError: If the selector names no known strategy.
    """
    if strategy is None:
        strategy = SOLVER_CONFIG.default_strategy
    if isinstance(strategy, str):
        try:
            strategy = SearchStrategy[strategy.upper()]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown search strategy '{strategy}'. "
                f"Expected one of: {', '.join(s.name.lower() for s in SearchStrategy)}."
            ) from None
    if isinstance(strategy, SearchStrategy):
        if strategy == SearchStrategy.DFS:
            return DepthFirstSearch()
        return BreadthFirstSearch()
    if isinstance(strategy, AugmentingPathSearch):
        return strategy
    raise InvalidArgumentError(f"Unsupported search strategy: {strategy!r}")


class MaxFlowSolver:
    """
    Maximum flow between a fixed source and sink by repeated augmentation.

    Build the graph with ``add_edge``, then ask for ``get_max_flow()`` or
    ``get_residual_graph()``. The first query runs ``solve()``; every later
    query returns the cached result. Once solving starts the graph is frozen.

    Examples:
        >>> solver = MaxFlowSolver(4, 0, 3, strategy="bfs")
        >>> _ = solver.add_edge(0, 1, 3)
        >>> _ = solver.add_edge(1, 3, 2)
        >>> _ = solver.add_edge(0, 2, 1)
        >>> _ = solver.add_edge(2, 3, 5)
        >>> solver.get_max_flow()
        3
    """

    def __init__(
        self,
        node_count: int,
        source: int,
        sink: int,
        *,
        strategy: Optional[StrategyLike] = None,
        max_rounds: Optional[int] = None,
        record_paths: bool = False,
    ) -> None:
        """
        Create a solver over an empty graph.

        Args:
            node_count: Number of nodes, including source and sink.
            source: Index of the source node, ``0 <= source < node_count``.
            sink: Index of the sink node, ``0 <= sink < node_count`` and ``sink != source``.
            strategy: Augmenting-path search (see ``get_search``).
            max_rounds: Round limit per solve; defaults to ``SOLVER_CONFIG.max_rounds``.
            record_paths: If True, keep the node sequence of every augmenting path.

        Raises:
            InvalidArgumentError: On a bad node count, an out-of-range
                terminal, ``source == sink``, an unknown strategy or a
                non-positive round limit.
        """
        self._graph = FlowGraph(node_count)
        self._graph.check_node(source, "Source")
        self._graph.check_node(sink, "Sink")
        if source == sink:
            raise InvalidArgumentError(
                f"Source and sink must differ, both are {source}."
            )
        self._source = source
        self._sink = sink
        self._search = get_search(strategy)
        self._max_rounds = SOLVER_CONFIG.resolve_max_rounds(max_rounds)
        self._record_paths = record_paths

        self._visited = VisitTracker(node_count)
        self._solved = False
        self._max_flow: Flow = 0
        self._rounds = 0
        self._paths: List[List[int]] = []

    @property
    def source(self) -> int:
        return self._source

    @property
    def sink(self) -> int:
        return self._sink

    @property
    def node_count(self) -> int:
        return self._graph.node_count

    @property
    def graph(self) -> FlowGraph:
        return self._graph

    @property
    def strategy(self) -> str:
        return self._search.name

    @property
    def is_solved(self) -> bool:
        return self._solved

    @property
    def rounds(self) -> int:
        """Augmenting paths applied so far."""
        return self._rounds

    @property
    def paths(self) -> List[List[int]]:
        """Node sequences of the applied paths (only when ``record_paths``)."""
        return list(self._paths)

    def add_edge(self, src: int, dst: int, capacity: Flow) -> Edge:
        """
        Add a directed edge (and its residual partner) to the flow graph.

        Raises:
            InvalidArgumentError: If an index is out of range or the capacity
                is not a finite positive number.
            RuntimeError: If solving has already started.
        """
        return self._graph.add_edge(src, dst, capacity)

    def solve(self) -> Flow:
        """
        Augment until no source-to-sink path with remaining capacity exists.

        Runs at most once; later calls return the cached flow.

        Returns:
            Flow: The maximum flow value.

        Raises:
            MaxRoundsExceededError: If the sink is still reachable after
                ``max_rounds`` augmenting paths. Exactly ``max_rounds`` paths
                have been applied, whatever the strategy; the partial flow
                is kept and the solver stays unsolved.
        """
        if self._solved:
            return self._max_flow

        self._graph.freeze()
        rounds_this_call = 0
        while True:
            if self._max_rounds is not None and rounds_this_call >= self._max_rounds:
                # DFS pushes flow while searching, so test for a path without one
                if self._sink in self._residual_reach():
                    raise MaxRoundsExceededError(self._max_rounds, self._max_flow)
                break
            self._visited.next_round()
            path = self._search.find_path(
                self._graph, self._source, self._sink, self._visited
            )
            if path is None or path.bottleneck <= 0:
                break
            if not path.applied:
                path.augment()
            rounds_this_call += 1
            self._account(path.bottleneck, path.nodes)

        self._solved = True
        logger.debug(
            "Max flow %s -> %s via %s: %s in %d rounds",
            self._source,
            self._sink,
            self._search.name,
            self._max_flow,
            self._rounds,
        )
        return self._max_flow

    def _account(self, bottleneck: Flow, nodes: List[int]) -> None:
        self._max_flow += bottleneck
        self._rounds += 1
        if self._record_paths:
            self._paths.append(nodes)
        logger.debug(
            "Round %d: pushed %s along %s", self._rounds, bottleneck, nodes
        )

    def get_max_flow(self) -> Flow:
        """Maximum flow from source to sink."""
        return self.solve()

    def get_residual_graph(self) -> Adjacency:
        """
        Residual graph after solving.

        Returns:
            Adjacency: Per node, the ordered outgoing edges (real and
            residual). The ``Edge`` objects are live; inspect ``src``,
            ``dst``, ``flow``, ``capacity`` and ``is_residual()``.
        """
        self.solve()
        return self._graph.as_adjacency()

    def reachable(self) -> Set[int]:
        """Nodes reachable from the source through edges with remaining capacity."""
        self.solve()
        return self._residual_reach()

    def _residual_reach(self) -> Set[int]:
        seen = {self._source}
        stack = [self._source]
        while stack:
            node = stack.pop()
            for edge in self._graph.out_edges(node):
                if edge.remaining_capacity() > 0 and edge.dst not in seen:
                    seen.add(edge.dst)
                    stack.append(edge.dst)
        return seen

    def min_cut(self) -> List[Edge]:
        """Real edges crossing from the source side to the sink side of the minimum cut."""
        reachable = self.reachable()
        return [
            edge
            for edge in self._graph.edges()
            if edge.src in reachable and edge.dst not in reachable
        ]

    def summary(self) -> FlowSummary:
        """Solve if needed and build a ``FlowSummary``."""
        total = self.solve()
        edge_flow = {}
        residual_cap = {}
        for edge in self._graph.edges():
            ref = (edge.src, edge.dst, edge.key)
            edge_flow[ref] = edge.flow
            residual_cap[ref] = edge.remaining_capacity()

        return FlowSummary(
            total_flow=total,
            edge_flow=edge_flow,
            residual_cap=residual_cap,
            reachable=self.reachable(),
            min_cut=[(e.src, e.dst, e.key) for e in self.min_cut()],
            rounds=self._rounds,
            strategy=self._search.name,
            paths=self.paths,
        )


@overload
def calc_max_flow(
    node_count: int,
    source: int,
    sink: int,
    edges: Iterable[EdgeSpec],
    *,
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
    return_summary: Literal[False] = False,
) -> Flow: ...


@overload
def calc_max_flow(
    node_count: int,
    source: int,
    sink: int,
    edges: Iterable[EdgeSpec],
    *,
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
    return_summary: Literal[True],
) -> Tuple[Flow, FlowSummary]: ...


def calc_max_flow(
    node_count: int,
    source: int,
    sink: int,
    edges: Iterable[EdgeSpec],
    *,
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
    return_summary: bool = False,
) -> Union[Flow, Tuple[Flow, FlowSummary]]:
    """Compute the maximum flow of a graph given as an edge list.

    Args:
        node_count (int):
            Number of nodes, including source and sink.
        source (int):
            Index of the source node.
        sink (int):
            Index of the sink node.
        edges (Iterable[EdgeSpec]):
            ``(src, dst, capacity)`` triples, added in order.
        strategy (Optional[StrategyLike]):
            Augmenting-path search; defaults to the configured strategy.
        max_rounds (Optional[int]):
            Optional limit on augmenting rounds.
        return_summary (bool):
            If True, also return a ``FlowSummary``. Defaults to False.

    Returns:
        Union[Flow, Tuple[Flow, FlowSummary]]:
            - If return_summary is False: the max flow value.
            - Otherwise: (max flow, FlowSummary).

    Examples:
        >>> calc_max_flow(3, 0, 2, [(0, 1, 10), (1, 2, 5)])
        5
        >>> flow, summary = calc_max_flow(
        ...     3, 0, 2, [(0, 1, 10), (1, 2, 5)], return_summary=True
        ... )
        >>> summary.min_cut
        [(1, 2, 1)]
    """
    solver = MaxFlowSolver(
        node_count, source, sink, strategy=strategy, max_rounds=max_rounds
    )
    for src, dst, capacity in edges:
        solver.add_edge(src, dst, capacity)

    if return_summary:
        summary = solver.summary()
        return summary.total_flow, summary
    return solver.get_max_flow()
