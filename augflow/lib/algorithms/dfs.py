from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from augflow.lib.algorithms.base import INF, VisitTracker
from augflow.lib.algorithms.types import AugmentingPath
from augflow.lib.edge import Edge, Flow
from augflow.lib.graph import FlowGraph

# (node, flow that can reach it, iterator over its remaining outgoing edges)
_Frame = Tuple[int, Flow, Iterator[Edge]]


class DepthFirstSearch:
    """
    Ford-Fulkerson augmenting-path search.

    Walks depth-first from the source and takes the first path that reaches
    the sink; it does not look for a wider one. The walk uses an explicit
    stack, so long paths do not exhaust the interpreter's recursion limit,
    but it visits nodes and edges in exactly the order a recursive descent
    would: a node is marked on entry, each of its edges with remaining
    capacity and an unvisited target is tried in adjacency order, and a
    dead end hands control back to the parent's next edge.

    Flow is pushed through the path while unwinding from the sink, so the
    returned path is already applied.
    """

    name = "dfs"

    def find_path(
        self,
        graph: FlowGraph,
        source: int,
        sink: int,
        visited: VisitTracker,
    ) -> Optional[AugmentingPath]:
        """
        Find one augmenting path and augment it.

        Args:
            graph: Flow graph holding the residual state.
            source: Index of the source node.
            sink: Index of the sink node.
            visited: Visit marks, already advanced to a new round.

        Returns:
            Optional[AugmentingPath]: The applied path, or None if the sink is unreachable.
        """
        visited.visit(source)
        stack: List[_Frame] = [(source, INF, iter(graph.out_edges(source)))]
        # path[i] is the edge taken out of stack[i]
        path: List[Edge] = []

        while stack:
            node, flow, edges = stack[-1]
            for edge in edges:
                remaining = edge.remaining_capacity()
                if remaining <= 0 or visited.is_visited(edge.dst):
                    continue
                capped = min(flow, remaining)
                path.append(edge)
                if edge.dst == sink:
                    return self._unwind(path, capped)
                visited.visit(edge.dst)
                stack.append((edge.dst, capped, iter(graph.out_edges(edge.dst))))
                break
            else:
                # Dead end: back off to the parent's next edge
                stack.pop()
                if path:
                    path.pop()
        return None

    @staticmethod
    def _unwind(path: List[Edge], bottleneck: Flow) -> AugmentingPath:
        for edge in reversed(path):
            edge.augment(bottleneck)
        return AugmentingPath(edges=path, bottleneck=bottleneck, applied=True)
