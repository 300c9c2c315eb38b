from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from augflow.lib.algorithms.base import VisitTracker
from augflow.lib.algorithms.types import AugmentingPath
from augflow.lib.edge import Edge
from augflow.lib.graph import FlowGraph


class BreadthFirstSearch:
    """
    Edmonds-Karp augmenting-path search.

    Explores the residual graph breadth-first from the source, so every path
    it returns has the fewest edges among all augmenting paths. This bounds
    the number of rounds by O(V * E) regardless of capacities.

    The path is reconstructed from predecessor edges after the search ends
    and returned unapplied; the caller pushes the flow.
    """

    name = "bfs"

    def find_path(
        self,
        graph: FlowGraph,
        source: int,
        sink: int,
        visited: VisitTracker,
    ) -> Optional[AugmentingPath]:
        """
        Find a shortest augmenting path.

        Args:
            graph: Flow graph holding the residual state.
            source: Index of the source node.
            sink: Index of the sink node.
            visited: Visit marks, already advanced to a new round.

        Returns:
            Optional[AugmentingPath]: The unapplied path, or None if the sink is unreachable.
        """
        pred: List[Optional[Edge]] = [None] * graph.node_count
        queue: Deque[int] = deque([source])
        visited.visit(source)

        while queue and not visited.is_visited(sink):
            node = queue.popleft()
            for edge in graph.out_edges(node):
                if edge.remaining_capacity() > 0 and not visited.is_visited(edge.dst):
                    visited.visit(edge.dst)
                    pred[edge.dst] = edge
                    if edge.dst == sink:
                        break
                    queue.append(edge.dst)

        if not visited.is_visited(sink):
            return None

        edges: List[Edge] = []
        node = sink
        while node != source:
            edge = pred[node]
            edges.append(edge)
            node = edge.src
        edges.reverse()

        bottleneck = min(edge.remaining_capacity() for edge in edges)
        return AugmentingPath(edges=edges, bottleneck=bottleneck, applied=False)
