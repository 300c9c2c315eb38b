from __future__ import annotations

import math
from enum import IntEnum
from typing import List, Optional, Protocol, runtime_checkable

from augflow.lib.algorithms.types import AugmentingPath
from augflow.lib.graph import FlowGraph

#: Inbound flow at the source. Capacities are finite, so min() against any
#: edge yields a finite bottleneck.
INF = math.inf


class SearchStrategy(IntEnum):
    """
    Augmenting-path search algorithms.
    """

    #: Depth-first search (Ford-Fulkerson).
    DFS = 1
    #: Breadth-first shortest augmenting path (Edmonds-Karp).
    BFS = 2


class VisitTracker:
    """
    Per-round visited marks without an O(n) reset between rounds.

    Node ``i`` counts as visited in the current round iff
    ``marks[i] == token``. Starting a new round just bumps the token.
    """

    __slots__ = ("token", "marks")

    def __init__(self, node_count: int) -> None:
        self.token = 0
        self.marks: List[int] = [0] * node_count

    def next_round(self) -> None:
        self.token += 1

    def visit(self, node: int) -> None:
        self.marks[node] = self.token

    def is_visited(self, node: int) -> bool:
        return self.marks[node] == self.token


@runtime_checkable
class AugmentingPathSearch(Protocol):
    """
    Interface shared by all search strategies.

    ``find_path`` looks for one source-to-sink path along edges with positive
    remaining capacity, using ``visited`` (already advanced to a fresh round)
    to avoid revisiting nodes. It returns None when the sink is unreachable.
    A strategy may push the flow itself while unwinding, in which case the
    returned path has ``applied=True``; otherwise the caller augments it.
    """

    name: str

    def find_path(
        self,
        graph: FlowGraph,
        source: int,
        sink: int,
        visited: VisitTracker,
    ) -> Optional[AugmentingPath]: ...
