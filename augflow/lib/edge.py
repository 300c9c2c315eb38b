from __future__ import annotations

from typing import Any, Dict, Optional, Union

#: Numeric flow or capacity amount.
Flow = Union[int, float]


class Edge:
    """
    One directed arc of a flow graph.

    Every real edge (``capacity > 0``) is paired with a residual edge running
    the opposite way with ``capacity == 0``. The two share a ``key`` and point
    at each other through ``residual``. Augmenting one edge by ``b`` lowers the
    partner's flow by ``b``, so ``edge.flow == -edge.residual.flow`` holds at
    all times and the residual edge exposes ``b`` units of reverse capacity.

    Attributes:
        src: Index of the node the edge leaves.
        dst: Index of the node the edge enters.
        capacity: Upper bound on flow, fixed at creation (0 for residual edges).
        flow: Current flow; only ``augment`` changes it.
        key: Insertion index of the real edge, shared with its residual partner.
        residual: The paired opposite edge.
    """

    __slots__ = ("src", "dst", "capacity", "flow", "key", "residual")

    def __init__(self, src: int, dst: int, capacity: Flow, key: int = 0) -> None:
        self.src = src
        self.dst = dst
        self.capacity = capacity
        self.flow: Flow = 0
        self.key = key
        self.residual: Optional[Edge] = None

    def is_residual(self) -> bool:
        """True iff this is the zero-capacity partner of a real edge."""
        return self.capacity == 0

    def remaining_capacity(self) -> Flow:
        return self.capacity - self.flow

    def augment(self, bottleneck: Flow) -> None:
        """
        Push ``bottleneck`` units through this edge.

        Args:
            bottleneck: Amount of flow to add; the residual partner loses the same amount.
        """
        self.flow += bottleneck
        self.residual.flow -= bottleneck

    def label(self, source: int, sink: int) -> str:
        """
        Human-readable one-line description with ``s``/``t`` substituted for
        the source and sink indices.

        Args:
            source: Index printed as ``s``.
            sink: Index printed as ``t``.

        Returns:
            str: e.g. ``"Edge s -> 0 | flow =  10 | capacity =  13 | is residual: False"``.
        """

        def name(node: int) -> str:
            if node == source:
                return "s"
            if node == sink:
                return "t"
            return str(node)

        return (
            f"Edge {name(self.src)} -> {name(self.dst)} | "
            f"flow = {self.flow:3} | capacity = {self.capacity:3} | "
            f"is residual: {self.is_residual()}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "src": self.src,
            "dst": self.dst,
            "key": self.key,
            "flow": self.flow,
            "capacity": self.capacity,
            "is_residual": self.is_residual(),
        }

    def __repr__(self) -> str:
        return (
            f"Edge({self.src}->{self.dst}, key={self.key}, flow={self.flow}, "
            f"capacity={self.capacity}, residual={self.is_residual()})"
        )


def make_edge_pair(src: int, dst: int, capacity: Flow, key: int) -> Edge:
    """
    Create a real edge and its zero-capacity residual partner, linked both ways.

    Returns:
        Edge: The forward (real) edge; its partner is ``edge.residual``.
    """
    forward = Edge(src, dst, capacity, key)
    backward = Edge(dst, src, 0, key)
    forward.residual = backward
    backward.residual = forward
    return forward
