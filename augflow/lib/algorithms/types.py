"""Types and data structures for augmenting-path results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from augflow.lib.edge import Edge, Flow

# Real edge identifier tuple: (source_node, destination_node, edge_key)
EdgeRef = Tuple[int, int, int]


@dataclass
class AugmentingPath:
    """One source-to-sink path found by a search strategy.

    Attributes:
        edges: Edges in order from source to sink.
        bottleneck: Minimum remaining capacity along the path at discovery time.
        applied: True once the bottleneck has been pushed through every edge.
    """

    edges: List[Edge]
    bottleneck: Flow
    applied: bool = False

    def augment(self) -> None:
        """Push the bottleneck through every edge of the path exactly once."""
        if self.applied:
            raise RuntimeError("Augmenting path has already been applied.")
        for edge in self.edges:
            edge.augment(self.bottleneck)
        self.applied = True

    @property
    def nodes(self) -> List[int]:
        """Node indices visited by the path, source first."""
        if not self.edges:
            return []
        return [self.edges[0].src] + [edge.dst for edge in self.edges]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: The maximum flow value achieved.
        edge_flow: Flow on each real edge, indexed by (src, dst, key).
        residual_cap: Remaining capacity on each real edge after the solve.
        reachable: Nodes reachable from the source in the residual graph.
        min_cut: Real edges leaving the reachable set; all are saturated and
            their capacities sum to ``total_flow``.
        rounds: Number of augmenting paths used.
        strategy: Name of the search strategy that produced the flow.
    """

    total_flow: Flow
    edge_flow: Dict[EdgeRef, Flow]
    residual_cap: Dict[EdgeRef, Flow]
    reachable: Set[int]
    min_cut: List[EdgeRef]
    rounds: int
    strategy: str
    paths: List[List[int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly representation (edge refs become ``"u->v#k"`` strings)."""

        def ref(edge: EdgeRef) -> str:
            return f"{edge[0]}->{edge[1]}#{edge[2]}"

        return {
            "total_flow": self.total_flow,
            "strategy": self.strategy,
            "rounds": self.rounds,
            "edge_flow": {ref(e): f for e, f in self.edge_flow.items()},
            "residual_cap": {ref(e): c for e, c in self.residual_cap.items()},
            "reachable": sorted(self.reachable),
            "min_cut": [ref(e) for e in self.min_cut],
            "paths": [list(p) for p in self.paths],
        }
