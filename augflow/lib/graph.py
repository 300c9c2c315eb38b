from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, List, Tuple

from augflow.errors import InvalidArgumentError
from augflow.lib.edge import Edge, Flow, make_edge_pair

#: Per-node ordered edge sequences, as handed out to callers.
Adjacency = Tuple[Tuple[Edge, ...], ...]


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class FlowGraph:
    """
    Adjacency-list flow graph over nodes ``0 .. node_count - 1``.

    This class enforces:
      - Node indices are ints within range (raising InvalidArgumentError otherwise).
      - Edge capacities are finite, strictly positive real numbers.
      - Every real edge gets a residual partner appended to the opposite
        endpoint's list, so search sees both directions under the same
        remaining-capacity rule.
      - Parallel edges between the same pair of nodes are kept separately.
      - Once frozen (a solve has started), no further edges may be added.
    """

    def __init__(self, node_count: int) -> None:
        """
        Initialize an empty graph.

        Args:
            node_count (int): Number of nodes, including source and sink.

        Raises:
            InvalidArgumentError: If node_count is not a non-negative int.
        """
        if not _is_index(node_count) or node_count < 0:
            raise InvalidArgumentError(
                f"Node count must be a non-negative integer, got {node_count!r}."
            )
        self._adj: List[List[Edge]] = [[] for _ in range(node_count)]
        self._edge_count = 0
        self._frozen = False

    @property
    def node_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        """Number of real edges (residual partners are not counted)."""
        return self._edge_count

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Disallow further edge insertion."""
        self._frozen = True

    def __len__(self) -> int:
        return len(self._adj)

    def check_node(self, node: int, role: str = "Node") -> None:
        """
        Validate a node index.

        Raises:
            InvalidArgumentError: If node is not an int in ``[0, node_count)``.
        """
        if not _is_index(node) or not 0 <= node < len(self._adj):
            raise InvalidArgumentError(
                f"{role} index {node!r} is out of range [0, {len(self._adj)})."
            )

    def add_edge(self, src: int, dst: int, capacity: Flow) -> Edge:
        """
        Add a directed edge and its residual partner.

        Args:
            src (int): Index of the node the edge starts at.
            dst (int): Index of the node the edge ends at.
            capacity (Flow): Capacity of the edge; must be finite and > 0.

        Returns:
            Edge: The new forward edge.

        Raises:
            InvalidArgumentError: If either index is out of range or the
                capacity is not a finite positive number.
            RuntimeError: If the graph has been frozen by a solver.
        """
        if self._frozen:
            raise RuntimeError("Cannot add edges once the flow has been solved.")
        self.check_node(src, "Source")
        self.check_node(dst, "Target")
        if isinstance(capacity, bool) or not isinstance(capacity, Real):
            raise InvalidArgumentError(
                f"Edge capacity must be a number, got {capacity!r}."
            )
        if not capacity > 0:
            raise InvalidArgumentError(
                f"Forward edge capacity must be > 0, got {capacity!r}."
            )
        if not math.isfinite(capacity):
            raise InvalidArgumentError(
                f"Forward edge capacity must be finite, got {capacity!r}."
            )

        edge = make_edge_pair(src, dst, capacity, self._edge_count)
        self._adj[src].append(edge)
        self._adj[dst].append(edge.residual)
        self._edge_count += 1
        return edge

    def adjacency(self, node: int) -> Tuple[Edge, ...]:
        """
        Ordered outgoing edges of a node, real and residual alike.

        Raises:
            InvalidArgumentError: If node is out of range.
        """
        self.check_node(node)
        return tuple(self._adj[node])

    def out_edges(self, node: int) -> List[Edge]:
        """Internal list of outgoing edges; search reads it without copying."""
        return self._adj[node]

    def as_adjacency(self) -> Adjacency:
        return tuple(tuple(edges) for edges in self._adj)

    def edges(self, include_residual: bool = False) -> Iterator[Edge]:
        """
        Iterate edges in node order, then insertion order.

        Args:
            include_residual (bool): If True, also yield residual partners.
        """
        for edges in self._adj:
            for edge in edges:
                if include_residual or not edge.is_residual():
                    yield edge
