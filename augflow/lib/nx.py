"""NetworkX graph conversion utilities.

This module converts between NetworkX graphs and augflow's index-based flow
graphs, so topologies built with NetworkX can be solved here and solved flows
can be inspected with NetworkX tooling.

Example:
    >>> import networkx as nx
    >>> from augflow.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=100.0)
    >>> G.add_edge("B", "C", capacity=50.0)
    >>>
    >>> solver, node_map, edge_map = from_networkx(G, "A", "C")
    >>> solver.get_max_flow()
    50.0
    >>> G_out = to_networkx(solver, node_map)
    >>> G_out.edges["B", "C", 1]["flow"]
    50.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple, Union

import networkx as nx

from augflow.errors import InvalidArgumentError
from augflow.lib.algorithms.max_flow import MaxFlowSolver, StrategyLike
from augflow.lib.graph import FlowGraph

NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]

# Type alias for edge references in the NetworkX graph: (source, target, key)
NxEdgeRef = Tuple[Hashable, Hashable, Any]


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and integer indices.

    Attributes:
        to_index: Maps original node names to integer indices
        to_name: Maps integer indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


@dataclass
class EdgeMap:
    """Mapping from augflow edge keys to the NetworkX edges they came from.

    Undirected edges produce two augflow edges, so ``from_ref`` maps to a list.
    """

    to_ref: Dict[int, NxEdgeRef] = field(default_factory=dict)
    from_ref: Dict[NxEdgeRef, List[int]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)


def from_networkx(
    G: NxGraph,
    source: Hashable,
    sink: Hashable,
    *,
    capacity_attr: str = "capacity",
    default_capacity: Optional[float] = None,
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
) -> Tuple[MaxFlowSolver, NodeMap, EdgeMap]:
    """Build a MaxFlowSolver from a NetworkX graph.

    Node names are sorted (by ``str``) and mapped to contiguous indices.
    Undirected graphs contribute one edge per direction. Edges whose capacity
    is zero cannot carry flow and are skipped.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        source: Name of the source node.
        sink: Name of the sink node.
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        default_capacity: Capacity for edges without the attribute. If None,
            such edges are rejected.
        strategy: Augmenting-path search for the solver.
        max_rounds: Optional round limit for the solver.

    Returns:
        Tuple of (solver, node_map, edge_map).

    Raises:
        TypeError: If G is not a NetworkX graph
        InvalidArgumentError: If source or sink is not in G, or an edge has
            no usable capacity.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )
    for role, name in (("Source", source), ("Sink", sink)):
        if name not in G:
            raise InvalidArgumentError(f"{role} node '{name}' is not in the graph.")

    node_names = sorted(G.nodes(), key=str)
    node_map = NodeMap.from_names(node_names)
    solver = MaxFlowSolver(
        len(node_names),
        node_map.to_index[source],
        node_map.to_index[sink],
        strategy=strategy,
        max_rounds=max_rounds,
    )
    edge_map = EdgeMap()

    if G.is_multigraph():
        edges_iter = G.edges(keys=True, data=True)
    else:
        edges_iter = ((u, v, 0, d) for u, v, d in G.edges(data=True))

    for u, v, key, data in edges_iter:
        cap = data.get(capacity_attr, default_capacity)
        if cap is None:
            raise InvalidArgumentError(
                f"Edge ({u!r}, {v!r}, {key!r}) has no '{capacity_attr}' attribute."
            )
        if cap == 0:
            continue
        edge_ref: NxEdgeRef = (u, v, key)
        pairs = [(u, v)] if G.is_directed() else [(u, v), (v, u)]
        for a, b in pairs:
            edge = solver.add_edge(node_map.to_index[a], node_map.to_index[b], cap)
            edge_map.to_ref[edge.key] = edge_ref
            edge_map.from_ref.setdefault(edge_ref, []).append(edge.key)

    return solver, node_map, edge_map


def to_networkx(
    flow: Union[MaxFlowSolver, FlowGraph],
    node_map: Optional[NodeMap] = None,
    *,
    include_residual: bool = False,
) -> nx.MultiDiGraph:
    """Export a flow graph as a NetworkX MultiDiGraph.

    Passing a solver solves it first. Each exported edge is keyed by its
    augflow edge key and carries ``capacity``, ``flow`` and ``is_residual``.

    Args:
        flow: A MaxFlowSolver (solved on demand) or a bare FlowGraph.
        node_map: Optional NodeMap to restore original node names. If None,
            nodes are labeled 0, 1, 2, ...
        include_residual: If True, also export zero-capacity residual edges.

    Returns:
        nx.MultiDiGraph with one edge per exported augflow edge.
    """
    if isinstance(flow, MaxFlowSolver):
        flow.solve()
        graph = flow.graph
    else:
        graph = flow

    def name(idx: int) -> Hashable:
        if node_map is None:
            return idx
        return node_map.to_name.get(idx, idx)

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(i) for i in range(graph.node_count))
    for edge in graph.edges(include_residual=include_residual):
        G.add_edge(
            name(edge.src),
            name(edge.dst),
            key=edge.key,
            capacity=edge.capacity,
            flow=edge.flow,
            is_residual=edge.is_residual(),
        )
    return G
