"""augflow: augmenting-path maximum flow.

augflow computes the maximum flow between a source and a sink of a directed
capacitated graph with Ford-Fulkerson (depth-first) or Edmonds-Karp
(breadth-first) augmenting-path search.

Primary API:
    MaxFlowSolver - Build a network and query its max flow / residual graph
    calc_max_flow() - One-shot max flow from an edge list
    SearchStrategy - Selects the augmenting-path search
    from_networkx() - Build a solver from a NetworkX graph
    to_networkx() - Export a solved network to NetworkX

Example:
    from augflow import MaxFlowSolver

    solver = MaxFlowSolver(4, 0, 3, strategy="bfs")
    solver.add_edge(0, 1, 3)
    solver.add_edge(1, 3, 2)
    solver.add_edge(0, 2, 1)
    solver.add_edge(2, 3, 5)

    solver.get_max_flow()        # 3
    solver.get_residual_graph()  # per-node tuples of Edge objects
"""

from __future__ import annotations

from augflow import cli, logging
from augflow._version import __version__
from augflow.errors import InvalidArgumentError, MaxRoundsExceededError
from augflow.lib.algorithms import (
    AugmentingPath,
    AugmentingPathSearch,
    BreadthFirstSearch,
    DepthFirstSearch,
    FlowSummary,
    MaxFlowSolver,
    SearchStrategy,
    calc_max_flow,
)
from augflow.lib.edge import Edge
from augflow.lib.graph import FlowGraph
from augflow.lib.io import load_network_yaml, network_from_dict, network_to_dict
from augflow.lib.nx import EdgeMap, NodeMap, from_networkx, to_networkx

__all__ = [
    # Version
    "__version__",
    # Model
    "Edge",
    "FlowGraph",
    # Solving (primary API)
    "MaxFlowSolver",
    "calc_max_flow",
    "SearchStrategy",
    "AugmentingPathSearch",
    "DepthFirstSearch",
    "BreadthFirstSearch",
    # Results
    "AugmentingPath",
    "FlowSummary",
    # Errors
    "InvalidArgumentError",
    "MaxRoundsExceededError",
    # Serialization
    "load_network_yaml",
    "network_from_dict",
    "network_to_dict",
    # Library integrations (NetworkX)
    "EdgeMap",
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
