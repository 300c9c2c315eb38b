"""Augmenting-path max-flow algorithms."""

from augflow.lib.algorithms.base import (
    INF,
    AugmentingPathSearch,
    SearchStrategy,
    VisitTracker,
)
from augflow.lib.algorithms.bfs import BreadthFirstSearch
from augflow.lib.algorithms.dfs import DepthFirstSearch
from augflow.lib.algorithms.max_flow import MaxFlowSolver, calc_max_flow, get_search
from augflow.lib.algorithms.types import AugmentingPath, EdgeRef, FlowSummary

__all__ = [
    "INF",
    "AugmentingPath",
    "AugmentingPathSearch",
    "BreadthFirstSearch",
    "DepthFirstSearch",
    "EdgeRef",
    "FlowSummary",
    "MaxFlowSolver",
    "SearchStrategy",
    "VisitTracker",
    "calc_max_flow",
    "get_search",
]
