"""Library modules for augflow.

Flow graph model, augmenting-path algorithms and integration modules for
external libraries.
"""

from augflow.lib.edge import Edge
from augflow.lib.graph import FlowGraph
from augflow.lib.nx import EdgeMap, NodeMap, from_networkx, to_networkx

__all__ = [
    "Edge",
    "EdgeMap",
    "FlowGraph",
    "NodeMap",
    "from_networkx",
    "to_networkx",
]
