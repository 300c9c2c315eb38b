from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import yaml

from augflow.errors import InvalidArgumentError
from augflow.lib.algorithms.max_flow import MaxFlowSolver, StrategyLike


def network_to_dict(solver: MaxFlowSolver) -> Dict[str, Any]:
    """
    Converts a solver's network into a plain dict representation.

    The returned dict is suitable for JSON or YAML serialization and has the
    following structure:
        {
            "nodes": <node count>,
            "source": <source index>,
            "sink": <sink index>,
            "strategy": "dfs" | "bfs" | <custom name>,
            "edges": [[src, dst, capacity], ...]
        }

    Only real edges are listed, in insertion order, so
    ``network_from_dict(network_to_dict(s))`` rebuilds the same network.

    Args:
        solver: The solver whose network to convert. It is not solved.

    Returns:
        A dict describing the network.
    """
    edges = sorted(solver.graph.edges(), key=lambda e: e.key)
    return {
        "nodes": solver.node_count,
        "source": solver.source,
        "sink": solver.sink,
        "strategy": solver.strategy,
        "edges": [[e.src, e.dst, e.capacity] for e in edges],
    }


def network_from_dict(
    data: Dict[str, Any],
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
) -> MaxFlowSolver:
    """
    Builds a MaxFlowSolver from its dict representation.

    Each entry of ``edges`` is either a ``[src, dst, capacity]`` sequence or
    a mapping with ``src``, ``dst`` and ``capacity`` keys.

    Args:
        data: A dict with ``nodes``, ``source``, ``sink`` and ``edges`` keys,
            plus an optional ``strategy``.
        strategy: Overrides the document's ``strategy`` when given.
        max_rounds: Optional round limit for the solver.

    Returns:
        An unsolved MaxFlowSolver with all edges added.

    Raises:
        InvalidArgumentError: If the document is malformed or describes an
            invalid network.
    """
    if not isinstance(data, dict):
        raise InvalidArgumentError("Network document must be a mapping.")
    missing = [k for k in ("nodes", "source", "sink") if k not in data]
    if missing:
        raise InvalidArgumentError(
            f"Network document is missing required keys: {', '.join(missing)}"
        )
    edges = data.get("edges") or []
    if not isinstance(edges, list):
        raise InvalidArgumentError("'edges' must be a list")

    solver = MaxFlowSolver(
        data["nodes"],
        data["source"],
        data["sink"],
        strategy=strategy if strategy is not None else data.get("strategy"),
        max_rounds=max_rounds,
    )
    for idx, entry in enumerate(edges):
        if isinstance(entry, dict):
            try:
                src, dst, cap = entry["src"], entry["dst"], entry["capacity"]
            except KeyError as exc:
                raise InvalidArgumentError(
                    f"Edge #{idx} is missing key {exc.args[0]!r}"
                ) from None
        elif isinstance(entry, (list, tuple)) and len(entry) == 3:
            src, dst, cap = entry
        else:
            raise InvalidArgumentError(
                f"Edge #{idx} must be [src, dst, capacity] or a mapping, got {entry!r}"
            )
        solver.add_edge(src, dst, cap)
    return solver


def load_network_yaml(
    yaml_str: str,
    strategy: Optional[StrategyLike] = None,
    max_rounds: Optional[int] = None,
) -> MaxFlowSolver:
    """
    Parses a YAML (or JSON) network document into a MaxFlowSolver.

    Example document:
        nodes: 4
        source: 0
        sink: 3
        strategy: bfs
        edges:
          - [0, 1, 3]
          - {src: 1, dst: 3, capacity: 2}

    Raises:
        InvalidArgumentError: If the text is not valid YAML or not a valid
            network document.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise InvalidArgumentError(f"Invalid network YAML: {exc}") from exc
    if data is None:
        data = {}
    return network_from_dict(data, strategy=strategy, max_rounds=max_rounds)


def edgelist_to_solver(
    lines: Iterable[str],
    node_count: int,
    source: int,
    sink: int,
    separator: Optional[str] = None,
    strategy: Optional[StrategyLike] = None,
) -> MaxFlowSolver:
    """
    Builds a MaxFlowSolver from edge-list text.

    Each non-blank line holds ``src dst capacity``. Lines starting with ``#``
    are ignored. Capacities are parsed as int when possible, else float.

    Args:
        lines: An iterable of strings, each representing one edge.
        node_count: Number of nodes in the network.
        source: Index of the source node.
        sink: Index of the sink node.
        separator: Token separator; None splits on any whitespace.
        strategy: Augmenting-path search for the solver.

    Returns:
        An unsolved MaxFlowSolver.

    Raises:
        InvalidArgumentError: If a line does not hold exactly three numeric tokens.
    """
    solver = MaxFlowSolver(node_count, source, sink, strategy=strategy)
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        tokens = line.split(separator)
        if len(tokens) != 3:
            raise InvalidArgumentError(
                f"Line '{line}' does not match 'src dst capacity' (token count mismatch)."
            )
        try:
            src, dst = int(tokens[0]), int(tokens[1])
            cap = _parse_number(tokens[2])
        except ValueError:
            raise InvalidArgumentError(f"Line '{line}' has non-numeric fields.") from None
        solver.add_edge(src, dst, cap)
    return solver


def solver_to_edgelist(
    solver: MaxFlowSolver,
    include_residual: bool = False,
    separator: str = " ",
) -> List[str]:
    """
    Converts a solved network into edge-list lines ``src dst capacity flow``.

    The solver is solved on demand so the flow column is final.
    """
    solver.solve()
    return [
        separator.join(str(v) for v in (e.src, e.dst, e.capacity, e.flow))
        for e in solver.graph.edges(include_residual=include_residual)
    ]


def _parse_number(token: str) -> float:
    try:
        return int(token)
    except ValueError:
        return float(token)
