"""Command-line interface for augflow."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from augflow.errors import InvalidArgumentError, MaxRoundsExceededError
from augflow.lib.algorithms.max_flow import MaxFlowSolver
from augflow.lib.io import load_network_yaml
from augflow.logging import get_logger, level_from_flags, set_global_log_level

logger = get_logger(__name__)

# Example network: 6 inner nodes plus source (6) and sink (7). Max flow is 26.
EXAMPLE_NODE_COUNT = 8
EXAMPLE_SOURCE = 6
EXAMPLE_SINK = 7
EXAMPLE_EDGES = [
    # From source
    (6, 0, 13),
    (6, 1, 10),
    (6, 2, 10),
    # Middle
    (0, 3, 24),
    (1, 2, 15),
    (2, 5, 15),
    (1, 0, 5),
    (3, 4, 1),
    (4, 5, 6),
    (1, 2, 15),
    (1, 5, 7),
    # Into sink
    (3, 7, 9),
    (4, 7, 13),
    (5, 7, 16),
]


def build_example(
    strategy: Optional[str] = None, record_paths: bool = False
) -> MaxFlowSolver:
    """Build the fixed example network used by ``augflow demo``."""
    solver = MaxFlowSolver(
        EXAMPLE_NODE_COUNT,
        EXAMPLE_SOURCE,
        EXAMPLE_SINK,
        strategy=strategy,
        record_paths=record_paths,
    )
    for src, dst, capacity in EXAMPLE_EDGES:
        solver.add_edge(src, dst, capacity)
    return solver


def _print_result(solver: MaxFlowSolver, show_edges: bool, as_json: bool) -> None:
    if as_json:
        print(json.dumps(solver.summary().to_dict(), indent=2))
        return

    print(f"Maximum Flow is: {solver.get_max_flow()}")
    if show_edges:
        for edges in solver.get_residual_graph():
            for edge in edges:
                print(edge.label(solver.source, solver.sink))


def _run_demo(strategy: str, show_edges: bool, as_json: bool) -> None:
    solver = build_example(strategy)
    logger.info(f"Solving example network with {solver.strategy} search")
    _print_result(solver, show_edges, as_json)
    logger.debug(f"Example solved in {solver.rounds} augmenting rounds")


def _run_solve(
    path: Path,
    strategy: Optional[str],
    max_rounds: Optional[int],
    show_edges: bool,
    as_json: bool,
) -> None:
    logger.info(f"Loading network from: {path}")
    try:
        solver = load_network_yaml(
            path.read_text(encoding="utf-8"), strategy=strategy, max_rounds=max_rounds
        )
        _print_result(solver, show_edges, as_json)
        logger.info(
            f"Solved with {solver.strategy} search in {solver.rounds} augmenting rounds"
        )
    except FileNotFoundError:
        logger.error(f"Network file not found: {path}")
        print(f"ERROR: Network file not found: {path}")
        sys.exit(1)
    except (InvalidArgumentError, MaxRoundsExceededError) as e:
        logger.error(f"Failed to solve network: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to solve network: {e}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read network file: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to read network file: {path}")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``augflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="augflow",
        description="Compute maximum flows with augmenting-path search.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{demo,solve}",
        help="Available commands",
    )

    demo_parser = subparsers.add_parser(
        "demo", help="Solve the built-in 8-node example network"
    )
    solve_parser = subparsers.add_parser(
        "solve", help="Solve a network described in a YAML or JSON file"
    )
    solve_parser.add_argument("network", type=Path, help="Path to network YAML/JSON")
    solve_parser.add_argument(
        "--max-rounds",
        type=int,
        default=None,
        help="Fail if more augmenting rounds than this are needed",
    )

    for p in (demo_parser, solve_parser):
        p.add_argument(
            "--strategy",
            "-s",
            choices=["dfs", "bfs"],
            default=None,
            help="Augmenting-path search (default: dfs, or the file's 'strategy')",
        )
        p.add_argument(
            "--edges",
            "-e",
            action="store_true",
            help="List every edge of the residual graph after solving",
        )
        p.add_argument(
            "--json",
            action="store_true",
            help="Print a JSON flow summary instead of text",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_from_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    if args.command == "demo":
        _run_demo(args.strategy, args.edges, args.json)
    elif args.command == "solve":
        _run_solve(args.network, args.strategy, args.max_rounds, args.edges, args.json)


if __name__ == "__main__":
    main()
