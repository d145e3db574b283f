"""Command-line interface for algraph."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

from algraph.algorithms.base import MAX_PATH
from algraph.algorithms.mincut import KargerMinCut, MinCutPlan
from algraph.algorithms.mst import minimum_spanning_tree
from algraph.algorithms.scc import find_sccs
from algraph.algorithms.spf import resolve_path, spf
from algraph.graph.io import (
    InputFormat,
    format_weight,
    graph_to_adjacency_lines,
    read_graph,
)
from algraph.graph.store import GraphStore, VertexNotFoundError
from algraph.logging import get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 8) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = [
        max(min_width, max(len(row[col_idx]) for row in all_data))
        for col_idx in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in all_data[1:])
    return "\n".join(lines)


def _format_hms(seconds: float) -> str:
    """Return ``"H hours, M minutes, S seconds"`` for a duration."""
    total = int(round(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours} hours, {minutes} minutes, {secs} seconds"


def _prompt_confirmation(plan: MinCutPlan) -> bool:
    """Warn about the expected duration and ask the user to type Y."""
    print(
        "Warning: This process is expected to take approximately "
        f"{_format_hms(plan.expected_seconds)} ({plan.trials} trials)."
    )
    print('Enter "Y" to proceed.')
    try:
        decision = input().strip()
    except EOFError:
        decision = ""
    print(f'You entered "{decision}".')
    return decision in ("Y", "y")


def _load(args: argparse.Namespace) -> GraphStore:
    return read_graph(
        args.graph,
        InputFormat.from_label(args.format),
        directed=not args.undirected,
        pre_reciprocated=args.pre_reciprocated,
    )


def _cmd_info(args: argparse.Namespace) -> None:
    store = _load(args)
    print(f"Kind: {'directed' if store.directed else 'undirected'}")
    print(f"Total vertices = {len(store)}")
    print(f"Total edges = {store.edge_count()}")
    print(f"Total weight = {format_weight(store.total_weight())}")


def _cmd_print(args: argparse.Namespace) -> None:
    store = _load(args)
    for line in graph_to_adjacency_lines(store):
        print(line)


def _cmd_scc(args: argparse.Namespace) -> None:
    store = _load(args)
    result = find_sccs(store)
    print(f"Strongly connected components = {result.scc_count()}")
    top = result.top_components(args.top)
    table = _format_table(["Representative", "Population"], [list(row) for row in top])
    if table:
        print(table)


def _cmd_shortest_paths(args: argparse.Namespace) -> None:
    store = _load(args)
    costs, pred = spf(store, args.source)
    targets = args.targets if args.targets else list(costs)
    rows = []
    for target in targets:
        if target not in store:
            raise VertexNotFoundError(target)
        cost = costs[target]
        if cost >= MAX_PATH:
            rows.append([target, "unreachable", ""])
        else:
            path = " -> ".join(str(v) for v in resolve_path(pred, target))
            rows.append([target, format_weight(cost), path])
    print(_format_table(["Vertex", "Distance", "Path"], rows))


def _cmd_mst(args: argparse.Namespace) -> None:
    store = _load(args)
    tree = minimum_spanning_tree(store)
    print(f"MST edges = {tree.edge_count()}")
    print(f"MST total weight = {format_weight(tree.total_weight())}")
    if args.print_tree:
        for line in graph_to_adjacency_lines(tree):
            print(line)


def _cmd_mincut(args: argparse.Namespace) -> None:
    store = _load(args)
    estimator = KargerMinCut(store, seed=args.seed, trials=args.trials)
    confirm: Optional[Callable[[MinCutPlan], bool]] = (
        None if args.yes else _prompt_confirmation
    )
    result = estimator.run(confirm=confirm, workers=args.workers)
    if result.declined:
        print("Minimum cut cancelled.")
        return
    print(f"Minimum cut = {result.cut} ({result.trials_run} trials)")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``algraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="algraph",
        description="Analyze graphs stored as edge or adjacency lists.",
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
        metavar="{info,print,scc,shortest-paths,mst,mincut}",
        help="Available commands",
    )

    info_parser = subparsers.add_parser("info", help="Show vertex and edge totals")
    print_parser = subparsers.add_parser(
        "print", help="Print the graph as an adjacency list"
    )

    scc_parser = subparsers.add_parser(
        "scc", help="Strongly connected components of a directed graph"
    )
    scc_parser.add_argument(
        "--top", "-n", type=int, default=5, help="Number of largest components to list"
    )

    sp_parser = subparsers.add_parser(
        "shortest-paths", help="Shortest distances from a source vertex"
    )
    sp_parser.add_argument("--source", "-s", type=int, required=True)
    sp_parser.add_argument(
        "--targets", "-t", type=int, nargs="+", help="Only report these vertices"
    )

    mst_parser = subparsers.add_parser("mst", help="Minimum spanning tree")
    mst_parser.add_argument(
        "--print-tree", action="store_true", help="Print the tree's adjacency list"
    )

    mincut_parser = subparsers.add_parser(
        "mincut", help="Randomized minimum cut estimate"
    )
    mincut_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the duration confirmation"
    )
    mincut_parser.add_argument("--seed", type=int, default=None)
    mincut_parser.add_argument(
        "--trials", type=int, default=None, help="Override the number of trials"
    )
    mincut_parser.add_argument(
        "--workers", "-w", type=int, default=1, help="Worker processes for trials"
    )

    for p in (
        info_parser,
        print_parser,
        scc_parser,
        sp_parser,
        mst_parser,
        mincut_parser,
    ):
        p.add_argument("graph", type=Path, help="Path to the graph file")
        p.add_argument(
            "--format",
            "-f",
            choices=[f.label for f in InputFormat],
            default=InputFormat.EDGE_LIST.label,
            help="Input layout (default: edge-list)",
        )
        p.add_argument(
            "--undirected",
            action="store_true",
            help="Treat edges as undirected (reciprocated on import)",
        )
        p.add_argument(
            "--pre-reciprocated",
            action="store_true",
            help="Undirected input already lists both directions of every edge",
        )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    commands = {
        "info": _cmd_info,
        "print": _cmd_print,
        "scc": _cmd_scc,
        "shortest-paths": _cmd_shortest_paths,
        "mst": _cmd_mst,
        "mincut": _cmd_mincut,
    }

    try:
        commands[args.command](args)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {args.graph}")
        print(f"ERROR: Graph file not found: {args.graph}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Cannot read graph file {args.graph}: {e}")
        print(f"ERROR: Cannot read graph file {args.graph}: {e.strerror or e}")
        sys.exit(1)
    except (VertexNotFoundError, ValueError) as e:
        # GraphFormatError, GraphKindError and NoSpanningTreeError are ValueErrors
        logger.error(f"{args.command} failed: {type(e).__name__}: {e}")
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
