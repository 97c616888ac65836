"""Command-line interface for fdenum."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

import networkx as nx

from fdenum.config import ENUMERATION_CONFIG
from fdenum.dsl import load_problem
from fdenum.logging import get_logger, set_global_log_level
from fdenum.solver.validation import InvalidConstraintError

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[Any]]) -> str:
    """Render rows as an indented ASCII table.

    Columns whose cells are all ints are right-aligned. Returns "" when there
    are no headers or no rows.
    """
    if not headers or not rows:
        return ""

    cells = [[str(item) for item in row] for row in rows]
    numeric = [
        all(isinstance(row[col], int) for row in rows) for col in range(len(headers))
    ]
    widths = [
        max([len(header)] + [len(row[col]) for row in cells])
        for col, header in enumerate(headers)
    ]

    def render(items: List[str]) -> str:
        padded = [
            item.rjust(width) if right else item.ljust(width)
            for item, width, right in zip(items, widths, numeric)
        ]
        return "   " + " | ".join(padded).rstrip()

    out = [render(list(headers)), "   " + "-+-".join("-" * w for w in widths)]
    out.extend(render(row) for row in cells)
    return "\n".join(out)


def _format_seconds(seconds: float) -> str:
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _solve_problem(
    path: Path,
    limit: Optional[int],
    fmt: str,
    output: Optional[Path],
) -> None:
    """Enumerate a problem file and render the solutions.

    Args:
        path: Problem YAML file.
        limit: Maximum number of solutions; ``None`` uses the file's limit or
            the configured default, and ``0`` means unlimited.
        fmt: One of "table", "json", "csv".
        output: Write rendered output here instead of stdout.
    """
    logger.info(f"Loading problem from: {path}")
    started = perf_counter()

    try:
        problem = load_problem(path)
        constraint_set = problem.constraint_set
        effective = ENUMERATION_CONFIG.effective_limit(
            limit if limit is not None else problem.limit
        )
        logger.debug(
            "Problem '%s': variables=%d, limit=%s",
            problem.name,
            len(constraint_set),
            effective,
        )

        # One extra row tells whether the limit cut the enumeration short.
        frame = constraint_set.to_dataframe(
            None if effective is None else effective + 1
        )
        truncated = effective is not None and len(frame) > effective
        if truncated:
            frame = frame.head(effective)
        count = len(frame)

        if fmt == "json":
            payload = {
                "problem": problem.name,
                "variables": list(constraint_set.names),
                "count": count,
                "truncated": truncated,
                "solutions": (
                    frame.to_dict(orient="records")
                    if len(frame.columns)
                    else [{} for _ in range(count)]
                ),
            }
            rendered = json.dumps(payload, indent=2, default=int)
        elif fmt == "csv":
            rendered = frame.to_csv(index=False).rstrip("\n")
        else:
            max_rows = ENUMERATION_CONFIG.max_table_rows
            rows = frame.head(max_rows).values.tolist()
            lines = [
                f"Problem: {problem.name}",
                f"Solutions: {count}{'+' if truncated else ''}",
            ]
            table = _format_table(list(constraint_set.names), rows)
            if table:
                lines.append(table)
            if count > max_rows:
                lines.append(f"   ... {count - max_rows} more rows")
            rendered = "\n".join(lines)

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered + "\n", encoding="utf-8")
            print(f"Results written to: {output}")
        else:
            print(rendered)

        elapsed = perf_counter() - started
        logger.info(
            f"Enumerated {count} {_plural(count, 'solution')}"
            f"{' (limit reached)' if truncated else ''}"
            f" in {_format_seconds(elapsed)}"
        )

    except FileNotFoundError:
        logger.error(f"Problem file not found: {path}")
        print(f"ERROR: Problem file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to solve problem: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to solve problem: {type(e).__name__}: {e}")
        sys.exit(1)


def _inspect_problem(path: Path) -> None:
    """Validate a problem file and show its declarations and dependencies."""
    logger.info(f"Inspecting problem from: {path}")

    try:
        problem = load_problem(path)
        constraint_set = problem.constraint_set
        graph = constraint_set.dependency_graph()

        print("\n" + "=" * 60)
        print("FDENUM PROBLEM INSPECTION")
        print("=" * 60)
        print(f"Name: {problem.name}")
        if problem.description:
            print(f"Description: {problem.description}")
        n_vars = len(constraint_set)
        print(f"Variables: {n_vars}")
        if problem.limit is not None:
            print(f"Limit: {problem.limit}")

        rows = [
            [
                index,
                data["name"],
                data["constraint"],
                data["pivot"] if data["pivot"] >= 0 else "-",
            ]
            for index, data in sorted(graph.nodes(data=True))
        ]
        table = _format_table(["#", "Name", "Constraint", "Pivot"], rows)
        if table:
            print("\nDeclarations:")
            print(table)

        names = constraint_set.names
        edges = sorted(graph.edges())
        print(f"\nDependencies: {len(edges)} {_plural(len(edges), 'edge')}")
        for source, target in edges:
            print(f"   {names[source]} -> {names[target]}")

        try:
            constraint_set.freeze()
        except InvalidConstraintError as exc:
            print(f"\nCausality: INVALID ({exc})")
            sys.exit(1)
        print("\nCausality: OK")
        if edges:
            depth = nx.dag_longest_path_length(graph)
            print(f"Longest dependency chain: {depth} {_plural(depth, 'edge')}")

        first = constraint_set.first()
        if first is None:
            print("First solution: none (unsatisfiable)")
        else:
            pairs = ", ".join(f"{n}={v}" for n, v in zip(names, first))
            print(f"First solution: {pairs}")

    except FileNotFoundError:
        logger.error(f"Problem file not found: {path}")
        print(f"ERROR: Problem file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect problem: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to inspect problem: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``fdenum`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="fdenum",
        description="Enumerate solutions of finite-domain constraint problems.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,inspect}",
        help="Available commands",
    )

    solve_parser = subparsers.add_parser("solve", help="Enumerate solutions")
    solve_parser.add_argument("problem", type=Path, help="Path to problem YAML")
    solve_parser.add_argument(
        "--limit",
        "-n",
        type=int,
        default=None,
        help=(
            "Maximum number of solutions (default: the file's 'limit', else "
            f"{ENUMERATION_CONFIG.default_limit}; 0 for no limit)"
        ),
    )
    solve_parser.add_argument(
        "--format",
        "-f",
        choices=("table", "json", "csv"),
        default="table",
        help="Output format",
    )
    solve_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write output to this file instead of stdout",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a problem and show its structure"
    )
    inspect_parser.add_argument("problem", type=Path, help="Path to problem YAML")

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

    if args.command == "solve":
        _solve_problem(args.problem, args.limit, args.format, args.output)
    elif args.command == "inspect":
        _inspect_problem(args.problem)


if __name__ == "__main__":
    main()
