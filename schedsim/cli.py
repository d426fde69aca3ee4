from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, DEFAULT_ORDER, DEFAULT_QUANTUM, run_algorithm
from .models import Process, ScheduleResult
from .report import build_comparison_table, print_result
from .workload_io import WorkloadError, load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SJF with priority, RR).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Shortcut for --log-level DEBUG.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Print the Gantt schedule and schedule table of each algorithm.",
    )
    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare their metrics.",
    )

    for sub in (run_parser, compare_parser):
        sub.add_argument("workload", help="Path to JSON or CSV workload file.")
        sub.add_argument(
            "--algorithm",
            "-a",
            dest="algorithms",
            nargs="+",
            choices=list(ALGORITHMS),
            default=list(DEFAULT_ORDER),
            help=f"Algorithms to run (default: {' '.join(DEFAULT_ORDER)}).",
        )
        sub.add_argument(
            "--quantum",
            "-q",
            type=int,
            default=DEFAULT_QUANTUM,
            help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
        )

    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Plain-text Gantt schedule and ASCII tables, no colour.",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run_all(processes: Sequence[Process], algorithms: Sequence[str], quantum: int) -> List[ScheduleResult]:
    # Each algorithm gets its own copy of the workload.
    return [
        run_algorithm(alg, list(processes), quantum=quantum if alg == "rr" else None)
        for alg in algorithms
    ]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)

    if args.quantum <= 0:
        parser.error("--quantum must be a positive integer")

    try:
        processes = load_workload(Path(args.workload))
    except (WorkloadError, OSError) as exc:
        logger.error("cannot load workload: %s", exc)
        Console(stderr=True).print(f"[red]Error: {escape(str(exc))}[/red]", highlight=False)
        return 1

    results = _run_all(processes, args.algorithms, args.quantum)

    if args.command == "run":
        console = Console(no_color=args.plain)
        for result in results:
            print_result(console, result, plain=args.plain)
        return 0

    Console().print(build_comparison_table(results, title=f"Algorithm comparison: {args.workload}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
