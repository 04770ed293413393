"""Command-line interface."""

from __future__ import annotations

import argparse
import logging
from itertools import islice
from pathlib import Path

from . import parser
from ..core.errors import ConfigurationError
from ..core.ig import best_probe, marginals, uncertainty
from ..heuristics import HEURISTIC_REGISTRY
from ..utils.logger import configure_logging, get_logger

LOGGER = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _limit(text: str) -> int:
    try:
        limit = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid limit {text!r}") from None
    if limit < 0:
        raise argparse.ArgumentTypeError(f"limit must be non-negative, got {limit}")
    return limit


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Enumerate every solution of a constraint problem")
    ap.add_argument("problem", help="Path to problem YAML")
    ap.add_argument("--heuristic", choices=sorted(HEURISTIC_REGISTRY), help="Branching heuristic")
    ap.add_argument("--limit", type=_limit, help="Stop after this many solutions")
    ap.add_argument("--summary", action="store_true", help="Print per-variable value frequencies")
    ap.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default="WARNING",
        help="Logging level (DEBUG shows search steps)",
    )
    args = ap.parse_args(argv)

    configure_logging(getattr(logging, args.log_level))

    try:
        problem = parser.load_problem(Path(args.problem))
        search = problem.build_system().solve_with_default(args.heuristic or problem.heuristic)
    except ConfigurationError as exc:
        LOGGER.error("%s", exc)
        return 2

    limit = args.limit if args.limit is not None else problem.limit
    try:
        solutions = list(islice(search, limit))
    except ConfigurationError as exc:
        LOGGER.error("%s", exc)
        return 2
    finally:
        search.close()

    for solution in solutions:
        print(solution)
    print(f"{len(solutions)} solution(s)")
    LOGGER.info(
        "Explored %d nodes with %d backtracks", search.stats.nodes, search.stats.backtracks,
    )

    if args.summary and solutions:
        bits = uncertainty(solutions)
        for var, counter in marginals(solutions).items():
            freqs = ", ".join(f"{value}: {count}" for value, count in sorted(counter.items(), key=str))
            print(f"{var}: {freqs} ({bits[var]:.3f} bits)")
        probe = best_probe(solutions)
        print(f"most informative variable: {probe} ({bits[probe]:.3f} bits)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
