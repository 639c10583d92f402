"""Command-line entry point running one comparison and printing the results."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from lps_analyzer.algorithms.registry import DP_VARIANTS, MANACHER_VARIANTS
from lps_analyzer.benchmarking.comparison import run_comparison
from lps_analyzer.benchmarking.config import HarnessConfig
from lps_analyzer.benchmarking.reporting import (
    render_report,
    write_report_json,
    write_results_to_csv,
)
from lps_analyzer.errors import ConfigurationError, InvalidInputError

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lps-analyzer",
        description="Compare longest palindromic substring algorithms on a text.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Text to analyse. Reads standard input when neither TEXT nor --file is given.",
    )
    parser.add_argument("--file", type=Path, default=None, help="UTF-8 text file to analyse.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML harness configuration. Defaults to LPS_* environment variables.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the execution order.")
    parser.add_argument(
        "--budget",
        type=float,
        default=None,
        help="Wall-clock budget per algorithm in seconds.",
    )
    parser.add_argument(
        "--dp-variant",
        choices=sorted(DP_VARIANTS),
        default=None,
        help="Strategy reported under the 'dp' label.",
    )
    parser.add_argument(
        "--manacher-variant",
        choices=sorted(MANACHER_VARIANTS),
        default=None,
        help="Strategy reported under the 'manacher' label.",
    )
    parser.add_argument("--csv", type=Path, default=None, help="Write results to a CSV file.")
    parser.add_argument("--json", type=Path, default=None, help="Write the report as JSON.")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Log every timed sample.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def _read_text(parser: argparse.ArgumentParser, args: argparse.Namespace) -> str:
    if args.text is not None and args.file is not None:
        parser.error("TEXT and --file are mutually exclusive")
    if args.file is not None:
        try:
            return args.file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            parser.error(f"Failed to read {args.file}: {exc}")
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the comparison and return the process exit code."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = (
            HarnessConfig.from_file(args.config)
            if args.config is not None
            else HarnessConfig.from_env()
        )
        config = config.with_overrides(
            seed=args.seed,
            budget_seconds=args.budget,
            dp_variant=args.dp_variant,
            manacher_variant=args.manacher_variant,
            debug=args.debug,
        )
    except (ConfigurationError, FileNotFoundError) as exc:
        parser.error(str(exc))

    text = _read_text(parser, args)
    if not text:
        logger.error("Input string is required")
        return 1

    try:
        report = run_comparison(text, config=config)
    except InvalidInputError as exc:  # pragma: no cover - CLI always passes text
        logger.error("Invalid input: %s", exc)
        return 1

    render_report(report)
    if args.csv is not None:
        write_results_to_csv(args.csv, report)
        logger.info("Results written to %s", args.csv)
    if args.json is not None:
        path = write_report_json(args.json, report)
        logger.info("Report written to %s", path)

    return 1 if report.has_errors else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
