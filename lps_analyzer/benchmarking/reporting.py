"""Persistence and terminal rendering of comparison reports."""

from __future__ import annotations

import csv
import datetime
import json
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from lps_analyzer.benchmarking.comparison import ComparisonReport
from lps_analyzer.benchmarking.harness import AlgorithmResult

__all__ = [
    "CSV_HEADER",
    "render_report",
    "result_to_row",
    "write_report_json",
    "write_results_to_csv",
]

CSV_HEADER = [
    "algorithm",
    "variant",
    "palindrome_length",
    "execution_time_ms",
    "memory_delta_kb",
    "iterations",
    "timed_out",
    "measurement_unreliable",
    "error",
]


def result_to_row(result: AlgorithmResult) -> List[str]:
    """Serialise *result* for CSV persistence."""

    return [
        result.algorithm,
        result.variant,
        str(result.palindrome_length),
        f"{result.execution_time_ms:.6f}",
        f"{result.memory_delta_kb:.3f}",
        str(result.iterations),
        str(result.timed_out).lower(),
        str(result.measurement_unreliable).lower(),
        result.error or "",
    ]


def write_results_to_csv(path: Path, report: ComparisonReport, *, newline: str = "") -> None:
    """Persist *report* to ``path`` in execution order with a fixed header."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline=newline) as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for name in report.execution_order:
            writer.writerow(result_to_row(report.results[name]))


def write_report_json(path: Path, report: ComparisonReport) -> Path:
    """Write a machine-readable summary of *report* and return its resolved path."""

    resolved_path = path.expanduser().resolve()
    resolved_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.to_dict()
    payload["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    resolved_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return resolved_path


def _preview(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def render_report(report: ComparisonReport, console: Optional[Console] = None) -> Table:
    """Print a Rich table summarising *report* and return it."""

    table = Table(title="Longest Palindromic Substring Comparison")
    table.add_column("Algorithm", justify="left")
    table.add_column("Variant", justify="left")
    table.add_column("Complexity", justify="left")
    table.add_column("Length", justify="right")
    table.add_column("Time ms", justify="right")
    table.add_column("Memory KB", justify="right")
    table.add_column("Runs", justify="right")
    table.add_column("Palindrome", justify="left")
    table.add_column("Notes", justify="left")

    for index, name in enumerate(report.execution_order):
        result = report.results[name]
        label = f"{name} (first)" if index == 0 else name
        notes: List[str] = []
        if result.error:
            notes.append(f"error: {result.error}")
        if result.timed_out:
            notes.append("timed out")
        if result.measurement_unreliable and not result.error:
            notes.append("memory unreliable")
        table.add_row(
            label,
            result.variant,
            f"{result.time_complexity} / {result.space_complexity}",
            str(result.palindrome_length),
            f"{result.execution_time_ms:.2f}",
            f"{result.memory_delta_kb:.2f}",
            str(result.iterations),
            _preview(result.substring),
            "\n".join(notes),
        )

    if not report.lengths_agree:
        table.caption = "Algorithms disagree on the palindrome length"
    (console or Console()).print(table)
    return table
