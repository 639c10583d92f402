from __future__ import annotations

import csv
import json
from pathlib import Path

from rich.console import Console

from lps_analyzer.benchmarking import (
    AlgorithmResult,
    ComparisonReport,
    render_report,
    write_report_json,
    write_results_to_csv,
)


def _report() -> ComparisonReport:
    results = {
        "naive": AlgorithmResult(
            algorithm="naive",
            substring="bab",
            execution_time_ms=0.123456789,
            memory_delta_kb=1.5,
            variant="expand_around_center",
            iterations=7,
            palindrome_length=3,
            time_complexity="O(n^2)",
            space_complexity="O(1)",
        ),
        "dp": AlgorithmResult(
            algorithm="dp",
            substring="",
            execution_time_ms=0.0,
            memory_delta_kb=0.0,
            error="dp produced an invalid span [0, 1]: not a palindrome",
            variant="center_expansion",
        ),
        "manacher": AlgorithmResult(
            algorithm="manacher",
            substring="bab",
            execution_time_ms=0.05,
            memory_delta_kb=-0.25,
            measurement_unreliable=True,
            timed_out=True,
            variant="linear",
            iterations=3,
            palindrome_length=3,
            time_complexity="O(n)",
            space_complexity="O(n)",
        ),
    }
    return ComparisonReport(
        results=results,
        execution_order=("manacher", "dp", "naive"),
        raw_length=5,
        canonical_length=5,
    )


def test_write_results_to_csv(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "results.csv"
    write_results_to_csv(target, _report())

    with target.open("r", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == [
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
    assert [row[0] for row in rows[1:]] == ["manacher", "dp", "naive"]
    assert rows[1] == ["manacher", "linear", "3", "0.050000", "-0.250", "3", "true", "true", ""]
    assert rows[2][-1].startswith("dp produced an invalid span")
    assert rows[3][3] == "0.123457"


def test_write_report_json(tmp_path: Path) -> None:
    path = write_report_json(tmp_path / "report.json", _report())
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload["execution_order"] == ["manacher", "dp", "naive"]
    assert payload["results"]["manacher"]["measurement_unreliable"] is True
    assert payload["results"]["dp"]["error"].endswith("not a palindrome")
    assert "timestamp" in payload


def test_render_report_lists_every_algorithm() -> None:
    console = Console(record=True, width=320)
    table = render_report(_report(), console=console)
    output = console.export_text()

    assert table.row_count == 3
    assert "manacher (first)" in output
    assert "timed out" in output
    assert "memory unreliable" in output
    assert "error:" in output
