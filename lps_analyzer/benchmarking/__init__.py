"""Performance harness, comparison runner and reporting helpers."""

from .comparison import FIRST_ALGORITHM, ComparisonReport, plan_execution_order, run_comparison
from .config import DEFAULT_ITERATION_TIERS, HarnessConfig
from .harness import AlgorithmResult, PerformanceHarness
from .reporting import render_report, write_report_json, write_results_to_csv
from .stats import Sample, SampleSet, TimingSummary, trimmed, trimmed_mean

__all__ = [
    "AlgorithmResult",
    "ComparisonReport",
    "DEFAULT_ITERATION_TIERS",
    "FIRST_ALGORITHM",
    "HarnessConfig",
    "PerformanceHarness",
    "Sample",
    "SampleSet",
    "TimingSummary",
    "plan_execution_order",
    "render_report",
    "run_comparison",
    "trimmed",
    "trimmed_mean",
    "write_report_json",
    "write_results_to_csv",
]
