"""Longest palindromic substring analyzer.

Three solvers compete on the same canonicalised text and a statistical
harness reports their execution time and allocator delta side by side.
"""

from __future__ import annotations

from .algorithms import (
    LPSAlgorithm,
    NormalizedText,
    PalindromeSpan,
    build_algorithms,
    canonicalize,
    is_palindrome,
    normalize,
)
from .benchmarking import (
    AlgorithmResult,
    ComparisonReport,
    HarnessConfig,
    PerformanceHarness,
    run_comparison,
)
from .errors import (
    ConfigurationError,
    InternalConsistencyError,
    InvalidInputError,
    LPSAnalyzerError,
    MeasurementTimeoutError,
)

__version__ = "0.1.0"

__all__ = [
    "AlgorithmResult",
    "ComparisonReport",
    "ConfigurationError",
    "HarnessConfig",
    "InternalConsistencyError",
    "InvalidInputError",
    "LPSAlgorithm",
    "LPSAnalyzerError",
    "MeasurementTimeoutError",
    "NormalizedText",
    "PalindromeSpan",
    "PerformanceHarness",
    "build_algorithms",
    "canonicalize",
    "is_palindrome",
    "normalize",
    "run_comparison",
]
