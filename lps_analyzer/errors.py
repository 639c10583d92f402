"""Error taxonomy shared by the algorithms, the harness and the service."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigurationError",
    "InternalConsistencyError",
    "InvalidInputError",
    "LPSAnalyzerError",
    "MeasurementTimeoutError",
]


class LPSAnalyzerError(Exception):
    """Base class for every error raised by :mod:`lps_analyzer`."""


class InvalidInputError(LPSAnalyzerError, TypeError):
    """Raised when the raw text is not a string."""


class ConfigurationError(LPSAnalyzerError, ValueError):
    """Raised when harness or service configuration values are invalid."""


class InternalConsistencyError(LPSAnalyzerError, RuntimeError):
    """Raised when an algorithm returns a span that is not a palindrome."""

    def __init__(self, algorithm: str, start: int, end: int, reason: str) -> None:
        super().__init__(
            f"{algorithm} produced an invalid span [{start}, {end}]: {reason}"
        )
        self.algorithm = algorithm
        self.start = start
        self.end = end
        self.reason = reason


class MeasurementTimeoutError(LPSAnalyzerError):
    """Raised inside the harness when an algorithm exhausts its time budget."""

    def __init__(
        self,
        algorithm: str,
        elapsed_seconds: float,
        budget_seconds: float,
        projected_seconds: Optional[float] = None,
    ) -> None:
        if projected_seconds is None:
            message = (
                f"{algorithm} exceeded its {budget_seconds:.1f}s budget "
                f"after {elapsed_seconds:.1f}s"
            )
        else:
            message = (
                f"{algorithm} would exceed its {budget_seconds:.1f}s budget: "
                f"{elapsed_seconds:.1f}s elapsed, next run expected to end at "
                f"{projected_seconds:.1f}s"
            )
        super().__init__(message)
        self.algorithm = algorithm
        self.elapsed_seconds = elapsed_seconds
        self.budget_seconds = budget_seconds
        self.projected_seconds = projected_seconds
