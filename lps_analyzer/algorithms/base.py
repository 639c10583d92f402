"""Common contract for the longest palindromic substring solvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from lps_analyzer.algorithms.normalizer import NormalizedText, normalize
from lps_analyzer.algorithms.span import EMPTY_SPAN, PalindromeSpan
from lps_analyzer.algorithms.validation import validate_span

__all__ = ["LPSAlgorithm"]


class LPSAlgorithm(ABC):
    """Base class for solvers operating on canonical text.

    Subclasses implement :meth:`find_span` over the canonical string only.
    :meth:`find` handles the empty case, validates the span and maps it back to
    the raw input, so a defective span can never leak out as a plausible
    answer.
    """

    #: Key used in reports (``naive``, ``dp`` or ``manacher``).
    name: ClassVar[str] = ""
    #: Identifier of the concrete strategy behind :attr:`name`.
    variant: ClassVar[str] = ""
    time_complexity: ClassVar[str] = ""
    space_complexity: ClassVar[str] = ""

    @abstractmethod
    def find_span(self, canonical: str) -> PalindromeSpan:
        """Return the longest palindromic span of the non-empty *canonical* text."""

    def find(self, normalized: NormalizedText) -> str:
        """Return the longest palindromic slice of ``normalized.raw``."""

        if normalized.is_empty:
            return validate_span(normalized, EMPTY_SPAN, self.name)
        span = self.find_span(normalized.canonical)
        return validate_span(normalized, span, self.name)

    def __call__(self, raw: str) -> str:
        return self.find(normalize(raw))

    def describe(self) -> dict[str, str]:
        return {
            "name": self.name,
            "variant": self.variant,
            "time_complexity": self.time_complexity,
            "space_complexity": self.space_complexity,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"{type(self).__name__}(variant={self.variant!r})"
