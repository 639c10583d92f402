"""Correctness guard applied to every algorithm result."""

from __future__ import annotations

from lps_analyzer.algorithms.normalizer import NormalizedText, canonicalize
from lps_analyzer.algorithms.span import PalindromeSpan
from lps_analyzer.errors import InternalConsistencyError

__all__ = ["is_palindrome", "validate_span"]


def is_palindrome(text: str) -> bool:
    """Return ``True`` when the canonical *text* reads the same reversed."""

    return text == text[::-1]


def validate_span(normalized: NormalizedText, span: PalindromeSpan, algorithm: str) -> str:
    """Check *span* against *normalized* and return the mapped raw slice.

    Raises
    ------
    InternalConsistencyError
        If the span is out of range, is not a palindrome, or its raw slice does
        not canonicalise back to the same characters.
    """

    canonical = normalized.canonical
    if span.is_empty:
        if canonical:
            raise InternalConsistencyError(
                algorithm, span.start, span.end, "empty span for non-empty input"
            )
        return ""
    if span.start < 0 or span.end >= len(canonical):
        raise InternalConsistencyError(
            algorithm,
            span.start,
            span.end,
            f"span outside canonical text of length {len(canonical)}",
        )

    fragment = canonical[span.start : span.end + 1]
    if not is_palindrome(fragment):
        raise InternalConsistencyError(algorithm, span.start, span.end, "not a palindrome")

    substring = normalized.slice_raw(span)
    if canonicalize(substring) != fragment:
        raise InternalConsistencyError(
            algorithm, span.start, span.end, "raw slice does not match canonical span"
        )
    return substring
