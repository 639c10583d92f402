"""Span bookkeeping shared by every palindrome algorithm."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["EMPTY_SPAN", "PalindromeSpan"]


@dataclass(frozen=True, slots=True)
class PalindromeSpan:
    """Inclusive ``[start, end]`` indices into a canonical string.

    An empty span is represented with ``end == start - 1`` so that
    :attr:`length` stays arithmetic for every case.
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def is_empty(self) -> bool:
        return self.length <= 0

    def is_longer_than(self, other: "PalindromeSpan") -> bool:
        """Return ``True`` when this span is strictly longer than *other*."""

        return self.length > other.length

    def beats(self, other: "PalindromeSpan") -> bool:
        """Return ``True`` when this span should replace *other* as the best.

        Longer spans win; equal lengths are decided by the smaller start
        offset, which is the span found first by a left-to-right scan.
        """

        if self.length != other.length:
            return self.length > other.length
        return self.start < other.start


EMPTY_SPAN = PalindromeSpan(start=0, end=-1)
