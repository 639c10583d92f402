"""Reference expand-around-center solver."""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.span import PalindromeSpan

__all__ = ["NaiveLPS", "expand_from_center", "interleaved_centers", "longest_from_centers"]


def expand_from_center(text: str, left: int, right: int) -> Tuple[int, int]:
    """Grow the window ``text[left..right]`` while both ends match.

    ``left == right`` seeds an odd-length palindrome and ``right == left + 1``
    an even-length one. The returned ``(start, end)`` is inclusive; an even
    seed whose two characters differ comes back as ``end == start - 1``.
    """

    size = len(text)
    while left >= 0 and right < size and text[left] == text[right]:
        left -= 1
        right += 1
    return left + 1, right - 1


def interleaved_centers(size: int) -> Iterator[Tuple[int, int]]:
    """Yield the ``2 * size - 1`` seeds in text order: 0, 0|1, 1, 1|2, ..."""

    for center in range(2 * size - 1):
        left = center // 2
        yield left, left + center % 2


def longest_from_centers(text: str, centers: Iterable[Tuple[int, int]]) -> PalindromeSpan:
    """Expand every seed of *centers* and keep the first longest palindrome.

    Seeds must arrive in increasing start order within each parity so that
    the first longest span is also the leftmost one.
    """

    best = PalindromeSpan(0, 0)
    for left, right in centers:
        candidate = PalindromeSpan(*expand_from_center(text, left, right))
        if candidate.is_longer_than(best):
            best = candidate
    return best


class NaiveLPS(LPSAlgorithm):
    """Visit all ``2n - 1`` centers and keep the first longest expansion.

    This is the ground-truth implementation: O(n^2) time, O(1) extra space and
    no special-casing for large inputs.
    """

    name = "naive"
    variant = "expand_around_center"
    time_complexity = "O(n^2)"
    space_complexity = "O(1)"

    def find_span(self, canonical: str) -> PalindromeSpan:
        return longest_from_centers(canonical, interleaved_centers(len(canonical)))
