"""Manacher-style solvers that avoid the separator-transformed string.

The classical formulation interleaves a separator between every character so
that odd and even palindromes share one radius array, doubling the working
string. Both solvers here work on the canonical string directly.

:class:`LinearManacherLPS` is the real Manacher recurrence split into an odd
and an even radius array: while scanning, a position inside the rightmost
palindrome found so far starts from the radius of its mirror, so each
character is compared a constant number of times overall.

:class:`TwoPassManacherLPS` reproduces the "optimised Manacher" published by
earlier benchmark runs, which used one odd-center pass and one
even-center pass of expand-around-center. It never reuses mirrored radii and
is quadratic on inputs such as ``"aaaa...a"``; its labels say so.
"""

from __future__ import annotations

from array import array
from itertools import chain

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.naive import longest_from_centers
from lps_analyzer.algorithms.span import PalindromeSpan

__all__ = ["LinearManacherLPS", "TwoPassManacherLPS", "palindrome_radii"]


def palindrome_radii(text: str) -> tuple[array, array]:
    """Return the odd and even palindrome radii of every position in *text*.

    ``odd[i]`` is the number of characters the longest odd palindrome centered
    on ``i`` spans on each side, counting ``i`` itself, so its length is
    ``2 * odd[i] - 1``. ``even[i]`` is the half-length of the longest even
    palindrome whose right half starts at ``i``.
    """

    n = len(text)
    odd = array("i", [0]) * n
    left, right = 0, -1
    for i in range(n):
        k = 1 if i > right else min(odd[left + right - i], right - i + 1)
        while i - k >= 0 and i + k < n and text[i - k] == text[i + k]:
            k += 1
        odd[i] = k
        if i + k - 1 > right:
            left, right = i - k + 1, i + k - 1

    even = array("i", [0]) * n
    left, right = 0, -1
    for i in range(n):
        k = 0 if i > right else min(even[left + right - i + 1], right - i + 1)
        while i - k - 1 >= 0 and i + k < n and text[i - k - 1] == text[i + k]:
            k += 1
        even[i] = k
        if i + k - 1 > right:
            left, right = i - k, i + k - 1

    return odd, even


class LinearManacherLPS(LPSAlgorithm):
    """Linear-time Manacher solver over the canonical string."""

    name = "manacher"
    variant = "linear"
    time_complexity = "O(n)"
    space_complexity = "O(n)"

    def find_span(self, canonical: str) -> PalindromeSpan:
        odd, even = palindrome_radii(canonical)
        best = PalindromeSpan(0, 0)
        for i in range(len(canonical)):
            candidate = PalindromeSpan(i - odd[i] + 1, i + odd[i] - 1)
            if candidate.beats(best):
                best = candidate
            if even[i]:
                candidate = PalindromeSpan(i - even[i], i + even[i] - 1)
                if candidate.beats(best):
                    best = candidate
        return best


class TwoPassManacherLPS(LPSAlgorithm):
    """Historical odd-pass then even-pass expansion published as Manacher."""

    name = "manacher"
    variant = "two_pass"
    time_complexity = "O(n^2)"
    space_complexity = "O(1)"

    def find_span(self, canonical: str) -> PalindromeSpan:
        size = len(canonical)
        odd = ((center, center) for center in range(size))
        even = ((center, center + 1) for center in range(size - 1))
        return longest_from_centers(canonical, chain(odd, even))
