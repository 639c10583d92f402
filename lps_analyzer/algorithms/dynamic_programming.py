"""Solvers reported under the ``dp`` label.

Two strategies share the label:

* :class:`CenterExpansionLPS` keeps the historical behaviour of the
  benchmark, which published expand-around-center timings as "dynamic
  programming". It is selected by default so that numbers stay comparable
  with earlier runs.
* :class:`TabulatedLPS` is the textbook bottom-up table where
  ``table[i][j]`` records whether ``canonical[i..j]`` is a palindrome.

Both report their real complexity through :attr:`time_complexity` and
:attr:`space_complexity`.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.naive import longest_from_centers
from lps_analyzer.algorithms.span import PalindromeSpan

__all__ = ["CenterExpansionLPS", "TabulatedLPS"]

logger = logging.getLogger(__name__)


class CenterExpansionLPS(LPSAlgorithm):
    """Expand-around-center solver published under the ``dp`` label."""

    name = "dp"
    variant = "center_expansion"
    time_complexity = "O(n^2)"
    space_complexity = "O(1)"

    def find_span(self, canonical: str) -> PalindromeSpan:
        # Each index seeds its odd center, then the even center to its right.
        centers = (
            (center, center + offset)
            for center in range(len(canonical))
            for offset in (0, 1)
        )
        return longest_from_centers(canonical, centers)


class TabulatedLPS(LPSAlgorithm):
    """Bottom-up dynamic program over the palindrome table.

    Parameters
    ----------
    table_limit:
        Largest canonical length solved with the full ``n x n`` table. Longer
        inputs run the same recurrence one row at a time, each row packed into
        an integer bitset, trading the O(n^2) table for O(n) bits per
        distinct character.
    """

    name = "dp"
    variant = "tabulation"
    time_complexity = "O(n^2)"
    space_complexity = "O(n^2)"

    def __init__(self, table_limit: int = 5_000) -> None:
        if table_limit < 1:
            raise ValueError("table_limit must be positive")
        self.table_limit = table_limit

    def find_span(self, canonical: str) -> PalindromeSpan:
        if len(canonical) > self.table_limit:
            logger.info(
                "Canonical length %d exceeds table limit %d; using rolling row",
                len(canonical),
                self.table_limit,
            )
            return self._rolling_row(canonical)
        return self._full_table(canonical)

    @staticmethod
    def _full_table(canonical: str) -> PalindromeSpan:
        n = len(canonical)
        table: List[bytearray] = [bytearray(n) for _ in range(n)]
        start, max_length = 0, 1

        for i in range(n):
            table[i][i] = 1

        for i in range(n - 1):
            if canonical[i] == canonical[i + 1]:
                table[i][i + 1] = 1
                if max_length < 2:
                    start, max_length = i, 2

        for length in range(3, n + 1):
            for i in range(n - length + 1):
                j = i + length - 1
                if table[i + 1][j - 1] and canonical[i] == canonical[j]:
                    table[i][j] = 1
                    if length > max_length:
                        start, max_length = i, length

        return PalindromeSpan(start, start + max_length - 1)

    @staticmethod
    def _rolling_row(canonical: str) -> PalindromeSpan:
        # Bit j of ``row`` is table[i][j]. Shifting the previous row (i + 1)
        # left by one lines table[i + 1][j - 1] up with bit j, so each row costs
        # a handful of whole-integer operations.
        positions: Dict[str, int] = {}
        for index, char in enumerate(canonical):
            positions[char] = positions.get(char, 0) | (1 << index)

        row = 0
        best_start, best_length = 0, 1
        for i in range(len(canonical) - 1, -1, -1):
            # Bits i and i + 1 have no inner palindrome to depend on.
            row = positions[canonical[i]] & ((row << 1) | (3 << i))
            length = row.bit_length() - i
            # Rows are visited right to left, so ties move the start left.
            if length >= best_length:
                best_start, best_length = i, length
        return PalindromeSpan(best_start, best_start + best_length - 1)
