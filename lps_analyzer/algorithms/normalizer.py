"""Canonicalisation of raw text and the map back to raw offsets.

Palindrome detection ignores case and every non-alphanumeric character. The
algorithms therefore operate on a *canonical* string that only contains the
lower-cased alphanumeric characters, while results must be reported as slices
of the untouched input. :func:`normalize` produces both views together with an
index map linking them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from lps_analyzer.algorithms.span import PalindromeSpan
from lps_analyzer.errors import InvalidInputError

__all__ = ["NormalizedText", "canonicalize", "normalize"]


@dataclass(frozen=True, slots=True)
class NormalizedText:
    """Raw input together with its canonical form.

    Attributes
    ----------
    raw:
        Original text exactly as received.
    canonical:
        Lower-cased alphanumeric characters of *raw* in order.
    index_map:
        ``index_map[k]`` is the offset in *raw* of ``canonical[k]``. The
        sequence is strictly increasing.
    """

    raw: str
    canonical: str
    index_map: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.canonical)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when *raw* holds no alphanumeric character."""

        return not self.canonical

    def slice_raw(self, span: PalindromeSpan) -> str:
        """Return the slice of *raw* covered by a canonical *span*."""

        if span.is_empty:
            return ""
        return self.raw[self.index_map[span.start] : self.index_map[span.end] + 1]


def _canonical_char(char: str) -> str:
    lowered = char.lower()
    # Some characters lower-case to several code points; keep the map 1:1.
    return lowered if len(lowered) == 1 else char


def normalize(raw: str) -> NormalizedText:
    """Return the canonical view of *raw*.

    Raises
    ------
    InvalidInputError
        If *raw* is not a string.
    """

    if not isinstance(raw, str):
        raise InvalidInputError("raw text must be a string")

    characters: List[str] = []
    offsets: List[int] = []
    for offset, char in enumerate(raw):
        if char.isalnum():
            characters.append(_canonical_char(char))
            offsets.append(offset)
    return NormalizedText(raw=raw, canonical="".join(characters), index_map=tuple(offsets))


def canonicalize(text: str) -> str:
    """Return only the canonical string of *text*."""

    return normalize(text).canonical
