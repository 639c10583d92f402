"""Longest palindromic substring solvers and the text canonicalisation they share."""

from .base import LPSAlgorithm
from .dynamic_programming import CenterExpansionLPS, TabulatedLPS
from .manacher import LinearManacherLPS, TwoPassManacherLPS, palindrome_radii
from .naive import NaiveLPS, expand_from_center, longest_from_centers
from .normalizer import NormalizedText, canonicalize, normalize
from .registry import ALGORITHM_NAMES, DP_VARIANTS, MANACHER_VARIANTS, build_algorithms
from .span import EMPTY_SPAN, PalindromeSpan
from .validation import is_palindrome, validate_span

__all__ = [
    "ALGORITHM_NAMES",
    "CenterExpansionLPS",
    "DP_VARIANTS",
    "EMPTY_SPAN",
    "LPSAlgorithm",
    "LinearManacherLPS",
    "MANACHER_VARIANTS",
    "NaiveLPS",
    "NormalizedText",
    "PalindromeSpan",
    "TabulatedLPS",
    "TwoPassManacherLPS",
    "build_algorithms",
    "canonicalize",
    "expand_from_center",
    "is_palindrome",
    "longest_from_centers",
    "normalize",
    "palindrome_radii",
    "validate_span",
]
