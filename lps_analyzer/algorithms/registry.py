"""Construction of the three competing solvers from configuration."""

from __future__ import annotations

from typing import Callable, Dict, Mapping

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.dynamic_programming import CenterExpansionLPS, TabulatedLPS
from lps_analyzer.algorithms.manacher import LinearManacherLPS, TwoPassManacherLPS
from lps_analyzer.algorithms.naive import NaiveLPS
from lps_analyzer.errors import ConfigurationError

__all__ = [
    "ALGORITHM_NAMES",
    "DP_VARIANTS",
    "MANACHER_VARIANTS",
    "build_algorithms",
]

ALGORITHM_NAMES = ("naive", "dp", "manacher")

DP_VARIANTS: Mapping[str, Callable[[int], LPSAlgorithm]] = {
    "center_expansion": lambda table_limit: CenterExpansionLPS(),
    "tabulation": lambda table_limit: TabulatedLPS(table_limit=table_limit),
}

MANACHER_VARIANTS: Mapping[str, Callable[[], LPSAlgorithm]] = {
    "linear": LinearManacherLPS,
    "two_pass": TwoPassManacherLPS,
}


def build_algorithms(
    dp_variant: str = "center_expansion",
    manacher_variant: str = "linear",
    *,
    tabulation_table_limit: int = 5_000,
) -> Dict[str, LPSAlgorithm]:
    """Return the solvers keyed by report name in :data:`ALGORITHM_NAMES` order."""

    try:
        dp_factory = DP_VARIANTS[dp_variant]
    except KeyError:
        raise ConfigurationError(
            f"Unknown dp variant {dp_variant!r}; expected one of {sorted(DP_VARIANTS)}"
        ) from None
    try:
        manacher_factory = MANACHER_VARIANTS[manacher_variant]
    except KeyError:
        raise ConfigurationError(
            f"Unknown manacher variant {manacher_variant!r}; "
            f"expected one of {sorted(MANACHER_VARIANTS)}"
        ) from None

    return {
        "naive": NaiveLPS(),
        "dp": dp_factory(tabulation_table_limit),
        "manacher": manacher_factory(),
    }
