"""Run the three solvers on one input and collect a comparison report."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.normalizer import normalize
from lps_analyzer.algorithms.registry import build_algorithms
from lps_analyzer.benchmarking.config import HarnessConfig
from lps_analyzer.benchmarking.harness import AlgorithmResult, PerformanceHarness
from lps_analyzer.errors import InvalidInputError

__all__ = [
    "ComparisonReport",
    "FIRST_ALGORITHM",
    "plan_execution_order",
    "run_comparison",
]

logger = logging.getLogger(__name__)

#: Always measured first so that it never benefits from caches warmed by siblings.
FIRST_ALGORITHM = "manacher"

_MEASUREMENT_LOCK = threading.Lock()


def plan_execution_order(
    names: Iterable[str], rng: random.Random, *, first: str = FIRST_ALGORITHM
) -> List[str]:
    """Return *names* with *first* leading (when present) and the rest shuffled by *rng*."""

    candidates = list(names)
    remaining = [name for name in candidates if name != first]
    rng.shuffle(remaining)
    if len(remaining) == len(candidates):
        return remaining
    return [first, *remaining]


@dataclass(frozen=True)
class ComparisonReport:
    """Per-algorithm results of a single comparison run."""

    results: Mapping[str, AlgorithmResult]
    execution_order: Tuple[str, ...]
    raw_length: int
    canonical_length: int

    @property
    def lengths_agree(self) -> bool:
        """``True`` when every successful algorithm found the same length."""

        lengths = {result.palindrome_length for result in self.results.values() if result.ok}
        return len(lengths) <= 1

    @property
    def has_errors(self) -> bool:
        return any(not result.ok for result in self.results.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raw_length": self.raw_length,
            "canonical_length": self.canonical_length,
            "execution_order": list(self.execution_order),
            "lengths_agree": self.lengths_agree,
            "results": {name: result.to_dict() for name, result in self.results.items()},
        }


def run_comparison(
    raw_text: str,
    *,
    config: Optional[HarnessConfig] = None,
    harness: Optional[PerformanceHarness] = None,
    rng: Optional[random.Random] = None,
    algorithms: Optional[Mapping[str, LPSAlgorithm]] = None,
) -> ComparisonReport:
    """Measure every solver on *raw_text*, one after the other.

    Concurrent calls are measured one at a time, since the timer and
    ``tracemalloc`` both observe the whole process.

    Raises
    ------
    InvalidInputError
        If *raw_text* is not a string. Empty text and text without any
        alphanumeric character produce empty results instead.
    """

    if not isinstance(raw_text, str):
        raise InvalidInputError(f"raw text must be a string, got {type(raw_text).__name__}")

    if harness is None:
        harness = PerformanceHarness(config)
    config = harness.config
    if algorithms is None:
        algorithms = build_algorithms(
            config.dp_variant,
            config.manacher_variant,
            tabulation_table_limit=config.tabulation_table_limit,
        )
    if rng is None:
        rng = random.Random(config.seed)

    normalized = normalize(raw_text)
    order = plan_execution_order(algorithms, rng)
    logger.info(
        "Processing input text (%d characters, %d canonical); order=%s",
        len(raw_text),
        len(normalized),
        ",".join(order),
    )

    results: Dict[str, AlgorithmResult] = {}
    with _MEASUREMENT_LOCK:
        for name in order:
            algorithm = algorithms[name]
            try:
                result = harness.measure(algorithm, normalized)
            except Exception as exc:
                logger.exception("Algorithm %s failed", name)
                result = AlgorithmResult(
                    algorithm=name,
                    substring="",
                    execution_time_ms=0.0,
                    memory_delta_kb=0.0,
                    error=f"{type(exc).__name__}: {exc}",
                    variant=algorithm.variant,
                    time_complexity=algorithm.time_complexity,
                    space_complexity=algorithm.space_complexity,
                )
            logger.info(
                "%s complete: palindrome length %d in %.2f ms",
                name,
                result.palindrome_length,
                result.execution_time_ms,
            )
            results[name] = result

    report = ComparisonReport(
        results={name: results[name] for name in algorithms},
        execution_order=tuple(order),
        raw_length=len(raw_text),
        canonical_length=len(normalized),
    )
    if not report.lengths_agree:
        logger.error(
            "Algorithms disagree on the palindrome length: %s",
            {name: result.palindrome_length for name, result in report.results.items()},
        )
    return report
