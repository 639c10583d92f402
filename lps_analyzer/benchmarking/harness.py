"""Statistical measurement of one palindrome solver.

:class:`PerformanceHarness` runs a solver a few untimed times to warm up, then
collects timed samples whose count depends on the canonical input length.
Between samples it pauses at an explicit settling point (optionally asking the
garbage collector to run first). Timing uses :func:`time.perf_counter` on
untraced runs. The allocator delta is the ``tracemalloc`` peak above the
pre-run baseline, read from extra runs that are never timed. Both are
best-effort figures and the aggregation reports, rather than hides, an
unusable memory reading.
"""

from __future__ import annotations

import gc
import logging
import threading
import time
import tracemalloc
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from lps_analyzer.algorithms.base import LPSAlgorithm
from lps_analyzer.algorithms.normalizer import NormalizedText, canonicalize
from lps_analyzer.benchmarking.config import HarnessConfig
from lps_analyzer.benchmarking.stats import SampleSet, TimingSummary
from lps_analyzer.errors import InternalConsistencyError, MeasurementTimeoutError

__all__ = ["AlgorithmResult", "PerformanceHarness"]

logger = logging.getLogger(__name__)

_TRACEMALLOC_LOCK = threading.Lock()


@dataclass(frozen=True)
class AlgorithmResult:
    """Outcome of measuring one algorithm on one input."""

    algorithm: str
    substring: str
    execution_time_ms: float
    memory_delta_kb: float
    timed_out: bool = False
    measurement_unreliable: bool = False
    error: Optional[str] = None
    variant: str = ""
    iterations: int = 0
    palindrome_length: int = 0
    time_complexity: str = ""
    space_complexity: str = ""
    timing: Optional[TimingSummary] = None

    @classmethod
    def empty(cls, algorithm: LPSAlgorithm) -> "AlgorithmResult":
        """Result for input without alphanumeric characters."""

        return cls(
            algorithm=algorithm.name,
            substring="",
            execution_time_ms=0.0,
            memory_delta_kb=0.0,
            variant=algorithm.variant,
            time_complexity=algorithm.time_complexity,
            space_complexity=algorithm.space_complexity,
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "variant": self.variant,
            "substring": self.substring,
            "palindrome_length": self.palindrome_length,
            "execution_time_ms": self.execution_time_ms,
            "memory_delta_kb": self.memory_delta_kb,
            "timed_out": self.timed_out,
            "measurement_unreliable": self.measurement_unreliable,
            "error": self.error,
            "iterations": self.iterations,
            "time_complexity": self.time_complexity,
            "space_complexity": self.space_complexity,
            "timing": self.timing.to_dict() if self.timing is not None else None,
        }


class PerformanceHarness:
    """Measure solvers according to a :class:`HarnessConfig`.

    Parameters
    ----------
    config:
        Measurement settings; defaults to :class:`HarnessConfig()`.
    clock:
        Monotonic clock in seconds used for samples and for the budget.
    sleep:
        Pause primitive used at settling points.
    collect:
        Garbage-collection trigger used at settling points.
    """

    def __init__(
        self,
        config: Optional[HarnessConfig] = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        collect: Callable[[], Any] = gc.collect,
    ) -> None:
        self.config = config or HarnessConfig()
        self._clock = clock
        self._sleep = sleep
        self._collect = collect

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def measure(self, algorithm: LPSAlgorithm, normalized: NormalizedText) -> AlgorithmResult:
        """Return the aggregated measurement of *algorithm* on *normalized*.

        Warmups and timed samples run untraced. Memory is read afterwards from
        up to ``memory_samples`` separate traced runs, skipped when a traced
        run is not expected to fit in the remaining budget. No run is started
        once the previous run's duration says it would end past the budget.

        Neither a timeout nor a consistency failure propagates: the first
        becomes ``timed_out=True`` with the samples gathered so far, the
        second becomes the result's ``error``.
        """

        if normalized.is_empty:
            return AlgorithmResult.empty(algorithm)

        config = self.config
        length = len(normalized)
        warmups = config.warmups_for(length)
        iterations = config.iterations_for(length)
        trace_memory = config.traces_memory_for(length)
        samples = SampleSet()
        substring = ""
        timed_out = False
        last_run: Optional[float] = None
        started = self._clock()

        logger.debug(
            "Measuring %s (%s): length=%d warmups=%d iterations=%d trace_memory=%s",
            algorithm.name,
            algorithm.variant,
            length,
            warmups,
            iterations,
            trace_memory,
        )

        try:
            for _ in range(warmups):
                if last_run is not None:
                    self._ensure_budget(algorithm, started, last_run)
                substring, last_run = self._timed_run(algorithm, normalized)
            if warmups:
                self._settle()

            for index in range(iterations):
                if last_run is not None:
                    self._ensure_budget(algorithm, started, last_run)
                substring, last_run = self._timed_run(algorithm, normalized)
                elapsed_ms = last_run * 1000.0
                samples.add(elapsed_ms)
                if config.debug:
                    logger.info(
                        "%s sample %d/%d: %.3f ms",
                        algorithm.name,
                        index + 1,
                        iterations,
                        elapsed_ms,
                    )
                if index + 1 < iterations:
                    self._settle()

            if trace_memory and last_run is not None:
                self._trace_memory(algorithm, normalized, samples, started, last_run)
        except MeasurementTimeoutError as exc:
            logger.warning("%s; keeping %d collected sample(s)", exc, len(samples))
            timed_out = True
        except InternalConsistencyError as exc:
            logger.error("Consistency check failed: %s", exc)
            return self._build_result(
                algorithm, "", samples, trace_memory, timed_out, error=str(exc)
            )

        if not timed_out:
            elapsed = self._clock() - started
            if elapsed > config.budget_seconds:
                overrun = MeasurementTimeoutError(algorithm.name, elapsed, config.budget_seconds)
                logger.warning("%s; keeping %d collected sample(s)", overrun, len(samples))
                timed_out = True

        return self._build_result(algorithm, substring, samples, trace_memory, timed_out)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _timed_run(self, algorithm: LPSAlgorithm, normalized: NormalizedText) -> Tuple[str, float]:
        """Run *algorithm* once, untraced, and return its answer and duration in seconds."""

        start = self._clock()
        substring = algorithm.find(normalized)
        return substring, self._clock() - start

    def _trace_memory(
        self,
        algorithm: LPSAlgorithm,
        normalized: NormalizedText,
        samples: SampleSet,
        started: float,
        last_run: float,
    ) -> None:
        config = self.config
        runs = min(config.memory_samples, len(samples))
        expected = last_run * config.trace_overhead_factor
        for index in range(runs):
            self._settle()
            remaining = config.budget_seconds - (self._clock() - started)
            if expected > remaining:
                logger.warning(
                    "Skipping memory measurement of %s: a traced run is expected to take "
                    "%.1fs with %.1fs of budget left",
                    algorithm.name,
                    expected,
                    remaining,
                )
                return
            memory_kb = self._traced_run(algorithm, normalized)
            samples.add_memory(memory_kb)
            if config.debug:
                logger.info(
                    "%s memory run %d/%d: %.2f KB", algorithm.name, index + 1, runs, memory_kb
                )

    def _traced_run(self, algorithm: LPSAlgorithm, normalized: NormalizedText) -> float:
        """Run *algorithm* once under ``tracemalloc`` and return the peak delta in KB.

        The clock is not read here. Tracing sessions of concurrent harnesses
        are serialised because ``tracemalloc`` state is process wide.
        """

        with _TRACEMALLOC_LOCK:
            started_tracing = False
            if not tracemalloc.is_tracing():
                tracemalloc.start()
                started_tracing = True
            try:
                baseline, _ = tracemalloc.get_traced_memory()
                tracemalloc.reset_peak()
                algorithm.find(normalized)
                _, peak = tracemalloc.get_traced_memory()
            finally:
                if started_tracing:
                    tracemalloc.stop()
        return (peak - baseline) / 1024.0

    def _ensure_budget(self, algorithm: LPSAlgorithm, started: float, last_run: float) -> None:
        """Refuse another run when one more run like the last would end past the budget."""

        elapsed = self._clock() - started
        expected_end = elapsed + last_run
        if expected_end > self.config.budget_seconds:
            raise MeasurementTimeoutError(
                algorithm.name, elapsed, self.config.budget_seconds, expected_end
            )

    def _settle(self) -> None:
        """Give the runtime a chance to reclaim memory before the next sample."""

        if self.config.collect_garbage:
            self._collect()
        if self.config.settle_seconds > 0:
            self._sleep(self.config.settle_seconds)

    def _build_result(
        self,
        algorithm: LPSAlgorithm,
        substring: str,
        samples: SampleSet,
        trace_memory: bool,
        timed_out: bool,
        *,
        error: Optional[str] = None,
    ) -> AlgorithmResult:
        config = self.config
        proportion, min_samples = config.trim_proportion, config.trim_min_samples
        execution_time_ms = samples.mean_time_ms(proportion, min_samples)
        memory_delta_kb = samples.mean_memory_kb(proportion, min_samples) if trace_memory else 0.0
        unreliable = error is None and memory_delta_kb <= 0
        if unreliable:
            logger.warning(
                "Memory measurement issue detected for %s: %.2f KB",
                algorithm.name,
                memory_delta_kb,
            )
        return AlgorithmResult(
            algorithm=algorithm.name,
            substring=substring,
            execution_time_ms=execution_time_ms,
            memory_delta_kb=memory_delta_kb,
            timed_out=timed_out,
            measurement_unreliable=unreliable,
            error=error,
            variant=algorithm.variant,
            iterations=len(samples),
            palindrome_length=len(canonicalize(substring)),
            time_complexity=algorithm.time_complexity,
            space_complexity=algorithm.space_complexity,
            timing=samples.summary(proportion, min_samples) if len(samples) else None,
        )
