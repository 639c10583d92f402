"""Sample collection and outlier-resistant aggregation."""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import numpy as np

__all__ = ["Sample", "SampleSet", "TimingSummary", "trimmed", "trimmed_mean"]


def trimmed(values: Iterable[float], proportion: float = 0.2, min_samples: int = 5) -> List[float]:
    """Return *values* sorted with ``proportion`` of each tail removed.

    Nothing is removed when fewer than *min_samples* values are available, so
    small sample sets are averaged as they are.
    """

    ordered = sorted(float(value) for value in values)
    if len(ordered) < min_samples:
        return ordered
    cut = int(len(ordered) * proportion)
    if cut == 0:
        return ordered
    return ordered[cut : len(ordered) - cut]


def trimmed_mean(values: Iterable[float], proportion: float = 0.2, min_samples: int = 5) -> float:
    """Return the trimmed mean of *values*, ``0.0`` when there are none."""

    kept = trimmed(values, proportion, min_samples)
    return statistics.fmean(kept) if kept else 0.0


@dataclass(frozen=True, slots=True)
class Sample:
    """One iteration: its duration and, when it was traced, its allocator delta."""

    time_ms: float
    memory_kb: Optional[float] = None


@dataclass(frozen=True)
class TimingSummary:
    """Distribution of the timed iterations of one algorithm, in milliseconds."""

    trimmed_mean_ms: float
    median_ms: float
    p90_ms: float
    min_ms: float
    max_ms: float
    stdev_ms: float
    samples: int

    def to_dict(self) -> dict[str, float]:
        return {
            "trimmed_mean_ms": self.trimmed_mean_ms,
            "median_ms": self.median_ms,
            "p90_ms": self.p90_ms,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "stdev_ms": self.stdev_ms,
            "samples": self.samples,
        }


@dataclass
class SampleSet:
    """Ordered per-iteration samples of a single algorithm run."""

    samples: List[Sample] = field(default_factory=list)

    def add(self, time_ms: float, memory_kb: Optional[float] = None) -> None:
        memory = None if memory_kb is None else float(memory_kb)
        self.samples.append(Sample(time_ms=float(time_ms), memory_kb=memory))

    def add_memory(self, memory_kb: float) -> None:
        """Attach *memory_kb* to the earliest sample that has no memory reading yet."""

        for index, sample in enumerate(self.samples):
            if sample.memory_kb is None:
                self.samples[index] = Sample(time_ms=sample.time_ms, memory_kb=float(memory_kb))
                return
        raise ValueError("every sample already carries a memory reading")

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def times_ms(self) -> List[float]:
        return [sample.time_ms for sample in self.samples]

    @property
    def memory_kb(self) -> List[float]:
        return [sample.memory_kb for sample in self.samples if sample.memory_kb is not None]

    def mean_time_ms(self, proportion: float = 0.2, min_samples: int = 5) -> float:
        return trimmed_mean(self.times_ms, proportion, min_samples)

    def mean_memory_kb(self, proportion: float = 0.2, min_samples: int = 5) -> float:
        # Trimmed independently of the time series.
        return trimmed_mean(self.memory_kb, proportion, min_samples)

    def summary(self, proportion: float = 0.2, min_samples: int = 5) -> TimingSummary:
        times: Sequence[float] = self.times_ms
        if not times:
            return TimingSummary(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0)
        data = np.asarray(times, dtype=np.float64)
        return TimingSummary(
            trimmed_mean_ms=trimmed_mean(times, proportion, min_samples),
            median_ms=float(np.percentile(data, 50)),
            p90_ms=float(np.percentile(data, 90)),
            min_ms=float(data.min()),
            max_ms=float(data.max()),
            stdev_ms=statistics.stdev(times) if len(times) > 1 else 0.0,
            samples=len(times),
        )
