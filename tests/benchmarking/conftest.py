from __future__ import annotations

import pytest

from lps_analyzer.benchmarking import HarnessConfig


class StepClock:
    """Deterministic clock advancing by ``step`` seconds on every reading."""

    def __init__(self, step: float = 1.0) -> None:
        self.step = step
        self.now = 0.0
        self.calls = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


@pytest.fixture
def fast_config() -> HarnessConfig:
    return HarnessConfig(settle_seconds=0.0, collect_garbage=False, seed=0)


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()
