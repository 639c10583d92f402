"""Configuration of the performance harness.

A :class:`HarnessConfig` is built once per comparison and handed to the
harness, which keeps diagnostic switches such as :attr:`HarnessConfig.debug`
scoped to a single run instead of process-wide flags. Values can come from
keyword arguments, ``LPS_*`` environment variables or a JSON/YAML file.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple

import yaml

from lps_analyzer.algorithms.registry import DP_VARIANTS, MANACHER_VARIANTS
from lps_analyzer.errors import ConfigurationError

__all__ = ["DEFAULT_ITERATION_TIERS", "HarnessConfig"]

#: ``(exclusive canonical length limit, timed iterations)`` pairs.
DEFAULT_ITERATION_TIERS: Tuple[Tuple[int, int], ...] = (
    (1_000, 7),
    (5_000, 5),
    (10_000, 3),
    (20_000, 2),
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _coerce_tiers(value: Any) -> Tuple[Tuple[int, int], ...]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise ConfigurationError("iteration_tiers must be a sequence of [limit, iterations] pairs")
    tiers = []
    for entry in value:
        if not isinstance(entry, Sequence) or isinstance(entry, (str, bytes)) or len(entry) != 2:
            raise ConfigurationError(f"Invalid iteration tier {entry!r}")
        limit, iterations = entry
        if isinstance(limit, bool) or isinstance(iterations, bool):
            raise ConfigurationError(f"Invalid iteration tier {entry!r}")
        if not isinstance(limit, int) or not isinstance(iterations, int):
            raise ConfigurationError(f"Iteration tier values must be integers: {entry!r}")
        tiers.append((limit, iterations))
    return tuple(tiers)


@dataclass(frozen=True)
class HarnessConfig:
    """Tunables of :class:`~lps_analyzer.benchmarking.harness.PerformanceHarness`."""

    warmup_runs: int = 2
    warmup_length_limit: Optional[int] = 20_000
    iteration_tiers: Tuple[Tuple[int, int], ...] = DEFAULT_ITERATION_TIERS
    min_iterations: int = 1
    trim_proportion: float = 0.2
    trim_min_samples: int = 5
    budget_seconds: float = 120.0
    settle_seconds: float = 0.01
    collect_garbage: bool = True
    track_memory: bool = True
    memory_tracking_limit: Optional[int] = 20_000
    memory_samples: int = 3
    trace_overhead_factor: float = 25.0
    seed: Optional[int] = None
    debug: bool = False
    dp_variant: str = "center_expansion"
    manacher_variant: str = "linear"
    tabulation_table_limit: int = 5_000

    def __post_init__(self) -> None:
        object.__setattr__(self, "iteration_tiers", _coerce_tiers(self.iteration_tiers))

        if self.warmup_runs < 0:
            raise ConfigurationError("warmup_runs must be non-negative")
        if self.min_iterations < 1:
            raise ConfigurationError("min_iterations must be at least 1")
        previous_limit = None
        for limit, iterations in self.iteration_tiers:
            if limit <= 0 or iterations < 1:
                raise ConfigurationError(
                    "iteration tiers need positive limits and at least one iteration"
                )
            if previous_limit is not None and limit <= previous_limit:
                raise ConfigurationError("iteration tier limits must be strictly increasing")
            previous_limit = limit
        if not 0.0 <= self.trim_proportion < 0.5:
            raise ConfigurationError("trim_proportion must be within [0, 0.5)")
        if self.trim_min_samples < 1:
            raise ConfigurationError("trim_min_samples must be at least 1")
        if self.budget_seconds <= 0:
            raise ConfigurationError("budget_seconds must be positive")
        if self.settle_seconds < 0:
            raise ConfigurationError("settle_seconds must be non-negative")
        if self.memory_samples < 1:
            raise ConfigurationError("memory_samples must be at least 1")
        if self.trace_overhead_factor < 1:
            raise ConfigurationError("trace_overhead_factor must be at least 1")
        for name in ("warmup_length_limit", "memory_tracking_limit"):
            limit = getattr(self, name)
            if limit is not None and limit <= 0:
                raise ConfigurationError(f"{name} must be positive or None")
        if self.tabulation_table_limit < 1:
            raise ConfigurationError("tabulation_table_limit must be positive")
        if self.dp_variant not in DP_VARIANTS:
            raise ConfigurationError(
                f"dp_variant must be one of {sorted(DP_VARIANTS)}, got {self.dp_variant!r}"
            )
        if self.manacher_variant not in MANACHER_VARIANTS:
            raise ConfigurationError(
                "manacher_variant must be one of "
                f"{sorted(MANACHER_VARIANTS)}, got {self.manacher_variant!r}"
            )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    def iterations_for(self, canonical_length: int) -> int:
        """Return the number of timed iterations for *canonical_length*."""

        for limit, iterations in self.iteration_tiers:
            if canonical_length < limit:
                return iterations
        return self.min_iterations

    def warmups_for(self, canonical_length: int) -> int:
        if self.warmup_length_limit is not None and canonical_length >= self.warmup_length_limit:
            return 0
        return self.warmup_runs

    def traces_memory_for(self, canonical_length: int) -> bool:
        if not self.track_memory:
            return False
        return self.memory_tracking_limit is None or canonical_length < self.memory_tracking_limit

    def with_overrides(self, **overrides: Any) -> "HarnessConfig":
        """Return a copy with the non-``None`` *overrides* applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "HarnessConfig":
        """Build a configuration from a plain mapping, rejecting unknown keys."""

        if not isinstance(mapping, Mapping):
            raise ConfigurationError("Harness configuration must be a mapping")
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(f"Unknown harness configuration keys: {', '.join(unknown)}")
        return cls(**dict(mapping))

    @classmethod
    def from_file(cls, path: Path | str) -> "HarnessConfig":
        """Load a JSON or YAML configuration file."""

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Harness configuration not found: {config_path}")
        text = config_path.read_text(encoding="utf-8")
        try:
            if config_path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Invalid configuration file {config_path}: {exc}") from exc
        if data is None:
            data = {}
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HarnessConfig":
        """Read ``LPS_*`` variables; ``DEBUG=true`` is honoured for compatibility."""

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        def _number(name: str, key: str, convert: Any) -> None:
            raw = env.get(name)
            if raw is None or raw == "":
                return
            try:
                values[key] = convert(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{name} is not a valid number: {raw!r}") from exc

        _number("LPS_WARMUP_RUNS", "warmup_runs", int)
        _number("LPS_BUDGET_SECONDS", "budget_seconds", float)
        _number("LPS_SETTLE_SECONDS", "settle_seconds", float)
        _number("LPS_TRIM_PROPORTION", "trim_proportion", float)
        _number("LPS_SEED", "seed", int)
        _number("LPS_TABULATION_TABLE_LIMIT", "tabulation_table_limit", int)
        _number("LPS_MEMORY_SAMPLES", "memory_samples", int)

        for name, key in (
            ("LPS_TRACK_MEMORY", "track_memory"),
            ("LPS_COLLECT_GARBAGE", "collect_garbage"),
            ("LPS_DEBUG", "debug"),
        ):
            raw = env.get(name)
            if raw:
                values[key] = _parse_bool(name, raw)
        if "debug" not in values and env.get("DEBUG", "").lower() == "true":
            values["debug"] = True

        for name, key in (
            ("LPS_DP_VARIANT", "dp_variant"),
            ("LPS_MANACHER_VARIANT", "manacher_variant"),
        ):
            raw = env.get(name)
            if raw:
                values[key] = raw.strip()

        return cls(**values)
