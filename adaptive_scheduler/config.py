"""Scheduler defaults and configuration loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from adaptive_scheduler.errors import ConfigError


def _default_time_ranges() -> dict[str, tuple[int, int]]:
    return {
        "morning": (8, 11),
        "afternoon": (12, 16),
        "evening": (17, 21),
        "any": (9, 17),
    }


@dataclass(frozen=True)
class SchedulerConfig:
    """Single home for every fallback value used by the scheduler."""

    default_estimated_duration: int = 30
    default_task_type: str = "general"
    default_category: str = "general"
    lookback_days: int = 90
    max_actual_duration: int = 24 * 60
    default_day_of_week: int = 1
    time_ranges: dict[str, tuple[int, int]] = field(default_factory=_default_time_ranges)
    # (exclusive upper sample count, confidence); counts at or above the last step get max_confidence
    confidence_steps: tuple[tuple[int, float], ...] = ((5, 0.3), (15, 0.6), (30, 0.8))
    max_confidence: float = 0.95


DEFAULT_CONFIG = SchedulerConfig()


def _coerce(name: str, value):
    if name == "time_ranges":
        if not isinstance(value, dict):
            raise ConfigError("time_ranges must be an object")
        ranges = _default_time_ranges()
        for period, bounds in value.items():
            if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
                raise ConfigError(f"time_ranges.{period} must be a [start, end] pair")
            ranges[str(period)] = (int(bounds[0]), int(bounds[1]))
        return ranges
    if name == "confidence_steps":
        try:
            return tuple((int(count), float(level)) for count, level in value)
        except (TypeError, ValueError) as exc:
            raise ConfigError("confidence_steps must be a list of [count, confidence] pairs") from exc
    return value


def config_from_dict(overrides: dict, base: SchedulerConfig = DEFAULT_CONFIG) -> SchedulerConfig:
    """Return ``base`` with the given keys replaced."""

    known = {f.name for f in fields(SchedulerConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys {unknown}")
    return replace(base, **{name: _coerce(name, value) for name, value in overrides.items()})


def load_config(path: str | Path) -> SchedulerConfig:
    """Load configuration overrides from a JSON object file."""

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: malformed JSON") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: configuration must be a JSON object")
    return config_from_dict(payload)
