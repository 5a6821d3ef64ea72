"""Recommendation confidence levels."""

from __future__ import annotations

from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig


def calculate_confidence(total_records: int, config: SchedulerConfig = DEFAULT_CONFIG) -> float:
    """Map the amount of historical evidence to a coarse confidence level."""

    if total_records <= 0:
        return 0.0
    for upper, level in config.confidence_steps:
        if total_records < upper:
            return level
    return config.max_confidence
