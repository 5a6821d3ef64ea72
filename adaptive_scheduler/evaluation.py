"""Chronological backtest of time-of-day recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import numpy as np

from adaptive_scheduler.analyzer import build_profile
from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.recommendation import choose_time_of_day
from adaptive_scheduler.schema import ProductivitySample


@dataclass(frozen=True)
class ReplayStep:
    sample: ProductivitySample
    recommended: str
    history_size: int

    @property
    def hit(self) -> bool:
        return self.recommended in ("any", self.sample.time_of_day)


def replay(
    samples: list[ProductivitySample],
    config: SchedulerConfig = DEFAULT_CONFIG,
    min_history: int = 1,
) -> list[ReplayStep]:
    """Recommend for every sample using only that user's strictly earlier samples."""

    ordered = sorted(samples, key=lambda s: (s.date, s.user_id, s.task_id))
    steps = []
    for index, sample in enumerate(ordered):
        cutoff = sample.date - timedelta(days=config.lookback_days)
        history = [
            s for s in ordered[:index] if s.user_id == sample.user_id and cutoff <= s.date < sample.date
        ]
        if len(history) < min_history:
            continue
        recommended, _ = choose_time_of_day(build_profile(history), sample.task_type)
        steps.append(ReplayStep(sample=sample, recommended=recommended, history_size=len(history)))
    return steps


def simulate_baseline(steps: list[ReplayStep]) -> dict:
    """Efficiency of every replayed task regardless of when it was done."""

    if not steps:
        return {"mean_efficiency": 0.0, "samples": 0}
    return {
        "mean_efficiency": float(np.mean([step.sample.efficiency for step in steps])),
        "samples": len(steps),
    }


def simulate_adaptive(steps: list[ReplayStep]) -> dict:
    """Efficiency of the replayed tasks that were done in the recommended bucket."""

    hits = [step for step in steps if step.hit]
    if not hits:
        return {"mean_efficiency": 0.0, "samples": 0, "hit_rate": 0.0}
    return {
        "mean_efficiency": float(np.mean([step.sample.efficiency for step in hits])),
        "samples": len(hits),
        "hit_rate": len(hits) / len(steps),
    }


def compare(baseline: dict, adaptive: dict) -> dict:
    old = baseline.get("mean_efficiency", 0.0)
    new = adaptive.get("mean_efficiency", 0.0)
    improvement = ((new - old) / old) * 100.0 if old else 0.0
    return {
        "efficiency_improvement_pct": improvement,
        "hit_rate": adaptive.get("hit_rate", 0.0),
    }
