"""Per-user productivity profile aggregation."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

import numpy as np

from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.recorder import local_naive
from adaptive_scheduler.schema import (
    TIMES_OF_DAY,
    BucketStats,
    ProductivitySample,
    TaskTypeStats,
    TimeOfDayStats,
    UserProductivityProfile,
)
from adaptive_scheduler.store import ProductivityStore

logger = logging.getLogger(__name__)


def _mean(values: list[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


def _group_by(samples: list[ProductivitySample], key) -> dict:
    groups: dict = defaultdict(list)
    for sample in samples:
        groups[key(sample)].append(sample)
    return groups


def _time_of_day_stats(samples: list[ProductivitySample]) -> dict[str, TimeOfDayStats]:
    groups = _group_by(samples, lambda s: s.time_of_day)
    return {
        bucket: TimeOfDayStats(
            count=len(groups[bucket]),
            efficiency=_mean([s.efficiency for s in groups[bucket]]),
            avg_duration=_mean([s.actual_duration for s in groups[bucket]]),
        )
        for bucket in TIMES_OF_DAY
        if groups.get(bucket)
    }


def _bucket_stats(samples: list[ProductivitySample]) -> BucketStats:
    return BucketStats(count=len(samples), efficiency=_mean([s.efficiency for s in samples]))


def build_profile(samples: Iterable[ProductivitySample]) -> UserProductivityProfile:
    """Reduce samples into a profile. Pure: equal input gives an equal profile."""

    samples = list(samples)
    if not samples:
        return UserProductivityProfile(total_records=0, time_of_day={}, task_type={}, day_of_week={})

    task_type = {}
    for label, type_samples in sorted(_group_by(samples, lambda s: s.task_type).items()):
        by_bucket = _group_by(type_samples, lambda s: s.time_of_day)
        task_type[label] = TaskTypeStats(
            count=len(type_samples),
            efficiency=_mean([s.efficiency for s in type_samples]),
            time_of_day={bucket: _bucket_stats(by_bucket[bucket]) for bucket in TIMES_OF_DAY if by_bucket.get(bucket)},
        )

    by_day = _group_by(samples, lambda s: s.day_of_week)
    day_of_week = {day: _bucket_stats(by_day[day]) for day in range(7) if by_day.get(day)}

    return UserProductivityProfile(
        total_records=len(samples),
        time_of_day=_time_of_day_stats(samples),
        task_type=task_type,
        day_of_week=day_of_week,
    )


def lookback_cutoff(now: datetime, config: SchedulerConfig = DEFAULT_CONFIG) -> datetime:
    return now - timedelta(days=config.lookback_days)


def analyze_user_productivity(
    user_id: str,
    store: ProductivityStore,
    now: Optional[datetime] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> UserProductivityProfile:
    """Aggregate the user's samples from the trailing lookback window."""

    now = local_naive(now) or datetime.now()
    samples = store.fetch(user_id, lookback_cutoff(now, config))
    profile = build_profile(samples)
    logger.debug("Built productivity profile for user %s from %d samples", user_id, profile.total_records)
    return profile
