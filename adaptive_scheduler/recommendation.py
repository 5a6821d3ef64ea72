"""Time-slot recommendations from a user's productivity profile."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from adaptive_scheduler.analyzer import analyze_user_productivity
from adaptive_scheduler.confidence import calculate_confidence
from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.preferences import PreferencesProvider
from adaptive_scheduler.recorder import day_of_week, local_naive
from adaptive_scheduler.schema import (
    TIMES_OF_DAY,
    SchedulingRecommendation,
    Task,
    TimeSlot,
    UserPreferences,
    UserProductivityProfile,
)
from adaptive_scheduler.store import ProductivityStore

logger = logging.getLogger(__name__)


def choose_time_of_day(profile: UserProductivityProfile, task_type: str) -> tuple[str, float]:
    """Return the most efficient bucket and its efficiency, or ("any", 0.0).

    Type-specific evidence replaces the overall choice only when strictly
    more efficient.
    """

    best, highest = "any", 0.0
    for bucket in TIMES_OF_DAY:
        stats = profile.time_of_day.get(bucket)
        efficiency = stats.efficiency if stats else 0.0
        if efficiency > highest:
            best, highest = bucket, efficiency

    type_stats = profile.task_type.get(task_type)
    if type_stats is not None:
        for bucket, stats in type_stats.time_of_day.items():
            if stats.efficiency > highest:
                best, highest = bucket, stats.efficiency

    return best, highest


def hour_range(
    time_of_day: str,
    preferences: Optional[UserPreferences] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> tuple[int, int]:
    """Default hour window for a bucket, narrowed to the user's work hours."""

    start, end = config.time_ranges[time_of_day]
    work_hours = preferences.work_hours if preferences else None
    if work_hours is not None:
        start = max(start, work_hours.start_hour)
        end = min(end, work_hours.end_hour)
    return start, end


def find_best_day_of_week(profile: UserProductivityProfile, config: SchedulerConfig = DEFAULT_CONFIG) -> int:
    best_day = config.default_day_of_week
    highest = 0.0
    for day in range(7):
        stats = profile.day_of_week.get(day)
        if stats is not None and stats.efficiency > highest:
            best_day, highest = day, stats.efficiency
    return best_day


def next_occurrence(now: datetime, target_day: int) -> datetime:
    """Next date landing on ``target_day``; a same-day match moves a week ahead."""

    days_until = (target_day - day_of_week(now) + 7) % 7
    return now + timedelta(days=days_until or 7)


def build_time_slots(day: datetime, start_hour: int, end_hour: int, duration: int) -> list[TimeSlot]:
    last_hour = end_hour - math.ceil(duration / 60)
    slots = []
    for hour in range(start_hour, last_hour + 1):
        slot_start = day.replace(hour=hour, minute=0, second=0, microsecond=0)
        slots.append(TimeSlot(start=slot_start, end=slot_start + timedelta(minutes=duration)))
    return slots


def get_recommended_times(
    task: Task,
    user_id: str,
    store: ProductivityStore,
    preferences: Optional[PreferencesProvider] = None,
    now: Optional[datetime] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> SchedulingRecommendation:
    """Recommend when to work on ``task`` for ``user_id``.

    Sparse or missing history falls back to the "any" window, Monday and zero
    confidence. Only store failures are raised.
    """

    now = local_naive(now) or datetime.now()
    profile = analyze_user_productivity(user_id, store, now=now, config=config)
    user_prefs = preferences.get(user_id) if preferences is not None else None

    task_type = task.task_type or config.default_task_type
    duration = task.estimated_duration or config.default_estimated_duration

    best_time_of_day, efficiency = choose_time_of_day(profile, task_type)
    start_hour, end_hour = hour_range(best_time_of_day, user_prefs, config)

    best_day = find_best_day_of_week(profile, config)
    recommended_date = next_occurrence(now, best_day)
    slots = build_time_slots(recommended_date, start_hour, end_hour, duration)

    logger.debug(
        "Recommendation for user %s task %s: %s on day %d, %d slots",
        user_id,
        task.task_id,
        best_time_of_day,
        best_day,
        len(slots),
    )

    return SchedulingRecommendation(
        best_time_of_day=best_time_of_day,
        best_day_of_week=best_day,
        next_best_date=recommended_date,
        recommended_time_slots=slots,
        efficiency=efficiency,
        confidence=calculate_confidence(profile.total_records, config),
    )
