"""Productivity sample recording for completed tasks."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional

from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.schema import ProductivitySample, Task
from adaptive_scheduler.store import ProductivityStore

logger = logging.getLogger(__name__)


def local_naive(moment: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware timestamp to naive local time; naive input is kept."""

    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def time_of_day_for_hour(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    return "evening"


def day_of_week(moment) -> int:
    """Return the weekday with Sunday as 0."""

    return (moment.weekday() + 1) % 7


def actual_duration_minutes(task: Task) -> int:
    started, completed = task.started_at, task.completed_at
    if (started.tzinfo is None) != (completed.tzinfo is None):
        started, completed = local_naive(started), local_naive(completed)
    seconds = (completed - started).total_seconds()
    # half-up rounding, not banker's rounding
    return int(math.floor(seconds / 60.0 + 0.5))


def compute_efficiency(estimated: int, actual: int) -> float:
    """Score in (0, 1]; 1.0 only when actual matches the estimate exactly."""

    if actual <= estimated:
        return actual / estimated
    return estimated / actual


def build_sample(task: Task, user_id: str, config: SchedulerConfig = DEFAULT_CONFIG) -> Optional[ProductivitySample]:
    """Derive a sample from a completed task, or None when timing data is unusable."""

    if task.started_at is None or task.completed_at is None:
        logger.info("Task %s has no start/completion time, skipping productivity sample", task.task_id)
        return None

    actual = actual_duration_minutes(task)
    if actual <= 0 or actual > config.max_actual_duration:
        logger.warning("Task %s has invalid duration %d min, skipping productivity sample", task.task_id, actual)
        return None

    estimated = task.estimated_duration or config.default_estimated_duration
    started_at = local_naive(task.started_at)

    return ProductivitySample(
        user_id=user_id,
        task_id=task.task_id,
        time_of_day=time_of_day_for_hour(started_at.hour),
        estimated_duration=int(estimated),
        actual_duration=actual,
        efficiency=compute_efficiency(estimated, actual),
        task_type=task.task_type or config.default_task_type,
        category=task.category or config.default_category,
        day_of_week=day_of_week(started_at),
        date=started_at,
    )


def record_productivity(
    task: Task,
    user_id: str,
    store: ProductivityStore,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Optional[ProductivitySample]:
    """Persist one sample for a completed task; store failures propagate."""

    sample = build_sample(task, user_id, config)
    if sample is None:
        return None

    saved = store.append(sample)
    logger.debug(
        "Recorded sample for task %s: %s, efficiency %.3f",
        sample.task_id,
        sample.time_of_day,
        sample.efficiency,
    )
    return saved
