"""Task status transitions that feed the productivity recorder."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.errors import InvalidTaskStateError, TaskNotAuthorizedError
from adaptive_scheduler.recorder import record_productivity
from adaptive_scheduler.schema import TASK_STATUSES, ProductivitySample, StatusChange, Task
from adaptive_scheduler.store import ProductivityStore

logger = logging.getLogger(__name__)


def _check_owner(task: Task, user_id: str) -> None:
    if task.user_id != user_id:
        raise TaskNotAuthorizedError(f"User {user_id} is not authorized to access task {task.task_id}")


def set_status(task: Task, status: str, now: datetime, comment: str = "") -> Task:
    """Move ``task`` to ``status``, keeping completed_at and history in step."""

    if status not in TASK_STATUSES:
        raise InvalidTaskStateError(f"Invalid status '{status}'")

    if status == "completed":
        if task.status != "completed":
            task.completed_at = now
    else:
        task.completed_at = None

    if status != task.status:
        task.status_history.append(
            StatusChange(from_status=task.status, to_status=status, changed_at=now, comment=comment)
        )
        task.status = status
    return task


def start_task(task: Task, user_id: str, now: Optional[datetime] = None) -> Task:
    _check_owner(task, user_id)
    now = now or datetime.now()
    task.started_at = now
    return set_status(task, "in_progress", now)


def schedule_task(task: Task, user_id: str, scheduled_time: Optional[datetime]) -> Task:
    if scheduled_time is None:
        raise InvalidTaskStateError("Scheduled time is required")
    _check_owner(task, user_id)
    task.scheduled_time = scheduled_time
    return task


def complete_task(
    task: Task,
    user_id: str,
    store: ProductivityStore,
    now: Optional[datetime] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Optional[ProductivitySample]:
    """Mark ``task`` completed and record its productivity sample if timed."""

    _check_owner(task, user_id)
    already_completed = task.status == "completed"
    set_status(task, "completed", now or datetime.now())
    if already_completed:
        logger.debug("Task %s was already completed, no new sample", task.task_id)
        return None
    return record_productivity(task, user_id, store, config)
