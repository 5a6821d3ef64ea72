"""Core data schema for tasks, productivity samples and recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

TIMES_OF_DAY = ("morning", "afternoon", "evening")
TASK_STATUSES = ("todo", "in_progress", "completed")


@dataclass
class StatusChange:
    from_status: str
    to_status: str
    changed_at: datetime
    comment: str = ""


@dataclass
class Task:
    """Task record used as completion input and as recommendation target."""

    task_id: str
    user_id: str
    title: str = ""
    status: str = "todo"
    priority: Optional[str] = None
    category: Optional[str] = None
    task_type: Optional[str] = None
    estimated_duration: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    scheduled_time: Optional[datetime] = None
    status_history: list[StatusChange] = field(default_factory=list)


@dataclass(frozen=True)
class ProductivitySample:
    """One immutable sample per completed, timed task instance."""

    user_id: str
    task_id: str
    time_of_day: str
    estimated_duration: int
    actual_duration: int
    efficiency: float
    task_type: str
    category: str
    day_of_week: int
    date: datetime


@dataclass(frozen=True)
class BucketStats:
    count: int
    efficiency: float


@dataclass(frozen=True)
class TimeOfDayStats:
    count: int
    efficiency: float
    avg_duration: float


@dataclass(frozen=True)
class TaskTypeStats:
    count: int
    efficiency: float
    time_of_day: dict[str, BucketStats]


@dataclass(frozen=True)
class UserProductivityProfile:
    """Aggregated view of one user's samples; empty buckets are absent."""

    total_records: int
    time_of_day: dict[str, TimeOfDayStats]
    task_type: dict[str, TaskTypeStats]
    day_of_week: dict[int, BucketStats]


@dataclass(frozen=True)
class WorkHours:
    start_hour: int
    end_hour: int


@dataclass(frozen=True)
class UserPreferences:
    work_hours: Optional[WorkHours] = None


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class SchedulingRecommendation:
    best_time_of_day: str
    best_day_of_week: int
    next_best_date: datetime
    recommended_time_slots: list[TimeSlot]
    efficiency: float
    confidence: float
