"""Scheduler facade bundling store, preferences, config and clock."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from adaptive_scheduler.analyzer import analyze_user_productivity
from adaptive_scheduler.config import DEFAULT_CONFIG, SchedulerConfig
from adaptive_scheduler.preferences import PreferencesProvider
from adaptive_scheduler.recommendation import get_recommended_times
from adaptive_scheduler.recorder import record_productivity
from adaptive_scheduler.schema import ProductivitySample, SchedulingRecommendation, Task, UserProductivityProfile
from adaptive_scheduler.store import ProductivityStore


class SchedulerService:
    def __init__(
        self,
        store: ProductivityStore,
        preferences: Optional[PreferencesProvider] = None,
        config: SchedulerConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.preferences = preferences
        self.config = config
        self.clock = clock

    def record_productivity(self, task: Task, user_id: str) -> Optional[ProductivitySample]:
        return record_productivity(task, user_id, self.store, self.config)

    def analyze_user_productivity(self, user_id: str) -> UserProductivityProfile:
        return analyze_user_productivity(user_id, self.store, now=self.clock(), config=self.config)

    def get_recommended_times(self, task: Task, user_id: str) -> SchedulingRecommendation:
        return get_recommended_times(
            task,
            user_id,
            self.store,
            preferences=self.preferences,
            now=self.clock(),
            config=self.config,
        )
