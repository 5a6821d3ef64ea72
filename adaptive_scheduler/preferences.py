"""User scheduling preference lookups."""

from __future__ import annotations

from typing import Optional, Protocol

from adaptive_scheduler.schema import UserPreferences, WorkHours


class PreferencesProvider(Protocol):
    def get(self, user_id: str) -> Optional[UserPreferences]:
        ...


class InMemoryPreferences:
    """Dictionary-backed preferences; unknown users have no preferences."""

    def __init__(self, preferences: Optional[dict[str, UserPreferences]] = None):
        self._preferences = dict(preferences or {})

    def get(self, user_id: str) -> Optional[UserPreferences]:
        return self._preferences.get(user_id)

    def set_work_hours(self, user_id: str, start_hour: int, end_hour: int) -> UserPreferences:
        if not (0 <= start_hour <= 23 and 0 <= end_hour <= 23):
            raise ValueError("Work hours must be between 0 and 23")
        prefs = UserPreferences(work_hours=WorkHours(start_hour=start_hour, end_hour=end_hour))
        self._preferences[user_id] = prefs
        return prefs
