import json
from datetime import datetime, timedelta, timezone

import pytest

from adaptive_scheduler.adapters.json_adapter import parse as parse_json
from adaptive_scheduler.capabilities import Notifier, TaskParser
from adaptive_scheduler.errors import StoreUnavailableError
from adaptive_scheduler.preferences import InMemoryPreferences
from adaptive_scheduler.recorder import time_of_day_for_hour
from adaptive_scheduler.schema import Task
from adaptive_scheduler.service import SchedulerService
from adaptive_scheduler.store import InMemoryProductivityStore, JsonLinesProductivityStore

NOW = datetime(2026, 10, 21, 8, 0)


def completed(task_id, start, minutes, estimate, task_type):
    return Task(
        task_id=task_id,
        user_id="u1",
        task_type=task_type,
        estimated_duration=estimate,
        started_at=start,
        completed_at=start + timedelta(minutes=minutes),
    )


def test_service_record_and_recommend(tmp_path):
    preferences = InMemoryPreferences()
    preferences.set_work_hours("u1", 9, 17)
    service = SchedulerService(JsonLinesProductivityStore(tmp_path / "s.jsonl"), preferences, clock=lambda: NOW)

    service.record_productivity(completed("a", datetime(2026, 10, 19, 14, 0), 60, 60, "admin"), "u1")
    service.record_productivity(completed("b", datetime(2026, 10, 20, 9, 0), 120, 60, "admin"), "u1")
    assert service.record_productivity(completed("c", datetime(2026, 10, 20, 9, 0), 0, 60, "admin"), "u1") is None

    profile = service.analyze_user_productivity("u1")
    assert profile.total_records == 2

    rec = service.get_recommended_times(Task(task_id="next", user_id="u1", task_type="admin"), "u1")
    assert rec.best_time_of_day == "afternoon"
    assert rec.best_day_of_week == 1
    assert rec.next_best_date.date() == datetime(2026, 10, 26).date()
    assert [slot.start.hour for slot in rec.recommended_time_slots] == [12, 13, 14, 15]
    assert rec.confidence == 0.3


def test_unknown_user_gets_defaults(tmp_path):
    service = SchedulerService(JsonLinesProductivityStore(tmp_path / "absent.jsonl"), clock=lambda: NOW)
    rec = service.get_recommended_times(Task(task_id="x", user_id="nobody"), "nobody")
    assert rec.best_time_of_day == "any"
    assert rec.confidence == 0.0


class EchoParser:
    def parse(self, text, user_id):
        return Task(task_id="parsed", user_id=user_id, title=text)


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, user_id, title, message, task=None):
        self.sent.append((user_id, title))
        return True


def test_capability_protocols():
    assert isinstance(EchoParser(), TaskParser)
    assert isinstance(RecordingNotifier(), Notifier)
    assert not isinstance(object(), Notifier)


def test_missing_store_directory_fails_the_request(tmp_path):
    service = SchedulerService(JsonLinesProductivityStore(tmp_path / "gone" / "s.jsonl"), clock=lambda: NOW)
    with pytest.raises(StoreUnavailableError):
        service.get_recommended_times(Task(task_id="x", user_id="u1"), "u1")


def test_offset_timestamps_with_default_clock(tmp_path):
    plus_two = timezone(timedelta(hours=2))
    started = (datetime.now(timezone.utc) - timedelta(days=2)).replace(microsecond=0).astimezone(plus_two)
    path = tmp_path / "completions.json"
    path.write_text(
        json.dumps(
            [
                {
                    "task_id": "a",
                    "user_id": "u1",
                    "task_type": "writing",
                    "estimated_duration": 45,
                    "started_at": started.isoformat(),
                    "completed_at": (started + timedelta(minutes=45)).isoformat(),
                }
            ]
        ),
        encoding="utf-8",
    )

    service = SchedulerService(InMemoryProductivityStore())
    for task in parse_json(str(path)):
        sample = service.record_productivity(task, task.user_id)
        assert sample.date.tzinfo is None
        assert sample.time_of_day == time_of_day_for_hour(started.astimezone().hour)

    rec = service.get_recommended_times(Task(task_id="n", user_id="u1", task_type="writing"), "u1")
    assert rec.best_time_of_day == time_of_day_for_hour(started.astimezone().hour)
    assert rec.efficiency == 1.0
    assert rec.confidence == 0.3


def test_aware_clock_with_naive_samples():
    store = InMemoryProductivityStore()
    service = SchedulerService(store, clock=lambda: datetime.now(timezone.utc))
    start = datetime.now() - timedelta(days=1)
    service.record_productivity(completed("a", start, 30, 30, "admin"), "u1")
    assert service.analyze_user_productivity("u1").total_records == 1
