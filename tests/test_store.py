from datetime import datetime

import pytest

from adaptive_scheduler.errors import StoreUnavailableError
from adaptive_scheduler.schema import ProductivitySample
from adaptive_scheduler.store import InMemoryProductivityStore, JsonLinesProductivityStore


def sample(user="u1", day=20, efficiency=0.75):
    return ProductivitySample(
        user_id=user,
        task_id=f"{user}-{day}",
        time_of_day="morning",
        estimated_duration=30,
        actual_duration=40,
        efficiency=efficiency,
        task_type="writing",
        category="work",
        day_of_week=2,
        date=datetime(2026, 10, day, 9, 0),
    )


def test_json_lines_store_roundtrip(tmp_path):
    store = JsonLinesProductivityStore(tmp_path / "samples.jsonl")
    store.append(sample())
    store.append(sample(user="u2"))
    store.append(sample(day=1))

    fetched = store.fetch("u1", since=datetime(2026, 10, 10))
    assert fetched == [sample()]


def test_json_lines_store_missing_file_is_empty(tmp_path):
    store = JsonLinesProductivityStore(tmp_path / "absent.jsonl")
    assert store.fetch("u1", since=datetime(2026, 1, 1)) == []


def test_json_lines_store_corrupt_line(tmp_path):
    path = tmp_path / "samples.jsonl"
    path.write_text('{"user_id": "u1"}\n', encoding="utf-8")
    with pytest.raises(StoreUnavailableError):
        JsonLinesProductivityStore(path).fetch("u1", since=datetime(2026, 1, 1))


def test_json_lines_store_unwritable(tmp_path):
    store = JsonLinesProductivityStore(tmp_path)
    with pytest.raises(StoreUnavailableError):
        store.append(sample())


def test_in_memory_store_filters_by_user_and_date():
    store = InMemoryProductivityStore([sample(), sample(user="u2"), sample(day=1)])
    assert store.fetch("u1", since=datetime(2026, 10, 1)) == [sample(), sample(day=1)]
    assert store.fetch("u1", since=datetime(2026, 10, 20, 9, 0)) == [sample()]


def test_json_lines_store_missing_directory(tmp_path):
    store = JsonLinesProductivityStore(tmp_path / "gone" / "samples.jsonl")
    with pytest.raises(StoreUnavailableError):
        store.fetch("u1", since=datetime(2026, 1, 1))
