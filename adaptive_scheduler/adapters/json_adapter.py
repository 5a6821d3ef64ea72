"""JSON adapter for completed-task logs."""

from __future__ import annotations

import json
from datetime import datetime

from adaptive_scheduler.recorder import local_naive
from adaptive_scheduler.schema import Task

_REQUIRED_FIELDS = ("task_id", "user_id", "started_at", "completed_at")


def _parse_item(item: dict, index: int) -> Task:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = [field for field in _REQUIRED_FIELDS if not item.get(field)]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        started_at = local_naive(datetime.fromisoformat(str(item["started_at"])))
        completed_at = local_naive(datetime.fromisoformat(str(item["completed_at"])))
    except ValueError as exc:
        raise ValueError(f"Item {index}: malformed timestamp") from exc

    estimated = item.get("estimated_duration")
    if estimated is not None:
        try:
            estimated = int(estimated)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Item {index}: invalid estimated_duration") from exc

    return Task(
        task_id=str(item["task_id"]).strip(),
        user_id=str(item["user_id"]).strip(),
        title=str(item.get("title") or ""),
        status="completed",
        priority=item.get("priority"),
        category=item.get("category"),
        task_type=item.get("task_type"),
        estimated_duration=estimated,
        started_at=started_at,
        completed_at=completed_at,
    )


def parse(file_path: str) -> list[Task]:
    """Parse a JSON list of completed tasks."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
