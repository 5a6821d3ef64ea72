"""CSV adapter for completed-task logs."""

from __future__ import annotations

import csv
from datetime import datetime

from adaptive_scheduler.recorder import local_naive
from adaptive_scheduler.schema import Task

_REQUIRED_FIELDS = ("task_id", "user_id", "started_at", "completed_at")


def _parse_timestamp(value: str, field_name: str, row_number: int) -> datetime:
    try:
        return local_naive(datetime.fromisoformat(value.strip()))
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed {field_name}") from exc


def _optional(row: dict, key: str):
    value = row.get(key)
    return value.strip() if value and value.strip() else None


def _parse_row(row: dict, row_number: int) -> Task:
    missing = [field for field in _REQUIRED_FIELDS if not row.get(field)]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    estimated_raw = _optional(row, "estimated_duration")
    estimated = None
    if estimated_raw is not None:
        try:
            estimated = int(float(estimated_raw))
        except ValueError as exc:
            raise ValueError(f"Row {row_number}: invalid estimated_duration") from exc

    return Task(
        task_id=row["task_id"].strip(),
        user_id=row["user_id"].strip(),
        title=_optional(row, "title") or "",
        status="completed",
        priority=_optional(row, "priority"),
        category=_optional(row, "category"),
        task_type=_optional(row, "task_type"),
        estimated_duration=estimated,
        started_at=_parse_timestamp(row["started_at"], "started_at", row_number),
        completed_at=_parse_timestamp(row["completed_at"], "completed_at", row_number),
    )


def parse(file_path: str) -> list[Task]:
    """Parse a CSV file into completed tasks."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [_parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]
