"""Productivity sample stores.

The scheduler only needs two operations from its persistence layer: append a
sample and fetch a user's samples since a cutoff. ``ProductivityStore`` is
that contract; the two implementations here back tests, scripts and demos.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Iterable, Protocol

from adaptive_scheduler.errors import StoreUnavailableError
from adaptive_scheduler.schema import ProductivitySample

logger = logging.getLogger(__name__)


class ProductivityStore(Protocol):
    def append(self, sample: ProductivitySample) -> ProductivitySample:
        ...

    def fetch(self, user_id: str, since: datetime) -> list[ProductivitySample]:
        ...


class InMemoryProductivityStore:
    """Append-only list of samples guarded by a lock."""

    def __init__(self, samples: Iterable[ProductivitySample] = ()):
        self._samples: list[ProductivitySample] = list(samples)
        self._lock = threading.Lock()

    def append(self, sample: ProductivitySample) -> ProductivitySample:
        with self._lock:
            self._samples.append(sample)
        return sample

    def fetch(self, user_id: str, since: datetime) -> list[ProductivitySample]:
        with self._lock:
            snapshot = list(self._samples)
        return [s for s in snapshot if s.user_id == user_id and s.date >= since]

    def __len__(self) -> int:
        return len(self._samples)


def sample_to_dict(sample: ProductivitySample) -> dict:
    payload = asdict(sample)
    payload["date"] = sample.date.isoformat()
    return payload


def sample_from_dict(payload: dict) -> ProductivitySample:
    return ProductivitySample(
        user_id=str(payload["user_id"]),
        task_id=str(payload["task_id"]),
        time_of_day=str(payload["time_of_day"]),
        estimated_duration=int(payload["estimated_duration"]),
        actual_duration=int(payload["actual_duration"]),
        efficiency=float(payload["efficiency"]),
        task_type=str(payload["task_type"]),
        category=str(payload["category"]),
        day_of_week=int(payload["day_of_week"]),
        date=datetime.fromisoformat(payload["date"]),
    )


class JsonLinesProductivityStore:
    """File-backed store writing one JSON object per line."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(self, sample: ProductivitySample) -> ProductivitySample:
        line = json.dumps(sample_to_dict(sample), sort_keys=True)
        try:
            with self._lock, open(self.path, "a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot append to {self.path}: {exc}") from exc
        return sample

    def fetch(self, user_id: str, since: datetime) -> list[ProductivitySample]:
        if not self.path.exists():
            if not self.path.parent.is_dir():
                raise StoreUnavailableError(f"Store directory {self.path.parent} does not exist")
            return []

        samples: list[ProductivitySample] = []
        try:
            with open(self.path, encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, start=1):
                    if not line.strip():
                        continue
                    try:
                        sample = sample_from_dict(json.loads(line))
                    except (KeyError, TypeError, ValueError) as exc:
                        raise StoreUnavailableError(f"{self.path}:{line_number}: corrupt sample") from exc
                    if sample.user_id == user_id and sample.date >= since:
                        samples.append(sample)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {self.path}: {exc}") from exc

        logger.debug("Loaded %d samples for user %s from %s", len(samples), user_id, self.path)
        return samples
