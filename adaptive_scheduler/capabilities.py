"""Capabilities the surrounding application injects; the scheduler core never calls them."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from adaptive_scheduler.schema import Task


@runtime_checkable
class TaskParser(Protocol):
    """Turns free text such as "write report tomorrow morning" into a task."""

    def parse(self, text: str, user_id: str) -> Task:
        ...


@runtime_checkable
class Notifier(Protocol):
    def notify(self, user_id: str, title: str, message: str, task: Optional[Task] = None) -> bool:
        ...
