"""Demo script for adaptive-scheduler."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from adaptive_scheduler.adapters.csv_adapter import parse
from adaptive_scheduler.preferences import InMemoryPreferences
from adaptive_scheduler.schema import Task
from adaptive_scheduler.service import SchedulerService
from adaptive_scheduler.store import InMemoryProductivityStore


def main() -> None:
    tasks = parse("examples/sample_completions.csv")
    preferences = InMemoryPreferences()
    preferences.set_work_hours("alice", 9, 18)

    service = SchedulerService(InMemoryProductivityStore(), preferences)
    for task in tasks:
        service.record_productivity(task, task.user_id)

    recommendation = service.get_recommended_times(
        Task(task_id="next", user_id="alice", task_type="writing", estimated_duration=90),
        "alice",
    )
    print("Best time of day:", recommendation.best_time_of_day)
    print("Best day of week:", recommendation.best_day_of_week)
    print("Confidence:", recommendation.confidence)
    for slot in recommendation.recommended_time_slots:
        print(f"  {slot.start:%a %Y-%m-%d %H:%M} - {slot.end:%H:%M}")


if __name__ == "__main__":
    main()
