"""Streamlit demo UI for adaptive-scheduler."""

from __future__ import annotations

import tempfile
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any

from adaptive_scheduler.adapters import csv_adapter, json_adapter
from adaptive_scheduler.evaluation import compare, replay, simulate_adaptive, simulate_baseline
from adaptive_scheduler.preferences import InMemoryPreferences
from adaptive_scheduler.recorder import record_productivity
from adaptive_scheduler.schema import Task
from adaptive_scheduler.service import SchedulerService
from adaptive_scheduler.store import InMemoryProductivityStore

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _parse_tasks_from_path(file_path: str) -> list[Task]:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list[Task]:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_tasks_from_path(temp_path)


def run_engine(tasks: list[Task], target: Task, work_hours: tuple[int, int] | None, now: datetime) -> dict[str, Any]:
    """Record all tasks, then profile, recommend and backtest for the target's user."""

    store = InMemoryProductivityStore()
    samples = [s for s in (record_productivity(t, t.user_id, store) for t in tasks) if s is not None]

    preferences = InMemoryPreferences()
    if work_hours is not None:
        preferences.set_work_hours(target.user_id, *work_hours)

    service = SchedulerService(store, preferences, clock=lambda: now)
    profile = service.analyze_user_productivity(target.user_id)
    recommendation = service.get_recommended_times(target, target.user_id)

    steps = replay([s for s in samples if s.user_id == target.user_id])
    baseline = simulate_baseline(steps)
    adaptive = simulate_adaptive(steps)

    return {
        "skipped": len(tasks) - len(samples),
        "task_types": Counter(s.task_type for s in samples if s.user_id == target.user_id),
        "profile": profile,
        "recommendation": recommendation,
        "baseline": baseline,
        "adaptive": adaptive,
        "comparison": compare(baseline, adaptive),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Adaptive Scheduler Demo", layout="wide")
    st.title("Adaptive Scheduler Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload completion log", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        user_id = st.text_input("User", value="alice")
        task_type = st.text_input("Task type", value="writing")
        duration = st.number_input("Estimated duration (min)", min_value=5, max_value=480, value=60, step=5)
        use_work_hours = st.checkbox("Apply work hours", value=False)
        work_start = st.slider("Work start", min_value=0, max_value=23, value=9)
        work_end = st.slider("Work end", min_value=0, max_value=23, value=17)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks = csv_adapter.parse("examples/sample_completions.csv")
            data_source = "demo dataset (examples/sample_completions.csv)"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        target = Task(task_id="ui_demo_task", user_id=user_id, task_type=task_type or None, estimated_duration=int(duration))
        work_hours = (int(work_start), int(work_end)) if use_work_hours else None
        result = run_engine(tasks, target, work_hours, datetime.now())

        st.success(f"Loaded {len(tasks)} tasks from {data_source}; {result['skipped']} had unusable timing data.")

        st.subheader("A) Productivity Profile")
        profile = result["profile"]
        st.metric("Samples in window", profile.total_records)
        st.table([{"bucket": k, **vars(v)} for k, v in profile.time_of_day.items()] or [{"bucket": "none"}])
        st.table([{"day": DAY_NAMES[k], **vars(v)} for k, v in profile.day_of_week.items()] or [{"day": "none"}])

        st.subheader("B) Recommendation")
        rec = result["recommendation"]
        r1, r2, r3 = st.columns(3)
        r1.metric("Best time of day", rec.best_time_of_day)
        r2.metric("Best day", DAY_NAMES[rec.best_day_of_week])
        r3.metric("Confidence", f"{rec.confidence:.2f}")
        slots = [f"{slot.start:%a %d %b %H:%M} - {slot.end:%H:%M}" for slot in rec.recommended_time_slots]
        st.write("\n".join(f"- {slot}" for slot in slots) if slots else "No slot fits the available window.")

        st.subheader("C) Backtest")
        ec1, ec2, ec3 = st.columns(3)
        ec1.write("**Baseline**")
        ec1.table([result["baseline"]])
        ec2.write("**Adaptive**")
        ec2.table([result["adaptive"]])
        ec3.write("**Comparison**")
        ec3.table([result["comparison"]])

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
