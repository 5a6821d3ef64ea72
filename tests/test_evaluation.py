from datetime import datetime, timedelta

import pytest

from adaptive_scheduler.adapters.csv_adapter import parse as parse_csv
from adaptive_scheduler.evaluation import compare, replay, simulate_adaptive, simulate_baseline
from adaptive_scheduler.recorder import build_sample
from adaptive_scheduler.schema import ProductivitySample

START = datetime(2026, 9, 1, 9, 0)


def sample(index, time_of_day, efficiency, user="u1"):
    return ProductivitySample(
        user_id=user,
        task_id=f"t{index}",
        time_of_day=time_of_day,
        estimated_duration=30,
        actual_duration=30,
        efficiency=efficiency,
        task_type="general",
        category="general",
        day_of_week=2,
        date=START + timedelta(days=index),
    )


def history():
    return [
        sample(0, "morning", 1.0),
        sample(1, "evening", 0.5),
        sample(2, "morning", 0.9),
        sample(3, "evening", 0.4),
        sample(4, "morning", 0.8, user="u2"),
    ]


def test_replay_uses_only_earlier_samples_of_same_user():
    steps = replay(history())
    assert [step.sample.task_id for step in steps] == ["t1", "t2", "t3"]
    assert [step.recommended for step in steps] == ["morning", "morning", "morning"]
    assert [step.history_size for step in steps] == [1, 2, 3]


def test_backtest_metrics():
    steps = replay(history())
    baseline = simulate_baseline(steps)
    adaptive = simulate_adaptive(steps)
    assert baseline["mean_efficiency"] == pytest.approx(0.6)
    assert adaptive["mean_efficiency"] == pytest.approx(0.9)
    assert adaptive["hit_rate"] == pytest.approx(1 / 3)

    result = compare(baseline, adaptive)
    assert result["efficiency_improvement_pct"] == pytest.approx(50.0)


def test_backtest_without_history():
    steps = replay([sample(0, "morning", 1.0)])
    assert steps == []
    assert simulate_baseline(steps)["samples"] == 0
    assert compare(simulate_baseline(steps), simulate_adaptive(steps))["efficiency_improvement_pct"] == 0.0


def test_replay_handles_mixed_offset_log(tmp_path):
    path = tmp_path / "completions.csv"
    path.write_text(
        "task_id,user_id,started_at,completed_at,estimated_duration\n"
        "a,u1,2026-09-01T09:00:00,2026-09-01T09:30:00,30\n"
        "b,u1,2026-09-02T09:00:00+02:00,2026-09-02T09:45:00+02:00,30\n"
        "c,u1,2026-09-03T09:00:00,2026-09-03T09:20:00,30\n",
        encoding="utf-8",
    )
    samples = [build_sample(task, task.user_id) for task in parse_csv(str(path))]
    steps = replay(samples)
    assert [step.sample.task_id for step in steps] == ["b", "c"]
