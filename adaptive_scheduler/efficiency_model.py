"""Regression benchmark predicting task efficiency from scheduling features."""

from __future__ import annotations

from typing import Any

import numpy as np
from sklearn.ensemble import GradientBoostingRegressor, RandomForestRegressor
from sklearn.linear_model import Ridge
from sklearn.model_selection import KFold, cross_validate
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from adaptive_scheduler.schema import TIMES_OF_DAY, ProductivitySample

_MIN_SAMPLES = 4


def build_feature_table(samples: list[ProductivitySample]) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """Return (X, y, feature_names) with efficiency as the target."""

    if not samples:
        return np.empty((0, 0)), np.array([], dtype=float), []

    task_types = sorted({sample.task_type for sample in samples})
    feature_names = ["estimated_duration"]
    feature_names += [f"time_of_day={bucket}" for bucket in TIMES_OF_DAY]
    feature_names += [f"day_of_week={day}" for day in range(7)]
    feature_names += [f"task_type={task_type}" for task_type in task_types]

    ordered = sorted(samples, key=lambda s: (s.date, s.task_id))
    rows = []
    for sample in ordered:
        row = [float(sample.estimated_duration)]
        row.extend(1.0 if sample.time_of_day == bucket else 0.0 for bucket in TIMES_OF_DAY)
        row.extend(1.0 if sample.day_of_week == day else 0.0 for day in range(7))
        row.extend(1.0 if sample.task_type == task_type else 0.0 for task_type in task_types)
        rows.append(row)

    y = np.asarray([sample.efficiency for sample in ordered], dtype=float)
    return np.asarray(rows, dtype=float), y, feature_names


def _make_models(seed: int) -> dict[str, Any]:
    return {
        "Ridge": Pipeline([("scaler", StandardScaler()), ("reg", Ridge(alpha=1.0))]),
        "RandomForest": RandomForestRegressor(n_estimators=200, random_state=seed),
        "GradientBoosting": GradientBoostingRegressor(random_state=seed),
    }


def benchmark_models(X: np.ndarray, y: np.ndarray, seed: int = 42) -> dict:
    """Cross-validate each regressor; lower mean absolute error ranks first."""

    if len(y) < _MIN_SAMPLES:
        return {"models": {}, "ranking": [], "best_model": None}

    cv = KFold(n_splits=min(5, len(y) // 2), shuffle=True, random_state=seed)
    scoring = {"mae": "neg_mean_absolute_error", "rmse": "neg_root_mean_squared_error"}

    report: dict[str, Any] = {"models": {}}
    for name, model in _make_models(seed).items():
        scores = cross_validate(model, X, y, cv=cv, scoring=scoring)
        report["models"][name] = {
            metric: {
                "mean": float(-np.mean(scores[f"test_{metric}"])),
                "std": float(np.std(scores[f"test_{metric}"])),
            }
            for metric in scoring
        }

    ranked = sorted(report["models"].items(), key=lambda item: item[1]["mae"]["mean"])
    report["ranking"] = [{"model": name, "cv_mae_mean": metrics["mae"]["mean"]} for name, metrics in ranked]
    report["best_model"] = ranked[0][0]
    return report


def train_best_model(X: np.ndarray, y: np.ndarray, seed: int = 42) -> tuple[Any, dict]:
    report = benchmark_models(X, y, seed=seed)
    best_name = report["best_model"]
    if best_name is None:
        raise ValueError(f"Need at least {_MIN_SAMPLES} samples to train an efficiency model")

    model = _make_models(seed)[best_name]
    model.fit(X, y)
    return model, report


def _feature_weights(model: Any) -> tuple[str, np.ndarray | None]:
    estimator = model.named_steps["reg"] if isinstance(model, Pipeline) else model
    if isinstance(estimator, Ridge):
        return "coefficients", np.ravel(estimator.coef_)
    if isinstance(estimator, (RandomForestRegressor, GradientBoostingRegressor)):
        return "feature_importances", np.ravel(estimator.feature_importances_)
    return "unsupported", None


def top_features(model: Any, feature_names: list[str], limit: int = 10) -> dict:
    """Rank features by their share of the model's total absolute weight.

    ``direction`` is +1 when a coefficient raises predicted efficiency and -1
    when it lowers it; importances are always +1.
    """

    kind, weights = _feature_weights(model)
    if weights is None:
        return {"type": kind, "top_features": []}

    magnitude = np.abs(weights)
    total = float(magnitude.sum())
    order = np.argsort(-magnitude, kind="stable")[:limit]
    ranked = [
        {
            "feature": feature_names[i],
            "weight": float(weights[i]),
            "share": float(magnitude[i] / total) if total else 0.0,
            "direction": -1 if weights[i] < 0 else 1,
        }
        for i in order
    ]
    return {"type": kind, "top_features": ranked}
