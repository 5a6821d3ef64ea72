import json

import pytest

from adaptive_scheduler.config import DEFAULT_CONFIG, config_from_dict, load_config
from adaptive_scheduler.errors import ConfigError


def test_defaults():
    assert DEFAULT_CONFIG.default_estimated_duration == 30
    assert DEFAULT_CONFIG.lookback_days == 90
    assert DEFAULT_CONFIG.max_actual_duration == 1440
    assert DEFAULT_CONFIG.time_ranges["any"] == (9, 17)


def test_load_config_overrides(tmp_path):
    path = tmp_path / "scheduler.json"
    path.write_text(json.dumps({"lookback_days": 30, "time_ranges": {"morning": [7, 10]}}), encoding="utf-8")
    config = load_config(path)
    assert config.lookback_days == 30
    assert config.time_ranges["morning"] == (7, 10)
    assert config.time_ranges["evening"] == (17, 21)
    assert DEFAULT_CONFIG.lookback_days == 90


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError):
        config_from_dict({"lookback_weeks": 3})


def test_malformed_config_file(tmp_path):
    path = tmp_path / "scheduler.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_priority_is_not_a_scheduler_setting():
    with pytest.raises(ConfigError):
        config_from_dict({"default_priority": "high"})
