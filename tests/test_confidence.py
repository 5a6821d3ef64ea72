from adaptive_scheduler.confidence import calculate_confidence
from adaptive_scheduler.config import config_from_dict


def test_confidence_steps():
    assert calculate_confidence(0) == 0.0
    assert calculate_confidence(3) == 0.3
    assert calculate_confidence(10) == 0.6
    assert calculate_confidence(20) == 0.8
    assert calculate_confidence(50) == 0.95


def test_confidence_breakpoints():
    assert calculate_confidence(1) == 0.3
    assert calculate_confidence(4) == 0.3
    assert calculate_confidence(5) == 0.6
    assert calculate_confidence(14) == 0.6
    assert calculate_confidence(15) == 0.8
    assert calculate_confidence(29) == 0.8
    assert calculate_confidence(30) == 0.95


def test_confidence_uses_configured_steps():
    config = config_from_dict({"confidence_steps": [[2, 0.1]], "max_confidence": 0.5})
    assert calculate_confidence(1, config) == 0.1
    assert calculate_confidence(2, config) == 0.5
