import math

import pytest

from engine.speed import (
    BASE_INTERVAL_MS,
    DEFAULT_RATE,
    MAX_RATE,
    MIN_RATE,
    SpeedController,
    clamp_rate,
    rate_to_interval_ms,
)


def test_defaults():
    speed = SpeedController()
    assert speed.rate == DEFAULT_RATE == 1.0
    assert speed.get_rate() == 1.0
    assert speed.interval_ms == BASE_INTERVAL_MS == 1000


@pytest.mark.parametrize("value,expected", [
    (0.0, MIN_RATE),
    (-3.0, MIN_RATE),
    (0.1, 0.1),
    (2.5, 2.5),
    (5.0, 5.0),
    (12.0, MAX_RATE),
    (math.inf, MAX_RATE),
    (-math.inf, MIN_RATE),
])
def test_set_rate_clamps(value, expected):
    speed = SpeedController()
    speed.set_rate(value)
    assert speed.rate == expected


def test_nan_keeps_current_rate():
    speed = SpeedController(2.0)
    speed.set_rate(float("nan"))
    assert speed.rate == 2.0


def test_set_rate_returns_nothing():
    assert SpeedController().set_rate(3.0) is None


def test_interval_bounds():
    assert rate_to_interval_ms(MAX_RATE) == 200
    assert rate_to_interval_ms(MIN_RATE) == 10000
    assert rate_to_interval_ms(2.0) == 500
    assert rate_to_interval_ms(3.0) == 333


def test_interval_clamps_out_of_range_rates():
    assert rate_to_interval_ms(50) == 200
    assert rate_to_interval_ms(0) == 10000


def test_interval_is_monotonic_inverse():
    rates = [MIN_RATE + i * 0.1 for i in range(50)]
    intervals = [rate_to_interval_ms(r) for r in rates]
    assert all(a >= b for a, b in zip(intervals, intervals[1:]))
    assert intervals[0] > intervals[-1]


def test_clamp_rate_fallback():
    assert clamp_rate(float("nan"), fallback=0.7) == 0.7
