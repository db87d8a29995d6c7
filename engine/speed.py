"""
speed.py — Playback Rate
=========================
The rate is a multiplier that lives OUTSIDE the playback state machine.
Changing it never produces a transition and never restarts the timer;
the timer simply reads `interval_ms` each time it schedules a tick.

Mapping:  interval_ms = round(BASE_INTERVAL_MS / rate)
    0.1×  → 10000 ms
    1.0×  →  1000 ms
    5.0×  →   200 ms
"""

import math
from typing import Dict, Optional


MIN_RATE:          float = 0.1
MAX_RATE:          float = 5.0
DEFAULT_RATE:      float = 1.0
BASE_INTERVAL_MS:  int   = 1000     # one step per second at 1.0×


# ---------------------------------------------------------------------------
# Speed presets (rate multipliers)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, float] = {
    "slow":   0.5,    # teaching mode
    "medium": 1.0,
    "fast":   2.5,    # demo mode
    "turbo":  5.0,
}


def clamp_rate(rate: float, fallback: float = DEFAULT_RATE) -> float:
    """Clamp into [MIN_RATE, MAX_RATE].  NaN yields `fallback`."""
    rate = float(rate)
    if math.isnan(rate):
        return fallback
    return max(MIN_RATE, min(MAX_RATE, rate))


def rate_to_interval_ms(rate: float) -> int:
    return round(BASE_INTERVAL_MS / clamp_rate(rate))


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class SpeedController:
    """Mutable cell holding the current rate."""

    def __init__(self, rate: Optional[float] = None):
        self._rate: float = DEFAULT_RATE
        if rate is not None:
            self.set_rate(rate)

    def set_rate(self, rate: float) -> None:
        self._rate = clamp_rate(rate, fallback=self._rate)

    def get_rate(self) -> float:
        return self._rate

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def interval_ms(self) -> int:
        return rate_to_interval_ms(self._rate)
