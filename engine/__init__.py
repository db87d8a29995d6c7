"""
engine/
-------
Playback layer.

    from engine import PlaybackEngine, ManualScheduler, use_playback

The transition function lives in engine._transitions and is not
exported; drive the engine through PlaybackEngine's commands.
"""

from engine.speed    import (
    SpeedController,
    SPEED_PRESETS,
    MIN_RATE,
    MAX_RATE,
    DEFAULT_RATE,
    BASE_INTERVAL_MS,
    clamp_rate,
    rate_to_interval_ms,
)
from engine.timer    import (
    Scheduler,
    ThreadingScheduler,
    AsyncioScheduler,
    ManualScheduler,
    TimerDriver,
)
from engine.playback import PlaybackEngine, EngineSnapshot
from engine.context  import (
    EngineNotProvidedError,
    provide,
    playback_provider,
    use_playback,
)

__all__ = [
    "PlaybackEngine",
    "EngineSnapshot",
    "SpeedController",
    "SPEED_PRESETS",
    "MIN_RATE",
    "MAX_RATE",
    "DEFAULT_RATE",
    "BASE_INTERVAL_MS",
    "clamp_rate",
    "rate_to_interval_ms",
    "Scheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "TimerDriver",
    "EngineNotProvidedError",
    "provide",
    "playback_provider",
    "use_playback",
]
