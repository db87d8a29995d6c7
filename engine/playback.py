"""
playback.py — Playback Engine Facade
=====================================
The PlaybackEngine is the ONLY object consumers interact with during a
replay.  It owns the playback state, the rate cell and the timer, and
exposes a small play/pause/step/jump/speed API plus read-only derived
fields.

    engine = PlaybackEngine(trace)
    engine.play()
    engine.set_rate(2.0)          # no restart, no position change
    snap = engine.snapshot()      # frozen view for renderers

Wiring:
    command  →  transition()  →  new state  →  TimerDriver.sync(is_playing)
                                            →  subscribers(snapshot)

Thread safety:
  Every command and every timer tick runs under one re-entrant lock, so
  transitions are applied one at a time in the order they arrive.
  Subscribers are called while that lock is held; they must not block.
  A subscriber that raises is logged and skipped.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from traces import Step, Trace
from engine import _transitions as t
from engine.speed import DEFAULT_RATE, SpeedController
from engine.timer import Scheduler, ThreadingScheduler, TimerDriver


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Snapshot — what consumers get to read
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class EngineSnapshot:
    trace:         Optional[Trace]
    position:      int
    is_playing:    bool
    current_step:  Optional[Step]
    total_steps:   int
    is_at_end:     bool
    is_at_start:   bool
    rate:          float
    interval_ms:   int


Listener = Callable[[EngineSnapshot], None]

COMMANDS = (
    "play",
    "pause",
    "toggle_play",
    "step_forward",
    "step_backward",
    "reset",
    "jump_to",
    "set_trace",
    "set_rate",
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class PlaybackEngine:
    """
    Attributes (read-only):
        trace        : The loaded Trace, or None.
        position     : Index of the step currently shown.
        is_playing   : True while the timer is auto-advancing.
        current_step : trace.steps[position], or None.
        total_steps  : len(trace.steps), or 0.
        is_at_end    : position >= total_steps - 1.
        is_at_start  : position == 0.
        rate         : Current speed multiplier.
    """

    def __init__(
        self,
        trace: Optional[Trace] = None,
        scheduler: Optional[Scheduler] = None,
        rate: float = DEFAULT_RATE,
    ):
        self._lock      = threading.RLock()
        self._state     = t.PlaybackState(trace=trace)
        self._speed     = SpeedController(rate)
        self._listeners: List[Listener] = []
        self._disposed  = False
        self._timer     = TimerDriver(
            scheduler or ThreadingScheduler(),
            interval_ms=lambda: self._speed.interval_ms,
            on_tick=self._tick,
            lock=self._lock,
        )

        # bind once: engine.play is engine.play
        for name in COMMANDS:
            setattr(self, name, getattr(self, name))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def dispose(self) -> None:
        """Cancel the timer and drop subscribers.  Safe to call twice."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._timer.stop()
            self._listeners.clear()
            logger.debug("engine disposed at position %d", self._state.position)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __enter__(self) -> "PlaybackEngine":
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def play(self) -> None:
        self._dispatch(t.Play())

    def pause(self) -> None:
        self._dispatch(t.Pause())

    def toggle_play(self) -> None:
        with self._lock:
            if self._state.is_playing:
                self.pause()
            else:
                self.play()

    def step_forward(self) -> None:
        self._dispatch(t.Advance())

    def step_backward(self) -> None:
        self._dispatch(t.StepBack())

    def reset(self) -> None:
        self._dispatch(t.Reset())

    def jump_to(self, index: int) -> None:
        self._dispatch(t.JumpTo(index))

    def set_trace(self, trace: Optional[Trace]) -> None:
        self._dispatch(t.SetTrace(trace))
        logger.debug("trace set (%d steps)", self._state.total_steps)

    def set_rate(self, rate: float) -> None:
        """Change speed.  Never touches position / play flag or the timer."""
        with self._lock:
            if self._disposed:
                return
            before = self._speed.rate
            self._speed.set_rate(rate)
            if self._speed.rate != before:
                self._notify()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(snapshot)` after every change.  Returns unsubscribe."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Optional[Trace]:
        return self._state.trace

    @property
    def position(self) -> int:
        return self._state.position

    current_step_index = position

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def current_step(self) -> Optional[Step]:
        trace = self._state.trace
        if trace is not None and 0 <= self._state.position < len(trace.steps):
            return trace.steps[self._state.position]
        return None

    @property
    def total_steps(self) -> int:
        return self._state.total_steps

    @property
    def is_at_end(self) -> bool:
        return self._state.position >= self.total_steps - 1

    @property
    def is_at_start(self) -> bool:
        return self._state.position == 0

    @property
    def rate(self) -> float:
        return self._speed.rate

    def get_rate(self) -> float:
        return self._speed.get_rate()

    @property
    def interval_ms(self) -> int:
        return self._speed.interval_ms

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                trace=self.trace,
                position=self.position,
                is_playing=self.is_playing,
                current_step=self.current_step,
                total_steps=self.total_steps,
                is_at_end=self.is_at_end,
                is_at_start=self.is_at_start,
                rate=self.rate,
                interval_ms=self.interval_ms,
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _tick(self) -> None:
        self._dispatch(t.Advance())

    def _dispatch(self, command: t.Command) -> None:
        with self._lock:
            if self._disposed:
                logger.debug("ignoring %s on disposed engine", type(command).__name__)
                return
            new_state = t.transition(self._state, command)
            if new_state is self._state:
                return
            self._state = new_state
            self._timer.sync(new_state.is_playing)
            self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                # a broken consumer must not fail the command or stop autoplay
                logger.exception("playback listener %r failed", listener)
