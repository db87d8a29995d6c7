"""
timer.py — Auto-advance Timer
==============================
While the engine is playing, a TimerDriver keeps exactly one pending
firing scheduled.  Each firing issues one tick (Advance) and, if the
engine is still playing afterwards, schedules the next firing using the
CURRENT interval.  A rate change therefore shows up on the next delay
without a restart and without touching the replay position.

Schedulers:
    ThreadingScheduler – daemon threading.Timer per firing (Flask app)
    AsyncioScheduler   – loop.call_later on a running event loop
    ManualScheduler    – virtual clock advanced by hand (tests, offline)

Cancellation:
  Every started chain gets a fresh token.  stop() drops the token and
  cancels the pending handle; a firing that still gets through (a
  threading.Timer already past its wait) sees a stale token and does
  nothing.  Token checks and ticks run under the lock shared with the
  engine, so a tick can never interleave with a user command.
"""

import asyncio
import heapq
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from functools import partial
from typing import Any, Callable, ContextManager, List, Optional, Tuple


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------
class Scheduler(ABC):
    """Runs a callback once after `delay_ms`.  The handle has cancel()."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        ...


class ThreadingScheduler(Scheduler):

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler(Scheduler):
    """Schedules on `loop`, or on the running loop at call time."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class _ManualHandle:
    __slots__ = ("due_ms", "callback", "cancelled")

    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms    = due_ms
        self.callback  = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """
    Deterministic virtual clock.

        sched = ManualScheduler()
        engine = PlaybackEngine(trace, scheduler=sched)
        engine.play()
        sched.advance(1000)     # fires one tick at 1.0×
    """

    def __init__(self):
        self.now_ms: int = 0
        self._queue: List[Tuple[int, int, _ManualHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self.now_ms + max(0, int(delay_ms)), callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def next_due_ms(self) -> Optional[int]:
        for due, _, h in sorted(self._queue):
            if not h.cancelled:
                return due
        return None

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing everything due.  Returns #fired."""
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now_ms = due
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------
class TimerDriver:
    """
    Attributes:
        scheduler   : Where firings are scheduled.
        interval_ms : Callable returning the delay for the NEXT firing.
        on_tick     : Called once per firing (the engine issues Advance).
        lock        : Re-entrant lock shared with the engine.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval_ms: Callable[[], int],
        on_tick: Callable[[], None],
        lock: Optional[ContextManager] = None,
    ):
        self.scheduler   = scheduler
        self.interval_ms = interval_ms
        self.on_tick     = on_tick
        self.lock        = lock if lock is not None else threading.RLock()

        self._token:  Optional[object] = None
        self._handle: Any              = None

    @property
    def running(self) -> bool:
        return self._token is not None

    def sync(self, is_playing: bool) -> None:
        """Start or stop to match the engine's play flag."""
        with self.lock:
            if is_playing and not self.running:
                self.start()
            elif not is_playing and self.running:
                self.stop()

    def start(self) -> None:
        with self.lock:
            self.stop()
            token = object()
            self._token = token
            logger.debug("timer started")
            self._schedule(token)

    def stop(self) -> None:
        with self.lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            if self._token is not None:
                logger.debug("timer stopped")
            self._token = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self, token: object) -> None:
        delay = self.interval_ms()
        self._handle = self.scheduler.call_later(delay, partial(self._fire, token))

    def _fire(self, token: object) -> None:
        with self.lock:
            if token is not self._token:
                return
            self._handle = None
            try:
                self.on_tick()
            finally:
                # on_tick may have paused (end of trace) or restarted us
                if token is self._token and self._handle is None:
                    self._schedule(token)
