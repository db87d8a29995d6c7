"""
context.py — Engine Distribution
=================================
Hands one PlaybackEngine to many consumers without threading it through
every call.  The engine stays owned by whoever provided it; consumers
look it up with `use_playback()` and read snapshots from it.

    with playback_provider(trace) as engine:
        render(use_playback().snapshot())

Calling `use_playback()` with nothing provided is a wiring bug, so it
raises immediately instead of returning None.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from traces import Trace
from engine.playback import PlaybackEngine


_current: ContextVar[Optional[PlaybackEngine]] = ContextVar("playback_engine", default=None)


class EngineNotProvidedError(RuntimeError):
    """Engine state was read before an engine was provided."""


@contextmanager
def provide(engine: PlaybackEngine) -> Iterator[PlaybackEngine]:
    """Make `engine` the current one for the duration of the block."""
    token = _current.set(engine)
    try:
        yield engine
    finally:
        _current.reset(token)


@contextmanager
def playback_provider(trace: Optional[Trace] = None, **kwargs) -> Iterator[PlaybackEngine]:
    """Create, provide, and finally dispose an engine."""
    engine = PlaybackEngine(trace, **kwargs)
    try:
        with provide(engine):
            yield engine
    finally:
        engine.dispose()


def use_playback() -> PlaybackEngine:
    engine = _current.get()
    if engine is None:
        raise EngineNotProvidedError("use_playback() called outside of a playback provider")
    return engine
