"""
_transitions.py — Playback State Machine
=========================================
Pure transition function:  (PlaybackState, Command) → PlaybackState.

Only the PlaybackEngine facade imports this module.  Everything else
talks to the engine through its command methods.

Commands:
    SetTrace(trace)  →  {trace, position 0, paused}
    Play             →  playing, unless no trace or already at the last step
    Pause            →  paused
    Advance          →  position + 1 (pausing on arrival at the last step),
                        or pause when there is no next step
    StepBack         →  position - 1 (floored at 0), paused
    JumpTo(index)    →  position clamped into range, paused
                        (±inf clamps to a bound, NaN keeps the position)
    Reset            →  position 0, paused

No command raises.  A transition that changes nothing returns the very
same state object, so callers can use `is` to skip notifications.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

from traces import Trace


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlaybackState:
    trace:       Optional[Trace] = None
    position:    int             = 0
    is_playing:  bool            = False

    @property
    def total_steps(self) -> int:
        return len(self.trace.steps) if self.trace is not None else 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
class Command:
    """Base class for everything `transition` accepts."""


@dataclass(frozen=True)
class SetTrace(Command):
    trace: Optional[Trace]


@dataclass(frozen=True)
class Play(Command):
    pass


@dataclass(frozen=True)
class Pause(Command):
    pass


@dataclass(frozen=True)
class Advance(Command):
    pass


@dataclass(frozen=True)
class StepBack(Command):
    pass


@dataclass(frozen=True)
class JumpTo(Command):
    index: int


@dataclass(frozen=True)
class Reset(Command):
    pass


# ---------------------------------------------------------------------------
# Transition
# ---------------------------------------------------------------------------
def _update(state: PlaybackState, position: int, is_playing: bool) -> PlaybackState:
    if position == state.position and is_playing == state.is_playing:
        return state
    return replace(state, position=position, is_playing=is_playing)


def _clamp_index(index: float, current: int, total: int) -> int:
    """Clamp into [0, total - 1].  NaN keeps `current`; ±inf hits a bound."""
    if isinstance(index, float):
        if math.isnan(index):
            return current
        if math.isinf(index):
            index = 0 if index < 0 else total - 1
    return max(0, min(total - 1, int(index)))


def transition(state: PlaybackState, command: Command) -> PlaybackState:
    total = state.total_steps

    if isinstance(command, SetTrace):
        return PlaybackState(trace=command.trace)

    if isinstance(command, Play):
        if state.trace is None or state.position >= total - 1:
            return state
        return _update(state, state.position, True)

    if isinstance(command, Pause):
        return _update(state, state.position, False)

    if isinstance(command, Advance):
        nxt = state.position + 1
        if nxt >= total:
            # end of trace: stop autoplay, never wrap
            return _update(state, state.position, False)
        # landing on the last step also ends autoplay
        return _update(state, nxt, state.is_playing and nxt < total - 1)

    if isinstance(command, StepBack):
        return _update(state, max(0, state.position - 1), False)

    if isinstance(command, JumpTo):
        return _update(state, _clamp_index(command.index, state.position, total), False)

    if isinstance(command, Reset):
        return _update(state, 0, False)

    raise TypeError(f"Not a playback command: {command!r}")
