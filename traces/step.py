"""
step.py — Execution Trace Model
================================
A Trace is the frozen record of an algorithm run that has ALREADY
happened somewhere else.  The replay engine only reads it:

    • Step          – one event of the run, tagged with a StepKind
    • TraceMetadata – complexity info shown next to the replay
    • Trace         – ordered steps + metadata

Design decisions:
  - StepKind is a closed Enum.  Consumers that switch on it must handle
    every member (or fall back to CUSTOM explicitly); there is no
    free-form "type" string anywhere past the loader.
  - Step is a frozen dataclass and its payload is frozen all the way
    down (read-only mappings, tuples), so a step handed to a renderer
    cannot be edited in place.  thaw() gives back plain JSON data.
  - Trace stores its steps as a tuple.  The engine keeps a reference to
    the producer's Trace and never copies or mutates it.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class TraceFormatError(ValueError):
    """Raised when trace data does not describe a valid Trace."""


# ---------------------------------------------------------------------------
# Step kinds
# ---------------------------------------------------------------------------
class StepKind(Enum):
    VISIT    = "visit"      # a node / cell was visited
    COMPARE  = "compare"    # two values were compared
    SWAP     = "swap"       # two positions were exchanged
    FRONTIER = "frontier"   # nodes pushed onto the frontier
    PATH     = "path"       # (partial) result path
    PIVOT    = "pivot"      # pivot selection
    CUSTOM   = "custom"     # anything algorithm-specific


# ---------------------------------------------------------------------------
# Payload freezing
# ---------------------------------------------------------------------------
def freeze(value: Any) -> Any:
    """Recursively turn mappings into read-only proxies and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze(): plain dicts and lists, ready for json.dumps."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (tuple, list, frozenset, set)):
        return [thaw(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        id      : Unique (within its trace) integer id.
        kind    : StepKind tag.
        payload : Read-only mapping of algorithm data.  By convention it
                  carries a human-readable "label".
    """

    id:       int
    kind:     StepKind
    payload:  Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "payload", freeze(self.payload))

    @property
    def label(self) -> Optional[str]:
        label = self.payload.get("label")
        return None if label is None else str(label)


# ---------------------------------------------------------------------------
# Metadata + Trace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraceMetadata:
    time_complexity:   str
    space_complexity:  str
    notes:             Optional[str] = None


@dataclass(frozen=True)
class Trace:
    """
    Attributes:
        steps    : Ordered steps (may be empty).
        metadata : TraceMetadata for the whole run.
    """

    steps:     Tuple[Step, ...]
    metadata:  TraceMetadata

    def __post_init__(self):
        steps = tuple(self.steps)
        seen = set()
        for s in steps:
            if s.id in seen:
                raise TraceFormatError(f"Duplicate step id: {s.id}")
            seen.add(s.id)
        object.__setattr__(self, "steps", steps)

    def __len__(self) -> int:
        return len(self.steps)
