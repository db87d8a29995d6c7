"""
traces/__init__.py — Trace Registry
=====================================
Single source of truth for the traces the app can load by name.

    from traces import REGISTRY, get_trace

REGISTRY is a dict:
    {
        "mock": TraceInfo(key, label, trace, description),
        …
    }

Traces themselves are produced elsewhere; registering one is just
adding an entry here.  Arbitrary traces can still be handed to the
engine directly or decoded with `trace_from_dict` / `load_trace`.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from traces.step import Step, StepKind, Trace, TraceFormatError, TraceMetadata, freeze, thaw
from traces.loader import load_trace, step_to_dict, trace_from_dict, trace_to_dict
from traces.mock import MOCK_TRACE


# ---------------------------------------------------------------------------
# TraceInfo — metadata card for each registered trace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraceInfo:
    key:          str     # registry key, e.g. "mock"
    label:        str     # human label, e.g. "Mock BFS Trace"
    trace:        Trace
    description:  str = ""


REGISTRY: Dict[str, TraceInfo] = {

    "mock": TraceInfo(
        key="mock", label="Mock BFS Trace", trace=MOCK_TRACE,
        description="Hand-written BFS-style run covering every step kind.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_trace(key: str) -> Optional[TraceInfo]:
    """Return TraceInfo by key, or None."""
    return REGISTRY.get(key)


def list_traces() -> List[TraceInfo]:
    """Return all registered traces in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "Step",
    "StepKind",
    "Trace",
    "TraceMetadata",
    "TraceFormatError",
    "freeze",
    "thaw",
    "TraceInfo",
    "REGISTRY",
    "MOCK_TRACE",
    "get_trace",
    "list_traces",
    "load_trace",
    "step_to_dict",
    "trace_from_dict",
    "trace_to_dict",
]
