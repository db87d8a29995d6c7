"""
loader.py — Trace (De)serialisation
====================================
Turns the plain JSON shape an external producer emits into a Trace,
and back.

Wire shape:
    {
      "steps": [
        {"id": 0, "type": "visit", "payload": {"node": 1, "label": "Start node"}},
        …
      ],
      "metadata": {
        "timeComplexity": "O(V + E)",
        "spaceComplexity": "O(V)",
        "notes": "optional"
      }
    }

"kind" is accepted as an alias for "type", and snake_case metadata keys
are accepted alongside camelCase.  Anything else that does not fit
raises TraceFormatError.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from traces.step import Step, StepKind, Trace, TraceFormatError, TraceMetadata, thaw


_KINDS: Dict[str, StepKind] = {k.value: k for k in StepKind}


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------
def step_from_dict(data: Any, index: int = 0) -> Step:
    if not isinstance(data, Mapping):
        raise TraceFormatError(f"Step #{index} is not an object")

    step_id = data.get("id")
    # bool is an int subclass; reject it explicitly
    if not isinstance(step_id, int) or isinstance(step_id, bool):
        raise TraceFormatError(f"Step #{index} has a non-integer id: {step_id!r}")

    raw_kind = data.get("type", data.get("kind"))
    kind = _KINDS.get(raw_kind) if isinstance(raw_kind, str) else None
    if kind is None:
        raise TraceFormatError(f"Step #{index} has an unknown kind: {raw_kind!r}")

    payload = data.get("payload", {})
    if not isinstance(payload, Mapping):
        raise TraceFormatError(f"Step #{index} payload is not an object")

    return Step(id=step_id, kind=kind, payload=payload)


def metadata_from_dict(data: Any) -> TraceMetadata:
    if not isinstance(data, Mapping):
        raise TraceFormatError("Trace metadata is missing or not an object")

    time_c  = data.get("timeComplexity",  data.get("time_complexity"))
    space_c = data.get("spaceComplexity", data.get("space_complexity"))
    notes   = data.get("notes")

    if not isinstance(time_c, str) or not isinstance(space_c, str):
        raise TraceFormatError("Trace metadata needs timeComplexity and spaceComplexity strings")
    if notes is not None and not isinstance(notes, str):
        raise TraceFormatError("Trace metadata notes must be a string")

    return TraceMetadata(time_complexity=time_c, space_complexity=space_c, notes=notes)


def trace_from_dict(data: Any) -> Trace:
    """Build a Trace from its JSON shape.  Raises TraceFormatError."""
    if not isinstance(data, Mapping):
        raise TraceFormatError("Trace is not an object")

    raw_steps = data.get("steps")
    if not isinstance(raw_steps, list):
        raise TraceFormatError("Trace 'steps' must be a list")

    steps = [step_from_dict(s, i) for i, s in enumerate(raw_steps)]
    return Trace(steps=tuple(steps), metadata=metadata_from_dict(data.get("metadata")))


def load_trace(path: Union[str, Path]) -> Trace:
    """Read a JSON trace file."""
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise TraceFormatError(f"{path}: invalid JSON ({e})") from e
    return trace_from_dict(data)


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------
def step_to_dict(step: Step) -> Dict[str, Any]:
    return {"id": step.id, "type": step.kind.value, "payload": thaw(step.payload)}


def trace_to_dict(trace: Trace) -> Dict[str, Any]:
    meta: Dict[str, Any] = {
        "timeComplexity":  trace.metadata.time_complexity,
        "spaceComplexity": trace.metadata.space_complexity,
    }
    if trace.metadata.notes is not None:
        meta["notes"] = trace.metadata.notes

    steps: List[Dict[str, Any]] = [step_to_dict(s) for s in trace.steps]
    return {"steps": steps, "metadata": meta}
