"""
panels.py — Replay View Models
================================
Every panel is a pure function that takes engine snapshots / steps and
returns a JSON-ready dict.  A presentation layer (browser, TUI, …)
renders these however it likes.

Panels:
  • step_legend        – icon/colour/label per StepKind
  • playback_panel     – which transport buttons are enabled, speed readout
  • progress_bar       – percentage + "n / total" counter
  • step_card          – one row of the step list
  • payload_inspector  – the current step in detail
  • metadata_panel     – complexity + notes
  • navbar             – live status line
  • render_view        – everything above stitched together

Design:
  - All panels are stateless.
  - Nothing here mutates the engine; commands go through the API.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from engine import EngineSnapshot
from traces import Step, StepKind, TraceMetadata, step_to_dict, thaw


# ---------------------------------------------------------------------------
# Step kind styling
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class KindStyle:
    color:  str
    bg:     str
    icon:   str
    label:  str


STEP_KIND_STYLES: Dict[StepKind, KindStyle] = {
    StepKind.VISIT:    KindStyle("#60a5fa", "rgba(96,165,250,0.15)",  "◉", "Visit"),
    StepKind.COMPARE:  KindStyle("#f59e0b", "rgba(245,158,11,0.15)",  "⟺", "Compare"),
    StepKind.SWAP:     KindStyle("#f87171", "rgba(248,113,113,0.15)", "⇄", "Swap"),
    StepKind.FRONTIER: KindStyle("#a78bfa", "rgba(167,139,250,0.15)", "◈", "Frontier"),
    StepKind.PATH:     KindStyle("#34d399", "rgba(52,211,153,0.15)",  "→", "Path"),
    StepKind.PIVOT:    KindStyle("#fb923c", "rgba(251,146,60,0.15)",  "⊛", "Pivot"),
    StepKind.CUSTOM:   KindStyle("#94a3b8", "rgba(148,163,184,0.15)", "◆", "Custom"),
}


def kind_style(kind: Any) -> KindStyle:
    return STEP_KIND_STYLES.get(kind, STEP_KIND_STYLES[StepKind.CUSTOM])


def _style_dict(style: KindStyle) -> Dict[str, str]:
    return {"color": style.color, "bg": style.bg, "icon": style.icon, "label": style.label}


def step_legend() -> List[Dict[str, str]]:
    return [
        {"kind": kind.value, **_style_dict(style)}
        for kind, style in STEP_KIND_STYLES.items()
    ]


# ---------------------------------------------------------------------------
# Playback controls
# ---------------------------------------------------------------------------
def playback_panel(snap: EngineSnapshot) -> Dict[str, Any]:
    return {
        "is_playing": snap.is_playing,
        "buttons": {
            "reset":         {"enabled": not snap.is_at_start},
            "step_backward": {"enabled": not snap.is_at_start},
            "play":          {"enabled": not snap.is_playing and not snap.is_at_end},
            "pause":         {"enabled": snap.is_playing},
            "step_forward":  {"enabled": not snap.is_at_end},
        },
        "speed": {
            "rate":        snap.rate,
            "display":     f"{snap.rate:.1f}×",
            "interval_ms": snap.interval_ms,
        },
    }


def progress_bar(snap: EngineSnapshot) -> Dict[str, Any]:
    total = snap.total_steps
    pct = (snap.position / (total - 1)) * 100 if total > 1 else 0.0
    return {
        "percent": round(pct, 2),
        "counter": f"{snap.position + 1} / {total}",
    }


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
def _step_text(step: Step) -> str:
    if step.label is not None:
        return step.label
    return json.dumps(thaw(step.payload), separators=(",", ":"), default=str)


def step_card(step: Step, index: int, is_current: bool = False) -> Dict[str, Any]:
    style = kind_style(step.kind)
    return {
        "id":         step.id,
        "index":      index,
        "kind":       step.kind.value,
        "text":       _step_text(step),
        "is_current": is_current,
        "style":      _style_dict(style),
    }


def payload_inspector(step: Optional[Step]) -> Optional[Dict[str, Any]]:
    if step is None:
        return None
    style = kind_style(step.kind)
    return {
        "step":         step_to_dict(step),
        "style":        _style_dict(style),
        "payload_json": json.dumps(thaw(step.payload), indent=2, default=str),
    }


def metadata_panel(metadata: Optional[TraceMetadata]) -> Optional[Dict[str, Any]]:
    if metadata is None:
        return None
    return {
        "time_complexity":  metadata.time_complexity,
        "space_complexity": metadata.space_complexity,
        "notes":            metadata.notes,
    }


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
def navbar(snap: EngineSnapshot) -> Dict[str, Any]:
    return {
        "status":  "PLAYING" if snap.is_playing else None,
        "counter": f"{snap.position + 1}/{snap.total_steps} steps",
    }


def snapshot_dict(snap: EngineSnapshot) -> Dict[str, Any]:
    """Flat engine state (no trace body) for polling clients."""
    return {
        "position":     snap.position,
        "is_playing":   snap.is_playing,
        "total_steps":  snap.total_steps,
        "is_at_end":    snap.is_at_end,
        "is_at_start":  snap.is_at_start,
        "rate":         snap.rate,
        "interval_ms":  snap.interval_ms,
        "has_trace":    snap.trace is not None,
        "current_step": step_to_dict(snap.current_step) if snap.current_step else None,
    }


def render_view(snap: EngineSnapshot) -> Dict[str, Any]:
    steps = snap.trace.steps if snap.trace is not None else ()
    return {
        "navbar":    navbar(snap),
        "playback":  playback_panel(snap),
        "progress":  progress_bar(snap),
        "legend":    step_legend(),
        "metadata":  metadata_panel(snap.trace.metadata if snap.trace else None),
        "inspector": payload_inspector(snap.current_step),
        "steps": [
            step_card(s, i, is_current=(i == snap.position))
            for i, s in enumerate(steps)
        ],
    }
