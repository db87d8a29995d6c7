"""
ui/
---
Presentation layer (view models only).

    from ui import render_view, snapshot_dict
"""

from ui.panels import (
    KindStyle,
    STEP_KIND_STYLES,
    kind_style,
    step_legend,
    playback_panel,
    progress_bar,
    step_card,
    payload_inspector,
    metadata_panel,
    navbar,
    snapshot_dict,
    render_view,
)

__all__ = [
    "KindStyle",
    "STEP_KIND_STYLES",
    "kind_style",
    "step_legend",
    "playback_panel",
    "progress_bar",
    "step_card",
    "payload_inspector",
    "metadata_panel",
    "navbar",
    "snapshot_dict",
    "render_view",
]
