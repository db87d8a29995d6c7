from engine import ManualScheduler, PlaybackEngine
from traces import MOCK_TRACE, Step, StepKind
from ui import (
    STEP_KIND_STYLES,
    kind_style,
    playback_panel,
    progress_bar,
    render_view,
    step_card,
    step_legend,
)


def make_snapshot(position=0, playing=False, trace=MOCK_TRACE):
    engine = PlaybackEngine(trace, scheduler=ManualScheduler())
    engine.jump_to(position)
    if playing:
        engine.play()
    return engine.snapshot()


def test_every_kind_has_a_style():
    assert set(STEP_KIND_STYLES) == set(StepKind)
    assert len(step_legend()) == len(StepKind)


def test_unknown_kind_falls_back_to_custom():
    assert kind_style("teleport") is STEP_KIND_STYLES[StepKind.CUSTOM]


def test_step_card_uses_label_or_json():
    labelled = step_card(Step(3, StepKind.SWAP, {"i": 0, "label": "Swap"}), 3, is_current=True)
    assert labelled["text"] == "Swap"
    assert labelled["is_current"] is True
    assert labelled["style"]["icon"] == "⇄"

    bare = step_card(Step(4, StepKind.PIVOT, {"node": 7}), 4)
    assert bare["text"] == '{"node":7}'


def test_progress_bar():
    assert progress_bar(make_snapshot(0)) == {"percent": 0.0, "counter": "1 / 10"}
    assert progress_bar(make_snapshot(9))["percent"] == 100.0
    assert progress_bar(make_snapshot(trace=None)) == {"percent": 0.0, "counter": "1 / 0"}


def test_playback_panel_buttons():
    start = playback_panel(make_snapshot(0))["buttons"]
    assert start["reset"]["enabled"] is False
    assert start["play"]["enabled"] is True

    end = playback_panel(make_snapshot(9))["buttons"]
    assert end["play"]["enabled"] is False
    assert end["step_forward"]["enabled"] is False

    playing = playback_panel(make_snapshot(2, playing=True))
    assert playing["buttons"]["pause"]["enabled"] is True
    assert playing["speed"]["display"] == "1.0×"


def test_render_view_marks_current_step():
    view = render_view(make_snapshot(4))
    assert [c["is_current"] for c in view["steps"]].index(True) == 4
    assert view["inspector"]["step"]["id"] == 4
    assert view["metadata"]["time_complexity"] == "O(V + E)"
    assert view["navbar"] == {"status": None, "counter": "5/10 steps"}


def test_render_view_without_trace():
    view = render_view(make_snapshot(trace=None))
    assert view["steps"] == []
    assert view["inspector"] is None
    assert view["metadata"] is None
