import json

import pytest
from flask import Flask

from engine import EngineNotProvidedError, ManualScheduler
from main import create_app, get_engine


@pytest.fixture
def sched():
    return ManualScheduler()


@pytest.fixture
def app(sched):
    app = create_app({"TESTING": True}, scheduler=sched)
    yield app
    app.extensions["playback"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def test_initial_state(client):
    data = client.get("/api/state").get_json()
    assert data["position"] == 0
    assert data["total_steps"] == 10
    assert data["is_playing"] is False
    assert data["current_step"]["payload"]["label"] == "Start node"


def test_index_view(client):
    view = client.get("/").get_json()
    assert len(view["steps"]) == 10
    assert view["progress"]["counter"] == "1 / 10"


def test_list_traces(client):
    data = client.get("/api/traces").get_json()
    assert data[0]["key"] == "mock"
    assert data[0]["total_steps"] == 10


def test_step_navigation_clamps(client):
    client.post("/api/step/next")
    data = client.post("/api/step/next").get_json()
    assert data["position"] == 2

    data = client.post("/api/step/goto", json={"index": 500}).get_json()
    assert data["position"] == 9
    assert data["is_at_end"] is True

    data = client.post("/api/step/goto", json={"index": -4}).get_json()
    assert data["position"] == 0

    data = client.post("/api/step/prev").get_json()
    assert data["position"] == 0


def test_goto_requires_integer(client):
    assert client.post("/api/step/goto", json={"index": "3"}).status_code == 400
    assert client.post("/api/step/goto").status_code == 400


def test_play_runs_on_server_timer(client, sched):
    assert client.post("/api/play").get_json()["is_playing"] is True
    sched.advance(3000)
    assert client.get("/api/state").get_json()["position"] == 3

    data = client.post("/api/pause").get_json()
    assert data["is_playing"] is False
    sched.advance(5000)
    assert client.get("/api/state").get_json()["position"] == 3


def test_toggle(client):
    assert client.post("/api/step/play").get_json()["is_playing"] is True
    assert client.post("/api/step/play").get_json()["is_playing"] is False


def test_reset(client):
    client.post("/api/step/goto", json={"index": 5})
    assert client.post("/api/reset").get_json()["position"] == 0


def test_speed_rate_and_preset(client):
    data = client.post("/api/config/speed", json={"rate": 9}).get_json()
    assert data["rate"] == 5.0
    assert data["interval_ms"] == 200

    data = client.post("/api/config/speed", json={"preset": "slow"}).get_json()
    assert data["rate"] == 0.5


def test_speed_rejects_bad_bodies(client):
    assert client.post("/api/config/speed", json={"preset": "warp"}).status_code == 400
    assert client.post("/api/config/speed", json={"rate": "fast"}).status_code == 400


def test_speed_change_keeps_playing(client, sched):
    client.post("/api/play")
    sched.advance(1000)
    data = client.post("/api/config/speed", json={"rate": 2.0}).get_json()
    assert data["is_playing"] is True
    assert data["position"] == 1


def test_load_inline_trace(client):
    client.post("/api/step/goto", json={"index": 4})
    body = {
        "trace": {
            "steps": [{"id": 7, "type": "custom", "payload": {"label": "only"}}],
            "metadata": {"timeComplexity": "O(1)", "spaceComplexity": "O(1)"},
        }
    }
    data = client.post("/api/trace", json=body).get_json()
    assert data["position"] == 0
    assert data["total_steps"] == 1
    assert data["current_step"]["id"] == 7


def test_load_trace_errors(client):
    assert client.post("/api/trace", json={"trace": {"steps": "x"}}).status_code == 400
    assert client.post("/api/trace", json={"key": "nope"}).status_code == 400
    assert client.post("/api/trace", json={}).status_code == 400


def test_load_registered_trace(client):
    client.post("/api/step/goto", json={"index": 4})
    assert client.post("/api/trace", json={"key": "mock"}).get_json()["position"] == 0


def test_trace_path_config(tmp_path, sched):
    path = tmp_path / "t.json"
    path.write_text(json.dumps({
        "steps": [{"id": 0, "type": "visit", "payload": {}}, {"id": 1, "type": "path", "payload": {}}],
        "metadata": {"timeComplexity": "O(1)", "spaceComplexity": "O(1)"},
    }), encoding="utf-8")

    app = create_app({"REPLAY_TRACE_PATH": str(path), "REPLAY_DEFAULT_RATE": 3.0}, scheduler=sched)
    data = app.test_client().get("/api/state").get_json()
    assert data["total_steps"] == 2
    assert data["rate"] == 3.0


def test_no_trace_config(sched):
    app = create_app({"REPLAY_TRACE": None}, scheduler=sched)
    data = app.test_client().get("/api/state").get_json()
    assert data["has_trace"] is False
    assert data["current_step"] is None


def test_unknown_trace_key_fails_at_startup(sched):
    with pytest.raises(ValueError):
        create_app({"REPLAY_TRACE": "nope"}, scheduler=sched)


def test_get_engine_requires_registration():
    bare = Flask(__name__)
    with bare.app_context():
        with pytest.raises(EngineNotProvidedError):
            get_engine()
