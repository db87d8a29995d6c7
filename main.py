"""
main.py — Trace Replay Flask App
=================================
The web server that exposes one PlaybackEngine over HTTP.

Routes:
  GET  /                       – full view model (all panels)
  GET  /api/state              – current engine snapshot (for polling)
  GET  /api/traces             – registered traces
  POST /api/trace              – load a trace ({"key": …} or {"trace": {…}})
  POST /api/play               – start auto-advance
  POST /api/pause              – stop auto-advance
  POST /api/step/play          – toggle play/pause
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (clamped)
  POST /api/reset              – back to step 0
  POST /api/config/speed       – set rate ({"rate": x} or {"preset": name})

State management:
  The engine lives in app.extensions["playback"], one per app.  Its timer
  runs server-side, so every client polling /api/state sees the same
  replay.  Out-of-range indices are clamped by the engine, never
  rejected; only malformed request bodies get a 400.

Config (Flask config, overridable with FLASK_* environment variables):
  REPLAY_TRACE         – registry key loaded at start-up   (default "mock")
  REPLAY_TRACE_PATH    – JSON trace file, wins over REPLAY_TRACE
  REPLAY_DEFAULT_RATE  – initial speed multiplier           (default 1.0)
"""

import atexit
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request

from engine import (
    DEFAULT_RATE,
    SPEED_PRESETS,
    EngineNotProvidedError,
    PlaybackEngine,
    Scheduler,
)
from traces import TraceFormatError, get_trace, list_traces, load_trace, trace_from_dict
from ui import render_view, snapshot_dict


DEFAULT_CONFIG: Dict[str, Any] = {
    "REPLAY_TRACE":        "mock",
    "REPLAY_TRACE_PATH":   None,
    "REPLAY_DEFAULT_RATE": DEFAULT_RATE,
}


# ---------------------------------------------------------------------------
# Engine access
# ---------------------------------------------------------------------------
def get_engine() -> PlaybackEngine:
    """The app's engine.  Raises if the app was built without one."""
    engine = current_app.extensions.get("playback")
    if engine is None:
        raise EngineNotProvidedError("No playback engine registered on this app")
    return engine


def _state_response():
    return jsonify(snapshot_dict(get_engine().snapshot()))


def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(
    config: Optional[Dict[str, Any]] = None,
    scheduler: Optional[Scheduler] = None,
) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env()
    if config:
        app.config.from_mapping(config)

    trace = _initial_trace(app)
    engine = PlaybackEngine(
        trace,
        scheduler=scheduler,
        rate=float(app.config["REPLAY_DEFAULT_RATE"]),
    )
    app.extensions["playback"] = engine

    _register_routes(app)
    return app


def _initial_trace(app: Flask):
    path = app.config.get("REPLAY_TRACE_PATH")
    if path:
        app.logger.info("Loading trace from %s", path)
        return load_trace(path)

    key = app.config.get("REPLAY_TRACE")
    if not key:
        return None
    info = get_trace(key)
    if info is None:
        raise ValueError(f"Unknown trace: {key}")
    app.logger.info("Loading registered trace %r", key)
    return info.trace


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        return jsonify(render_view(get_engine().snapshot()))

    @app.route("/api/state")
    def api_state():
        return _state_response()

    @app.route("/api/traces")
    def api_traces():
        return jsonify([
            {
                "key": info.key,
                "label": info.label,
                "description": info.description,
                "total_steps": len(info.trace.steps),
                "time_complexity": info.trace.metadata.time_complexity,
                "space_complexity": info.trace.metadata.space_complexity,
            }
            for info in list_traces()
        ])

    @app.route("/api/trace", methods=["POST"])
    def api_trace():
        data = _json_body()

        if "key" in data:
            info = get_trace(data["key"])
            if info is None:
                return _bad_request(f"Unknown trace: {data['key']}")
            trace = info.trace
        elif "trace" in data:
            try:
                trace = trace_from_dict(data["trace"])
            except TraceFormatError as e:
                return _bad_request(str(e))
        else:
            return _bad_request("Send either 'key' or 'trace'")

        get_engine().set_trace(trace)
        return _state_response()

    # -- transport --------------------------------------------------------
    @app.route("/api/play", methods=["POST"])
    def api_play():
        get_engine().play()
        return _state_response()

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        get_engine().pause()
        return _state_response()

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        get_engine().toggle_play()
        return _state_response()

    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        get_engine().step_forward()
        return _state_response()

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        get_engine().step_backward()
        return _state_response()

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        idx = _json_body().get("index")
        if not isinstance(idx, int) or isinstance(idx, bool):
            return _bad_request("'index' must be an integer")
        get_engine().jump_to(idx)
        return _state_response()

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        get_engine().reset()
        return _state_response()

    # -- config -----------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        data = _json_body()

        if "preset" in data:
            rate = SPEED_PRESETS.get(data["preset"])
            if rate is None:
                return _bad_request(f"Unknown speed preset: {data['preset']}")
        else:
            rate = data.get("rate")
            if not isinstance(rate, (int, float)) or isinstance(rate, bool):
                return _bad_request("'rate' must be a number")

        get_engine().set_rate(rate)
        return _state_response()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    atexit.register(app.extensions["playback"].dispose)
    print("=" * 60)
    print("  Algorithm Trace Replay")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=False, host="0.0.0.0", port=5000)
