"""
main.py — Graph Algorithm Trace Engine Flask App
=================================================
JSON API in front of one Session.  It renders nothing: a front-end
polls /api/state (or reads the step returned by each navigation call)
and draws visited / current / frontier / path itself.

Routes:
  GET    /api/algorithms              – registry cards
  GET    /api/state                   – selections, playback state, current step
  GET    /api/graph                   – current graph
  PUT    /api/graph                   – replace graph from JSON
  POST   /api/graph/sample            – load the teaching graph (start 0, goal 9)
  POST   /api/graph/clear             – empty graph
  POST   /api/graph/nodes             – add node {x, y}
  DELETE /api/graph/nodes/<id>        – remove node (+ its edges)
  POST   /api/graph/edges             – add edge {a, b, weight}
  DELETE /api/graph/edges/<a>/<b>     – remove edge
  POST   /api/config/algo             – select algorithm {algo_key, heuristic}
  POST   /api/config/source_target    – select endpoints {source, target}
  POST   /api/run                     – run, load trace, return step 0
  POST   /api/step/next               – advance one step
  POST   /api/step/prev               – rewind one step
  POST   /api/step/goto               – jump to step {index}
  POST   /api/step/play               – auto-play {index?, speed?, interval?}
  POST   /api/step/pause              – cancel auto-play

State management:
  The app holds a single Session in app.extensions (in-memory, one user).
  Every graph or selection change discards the current trace.
"""

import logging
import math
from typing import Optional

from flask import Flask, current_app, jsonify, request

from config import MIN_INTERVAL, Settings, settings as default_settings
from errors import (
    GraphEditError,
    IndexOutOfRange,
    InvalidEndpoints,
    InvalidPlaybackState,
    InvalidRequest,
    UnknownAlgorithm,
)
from graph import Graph
from algorithms import list_algorithms
from engine import Session, summarize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(session: Optional[Session] = None, app_settings: Optional[Settings] = None) -> Flask:
    cfg = app_settings or default_settings
    app = Flask(__name__)
    app.config["TRACE_SETTINGS"] = cfg
    app.extensions["trace_session"] = session or Session(interval=cfg.default_interval)

    _register_error_handlers(app)
    _register_routes(app)
    return app


def get_session() -> Session:
    return current_app.extensions["trace_session"]


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("request body must be a JSON object")
    return data


def _number(data: dict, key: str, default=None):
    """Read an optional numeric field, rejecting anything that is not a finite number."""
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidRequest(f"'{key}' must be a number, got {value!r}")
    return value


def _integer(data: dict, key: str, default=None) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"'{key}' must be an integer, got {value!r}")
    return value


def _text(data: dict, key: str, default: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidRequest(f"'{key}' must be a string, got {value!r}")
    return value


def _state_payload(session: Session) -> dict:
    ctrl  = session.controller
    trace = ctrl.trace
    step  = ctrl.current_step
    return {
        "source":        session.start,
        "target":        session.goal,
        "selected_algo": session.algorithm,
        "heuristic":     session.heuristic,
        "node_count":    session.graph.node_count(),
        "edge_count":    session.graph.edge_count(),
        "playback":      ctrl.state.value,
        "current_step":  ctrl.cursor,
        "total_steps":   len(trace) if trace else 0,
        "step":          step.to_dict() if step else None,
        "result":        trace.to_dict(include_steps=False) if trace else None,
        "metrics":       summarize(trace, session.graph).to_dict() if trace else None,
    }


def _step_payload(session: Session, step) -> dict:
    ctrl = session.controller
    return {
        "moved":        step is not None,
        "current_step": ctrl.cursor,
        "total_steps":  len(ctrl.trace) if ctrl.trace else 0,
        "step":         ctrl.current_step.to_dict() if ctrl.current_step else None,
    }


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
def _register_error_handlers(app: Flask) -> None:

    def _error(exc: Exception, status: int):
        logger.warning("%s: %s", type(exc).__name__, exc)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), status

    @app.errorhandler(InvalidEndpoints)
    @app.errorhandler(GraphEditError)
    @app.errorhandler(UnknownAlgorithm)
    @app.errorhandler(InvalidRequest)
    def bad_request(exc):
        return _error(exc, 400)

    @app.errorhandler(IndexOutOfRange)
    def not_found(exc):
        return _error(exc, 404)

    @app.errorhandler(InvalidPlaybackState)
    def conflict(exc):
        return _error(exc, 409)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    # ---------------- info / state ----------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify([a.to_dict() for a in list_algorithms()])

    @app.route("/api/state")
    def api_state():
        return jsonify(_state_payload(get_session()))

    # ---------------- graph ----------------
    @app.route("/api/graph", methods=["GET"])
    def api_graph_get():
        return jsonify(get_session().graph.to_dict())

    @app.route("/api/graph", methods=["PUT"])
    def api_graph_put():
        data = _body()
        try:
            graph = Graph.from_dict(data)
        except GraphEditError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GraphEditError(f"malformed graph: {e}") from e
        session = get_session()
        session.replace_graph(graph)
        return jsonify(session.graph.to_dict())

    @app.route("/api/graph/sample", methods=["POST"])
    def api_graph_sample():
        session = get_session()
        session.load_sample()
        return jsonify({"graph": session.graph.to_dict(), "source": session.start, "target": session.goal})

    @app.route("/api/graph/clear", methods=["POST"])
    def api_graph_clear():
        session = get_session()
        session.clear_graph()
        return jsonify(session.graph.to_dict())

    @app.route("/api/graph/nodes", methods=["POST"])
    def api_graph_add_node():
        data = _body()
        node = get_session().add_node(float(_number(data, "x", 0.0)), float(_number(data, "y", 0.0)))
        return jsonify(node.to_dict()), 201

    @app.route("/api/graph/nodes/<int:node_id>", methods=["DELETE"])
    def api_graph_remove_node(node_id: int):
        session = get_session()
        if not session.graph.has_node(node_id):
            return jsonify({"error": f"unknown node {node_id}"}), 404
        session.remove_node(node_id)
        return jsonify(_state_payload(session))

    @app.route("/api/graph/edges", methods=["POST"])
    def api_graph_add_edge():
        data = _body()
        a, b = _integer(data, "a"), _integer(data, "b")
        if a is None or b is None:
            raise InvalidRequest("edge needs integer 'a' and 'b'")
        edge = get_session().add_edge(a, b, data.get("weight", 1))
        return jsonify(edge.to_dict()), 201

    @app.route("/api/graph/edges/<int:a>/<int:b>", methods=["DELETE"])
    def api_graph_remove_edge(a: int, b: int):
        session = get_session()
        if not session.graph.has_edge(a, b):
            return jsonify({"error": f"no edge between {a} and {b}"}), 404
        session.remove_edge(a, b)
        return jsonify(session.graph.to_dict())

    # ---------------- config ----------------
    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        data = _body()
        session = get_session()
        session.select_algorithm(_text(data, "algo_key", "bfs"), _text(data, "heuristic"))
        return jsonify({"selected_algo": session.algorithm, "heuristic": session.heuristic})

    @app.route("/api/config/source_target", methods=["POST"])
    def api_config_source_target():
        data = _body()
        session = get_session()
        src = data.get("source", session.start)
        tgt = data.get("target", session.goal)
        session.set_endpoints(src, tgt)
        return jsonify({"source": session.start, "target": session.goal})

    # ---------------- run ----------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        session = get_session()
        trace = session.run()
        payload = _state_payload(session)
        payload["steps"] = [s.to_dict() for s in trace.steps]
        return jsonify(payload)

    # ---------------- step navigation ----------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        session = get_session()
        return jsonify(_step_payload(session, session.controller.step_forward()))

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        session = get_session()
        return jsonify(_step_payload(session, session.controller.step_backward()))

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        session = get_session()
        idx = _integer(_body(), "index", 0)
        return jsonify(_step_payload(session, session.controller.jump_to(idx)))

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        data = _body()
        session = get_session()
        cfg: Settings = current_app.config["TRACE_SETTINGS"]
        interval = _number(data, "interval")
        speed    = _text(data, "speed")
        if interval is not None:
            interval = max(MIN_INTERVAL, float(interval))
        elif speed is not None:
            interval = cfg.interval_for(speed)
        session.controller.play_in_background(_integer(data, "index"), interval)
        return jsonify(_state_payload(session))

    @app.route("/api/step/pause", methods=["POST"])
    def api_step_pause():
        session = get_session()
        cancelled = session.controller.cancel()
        payload = _state_payload(session)
        payload["cancelled"] = cancelled
        return jsonify(payload)


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=default_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("%s listening on http://%s:%d", default_settings.app_name,
                default_settings.host, default_settings.port)
    app.run(debug=default_settings.debug, host=default_settings.host, port=default_settings.port)
