"""flowedit.server.app - Flask app factory and REST API routes.

This is a THIN REST wrapper: each route parses its JSON body, turns it
into an editor command, and serializes the result. No graph logic lives
here.

Requests are serialized through a lock so the editor sees one event at
a time even under a threaded development server.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from flask import Flask, jsonify, request
from flask_cors import CORS

from flowedit.editor import (
    ClearFocus,
    Connect,
    Drop,
    EdgeChanges,
    EditLabel,
    FlowEditor,
    Focus,
    NodeChanges,
    Save,
)
from flowedit.graph.errors import GraphError, PersistError, PlacementError
from flowedit.graph.policy import Accept
from flowedit.graph.selection import Selected
from flowedit.graph.serialize import (
    PayloadError,
    parse_bounds,
    parse_changes,
    parse_edge_change,
    parse_node_change,
    parse_optional_string,
    parse_point,
    parse_string,
    parse_viewport,
    serialize_edge,
    serialize_node,
    serialize_snapshot,
)
from flowedit.graph.validation import Approved

logger = logging.getLogger(__name__)


def create_app(editor: FlowEditor, config: dict[str, Any] | None = None) -> Flask:
    """Create the Flask application with REST API routes.

    Args:
        editor: The editor instance that owns graph state.
        config: flowedit configuration dict.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    CORS(app)

    _state: dict[str, Any] = {
        "editor": editor,
        "config": config or {},
    }
    _lock = threading.Lock()

    def _body() -> dict[str, Any]:
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            raise PayloadError("JSON object body required")
        return data

    def _graph_payload() -> dict[str, Any]:
        ed: FlowEditor = _state["editor"]
        result = serialize_snapshot(ed.snapshot)
        selection = ed.selection
        result["selected_node_id"] = selection.node_id if isinstance(selection, Selected) else None
        result["dirty"] = ed.is_dirty()
        return result

    @app.errorhandler(PayloadError)
    def _bad_payload(e: PayloadError):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(PlacementError)
    def _bad_viewport(e: PlacementError):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(GraphError)
    def _graph_error(e: GraphError):
        return jsonify({"success": False, "error": str(e)}), 409

    # ─────────────────────────────────────────────────────────────────
    # Read-only GET endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/graph")
    def api_graph():
        """GET /api/graph - Current snapshot, focused node id and dirty flag."""
        with _lock:
            return jsonify(_graph_payload())

    @app.route("/api/selection")
    def api_selection():
        """GET /api/selection - Focused node, or null."""
        with _lock:
            node = _state["editor"].selected_node()
            return jsonify({"node": serialize_node(node) if node else None})

    @app.route("/api/dirty")
    def api_dirty():
        """GET /api/dirty - Check if the graph has unsaved changes."""
        with _lock:
            count = len(_state["editor"].mutation_log)
        return jsonify({"dirty": count > 0, "mutation_count": count})

    # ─────────────────────────────────────────────────────────────────
    # Event POST endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/nodes/changes", methods=["POST"])
    def api_node_changes():
        """POST /api/nodes/changes - Apply a node change set."""
        changes = parse_changes(_body(), parse_node_change)
        with _lock:
            _state["editor"].dispatch(NodeChanges(changes))
            return jsonify(_graph_payload())

    @app.route("/api/edges/changes", methods=["POST"])
    def api_edge_changes():
        """POST /api/edges/changes - Apply an edge change set."""
        changes = parse_changes(_body(), parse_edge_change)
        with _lock:
            _state["editor"].dispatch(EdgeChanges(changes))
            return jsonify(_graph_payload())

    @app.route("/api/connect", methods=["POST"])
    def api_connect():
        """POST /api/connect - Attempt to connect source -> target."""
        data = _body()
        source = parse_string(data, "source")
        target = parse_string(data, "target")
        with _lock:
            decision = _state["editor"].dispatch(Connect(source, target))
        if isinstance(decision, Accept):
            return jsonify({"success": True, "edge": serialize_edge(decision.edge)})
        return jsonify({"success": False, "error": decision.reason}), 409

    @app.route("/api/drop", methods=["POST"])
    def api_drop():
        """POST /api/drop - Create a node from a dropped template.

        Body: ``{"type", "client": {x, y}, "bounds": {left, top}, "viewport"}``.
        Responds 204 when the drop is ignored.
        """
        data = _body()
        command = Drop(
            payload_type=parse_optional_string(data, "type"),
            screen_point=parse_point(data.get("client")),
            bounds=parse_bounds(data.get("bounds")),
            viewport=parse_viewport(data.get("viewport")),
        )
        with _lock:
            node = _state["editor"].dispatch(command)
        if node is None:
            return "", 204
        return jsonify({"success": True, "node": serialize_node(node)}), 201

    @app.route("/api/focus", methods=["POST"])
    def api_focus():
        """POST /api/focus - Focus a node for label editing."""
        node_id = parse_string(_body(), "node_id")
        with _lock:
            ed: FlowEditor = _state["editor"]
            if ed.snapshot.find_node(node_id) is None:
                return jsonify({"success": False, "error": f"Node '{node_id}' not found"}), 404
            ed.dispatch(Focus(node_id))
            node = ed.selected_node()
        return jsonify({"success": True, "node": serialize_node(node)})

    @app.route("/api/focus/clear", methods=["POST"])
    def api_focus_clear():
        """POST /api/focus/clear - Close the settings panel."""
        with _lock:
            _state["editor"].dispatch(ClearFocus())
        return jsonify({"success": True})

    @app.route("/api/label", methods=["POST"])
    def api_label():
        """POST /api/label - Replace the focused node's label."""
        text = _body().get("text")
        if not isinstance(text, str):
            return jsonify({"success": False, "error": "text required"}), 400
        with _lock:
            ed: FlowEditor = _state["editor"]
            if ed.selected_node() is None:
                return jsonify({"success": False, "error": "No node is focused"}), 409
            ed.dispatch(EditLabel(text))
            node = ed.selected_node()
        return jsonify({"success": True, "node": serialize_node(node)})

    # ─────────────────────────────────────────────────────────────────
    # Persistence endpoint
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/save", methods=["POST"])
    def api_save():
        """POST /api/save - Validate and persist the current graph."""
        with _lock:
            try:
                result = _state["editor"].dispatch(Save())
            except PersistError as e:
                return jsonify({"success": False, "error": str(e)}), 500
        if isinstance(result, Approved):
            return jsonify({"success": True, "message": "Flow saved successfully!"})
        return (
            jsonify(
                {
                    "success": False,
                    "error": f"Error: {result.reason}",
                    "rootless": list(result.rootless_ids),
                }
            ),
            422,
        )

    return app
