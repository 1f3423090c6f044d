"""
flowedit.commands.serve - Run the REST API server for the canvas.
"""

import argparse
import logging
from typing import Any, Dict

from flowedit.config import EditorConfig, ServerConfig
from flowedit.editor import FlowEditor
from flowedit.persistence import LoggingSink

logger = logging.getLogger(__name__)


def build_app(config: Dict[str, Any]):
    """Create the Flask app for ``config`` with a fresh editor session."""
    from flowedit.server import create_app

    editor = FlowEditor(
        config=EditorConfig.from_dict(config.get("editor", {})),
        sink=LoggingSink(),
    )
    return create_app(editor, config)


def run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Handle ``flowedit serve``."""
    server = ServerConfig.from_dict(config.get("server", {}))
    host = args.host or server.host
    port = args.port or server.port

    app = build_app(config)
    print(
        f"""
======================================
  flowedit Server
======================================

Server:     http://{host}:{port}
Templates:  {", ".join(EditorConfig.from_dict(config.get("editor", {})).node_types)}

Press Ctrl+C to stop
"""
    )
    logger.info("Serving on %s:%d", host, port)
    try:
        app.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    return 0
