"""flowedit.server - Flask REST API server for the flow editor.

Exposes the editor's commands over HTTP for the browser canvas.
"""

from flowedit.server.app import create_app

__all__ = ["create_app"]
