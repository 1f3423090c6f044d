"""
flowedit.config.defaults - Built-in configuration values.
"""

from typing import Any, Dict

CONFIG_FILENAME = ".flowedit.toml"

ENV_PREFIX = "FLOWEDIT_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        # Node templates the palette can drop onto the canvas
        "node_types": ["textUpdater"],
        "default_label": "Message Node",
        "id_prefix": "node-",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5173,
    },
    "logging": {
        "level": "INFO",
    },
}
