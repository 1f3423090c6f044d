"""
flowedit.config.settings - Typed views over configuration sections.
"""

from dataclasses import dataclass, field
from typing import Any

from flowedit.config.loader import ConfigError


@dataclass
class EditorConfig:
    """
    Configuration for the graph editor.

    Attributes:
        node_types: Node template names accepted on drop
        default_label: Label given to newly dropped nodes
        id_prefix: Prefix of allocated node ids
    """

    node_types: list[str] = field(default_factory=lambda: ["textUpdater"])
    default_label: str = "Message Node"
    id_prefix: str = "node-"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditorConfig":
        """
        Create EditorConfig from configuration dictionary.

        Args:
            data: Dictionary from [editor] config section

        Returns:
            EditorConfig instance with values from data or defaults
        """
        node_types = data.get("node_types", ["textUpdater"])
        if isinstance(node_types, str):
            node_types = [node_types]
        return cls(
            node_types=list(node_types),
            default_label=data.get("default_label", "Message Node"),
            id_prefix=data.get("id_prefix", "node-"),
        )


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 5173

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerConfig":
        port = data.get("port", 5173)
        try:
            port = int(port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"server.port must be an integer, got {port!r}") from e
        return cls(host=str(data.get("host", "127.0.0.1")), port=port)
