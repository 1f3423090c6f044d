"""
flowedit.config - Configuration loading and defaults
"""

from flowedit.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from flowedit.config.loader import (
    ConfigError,
    _apply_env_overrides,
    _try_parse_env_value,
    dump_config,
    find_config_file,
    load_config,
    merge_configs,
)
from flowedit.config.logging_config import configure_logging
from flowedit.config.settings import EditorConfig, ServerConfig

__all__ = [
    "load_config",
    "find_config_file",
    "merge_configs",
    "dump_config",
    "configure_logging",
    "ConfigError",
    "EditorConfig",
    "ServerConfig",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
]
