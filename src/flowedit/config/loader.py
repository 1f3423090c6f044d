"""
flowedit.config.loader - Locate, parse and merge configuration.

Configuration is resolved in three layers, later layers winning:

1. ``DEFAULT_CONFIG``
2. ``.flowedit.toml`` (found by walking up from the working directory)
3. ``FLOWEDIT_<SECTION>_<KEY>`` environment variables
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from flowedit.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX


class ConfigError(Exception):
    """Configuration file could not be read or parsed."""


def find_config_file(start: Path) -> Optional[Path]:
    """Find ``.flowedit.toml`` in ``start`` or any parent directory.

    Args:
        start: Directory to begin the search from.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment variable value.

    JSON arrays/objects and true/false are converted; everything else
    (including malformed JSON) is returned as the raw string.
    """
    stripped = value.strip()
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(
    config: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Apply ``FLOWEDIT_<SECTION>_<KEY>`` overrides to ``config`` in place.

    ``FLOWEDIT_EDITOR_DEFAULT_LABEL=Hi`` sets ``config["editor"]["default_label"]``.
    """
    env = os.environ if environ is None else environ
    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        rest = name[len(ENV_PREFIX) :].lower()
        section, sep, key = rest.partition("_")
        if not sep or not key:
            continue
        target = config.setdefault(section, {})
        if not isinstance(target, dict):
            continue
        target[key] = _try_parse_env_value(raw)
    return config


def parse_config_text(text: str, source: str = "<string>") -> Dict[str, Any]:
    """Parse TOML text into a plain dict.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(text).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e


def load_config(
    config_path: Optional[Path] = None,
    start_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Load the effective configuration.

    Args:
        config_path: Explicit config file. When None, the file is searched
            for from ``start_dir`` (default: current directory).
        start_dir: Directory to start the config file search from.
        environ: Environment mapping for overrides (default: os.environ).

    Returns:
        Merged configuration dict.

    Raises:
        ConfigError: If an explicit file is missing, or a file is unreadable
            or not valid TOML.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())
    elif not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    user: Dict[str, Any] = {}
    if config_path is not None:
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        user = parse_config_text(text, source=str(config_path))

    config = merge_configs(DEFAULT_CONFIG, user)
    return _apply_env_overrides(config, environ)


def dump_config(config: Mapping[str, Any]) -> str:
    """Render a config dict as TOML text."""
    return tomlkit.dumps(dict(config))
