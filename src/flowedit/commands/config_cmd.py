"""
flowedit.commands.config_cmd - Inspect the effective configuration.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from flowedit.config import dump_config, find_config_file


def run(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Handle ``flowedit config show|path``."""
    action = getattr(args, "config_action", None)

    if action == "show":
        sys.stdout.write(dump_config(config))
        return 0

    if action == "path":
        path = args.config or find_config_file(Path.cwd())
        if path is None:
            print("No .flowedit.toml found (using defaults)", file=sys.stderr)
            return 1
        print(path)
        return 0

    print("Usage: flowedit config {show,path}", file=sys.stderr)
    return 1
