"""
flowedit.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "serve",
]
