"""
flowedit.config.logging_config - Root logger setup for the CLI.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(name)-28s %(levelname)-8s: %(message)s"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def configure_logging(level: str = "INFO") -> None:
    """Send ``flowedit`` log records to stderr at ``level``.

    Args:
        level: One of CRITICAL, ERROR, WARNING, INFO, DEBUG (any case).
            Unknown names fall back to INFO.
    """
    name = str(level).upper()
    if name not in _LEVELS:
        name = "INFO"

    logger = logging.getLogger("flowedit")
    logger.setLevel(name)
    if not any(getattr(h, "_flowedit", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._flowedit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
