"""
Logging utility for the language client.

STDIO transport:
- STDOUT may carry JSON-RPC traffic between host and server
- STDERR is used for all logging

configure_logging() resets loguru to a single stderr sink. Components log
through the exported ``logger`` and bind the workspace they act on with
``logger.contextualize(workspace=...)`` so interleaved sessions stay
distinguishable.
"""

import os
import sys

from loguru import logger as loguru_logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | {extra[workspace]} | <level>{message}</level>"
)


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("DEBUG", "").lower() == "true"


def configure_logging(level: str | None = None) -> int:
    """Route all log output to stderr at the given level.

    Args:
        level: Loguru level name; defaults to DEBUG when ``DEBUG=true``
            is set in the environment, INFO otherwise.

    Returns:
        The id of the installed sink.
    """
    if level is None:
        level = "DEBUG" if is_debug_enabled() else "INFO"
    loguru_logger.remove()
    loguru_logger.configure(extra={"workspace": "-"})
    return loguru_logger.add(sys.stderr, level=level, format=LOG_FORMAT)


# Export loguru logger for direct use
logger = loguru_logger
