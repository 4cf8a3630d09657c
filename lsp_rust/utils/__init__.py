"""
lsp-rust utility modules.

- Logging (stderr-only, loguru)
- Subprocess helpers shared by command and root resolution
"""

from .logger import configure_logging, is_debug_enabled, logger
from .subprocess_util import format_command, quote_arg, split_command, subprocess_kwargs

__all__ = [
    "configure_logging",
    "format_command",
    "is_debug_enabled",
    "logger",
    "quote_arg",
    "split_command",
    "subprocess_kwargs",
]
