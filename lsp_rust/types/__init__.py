"""
lsp-rust type definitions.

This module exports the error taxonomy shared by every component.
"""

from .errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    LspRustError,
    RecoveryAction,
    RootResolutionError,
    StaleEditRejection,
    UnsupportedPayloadField,
)

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "LspRustError",
    "ConfigurationError",
    "RootResolutionError",
    "StaleEditRejection",
    "UnsupportedPayloadField",
]
