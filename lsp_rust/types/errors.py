"""
Structured error handling for lsp-rust.

Every failure the adapter can report carries an internal code, a severity,
a user-facing message and optional recovery actions, so the host can show
something actionable when a session fails to start.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from lsp_rust.constants import utcnow


class ErrorCode(IntEnum):
    """Internal error codes for categorization."""

    # Launch/Configuration Errors (1000-1999)
    NO_LAUNCH_COMMAND = 1001
    INVALID_CONFIG = 1002

    # Workspace Errors (2000-2999)
    METADATA_COMMAND_FAILED = 2001
    METADATA_UNPARSABLE = 2002
    WORKSPACE_ROOT_MISSING = 2003

    # Edit Errors (3000-3999)
    STALE_EDIT = 3001
    UNSUPPORTED_PAYLOAD_FIELD = 3002


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RecoveryAction:
    """Suggested action to recover from an error."""

    description: str
    command: str | None = None
    automated: bool = False


@dataclass
class ErrorContext:
    """Context information for an error."""

    operation: str | None = None
    file_path: str | None = None
    backend: str | None = None
    component: str | None = None
    timestamp: datetime = field(default_factory=utcnow)
    additional_info: dict[str, Any] = field(default_factory=dict)


class LspRustError(Exception):
    """Base error class for lsp-rust."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        user_message: str,
        severity: str = ErrorSeverity.MEDIUM,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.user_message = user_message
        self.context = context or ErrorContext()
        self.recovery_actions = recovery_actions or []
        self.original_error = original_error

        self.context.timestamp = utcnow()

    def get_formatted_message(self) -> str:
        """Get a formatted error message for display to users."""
        parts = [
            f"[Error] {self.user_message}",
            f"   Code: {self.code.value}",
        ]

        if self.context.operation:
            parts.append(f"   Operation: {self.context.operation}")
        if self.context.file_path:
            parts.append(f"   File: {self.context.file_path}")
        if self.context.backend:
            parts.append(f"   Backend: {self.context.backend}")

        if self.recovery_actions:
            parts.append("")
            parts.append("Suggested actions:")
            for i, action in enumerate(self.recovery_actions, 1):
                parts.append(f"   {i}. {action.description}")
                if action.command:
                    parts.append(f"      Run: {action.command}")

        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.__class__.__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity,
            "context": {
                "operation": self.context.operation,
                "file_path": self.context.file_path,
                "backend": self.context.backend,
                "component": self.context.component,
                "timestamp": self.context.timestamp.isoformat(),
                "additional_info": self.context.additional_info,
            },
            "recovery_actions": [
                {"description": a.description, "command": a.command, "automated": a.automated}
                for a in self.recovery_actions
            ],
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ConfigurationError(LspRustError):
    """No launch command could be resolved for a backend."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NO_LAUNCH_COMMAND,
            message=message,
            user_message=user_message or "No language server command could be resolved.",
            severity=ErrorSeverity.HIGH,
            context=context,
            recovery_actions=recovery_actions,
            original_error=original_error,
        )


class RootResolutionError(LspRustError):
    """The project metadata command failed or produced unusable output."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.METADATA_COMMAND_FAILED,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            user_message=user_message or "Could not determine the Cargo workspace root.",
            severity=ErrorSeverity.HIGH,
            context=context,
            recovery_actions=recovery_actions,
            original_error=original_error,
        )


class StaleEditRejection(LspRustError):
    """An edit was computed against a document version that is no longer current.

    Never raised to the user; the applier logs it and drops the edit.
    """

    def __init__(
        self,
        file_path: str,
        expected_version: int,
        current_version: int,
    ) -> None:
        super().__init__(
            code=ErrorCode.STALE_EDIT,
            message=(
                f"Dropped edit for {file_path}: expected version {expected_version}, "
                f"document is at {current_version}"
            ),
            user_message="A server edit was computed against an outdated document and was skipped.",
            severity=ErrorSeverity.LOW,
            context=ErrorContext(
                operation="apply_edit",
                file_path=file_path,
                component="VersionedEditApplier",
                additional_info={
                    "expected_version": expected_version,
                    "current_version": current_version,
                },
            ),
        )
        self.file_path = file_path
        self.expected_version = expected_version
        self.current_version = current_version


class UnsupportedPayloadField(LspRustError):
    """A command payload carried fields this client does not implement."""

    def __init__(self, command: str, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_PAYLOAD_FIELD,
            message=f"{command}: unhandled payload fields {', '.join(fields)}",
            user_message=(
                f"The server requested {', '.join(fields)}, which this client does not support yet."
            ),
            severity=ErrorSeverity.MEDIUM,
            context=ErrorContext(
                operation=command,
                component="ActionDispatcher",
                additional_info={"fields": list(fields)},
            ),
        )
        self.command = command
        self.fields = list(fields)
