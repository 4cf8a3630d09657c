"""Tests for the error taxonomy."""

from lsp_rust.types.errors import (
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


class TestErrorTypes:
    """Tests for codes and severities of each error."""

    def test_hierarchy(self):
        for cls in (ConfigurationError, RootResolutionError):
            assert issubclass(cls, LspRustError)
        assert isinstance(StaleEditRejection("/a.rs", 1, 2), LspRustError)
        assert isinstance(UnsupportedPayloadField("cmd", ["cursorPosition"]), LspRustError)

    def test_configuration_error_defaults(self):
        error = ConfigurationError("no command")
        assert error.code == ErrorCode.NO_LAUNCH_COMMAND
        assert error.severity == ErrorSeverity.HIGH
        assert str(error) == "no command"
        assert error.user_message

    def test_root_resolution_code_override(self):
        error = RootResolutionError("bad json", code=ErrorCode.METADATA_UNPARSABLE)
        assert error.code == ErrorCode.METADATA_UNPARSABLE

    def test_stale_edit_details(self):
        error = StaleEditRejection("/a.rs", 1, 2)
        assert error.severity == ErrorSeverity.LOW
        assert error.context.additional_info == {"expected_version": 1, "current_version": 2}
        assert "expected version 1" in str(error)

    def test_unsupported_fields_listed(self):
        error = UnsupportedPayloadField("rust-analyzer.applySourceChange", ["fileSystemEdits"])
        assert "fileSystemEdits" in error.user_message
        assert error.command == "rust-analyzer.applySourceChange"


class TestFormatting:
    """Tests for display and serialization."""

    def test_formatted_message(self):
        error = ConfigurationError(
            "missing",
            user_message="Cannot start RLS.",
            context=ErrorContext(operation="resolve_command", backend="rls"),
            recovery_actions=[RecoveryAction("Install RLS", command="rustup component add rls")],
        )
        text = error.get_formatted_message()
        assert "[Error] Cannot start RLS." in text
        assert "Backend: rls" in text
        assert "1. Install RLS" in text
        assert "Run: rustup component add rls" in text

    def test_to_dict(self):
        original = ValueError("inner")
        error = RootResolutionError("outer", context=ErrorContext(file_path="/p"), original_error=original)
        data = error.to_dict()
        assert data["name"] == "RootResolutionError"
        assert data["code"] == ErrorCode.METADATA_COMMAND_FAILED.value
        assert data["context"]["file_path"] == "/p"
        assert data["original_error"] == "inner"
        assert data["recovery_actions"] == []
