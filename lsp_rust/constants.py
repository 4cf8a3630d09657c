"""Shared constants for lsp-rust.

Centralizes protocol method names, environment variable names and the
fixed command fragments used to launch and locate Rust projects.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# Environment variable naming a local RLS checkout, used when no RLS
# command is configured.
RLS_ROOT_ENV: str = "RLS_ROOT"

DEFAULT_RUST_ANALYZER_COMMAND: list[str] = ["ra_lsp_server"]

# Flags appended after --manifest-path when running RLS from source.
RLS_SOURCE_PREFIX: list[str] = ["cargo", "+nightly", "run", "--quiet"]
RLS_SOURCE_FLAGS: list[str] = ["--release"]

CARGO_METADATA_COMMAND: list[str] = ["cargo", "metadata", "--no-deps", "--format-version", "1"]
WORKSPACE_ROOT_FIELD: str = "workspace_root"

# Key the option snapshot is nested under in workspace/didChangeConfiguration.
CONFIG_NAMESPACE: str = "rust"
DID_CHANGE_CONFIGURATION: str = "workspace/didChangeConfiguration"

BUILDING_LABEL: str = "(building)"

# RLS notifications
WINDOW_PROGRESS: str = "window/progress"
DIAGNOSTICS_BEGIN: str = "rustDocument/diagnosticsBegin"
DIAGNOSTICS_END: str = "rustDocument/diagnosticsEnd"
BEGIN_BUILD: str = "rustDocument/beginBuild"

# rust-analyzer
PUBLISH_DECORATIONS: str = "m/publishDecorations"
APPLY_SOURCE_CHANGE: str = "rust-analyzer.applySourceChange"
