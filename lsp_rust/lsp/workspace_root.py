"""Cargo workspace root discovery.

Runs ``cargo metadata`` in the file's directory and reads the
``workspace_root`` it reports. The call blocks until cargo exits and has no
timeout, so a hung cargo process hangs session startup with it.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

from lsp_rust.constants import CARGO_METADATA_COMMAND, WORKSPACE_ROOT_FIELD
from lsp_rust.types.errors import ErrorCode, ErrorContext, RecoveryAction, RootResolutionError
from lsp_rust.utils.logger import logger
from lsp_rust.utils.subprocess_util import format_command, quote_arg, subprocess_kwargs


class WorkspaceRootResolver:
    """Resolves the Cargo workspace root for a directory."""

    def __init__(self, command: list[str] | None = None) -> None:
        self._command = list(command or CARGO_METADATA_COMMAND)

    def resolve_root(self, current_directory: str | Path) -> Path:
        """Return the workspace root containing ``current_directory``.

        Every failure mode collapses into RootResolutionError; callers
        must not start a session for the directory when it is raised.
        """
        directory = str(current_directory)
        context = ErrorContext(
            operation="resolve_root",
            file_path=directory,
            component="WorkspaceRootResolver",
        )
        recovery = [
            RecoveryAction(
                "Check that the directory belongs to a Cargo project",
                command=f"cd {quote_arg(directory)} && {format_command(self._command)}",
            )
        ]

        try:
            proc = subprocess.run(
                self._command,
                cwd=directory,
                capture_output=True,
                text=True,
                **subprocess_kwargs(),
            )
        except OSError as e:
            raise RootResolutionError(
                f"Could not run {self._command[0]}: {e}",
                context=context,
                recovery_actions=recovery,
                original_error=e,
            ) from e

        if proc.returncode != 0:
            raise RootResolutionError(
                f"{format_command(self._command)} exited with {proc.returncode}: {proc.stderr.strip()}",
                context=context,
                recovery_actions=recovery,
            )

        try:
            metadata = json.loads(proc.stdout)
        except json.JSONDecodeError as e:
            raise RootResolutionError(
                f"Malformed cargo metadata output: {e}",
                code=ErrorCode.METADATA_UNPARSABLE,
                context=context,
                recovery_actions=recovery,
                original_error=e,
            ) from e

        root = metadata.get(WORKSPACE_ROOT_FIELD) if isinstance(metadata, dict) else None
        if not isinstance(root, str) or not root:
            raise RootResolutionError(
                f"cargo metadata output has no '{WORKSPACE_ROOT_FIELD}' field",
                code=ErrorCode.WORKSPACE_ROOT_MISSING,
                context=context,
                recovery_actions=recovery,
            )

        logger.debug("Workspace root for {} is {}", directory, root)
        return Path(root)
