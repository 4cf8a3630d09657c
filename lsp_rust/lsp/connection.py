"""Launch command resolution for the two Rust backends."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from lsp_rust.constants import RLS_SOURCE_FLAGS, RLS_SOURCE_PREFIX
from lsp_rust.lsp.profiles import Backend
from lsp_rust.lsp.settings import ClientSettings
from lsp_rust.types.errors import ConfigurationError, ErrorContext, RecoveryAction
from lsp_rust.utils.logger import logger
from lsp_rust.utils.subprocess_util import format_command


class ConnectionResolver:
    """Picks the command line used to start a backend.

    RLS prefers an explicit command and otherwise runs RLS from a local
    checkout named by an environment variable. rust-analyzer uses its
    configured command as-is.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._environ = environ

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def _getenv(self, name: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name)

    def resolve_command(self, backend: Backend | str) -> list[str]:
        """Resolve the launch command for ``backend``.

        Raises:
            ConfigurationError: If no command can be resolved.
        """
        backend = Backend(backend)
        if backend is Backend.RLS:
            command = self._resolve_rls()
        else:
            command = self._resolve_rust_analyzer()
        logger.debug("Resolved {} command: {}", backend, format_command(command))
        return command

    def _resolve_rls(self) -> list[str]:
        if self._settings.rls_command:
            return list(self._settings.rls_command)

        env_name = self._settings.rls_root_env
        rls_root = self._getenv(env_name)
        if rls_root:
            manifest = Path(os.path.expanduser(rls_root)) / "Cargo.toml"
            return [*RLS_SOURCE_PREFIX, f"--manifest-path={manifest}", *RLS_SOURCE_FLAGS]

        raise ConfigurationError(
            f"RLS command is not set and {env_name} is not defined",
            user_message="Cannot start RLS: no command configured and no local RLS checkout found.",
            context=ErrorContext(operation="resolve_command", backend=Backend.RLS.value),
            recovery_actions=[
                RecoveryAction("Install RLS and configure its command", command="rustup component add rls"),
                RecoveryAction(f"Point {env_name} at a local RLS checkout"),
            ],
        )

    def _resolve_rust_analyzer(self) -> list[str]:
        if self._settings.rust_analyzer_command:
            return list(self._settings.rust_analyzer_command)
        raise ConfigurationError(
            "rust-analyzer command is empty",
            user_message="Cannot start rust-analyzer: its command is not configured.",
            context=ErrorContext(operation="resolve_command", backend=Backend.RUST_ANALYZER.value),
            recovery_actions=[RecoveryAction("Configure the rust-analyzer server command")],
        )
