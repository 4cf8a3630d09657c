"""Rust language server session lifecycle.

A RustSession ties one backend profile to one workspace: it resolves the
launch command and workspace root at startup, routes inbound notifications
and commands while running, and pushes the configuration snapshot whenever
the initialize handshake completes. State shared across sessions lives in
a SessionContext the host owns and passes to every session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from lsp_rust.constants import DID_CHANGE_CONFIGURATION
from lsp_rust.lsp.actions import RUST_ANALYZER_ACTIONS, ActionDispatcher
from lsp_rust.lsp.config_store import ConfigurationStore
from lsp_rust.lsp.connection import ConnectionResolver
from lsp_rust.lsp.documents import DocumentStore, VersionedEditApplier
from lsp_rust.lsp.notifications import (
    RLS_NOTIFICATIONS,
    RUST_ANALYZER_NOTIFICATIONS,
    RUST_ANALYZER_SUPPRESSED,
    NotificationRouter,
)
from lsp_rust.lsp.profiles import Backend, BackendProfile
from lsp_rust.lsp.progress import ProgressAggregator, StatusLine
from lsp_rust.lsp.workspace_root import WorkspaceRootResolver
from lsp_rust.utils.logger import logger


class ProtocolClient(Protocol):
    """The part of the host's protocol client a session talks to."""

    def send_notification(self, method: str, params: Any) -> None: ...


@dataclass
class SessionContext:
    """State shared by every session in the host process."""

    status: StatusLine = field(default_factory=StatusLine)
    config: ConfigurationStore = field(default_factory=ConfigurationStore)
    documents: DocumentStore = field(default_factory=DocumentStore)
    progress: ProgressAggregator = field(init=False)
    edit_applier: VersionedEditApplier = field(init=False)

    def __post_init__(self) -> None:
        self.progress = ProgressAggregator(self.status)
        self.edit_applier = VersionedEditApplier(self.documents)


def build_profile(backend: Backend | str, launch_command: list[str]) -> BackendProfile:
    """Assemble the handler tables for ``backend``."""
    backend = Backend(backend)
    if backend is Backend.RLS:
        return BackendProfile.build(backend, launch_command, notification_handlers=RLS_NOTIFICATIONS)
    return BackendProfile.build(
        backend,
        launch_command,
        notification_handlers=RUST_ANALYZER_NOTIFICATIONS,
        action_handlers=RUST_ANALYZER_ACTIONS,
        suppressed_methods=RUST_ANALYZER_SUPPRESSED,
    )


@dataclass(frozen=True)
class LaunchPlan:
    """Everything the host needs to spawn a server."""

    profile: BackendProfile
    workspace_root: Path

    @property
    def command(self) -> list[str]:
        return list(self.profile.launch_command)


class RustSession:
    """One backend serving one Cargo workspace."""

    def __init__(
        self,
        backend: Backend | str,
        context: SessionContext,
        connection: ConnectionResolver | None = None,
        root_resolver: WorkspaceRootResolver | None = None,
    ) -> None:
        self._backend = Backend(backend)
        self._context = context
        self._connection = connection or ConnectionResolver()
        self._root_resolver = root_resolver or WorkspaceRootResolver()
        self._plan: LaunchPlan | None = None
        self._notifications: NotificationRouter | None = None
        self._actions: ActionDispatcher | None = None

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def plan(self) -> LaunchPlan | None:
        return self._plan

    @property
    def workspace_id(self) -> str:
        if self._plan is None:
            raise RuntimeError("Session has not been started")
        return str(self._plan.workspace_root)

    def start(self, current_directory: str | Path) -> LaunchPlan:
        """Resolve command and root, then wire up the handler tables.

        Raises:
            ConfigurationError: No launch command for the backend.
            RootResolutionError: The workspace root could not be determined.
        """
        command = self._connection.resolve_command(self._backend)
        root = self._root_resolver.resolve_root(current_directory)

        profile = build_profile(self._backend, command)
        self._plan = LaunchPlan(profile=profile, workspace_root=root)
        self._notifications = NotificationRouter(profile, self._context, str(root))
        self._actions = ActionDispatcher(profile, self._context)
        logger.info("Starting {} for workspace {}", self._backend, root)
        return self._plan

    def _require_started(self) -> tuple[NotificationRouter, ActionDispatcher]:
        if self._notifications is None or self._actions is None:
            raise RuntimeError("Session has not been started")
        return self._notifications, self._actions

    def handle_notification(self, method: str, params: Any) -> bool:
        notifications, _ = self._require_started()
        with logger.contextualize(workspace=self.workspace_id):
            return notifications.dispatch(method, params)

    def execute_command(self, command: str, arguments: list[Any] | None = None) -> bool:
        _, actions = self._require_started()
        with logger.contextualize(workspace=self.workspace_id):
            return actions.dispatch(command, arguments)

    def on_initialized(self, client: ProtocolClient) -> dict[str, Any]:
        """Push the full configuration snapshot after the handshake."""
        payload = self._context.config.configuration_payload()
        client.send_notification(DID_CHANGE_CONFIGURATION, payload)
        logger.debug("Sent configuration to {}: {}", self._backend, payload)
        return payload

    def get_status(self) -> dict[str, Any]:
        """Get status of this session."""
        status: dict[str, Any] = {
            "backend": self._backend.value,
            "started": self._plan is not None,
            "status_label": self._context.status.label,
        }
        if self._plan is not None:
            state = self._context.progress.state(self.workspace_id)
            status.update(
                {
                    "command": self._plan.command,
                    "workspace_root": self.workspace_id,
                    "active_progress": sorted(state.active_progress_ids),
                    "build_depth": state.build_depth,
                }
            )
        return status
