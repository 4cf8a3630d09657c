"""Server notification handlers and routing.

RLS announces builds and progress through ``window/progress`` plus three
``rustDocument/*`` notifications; rust-analyzer sends decorations this
client does not render.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lsp_rust.constants import (
    BEGIN_BUILD,
    DIAGNOSTICS_BEGIN,
    DIAGNOSTICS_END,
    PUBLISH_DECORATIONS,
    WINDOW_PROGRESS,
)
from lsp_rust.utils.logger import logger

if TYPE_CHECKING:
    from lsp_rust.lsp.profiles import BackendProfile, NotificationHandler
    from lsp_rust.lsp.session import SessionContext


def handle_progress(context: SessionContext, workspace_id: str, params: dict[str, Any]) -> None:
    context.progress.update_progress(
        workspace_id,
        str(params["id"]),
        bool(params.get("done")),
        message=params.get("message"),
        percentage=params.get("percentage"),
        title=params.get("title"),
    )


def handle_diagnostics_begin(context: SessionContext, workspace_id: str, params: Any) -> None:
    """Kept for servers that still speak the older diagnostics protocol."""


def handle_diagnostics_end(context: SessionContext, workspace_id: str, params: Any) -> None:
    context.progress.decrement_build_counter(workspace_id)


def handle_begin_build(context: SessionContext, workspace_id: str, params: Any) -> None:
    context.progress.increment_build_counter(workspace_id)


def ignore_notification(context: SessionContext, workspace_id: str, params: Any) -> None:
    pass


RLS_NOTIFICATIONS: list[tuple[str, NotificationHandler]] = [
    (WINDOW_PROGRESS, handle_progress),
    (DIAGNOSTICS_BEGIN, handle_diagnostics_begin),
    (DIAGNOSTICS_END, handle_diagnostics_end),
    (BEGIN_BUILD, handle_begin_build),
]

RUST_ANALYZER_NOTIFICATIONS: list[tuple[str, NotificationHandler]] = [
    (PUBLISH_DECORATIONS, ignore_notification),
]
RUST_ANALYZER_SUPPRESSED: frozenset[str] = frozenset({PUBLISH_DECORATIONS})


class NotificationRouter:
    """Routes notifications for one workspace through a profile's handler table."""

    def __init__(self, profile: BackendProfile, context: SessionContext, workspace_id: str) -> None:
        self._profile = profile
        self._context = context
        self._workspace_id = workspace_id

    def dispatch(self, method: str, params: Any) -> bool:
        """Handle one notification.

        Handler exceptions propagate to the protocol layer, which logs them.

        Returns:
            True if a handler ran.
        """
        handler = self._profile.notification_handlers.get(method)
        if handler is None:
            if method not in self._profile.suppressed_methods:
                logger.warning("Unhandled {} notification: {}", self._profile.id, method)
            return False
        handler(self._context, self._workspace_id, params)
        return True
