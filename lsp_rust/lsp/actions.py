"""Client-side commands the server asks the editor to execute."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lsp_rust.constants import APPLY_SOURCE_CHANGE
from lsp_rust.types.errors import UnsupportedPayloadField
from lsp_rust.utils.logger import logger

if TYPE_CHECKING:
    from lsp_rust.lsp.profiles import ActionHandler, BackendProfile
    from lsp_rust.lsp.session import SessionContext

# Present in rust-analyzer's source change payload, not implemented here.
UNHANDLED_SOURCE_CHANGE_FIELDS = ("fileSystemEdits", "cursorPosition")


def apply_source_change(context: SessionContext, arguments: list[Any]) -> None:
    """Apply the ``sourceFileEdits`` of a rust-analyzer source change.

    Each entry is a text document edit; entries are applied in order, each
    under its own version check. File system edits and cursor moves are
    reported via UnsupportedPayloadField once the text edits are in.
    """
    if not arguments or not isinstance(arguments[0], dict):
        logger.warning("Ignoring {}: expected a source change object, got {!r}", APPLY_SOURCE_CHANGE, arguments)
        return

    change = arguments[0]
    for file_edit in change.get("sourceFileEdits") or []:
        document = file_edit["textDocument"]
        context.edit_applier.apply_edit(
            document["uri"],
            document.get("version"),
            file_edit["edits"],
        )

    unhandled = [name for name in UNHANDLED_SOURCE_CHANGE_FIELDS if change.get(name)]
    if unhandled:
        error = UnsupportedPayloadField(APPLY_SOURCE_CHANGE, unhandled)
        logger.warning(error.user_message)
        raise error


RUST_ANALYZER_ACTIONS: list[tuple[str, ActionHandler]] = [
    (APPLY_SOURCE_CHANGE, apply_source_change),
]


class ActionDispatcher:
    """Maps command identifiers to a profile's action handlers."""

    def __init__(self, profile: BackendProfile, context: SessionContext) -> None:
        self._profile = profile
        self._context = context

    def dispatch(self, command: str, arguments: list[Any] | None = None) -> bool:
        handler = self._profile.action_handlers.get(command)
        if handler is None:
            logger.warning("No {} handler for command {}", self._profile.id, command)
            return False
        handler(self._context, list(arguments or []))
        return True
