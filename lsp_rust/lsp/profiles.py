"""
Backend profiles: which server to launch and how its messages are handled.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lsp_rust.lsp.session import SessionContext

NotificationHandler = Callable[["SessionContext", str, Any], None]
"""(context, workspace_id, params)"""
ActionHandler = Callable[["SessionContext", list[Any]], None]
"""(context, arguments)"""


class Backend(str, Enum):
    """
    The two alternative analysis servers. Both serve ``*.rs`` files; the user picks one.
    """

    RLS = "rls"
    RUST_ANALYZER = "rust-analyzer"

    def __str__(self) -> str:
        return self.value


class HandlerRegistry:
    """Name -> handler table that refuses duplicate registrations."""

    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._handlers: dict[str, Callable[..., None]] = {}

    def register(self, name: str, handler: Callable[..., None]) -> None:
        if name in self._handlers:
            raise ValueError(f"Duplicate {self._kind} handler for '{name}'")
        self._handlers[name] = handler

    def update(self, handlers: Iterable[tuple[str, Callable[..., None]]]) -> None:
        for name, handler in handlers:
            self.register(name, handler)

    def freeze(self) -> Mapping[str, Callable[..., None]]:
        return MappingProxyType(dict(self._handlers))


@dataclass(frozen=True)
class BackendProfile:
    """A registered server configuration: launch command plus handler tables."""

    backend: Backend
    launch_command: tuple[str, ...]
    notification_handlers: Mapping[str, NotificationHandler] = field(
        default_factory=lambda: MappingProxyType({})
    )
    action_handlers: Mapping[str, ActionHandler] = field(default_factory=lambda: MappingProxyType({}))
    suppressed_methods: frozenset[str] = frozenset()

    @property
    def id(self) -> str:
        return self.backend.value

    @classmethod
    def build(
        cls,
        backend: Backend,
        launch_command: Iterable[str],
        notification_handlers: Iterable[tuple[str, NotificationHandler]] = (),
        action_handlers: Iterable[tuple[str, ActionHandler]] = (),
        suppressed_methods: Iterable[str] = (),
    ) -> "BackendProfile":
        """Validate handler tables and freeze them into a profile.

        :raises ValueError: if a method or command name is registered twice
        """
        notifications = HandlerRegistry("notification")
        notifications.update(notification_handlers)
        actions = HandlerRegistry("action")
        actions.update(action_handlers)
        suppressed = frozenset(suppressed_methods)
        return cls(
            backend=backend,
            launch_command=tuple(launch_command),
            notification_handlers=notifications.freeze(),
            action_handlers=actions.freeze(),
            suppressed_methods=suppressed,
        )
