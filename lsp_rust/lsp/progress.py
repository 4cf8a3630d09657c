"""Build and progress status aggregation.

RLS reports work through two channels: ``window/progress`` tokens and a
build counter driven by ``beginBuild``/``diagnosticsEnd``. Both feed one
status label that the host shows in its status line. The label is
last-writer-wins: a progress update can overwrite "(building)" while a
build is still running, and a decrement that leaves the counter above zero
does not restore it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from numbers import Real

from lsp_rust.constants import BUILDING_LABEL
from lsp_rust.utils.logger import logger

StatusListener = Callable[[str | None], None]


class StatusLine:
    """The single optional status string exposed to the host."""

    def __init__(self) -> None:
        self._label: str | None = None
        self._listeners: list[StatusListener] = []

    @property
    def label(self) -> str | None:
        return self._label

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def set(self, label: str | None) -> None:
        self._label = label
        for listener in self._listeners:
            listener(label)

    def clear(self) -> None:
        self.set(None)


@dataclass
class WorkspaceProgressState:
    """Progress bookkeeping for one workspace."""

    workspace_id: str
    active_progress_ids: set[str] = field(default_factory=set)
    build_depth: int = 0


def format_progress_label(
    percentage: float | None,
    message: str | None,
    title: str | None,
) -> str | None:
    """Pick the most specific description of an active progress token."""
    if isinstance(percentage, Real) and not isinstance(percentage, bool):
        return f"{round(percentage)}%"
    if message:
        return f"({message})"
    if title:
        return f"({title.lower()})"
    return None


class ProgressAggregator:
    """Per-workspace progress state machine writing to a shared StatusLine."""

    def __init__(self, status: StatusLine | None = None) -> None:
        self.status = status or StatusLine()
        self._states: dict[str, WorkspaceProgressState] = {}

    def state(self, workspace_id: str) -> WorkspaceProgressState:
        """Get the state for a workspace, creating it on first use."""
        state = self._states.get(workspace_id)
        if state is None:
            state = WorkspaceProgressState(workspace_id)
            self._states[workspace_id] = state
        return state

    def update_progress(
        self,
        workspace_id: str,
        progress_id: str,
        done: bool,
        message: str | None = None,
        percentage: float | None = None,
        title: str | None = None,
    ) -> str | None:
        """Record a progress event and recompute the label.

        Returns:
            The new status label.
        """
        state = self.state(workspace_id)
        if done:
            state.active_progress_ids.discard(progress_id)
        else:
            state.active_progress_ids.add(progress_id)

        if state.active_progress_ids:
            label = format_progress_label(percentage, message, title)
        else:
            label = None
        self.status.set(label)
        return label

    def increment_build_counter(self, workspace_id: str) -> int:
        state = self.state(workspace_id)
        state.build_depth += 1
        self.status.set(BUILDING_LABEL)
        return state.build_depth

    def decrement_build_counter(self, workspace_id: str) -> int:
        # No floor: an unmatched diagnosticsEnd drives the counter negative.
        state = self.state(workspace_id)
        state.build_depth -= 1
        if state.build_depth < 0:
            logger.warning(
                "Build counter for {} dropped to {} (unmatched diagnosticsEnd)",
                workspace_id,
                state.build_depth,
            )
        if state.build_depth <= 0:
            self.status.clear()
        return state.build_depth

    def workspaces(self) -> list[str]:
        return list(self._states)
