"""LSP integration for lsp-rust.

Launch resolution, notification routing, progress aggregation and
version-guarded edit application for RLS and rust-analyzer sessions.
"""

from .config_store import ConfigurationStore
from .connection import ConnectionResolver
from .documents import Document, DocumentStore, VersionedEditApplier
from .profiles import Backend, BackendProfile
from .progress import ProgressAggregator, StatusLine, WorkspaceProgressState
from .session import LaunchPlan, RustSession, SessionContext, build_profile
from .settings import ClientSettings
from .workspace_root import WorkspaceRootResolver

__all__ = [
    "Backend",
    "BackendProfile",
    "ClientSettings",
    "ConfigurationStore",
    "ConnectionResolver",
    "Document",
    "DocumentStore",
    "LaunchPlan",
    "ProgressAggregator",
    "RustSession",
    "SessionContext",
    "StatusLine",
    "VersionedEditApplier",
    "WorkspaceProgressState",
    "WorkspaceRootResolver",
    "build_profile",
]
