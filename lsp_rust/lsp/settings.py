"""
Client-side settings for launching Rust language servers.
"""

import inspect
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Self

from lsp_rust.constants import DEFAULT_RUST_ANALYZER_COMMAND, RLS_ROOT_ENV
from lsp_rust.utils.subprocess_util import split_command

RLS_COMMAND_ENV = "LSP_RUST_RLS_COMMAND"
RUST_ANALYZER_COMMAND_ENV = "LSP_RUST_RA_COMMAND"


@dataclass
class ClientSettings:
    """
    Launch settings for both backends
    """

    rls_command: list[str] = field(default_factory=list)
    """Explicit RLS command. Empty means: fall back to running RLS from ``rls_root_env``."""
    rust_analyzer_command: list[str] = field(default_factory=lambda: list(DEFAULT_RUST_ANALYZER_COMMAND))
    """rust-analyzer command; used verbatim, there is no fallback"""
    rls_root_env: str = RLS_ROOT_ENV
    """Environment variable naming a local RLS checkout"""

    @classmethod
    def from_dict(cls, env: dict) -> Self:
        return cls(**{k: v for k, v in env.items() if k in inspect.signature(cls).parameters})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build settings from ``LSP_RUST_RLS_COMMAND`` / ``LSP_RUST_RA_COMMAND``."""
        environ = os.environ if environ is None else environ
        values: dict = {}
        rls = environ.get(RLS_COMMAND_ENV, "").strip()
        if rls:
            values["rls_command"] = split_command(rls)
        ra = environ.get(RUST_ANALYZER_COMMAND_ENV, "").strip()
        if ra:
            values["rust_analyzer_command"] = split_command(ra)
        return cls.from_dict(values)
