"""Server option store pushed to the backend after every handshake."""

from __future__ import annotations

from typing import Any

from lsp_rust.constants import CONFIG_NAMESPACE
from lsp_rust.utils.logger import logger

Scalar = str | int | float | bool | None


class ConfigurationStore:
    """Option name -> value mapping.

    The whole mapping is sent on every handshake; nothing is diffed.
    """

    BUILD_LIB = "build_lib"
    BUILD_BIN = "build_bin"
    CFG_TEST = "cfg_test"
    GOTO_DEF_RACER_FALLBACK = "goto_def_racer_fallback"

    def __init__(self, namespace: str = CONFIG_NAMESPACE) -> None:
        self._namespace = namespace
        self._options: dict[str, Scalar] = {}

    @property
    def namespace(self) -> str:
        return self._namespace

    def set(self, name: str, value: Scalar) -> None:
        logger.debug("Config option {} = {!r}", name, value)
        self._options[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def set_build_lib(self, enabled: bool) -> None:
        """Build only the library target."""
        self.set(self.BUILD_LIB, bool(enabled))

    def set_build_bin(self, target: str) -> None:
        """Build only the named binary target."""
        self.set(self.BUILD_BIN, target)

    def set_cfg_test(self, enabled: bool) -> None:
        """Build with ``#[cfg(test)]`` code enabled."""
        self.set(self.CFG_TEST, bool(enabled))

    def set_goto_def_racer_fallback(self, enabled: bool) -> None:
        """Let goto-definition fall back to racer."""
        self.set(self.GOTO_DEF_RACER_FALLBACK, bool(enabled))

    def snapshot(self) -> dict[str, Scalar]:
        return dict(self._options)

    def configuration_payload(self) -> dict[str, Any]:
        """Params for ``workspace/didChangeConfiguration``."""
        return {"settings": {self._namespace: self.snapshot()}}

    def __len__(self) -> int:
        return len(self._options)
