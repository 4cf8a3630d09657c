"""In-memory documents and version-guarded edit application.

Server edits carry the document version they were computed against. An
edit whose version no longer matches is dropped rather than applied to
text it was not computed for; it is never retried or queued.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from lsp_rust.lsp.utils import apply_text_edits, uri_to_path
from lsp_rust.types.errors import StaleEditRejection
from lsp_rust.utils.logger import logger


@dataclass
class Document:
    """Open buffer contents plus the revision counter the server sees."""

    path: str
    text: str = ""
    version: int = 0


class DocumentStore:
    """Documents keyed by absolute path."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._documents: dict[str, Document] = {}

    def get(self, path: str) -> Document | None:
        return self._documents.get(os.path.abspath(path))

    def open(self, path: str, text: str | None = None, version: int = 0) -> Document:
        """Return the open document for ``path``, opening it if needed.

        A newly opened document is read from disk when the file exists and
        starts empty otherwise.
        """
        key = os.path.abspath(path)
        document = self._documents.get(key)
        if document is not None:
            return document
        if text is None:
            text = ""
            if os.path.isfile(key):
                with open(key, encoding=self._encoding, newline="") as f:
                    text = f.read()
        document = Document(path=key, text=text, version=version)
        self._documents[key] = document
        return document


class VersionedEditApplier:
    """Applies server edits under an optimistic version check."""

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    def apply_edit(
        self,
        target: str,
        expected_version: int | None,
        edits: list[dict[str, Any]],
    ) -> bool:
        """Apply ``edits`` to ``target`` if its version still matches.

        Args:
            target: Path or file:// URI of the document.
            expected_version: Version the edits were computed against;
                None applies unconditionally.
            edits: LSP TextEdits, all ranges relative to the current text.

        Returns:
            True if the edits were applied, False if they were stale.
        """
        document = self._documents.open(uri_to_path(target))

        if expected_version is not None and expected_version != document.version:
            rejection = StaleEditRejection(document.path, expected_version, document.version)
            logger.debug(str(rejection))
            return False

        document.text = apply_text_edits(document.text, edits)
        document.version += 1
        return True
