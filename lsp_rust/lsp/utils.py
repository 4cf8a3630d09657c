"""Shared utilities for the LSP layer.

URI/path conversion and LSP position arithmetic used by the document store.
Lines break only on ``\\n``, ``\\r\\n`` and ``\\r``; characters are counted in
UTF-16 code units.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import unquote

_LINE_BREAK = re.compile(r"(?<=\n)|(?<=\r)(?!\n)")


def uri_to_path(uri: str) -> str:
    """Convert a file:// URI to a filesystem path.

    Non-file URIs and plain paths are returned unchanged.
    """
    if uri.startswith("file://"):
        return unquote(uri[7:])
    return uri


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines, keeping each line's terminator."""
    return _LINE_BREAK.split(text)


def utf16_column_to_index(line: str, character: int) -> int:
    """Map a UTF-16 column to a code point index within ``line``."""
    units = 0
    for index, ch in enumerate(line):
        if units >= character:
            return index
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(line)


def position_to_offset(text: str, position: dict[str, Any]) -> int:
    """Convert an LSP ``{line, character}`` position to a string offset.

    Positions past the end of a line clamp to the line's end; positions past
    the last line clamp to the end of the text.
    """
    lines = split_lines(text)
    line = position["line"]
    if line >= len(lines):
        return len(text)
    content = lines[line].rstrip("\r\n")
    character = utf16_column_to_index(content, position["character"])
    return sum(len(previous) for previous in lines[:line]) + character


def apply_text_edits(text: str, edits: list[dict[str, Any]]) -> str:
    """Apply LSP TextEdits whose ranges all refer to ``text``.

    Edits are applied bottom to top so earlier ranges stay valid. Edits
    starting at the same position end up in the order they were given.
    """
    resolved = [
        (
            position_to_offset(text, edit["range"]["start"]),
            position_to_offset(text, edit["range"]["end"]),
            index,
            edit["newText"],
        )
        for index, edit in enumerate(edits)
    ]
    for start, end, _, new_text in sorted(resolved, key=lambda r: (r[0], r[2]), reverse=True):
        text = text[:start] + new_text + text[end:]
    return text
