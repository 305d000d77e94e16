"""Whitespace normalization for generated syntax."""
from __future__ import annotations

import libcst as cst

from ..config import FormattingOptions
from ..text import line_prefix


def normalize_whitespace(node: cst.CSTNode, formatting: FormattingOptions) -> str:
    """Render ``node`` with the host's indentation and newline conventions."""
    module = cst.Module(
        body=[],
        default_indent=formatting.indent,
        default_newline=formatting.newline,
    )
    return module.code_for_node(node)


def indentation_at(text: str, position: int) -> str:
    """Leading whitespace of the line containing ``position``."""
    prefix = line_prefix(text, position)
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def reindent(text: str, indent: str) -> str:
    """Prefix every non-blank line after the first with ``indent``.

    The first line is inserted after the existing indentation at the
    insertion point, so it is left alone.
    """
    if not indent:
        return text
    lines = text.splitlines(keepends=True)
    return "".join(
        line if i == 0 or not line.strip() else indent + line
        for i, line in enumerate(lines)
    )


def reindented_offset(text: str, offset: int, indent: str) -> int:
    """Map an offset in ``text`` to the same character after ``reindent``."""
    if not indent:
        return offset
    added = 0
    start = 0
    for i, line in enumerate(text.splitlines(keepends=True)):
        if start > offset:
            break
        if i > 0 and line.strip():
            added += len(indent)
        start += len(line)
    return offset + added
