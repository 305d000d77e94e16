"""Text spans, text changes, and atomic edit application."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import TextChangeError


@dataclass(frozen=True)
class TextSpan:
    """Half-open range ``[start, start + length)`` over a document's text."""

    start: int
    length: int = 0

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"TextSpan length must be >= 0, got {self.length}")

    @classmethod
    def from_bounds(cls, start: int, end: int) -> TextSpan:
        if end < start:
            raise ValueError(f"TextSpan end {end} precedes start {start}")
        return cls(start, end - start)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def contains(self, position: int) -> bool:
        return self.start <= position < self.end


@dataclass(frozen=True)
class TextChange:
    """Replace ``span`` with ``new_text``."""

    span: TextSpan
    new_text: str


def _check_changes(text: str, changes: Iterable[TextChange]) -> list[TextChange]:
    ordered = sorted(changes, key=lambda c: (c.span.start, c.span.end))
    previous: TextChange | None = None
    for change in ordered:
        if change.span.start < 0 or change.span.end > len(text):
            raise TextChangeError(
                f"span [{change.span.start}, {change.span.end}) is outside "
                f"a document of length {len(text)}"
            )
        if previous is not None:
            if change.span.start < previous.span.end:
                raise TextChangeError(
                    f"span [{change.span.start}, {change.span.end}) overlaps "
                    f"[{previous.span.start}, {previous.span.end})"
                )
            # Two insertions at one offset have no defined order.
            if change.span.start == previous.span.start and previous.span.is_empty:
                raise TextChangeError(
                    f"multiple changes start at offset {change.span.start}"
                )
        previous = change
    return ordered


def apply_text_changes(text: str, changes: Iterable[TextChange]) -> str:
    """Apply non-overlapping changes as a single unit.

    Every change is validated before any is applied, so a rejected batch
    leaves the caller's text untouched.
    """
    ordered = _check_changes(text, changes)
    parts: list[str] = []
    cursor = 0
    for change in ordered:
        parts.append(text[cursor:change.span.start])
        parts.append(change.new_text)
        cursor = change.span.end
    parts.append(text[cursor:])
    return "".join(parts)


def offset_of(text: str, line: int, column: int) -> int:
    """Convert a 1-based line and 0-based column to a text offset."""
    offset = 0
    for _ in range(line - 1):
        newline = text.find("\n", offset)
        if newline < 0:
            raise ValueError(f"line {line} is beyond the end of the text")
        offset = newline + 1
    return offset + column


def line_prefix(text: str, position: int) -> str:
    """Return the text between the start of ``position``'s line and ``position``."""
    line_start = text.rfind("\n", 0, position) + 1
    return text[line_start:position]


def line_suffix(text: str, position: int) -> str:
    """Return the text between ``position`` and the end of its line."""
    line_end = text.find("\n", position)
    if line_end < 0:
        line_end = len(text)
    return text[position:line_end].rstrip("\r")
