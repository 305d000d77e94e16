"""Snippet generation: provider contract and the shared pipeline.

A provider synthesizes the syntax for one kind of construct and knows how
to recognise that construct afterwards. ``generate_snippet`` turns the
synthesized node into a single insertion edit:

    synthesize ──> normalize whitespace ──> reindent ──> TextChange

Cancellation is checked before every stage and yields an empty result,
never an exception.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import libcst as cst

from ..errors import SnippetGenerationError
from ..text import TextChange, TextSpan, line_suffix
from ..workspace import Document
from .formatting import indentation_at, normalize_whitespace, reindent, reindented_offset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnippetPlaceholder:
    """A named field the user tabs through after insertion."""

    name: str
    span: TextSpan


@runtime_checkable
class SnippetProvider(Protocol):
    identifier: str
    description: str

    async def synthesize(
        self,
        document: Document,
        position: int,
        cancel_event: asyncio.Event | None = None,
    ) -> cst.CSTNode | None:
        """Build the construct to insert at ``position``.

        Returns None when ``cancel_event`` was observed set part way through.
        """
        ...

    def container_predicate(self, node: cst.CSTNode | None) -> bool:
        """True when ``node`` is the kind of construct this snippet produces."""
        ...

    def is_valid_location(self, document: Document, position: int) -> bool: ...

    def placeholders(self, rendered: str) -> list[SnippetPlaceholder]:
        """Placeholder spans relative to the start of ``rendered``."""
        ...


@dataclass(frozen=True)
class SnippetResult:
    """Ordered, non-overlapping edits produced by one snippet invocation."""

    identifier: str
    changes: tuple[TextChange, ...] = ()
    placeholders: tuple[SnippetPlaceholder, ...] = field(default=())
    caret_position: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.changes


def _cancelled(cancel_event: asyncio.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


async def generate_snippet(
    provider: SnippetProvider,
    document: Document,
    position: int,
    cancel_event: asyncio.Event | None = None,
) -> SnippetResult:
    """Run the snippet pipeline for ``provider`` at ``position``.

    Raises SnippetGenerationError when synthesis fails. Returns an empty
    result when ``cancel_event`` is set before edits are emitted.
    """
    empty = SnippetResult(identifier=provider.identifier)

    if _cancelled(cancel_event):
        logger.debug("Snippet %s cancelled before synthesis", provider.identifier)
        return empty
    try:
        node = await provider.synthesize(document, position, cancel_event)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        raise SnippetGenerationError(
            provider.identifier, str(exc) or type(exc).__name__
        ) from exc

    if node is None and not _cancelled(cancel_event):
        raise SnippetGenerationError(provider.identifier, "provider returned no syntax")
    if _cancelled(cancel_event):
        logger.debug("Snippet %s cancelled before formatting", provider.identifier)
        return empty
    rendered = normalize_whitespace(node, document.formatting)
    indent = indentation_at(document.text, position)
    text = reindent(rendered, indent)
    caret_offset = len(text.rstrip("\r\n"))
    if text.endswith("\n") and line_suffix(document.text, position).strip():
        # Content after the caret keeps its column on the following line.
        text += indent

    if _cancelled(cancel_event):
        logger.debug("Snippet %s cancelled before emitting edits", provider.identifier)
        return empty
    placeholders = tuple(
        SnippetPlaceholder(
            name=p.name,
            span=TextSpan(
                position + reindented_offset(rendered, p.span.start, indent),
                p.span.length,
            ),
        )
        for p in provider.placeholders(rendered)
    )
    result = SnippetResult(
        identifier=provider.identifier,
        changes=(TextChange(TextSpan(position, 0), text),),
        placeholders=placeholders,
        caret_position=position + caret_offset,
    )
    logger.debug(
        "Snippet %s generated %d chars at %d", provider.identifier, len(text), position
    )
    return result
