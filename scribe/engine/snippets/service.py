"""Snippet lookup, availability, and application to buffers."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from ..errors import InvalidSnippetLocationError, SnippetNotFoundError, TextChangeError
from ..text import offset_of
from ..workspace import Document, TextBuffer
from .base import SnippetProvider, SnippetResult, generate_snippet
from .property_snippet import PropertySnippetProvider

logger = logging.getLogger(__name__)


class _ContainerFinder(cst.CSTVisitor):
    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(
        self,
        predicate: Callable[[cst.CSTNode | None], bool],
        text: str,
        position: int,
    ) -> None:
        super().__init__()
        self._predicate = predicate
        self._text = text
        self._position = position
        self.matches: list[tuple[int, cst.CSTNode]] = []

    def on_visit(self, node: cst.CSTNode) -> bool:
        if self._predicate(node):
            code_range = self.get_metadata(PositionProvider, node)
            start = code_range.start
            # Decorators precede the recorded position of a def or class.
            decorators = getattr(node, "decorators", ())
            if decorators:
                start = self.get_metadata(PositionProvider, decorators[0]).start
            begin = offset_of(self._text, start.line, start.column)
            end = offset_of(self._text, code_range.end.line, code_range.end.column)
            if begin <= self._position < end:
                self.matches.append((end - begin, node))
        return True


def find_snippet_container(
    predicate: Callable[[cst.CSTNode | None], bool],
    text: str,
    position: int,
) -> cst.CSTNode | None:
    """Innermost node satisfying ``predicate`` that covers ``position``."""
    try:
        wrapper = MetadataWrapper(cst.parse_module(text))
    except cst.ParserSyntaxError:
        logger.debug("find_snippet_container: text does not parse")
        return None
    finder = _ContainerFinder(predicate, text, position)
    wrapper.visit(finder)
    if not finder.matches:
        return None
    return min(finder.matches, key=lambda m: m[0])[1]


class SnippetService:
    """Registry of snippet providers keyed by identifier."""

    def __init__(self, providers: Iterable[SnippetProvider] = ()) -> None:
        self._providers: dict[str, SnippetProvider] = {}
        for provider in providers:
            self.register(provider)

    @property
    def providers(self) -> list[SnippetProvider]:
        return list(self._providers.values())

    def register(self, provider: SnippetProvider) -> None:
        if provider.identifier in self._providers:
            raise ValueError(f"Snippet '{provider.identifier}' is already registered")
        self._providers[provider.identifier] = provider

    def get(self, identifier: str) -> SnippetProvider:
        try:
            return self._providers[identifier]
        except KeyError:
            raise SnippetNotFoundError(identifier, sorted(self._providers)) from None

    def available_snippets(self, document: Document, position: int) -> list[SnippetProvider]:
        available = []
        for provider in self._providers.values():
            try:
                if provider.is_valid_location(document, position):
                    available.append(provider)
            except Exception:
                logger.exception(
                    "Snippet %s failed its location check", provider.identifier
                )
        return available

    async def generate(
        self,
        identifier: str,
        document: Document,
        position: int,
        cancel_event: asyncio.Event | None = None,
    ) -> SnippetResult:
        return await generate_snippet(self.get(identifier), document, position, cancel_event)

    async def apply_snippet(
        self,
        buffer: TextBuffer,
        identifier: str,
        position: int,
        cancel_event: asyncio.Event | None = None,
        require_valid_location: bool = False,
    ) -> SnippetResult:
        """Generate a snippet and apply its edits to ``buffer`` as one unit."""
        provider = self.get(identifier)
        document = buffer.document
        if require_valid_location and not provider.is_valid_location(document, position):
            raise InvalidSnippetLocationError(identifier, position)

        result = await generate_snippet(provider, document, position, cancel_event)
        if result.is_empty:
            return result
        if buffer.text != document.text:
            raise TextChangeError("buffer changed while the snippet was generated")
        buffer.apply_changes(result.changes)
        return result

    def locate_inserted(self, result: SnippetResult, text: str) -> cst.CSTNode | None:
        """Find the construct a result inserted, in the post-edit ``text``."""
        if result.is_empty:
            return None
        provider = self.get(result.identifier)
        return find_snippet_container(
            provider.container_predicate, text, result.changes[0].span.start
        )


def default_snippet_service() -> SnippetService:
    return SnippetService([PropertySnippetProvider()])
