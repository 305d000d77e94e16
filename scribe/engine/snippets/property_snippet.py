"""The ``prop`` snippet: a read-only property backed by a private attribute.

Generates::

    @property
    def my_property(self) -> int:
        return self._my_property
"""
from __future__ import annotations

import asyncio
import logging
import re

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from ..text import TextSpan, line_prefix, offset_of
from ..workspace import Document
from .base import SnippetPlaceholder
from .syntax_facts import PythonSyntaxFacts

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_NAME = "my_property"
DEFAULT_PROPERTY_TYPE = "int"


def _unique_name(
    text: str, base: str, cancel_event: asyncio.Event | None = None
) -> str | None:
    name = base
    suffix = 1
    while re.search(rf"\b_?{re.escape(name)}\b", text):
        if cancel_event is not None and cancel_event.is_set():
            return None
        name = f"{base}{suffix}"
        suffix += 1
    return name


class PropertySnippetProvider:
    """Snippet provider for Python property declarations."""

    identifier = "prop"
    description = "property"

    def __init__(
        self,
        syntax_facts: PythonSyntaxFacts | None = None,
        property_type: str = DEFAULT_PROPERTY_TYPE,
    ) -> None:
        self._syntax_facts = syntax_facts or PythonSyntaxFacts()
        self._property_type = property_type

    async def synthesize(
        self,
        document: Document,
        position: int,
        cancel_event: asyncio.Event | None = None,
    ) -> cst.FunctionDef | None:
        if not 0 <= position <= len(document.text):
            raise ValueError(
                f"position {position} is outside a document of length {len(document.text)}"
            )
        name = _unique_name(document.text, DEFAULT_PROPERTY_NAME, cancel_event)
        if name is None or (cancel_event is not None and cancel_event.is_set()):
            logger.debug("prop synthesis stopped: cancelled")
            return None
        return cst.FunctionDef(
            name=cst.Name(name),
            params=cst.Parameters(params=[cst.Param(name=cst.Name("self"))]),
            body=cst.IndentedBlock(
                body=[
                    cst.SimpleStatementLine(
                        body=[
                            cst.Return(
                                value=cst.Attribute(
                                    value=cst.Name("self"),
                                    attr=cst.Name(f"_{name}"),
                                )
                            )
                        ]
                    )
                ]
            ),
            decorators=[cst.Decorator(decorator=cst.Name("property"))],
            returns=cst.Annotation(annotation=cst.parse_expression(self._property_type)),
        )

    def container_predicate(self, node: cst.CSTNode | None) -> bool:
        return self._syntax_facts.is_property_declaration(node)

    def is_valid_location(self, document: Document, position: int) -> bool:
        """Valid at the start of a statement inside a class body."""
        text = document.text
        if not 0 <= position <= len(text):
            return False
        prefix = line_prefix(text, position)
        if prefix.strip():
            return False
        try:
            wrapper = MetadataWrapper(cst.parse_module(text))
        except cst.ParserSyntaxError:
            logger.debug("is_valid_location: document does not parse")
            return False
        positions = wrapper.resolve(PositionProvider)
        line = text.count("\n", 0, position) + 1
        lines = text.splitlines()

        for node, code_range in positions.items():
            if not self._syntax_facts.is_class_declaration(node):
                continue
            if not isinstance(node.body, cst.IndentedBlock) or not node.body.body:
                continue
            body_column = positions[node.body.body[0]].start.column
            if len(prefix) != body_column or line <= code_range.start.line:
                continue
            if line <= code_range.end.line:
                return True
            # Blank lines trailing the class still belong to its body.
            if all(not l.strip() for l in lines[code_range.end.line:line - 1]):
                return True
        return False

    def placeholders(self, rendered: str) -> list[SnippetPlaceholder]:
        wrapper = MetadataWrapper(cst.parse_module(rendered))
        positions = wrapper.resolve(PositionProvider)
        function = next(
            n for n in wrapper.module.body if isinstance(n, cst.FunctionDef)
        )
        result: list[SnippetPlaceholder] = []
        if function.returns is not None:
            result.append(self._placeholder("type", rendered, positions[function.returns.annotation]))
        result.append(self._placeholder("name", rendered, positions[function.name]))
        return result

    @staticmethod
    def _placeholder(name: str, text: str, code_range) -> SnippetPlaceholder:
        start = offset_of(text, code_range.start.line, code_range.start.column)
        end = offset_of(text, code_range.end.line, code_range.end.column)
        return SnippetPlaceholder(name=name, span=TextSpan.from_bounds(start, end))
