"""Snippet providers and the generation pipeline."""
from .base import SnippetPlaceholder, SnippetProvider, SnippetResult, generate_snippet
from .property_snippet import PropertySnippetProvider
from .service import SnippetService, default_snippet_service, find_snippet_container
from .syntax_facts import PythonSyntaxFacts

__all__ = [
    "SnippetPlaceholder",
    "SnippetProvider",
    "SnippetResult",
    "generate_snippet",
    "PropertySnippetProvider",
    "SnippetService",
    "default_snippet_service",
    "find_snippet_container",
    "PythonSyntaxFacts",
]
