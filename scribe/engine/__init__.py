"""Scribe engine — rename sessions and snippet generation for editor views."""
from .config import EditorConfig, FormattingOptions
from .errors import (
    InvalidSnippetLocationError,
    NoActiveRenameSessionError,
    RenameSessionActiveError,
    RenameSessionError,
    ScribeError,
    SnippetError,
    SnippetGenerationError,
    SnippetNotFoundError,
    TextChangeError,
)
from .signals import Signal, Subscription
from .text import TextChange, TextSpan, apply_text_changes
from .workspace import Document, TextBuffer, Workspace, workspace_for_buffer

__all__ = [
    "EditorConfig",
    "FormattingOptions",
    "InvalidSnippetLocationError",
    "NoActiveRenameSessionError",
    "RenameSessionActiveError",
    "RenameSessionError",
    "ScribeError",
    "SnippetError",
    "SnippetGenerationError",
    "SnippetNotFoundError",
    "TextChangeError",
    "Signal",
    "Subscription",
    "TextChange",
    "TextSpan",
    "apply_text_changes",
    "Document",
    "TextBuffer",
    "Workspace",
    "workspace_for_buffer",
]
