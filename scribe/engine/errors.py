"""Exception hierarchy for the editor features engine.

Specific exceptions for each failure mode. Absence of a rename session or
an unfocused inline view are not errors and never raise.
"""
from __future__ import annotations


class ScribeError(Exception):
    """Base exception for all editor feature errors."""


class RenameSessionError(ScribeError):
    """Base exception for rename session failures."""


class RenameSessionActiveError(RenameSessionError):
    """A rename session is already active."""
    def __init__(self, workspace_name: str):
        self.workspace_name = workspace_name
        super().__init__(
            f"Cannot start rename: a session is already active "
            f"in workspace '{workspace_name}'"
        )


class NoActiveRenameSessionError(RenameSessionError):
    """Commit or cancel requested without an active session."""
    def __init__(self) -> None:
        super().__init__("No rename session is active")


class SnippetError(ScribeError):
    """Base exception for snippet failures."""


class SnippetGenerationError(SnippetError):
    """Snippet synthesis failed; no edits were produced."""
    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Snippet '{identifier}' failed to generate: {reason}")


class SnippetNotFoundError(SnippetError):
    """Requested snippet identifier is not registered."""
    def __init__(self, identifier: str, available: list[str]):
        self.identifier = identifier
        self.available = available
        avail_str = ", ".join(available) if available else "none"
        super().__init__(
            f"Snippet '{identifier}' is not registered. "
            f"Available snippets: {avail_str}"
        )


class InvalidSnippetLocationError(SnippetError):
    """Snippet cannot be inserted at the requested position."""
    def __init__(self, identifier: str, position: int):
        self.identifier = identifier
        self.position = position
        super().__init__(
            f"Snippet '{identifier}' is not valid at position {position}"
        )


class TextChangeError(ScribeError):
    """Edits overlap or fall outside the document; nothing was applied."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot apply text changes: {reason}")
