"""Rename session lifecycle and the view models shared across views."""
from .registry import ViewModelRegistry
from .session import InlineRenameService, RenameSession, RenameSessionState
from .view_models import RenameDashboardViewModel, RenameFlyoutViewModel

__all__ = [
    "InlineRenameService",
    "RenameSession",
    "RenameSessionState",
    "RenameDashboardViewModel",
    "RenameFlyoutViewModel",
    "ViewModelRegistry",
]
