"""Per-view manager that shows the rename overlay while a session is active.

One manager exists for each open editor view. It listens for active
session changes and for the view closing, and rebuilds the view's rename
adornment on the view's own execution context.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Protocol

from scribe.engine.rename.registry import ViewModelRegistry
from scribe.engine.rename.session import InlineRenameService, RenameSession
from scribe.engine.rename.view_models import (
    RenameDashboardViewModel,
    RenameFlyoutViewModel,
)
from scribe.engine.text import TextSpan
from scribe.shared.services.preferences import RenamePresentation
from scribe.tui.adornment_layer import AdornmentPositioning
from scribe.tui.theme import RenameColorUpdater, ThemeApplier
from scribe.tui.view import EditorView
from scribe.tui.widgets.rename_flyout import RenameDashboard, RenameFlyout

logger = logging.getLogger(__name__)


class RenameOptions(Protocol):
    @property
    def presentation(self) -> RenamePresentation: ...


def compute_identifier_selection(trigger_span: TextSpan, selection: TextSpan) -> TextSpan:
    """Map the editor selection onto the identifier being renamed.

    An empty selection selects the whole identifier; otherwise the span is
    the selection shifted to be relative to the identifier's start.
    """
    if selection.is_empty:
        return TextSpan(0, trigger_span.length)
    return TextSpan(selection.start - trigger_span.start, selection.length)


def _dispose_overlay(element: object) -> None:
    if isinstance(element, (RenameFlyout, RenameDashboard)):
        element.dispose()


class InlineRenameAdornmentManager:
    """Keeps one view's rename adornment in step with the active session."""

    def __init__(
        self,
        view: EditorView,
        rename_service: InlineRenameService,
        options: RenameOptions,
        registry: ViewModelRegistry,
        theme: ThemeApplier | None = None,
        color_updater: RenameColorUpdater | None = None,
    ) -> None:
        self._view = view
        self._rename_service = rename_service
        self._options = options
        self._registry = registry
        self._theme = theme
        self._color_updater = color_updater
        self._adornment_layer = view.adornment_layer

        self._subscriptions = ExitStack()
        self._subscriptions.enter_context(
            rename_service.active_session_changed.connect(self._on_active_session_changed)
        )
        self._subscriptions.enter_context(view.closed.connect(self._on_view_closed))
        self._disposed = False

        self._update_adornments()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._subscriptions.close()
        if not self._view.is_closed:
            # No longer subscribed, so nothing else would take the overlay down.
            self._view.dispatch(self._adornment_layer.remove_all)
        logger.debug("Adornment manager disposed for %r", self._view)

    def refresh(self) -> None:
        """Recompute the adornment on the view's execution context."""
        self._view.dispatch(self._update_adornments)

    # ── signal handlers ──────────────────────────────────────────────

    def _on_view_closed(self) -> None:
        self.dispose()

    def _on_active_session_changed(self) -> None:
        self._view.dispatch(self._update_adornments)

    # ── adornment computation ────────────────────────────────────────

    def _update_adornments(self) -> None:
        self._adornment_layer.remove_all()
        if self._disposed:
            return

        session = self._rename_service.active_session
        if session is None or not self._view.includes_workspace(session.workspace):
            return

        if self._color_updater is not None:
            self._color_updater.update_colors()

        adornment = self._create_adornment(session)
        if adornment is None:
            return

        if self._theme is not None:
            self._theme.apply_theme_to_element(adornment)

        # No visual span: buffer edits under the identifier must not
        # remove the overlay.
        self._adornment_layer.add(
            adornment,
            AdornmentPositioning.VIEWPORT_RELATIVE,
            teardown=_dispose_overlay,
            visual_span=None,
        )
        logger.debug("Installed %s for %r", type(adornment).__name__, session)

    def _create_adornment(
        self, session: RenameSession
    ) -> RenameFlyout | RenameDashboard | None:
        if self._options.presentation is RenamePresentation.INLINE:
            if not self._view.has_focus:
                # The flyout dismisses itself on focus loss, so unfocused
                # views never carry one.
                return None

            identifier_selection = compute_identifier_selection(
                session.trigger_span, self._view.primary_selection
            )
            view_model = self._registry.get_or_create(
                session,
                lambda s: RenameFlyoutViewModel(s, identifier_selection),
                kind=RenamePresentation.INLINE,
            )
            return RenameFlyout(view_model, self._view)

        view_model = self._registry.get_or_create(
            session,
            RenameDashboardViewModel,
            kind=RenamePresentation.PANEL,
        )
        return RenameDashboard(view_model, self._view)


class InlineRenameAdornmentProvider:
    """Creates a manager for each opened view; all share one registry."""

    def __init__(
        self,
        rename_service: InlineRenameService,
        options: RenameOptions,
        theme: ThemeApplier | None = None,
        color_updater: RenameColorUpdater | None = None,
    ) -> None:
        self._rename_service = rename_service
        self._options = options
        self._theme = theme
        self._color_updater = color_updater
        self.registry = ViewModelRegistry(rename_service)
        self._managers: list[InlineRenameAdornmentManager] = []

    @property
    def managers(self) -> list[InlineRenameAdornmentManager]:
        self._managers = [m for m in self._managers if not m.is_disposed]
        return list(self._managers)

    def view_created(self, view: EditorView) -> InlineRenameAdornmentManager:
        manager = InlineRenameAdornmentManager(
            view,
            self._rename_service,
            self._options,
            self.registry,
            theme=self._theme,
            color_updater=self._color_updater,
        )
        self._managers = [m for m in self._managers if not m.is_disposed]
        self._managers.append(manager)
        return manager

    def close(self) -> None:
        for manager in self._managers:
            manager.dispose()
        self._managers = []
        self.registry.close()
