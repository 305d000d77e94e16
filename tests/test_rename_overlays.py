"""Tests for rename overlay widgets, themes and the mounted adornment layer."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

from textual.app import App, ComposeResult
from textual.containers import Container

from scribe.engine.rename.registry import ViewModelRegistry
from scribe.engine.rename.session import InlineRenameService, RenameSession
from scribe.engine.rename.view_models import (
    RenameDashboardViewModel,
    RenameFlyoutViewModel,
)
from scribe.engine.text import TextSpan
from scribe.engine.workspace import Workspace
from scribe.shared.services.preferences import RenamePresentation
from scribe.tui.adornment_layer import AdornmentLayer, AdornmentPositioning, MountedAdornmentLayer
from scribe.tui.handlers.adornment_manager import InlineRenameAdornmentManager
from scribe.tui.theme import ThemeApplier
from scribe.tui.view import EditorView, make_textual_dispatcher
from scribe.tui.widgets.rename_flyout import RenameDashboard, RenameFlyout

SOURCE = "velocity = 3\n"


def _session() -> RenameSession:
    workspace = Workspace("project")
    buffer = workspace.open_buffer(SOURCE)
    return RenameSession(workspace, buffer, TextSpan(0, 8))


def test_flyout_highlights_selected_part_of_identifier():
    session = _session()
    view_model = RenameFlyoutViewModel(session, TextSpan(2, 3))
    flyout = RenameFlyout(view_model, EditorView(session.workspace.buffers))

    rendered = flyout.render()

    assert rendered.plain == "velocity"
    assert any(span.start == 2 and span.end == 5 for span in rendered.spans)


def test_dashboard_renders_header():
    session = _session()
    dashboard = RenameDashboard(
        RenameDashboardViewModel(session), EditorView(session.workspace.buffers)
    )
    assert dashboard.render().plain.startswith("Rename: velocity")


def test_overlay_dispose_is_idempotent():
    session = _session()
    dashboard = RenameDashboard(
        RenameDashboardViewModel(session), EditorView(session.workspace.buffers)
    )
    dashboard.dispose()
    dashboard.dispose()
    assert dashboard.is_disposed


def test_theme_applier_tags_overlay():
    session = _session()
    dashboard = RenameDashboard(
        RenameDashboardViewModel(session), EditorView(session.workspace.buffers)
    )
    ThemeApplier("light").apply_theme_to_element(dashboard)
    assert dashboard.has_class("rename-theme-light")
    assert dashboard.rename_theme == "light"

    ThemeApplier("dark").apply_theme_to_element(dashboard)
    assert not dashboard.has_class("rename-theme-light")
    assert dashboard.has_class("rename-theme-dark")


def test_unknown_theme_falls_back_to_dark():
    assert ThemeApplier("neon").theme == "dark"


def test_adornment_layer_runs_each_teardown_once():
    layer = AdornmentLayer()
    torn_down: list[str] = []
    layer.add("a", AdornmentPositioning.VIEWPORT_RELATIVE, teardown=torn_down.append)
    layer.add("b", AdornmentPositioning.TEXT_RELATIVE, teardown=torn_down.append)

    layer.remove_all()
    layer.remove_all()

    assert torn_down == ["a", "b"]
    assert layer.adornments == []


class _EditorHost(App):
    def compose(self) -> ComposeResult:
        yield Container(id="surface")


def test_mounted_layer_tracks_session():
    async def _run() -> None:
        app = _EditorHost()
        async with app.run_test(size=(80, 20)) as pilot:
            await pilot.pause()
            surface = app.query_one("#surface", Container)
            service = InlineRenameService()
            registry = ViewModelRegistry(service)
            buffer = Workspace("project").open_buffer(SOURCE)
            view = EditorView(
                [buffer],
                adornment_layer=MountedAdornmentLayer(surface),
                has_focus=True,
                dispatcher=make_textual_dispatcher(app),
            )
            InlineRenameAdornmentManager(
                view,
                service,
                SimpleNamespace(presentation=RenamePresentation.INLINE),
                registry,
            )

            service.start_session(buffer, TextSpan(0, 8))
            await pilot.pause()
            assert len(surface.query(RenameFlyout)) == 1

            service.cancel()
            await pilot.pause()
            assert len(surface.query(RenameFlyout)) == 0

    asyncio.run(_run())
