"""Tests for environment config, YAML config and user preferences."""

from __future__ import annotations

import json

from scribe.app import create_rename_adornment_provider, load_config, resolve_preferences
from scribe.engine.config import EditorConfig, FormattingOptions
from scribe.engine.rename.session import InlineRenameService
from scribe.engine.text import TextSpan
from scribe.engine.workspace import Workspace
from scribe.engine.yaml_config import discover_yaml_config, load_yaml_config
from scribe.shared.services.preferences import RenamePresentation, UserPreferences
from scribe.tui.view import EditorView
from scribe.tui.widgets.rename_flyout import RenameDashboard


class TestEditorConfig:
    def test_defaults(self, monkeypatch):
        for key in ("SCRIBE_INDENT_SIZE", "SCRIBE_USE_TABS", "SCRIBE_NEWLINE", "SCRIBE_RENAME_UI"):
            monkeypatch.delenv(key, raising=False)
        config = EditorConfig.from_env()
        assert config.formatting == FormattingOptions(indent="    ", newline="\n")
        assert config.rename_ui is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SCRIBE_INDENT_SIZE", "2")
        monkeypatch.setenv("SCRIBE_NEWLINE", "crlf")
        monkeypatch.setenv("SCRIBE_RENAME_UI", "panel")
        config = EditorConfig.from_env()
        assert config.formatting.indent == "  "
        assert config.formatting.newline == "\r\n"
        assert config.rename_ui == "panel"

    def test_tabs_and_bad_values(self, monkeypatch):
        monkeypatch.setenv("SCRIBE_USE_TABS", "yes")
        monkeypatch.setenv("SCRIBE_INDENT_SIZE", "wide")
        monkeypatch.setenv("SCRIBE_RENAME_UI", "floating")
        config = EditorConfig.from_env()
        assert config.formatting.indent == "\t"
        assert config.indent_size == 4
        assert config.rename_ui is None

    def test_unknown_newline_falls_back_to_lf(self):
        assert FormattingOptions.from_settings(newline="cr").newline == "\n"


class TestYamlConfig:
    def test_overlay(self, tmp_path):
        path = tmp_path / "scribe.yaml"
        path.write_text(
            "formatting:\n"
            "  indent_size: 2\n"
            "rename:\n"
            "  ui: panel\n"
            "  theme: light\n"
        )
        config = load_yaml_config(path, base=EditorConfig())
        assert config.formatting.indent == "  "
        assert config.rename_ui == "panel"
        assert config.rename_theme == "light"

    def test_missing_file_returns_base(self, tmp_path):
        base = EditorConfig(indent_size=8)
        assert load_yaml_config(tmp_path / "absent.yaml", base=base) is base

    def test_malformed_file_returns_base(self, tmp_path):
        path = tmp_path / "scribe.yaml"
        path.write_text("formatting: [unclosed\n")
        base = EditorConfig()
        assert load_yaml_config(path, base=base) is base

    def test_discovery_prefers_dot_scribe(self, tmp_path):
        (tmp_path / ".scribe").mkdir()
        (tmp_path / ".scribe" / "scribe.yaml").write_text("{}\n")
        (tmp_path / "scribe.yaml").write_text("{}\n")
        assert discover_yaml_config(tmp_path) == tmp_path / ".scribe" / "scribe.yaml"

    def test_load_config_discovers_from_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SCRIBE_INDENT_SIZE", raising=False)
        (tmp_path / "scribe.yaml").write_text("formatting:\n  use_tabs: true\n")
        config = load_config(cwd=tmp_path)
        assert config.formatting.indent == "\t"


class TestUserPreferences:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "preferences.json"
        UserPreferences(rename_ui="panel", rename_theme="light").save(path)
        prefs = UserPreferences.load(path)
        assert prefs.presentation is RenamePresentation.PANEL
        assert prefs.rename_theme == "light"

    def test_invalid_values_corrected(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"rename_ui": "sideways", "rename_theme": "", "extra": 1}))
        prefs = UserPreferences.load(path)
        assert prefs.presentation is RenamePresentation.INLINE
        assert prefs.rename_theme == "dark"

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{not json")
        assert UserPreferences.load(path) == UserPreferences()

    def test_config_overrides_preferences(self, tmp_path):
        path = tmp_path / "preferences.json"
        UserPreferences(rename_ui="inline").save(path)
        prefs = resolve_preferences(EditorConfig(rename_ui="panel", rename_theme="light"), path)
        assert prefs.presentation is RenamePresentation.PANEL
        assert prefs.rename_theme == "light"


def test_rename_provider_follows_layered_settings(tmp_path):
    path = tmp_path / "preferences.json"
    UserPreferences(rename_ui="inline", rename_theme="dark").save(path)
    service = InlineRenameService()
    provider = create_rename_adornment_provider(
        service, EditorConfig(rename_ui="panel", rename_theme="light"), path
    )

    buffer = Workspace("project").open_buffer("count = 1\n")
    view = EditorView([buffer])
    provider.view_created(view)
    service.start_session(buffer, TextSpan(0, 5))

    [dashboard] = view.adornment_layer.elements
    assert isinstance(dashboard, RenameDashboard)
    assert dashboard.has_class("rename-theme-light")
    assert dashboard.rename_theme == "light"
    provider.close()
