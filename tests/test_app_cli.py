"""Tests for the scribe command line."""

from __future__ import annotations

from unittest.mock import patch

from scribe.app import main

SOURCE = "class Point:\n    x = 1\n\n    "

_NO_LOGGING = patch("scribe.app.configure_logging")


def test_snippet_write(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "point.py"
    source.write_text(SOURCE)
    with _NO_LOGGING:
        code = main(["snippet", "prop", str(source), "--offset", str(len(SOURCE)), "--write"])
    assert code == 0
    assert "    def my_property(self) -> int:" in source.read_text()


def test_snippet_prints_without_write(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "point.py"
    source.write_text(SOURCE)
    with _NO_LOGGING:
        code = main(["snippet", "prop", str(source), "--offset", str(len(SOURCE))])
    assert code == 0
    assert "@property" in capsys.readouterr().out
    assert source.read_text() == SOURCE


def test_strict_snippet_at_invalid_offset_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "point.py"
    source.write_text(SOURCE)
    with _NO_LOGGING:
        code = main(["snippet", "prop", str(source), "--offset", "0", "--strict"])
    assert code == 1
    assert source.read_text() == SOURCE


def test_unknown_snippet_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "point.py"
    source.write_text(SOURCE)
    with _NO_LOGGING:
        assert main(["snippet", "ctor", str(source), "--offset", "0"]) == 1


def test_list_snippets(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "point.py"
    source.write_text(SOURCE)
    with _NO_LOGGING:
        code = main(["snippets", str(source), "--offset", str(len(SOURCE))])
    assert code == 0
    assert capsys.readouterr().out == "prop\tproperty\n"
