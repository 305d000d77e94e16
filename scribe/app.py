"""Scribe CLI — main entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from scribe.engine.config import EditorConfig
from scribe.engine.errors import ScribeError
from scribe.engine.rename.session import InlineRenameService
from scribe.engine.snippets import default_snippet_service
from scribe.engine.workspace import Workspace
from scribe.engine.yaml_config import discover_yaml_config, load_yaml_config
from scribe.shared.services.preferences import UserPreferences
from scribe.tui.handlers.adornment_manager import InlineRenameAdornmentProvider
from scribe.tui.theme import ThemeApplier

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure the root logger for CLI use."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def load_config(config_path: str | None = None, cwd: Path | None = None) -> EditorConfig:
    """Environment config overlaid with scribe.yaml, if one is found."""
    config = EditorConfig.from_env()
    path = Path(config_path) if config_path else discover_yaml_config(cwd or Path.cwd())
    if path is not None:
        config = load_yaml_config(path, base=config)
    return config


def resolve_preferences(config: EditorConfig, path: Path | None = None) -> UserPreferences:
    """User preferences with config overrides applied."""
    prefs = UserPreferences.load(path)
    if config.rename_ui:
        prefs.rename_ui = config.rename_ui
    if config.rename_theme:
        prefs.rename_theme = config.rename_theme
    prefs.validate()
    return prefs


def create_rename_adornment_provider(
    rename_service: InlineRenameService,
    config: EditorConfig | None = None,
    prefs_path: Path | None = None,
) -> InlineRenameAdornmentProvider:
    """Adornment provider whose presentation and theme follow config and preferences."""
    prefs = resolve_preferences(config or load_config(), prefs_path)
    logger.debug(
        "Rename overlays: ui=%s theme=%s", prefs.rename_ui, prefs.rename_theme
    )
    return InlineRenameAdornmentProvider(
        rename_service, prefs, theme=ThemeApplier(prefs.rename_theme)
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scribe",
        description="Editor features: code snippets for Python sources.",
    )
    parser.add_argument("--config", default=None, help="Path to scribe.yaml")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    snippet = sub.add_parser("snippet", help="Insert a snippet into a file")
    snippet.add_argument("identifier", help="Snippet identifier, e.g. prop")
    snippet.add_argument("file", help="Python source file")
    snippet.add_argument("--offset", type=int, required=True, help="Insertion offset")
    snippet.add_argument(
        "--write",
        action="store_true",
        help="Write the result back instead of printing it",
    )
    snippet.add_argument(
        "--strict",
        action="store_true",
        help="Fail unless the snippet is valid at the offset",
    )

    listing = sub.add_parser("snippets", help="List snippets valid at an offset")
    listing.add_argument("file", help="Python source file")
    listing.add_argument("--offset", type=int, required=True, help="Cursor offset")
    return parser


async def _run_snippet(args: argparse.Namespace, config: EditorConfig) -> int:
    path = Path(args.file)
    workspace = Workspace(path.parent.name or "workspace", formatting=config.formatting)
    buffer = workspace.open_buffer(path.read_text(encoding="utf-8"), path=path)
    service = default_snippet_service()
    result = await service.apply_snippet(
        buffer,
        args.identifier,
        args.offset,
        require_valid_location=args.strict,
    )
    if result.is_empty:
        logger.info("Snippet %s produced no edits", args.identifier)
        return 0
    if args.write:
        path.write_text(buffer.text, encoding="utf-8")
        logger.info("Wrote %s", path)
    else:
        sys.stdout.write(buffer.text)
    for placeholder in result.placeholders:
        logger.info(
            "Placeholder %s at [%d, %d)",
            placeholder.name, placeholder.span.start, placeholder.span.end,
        )
    return 0


def _run_listing(args: argparse.Namespace, config: EditorConfig) -> int:
    path = Path(args.file)
    workspace = Workspace(path.parent.name or "workspace", formatting=config.formatting)
    buffer = workspace.open_buffer(path.read_text(encoding="utf-8"), path=path)
    service = default_snippet_service()
    for provider in service.available_snippets(buffer.document, args.offset):
        print(f"{provider.identifier}\t{provider.description}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = load_config(args.config)
    level = "DEBUG" if args.verbose else os.getenv("SCRIBE_LOG_LEVEL", config.log_level)
    configure_logging(level, Path(args.log_file) if args.log_file else None)

    try:
        if args.command == "snippet":
            return asyncio.run(_run_snippet(args, config))
        return _run_listing(args, config)
    except (ScribeError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
