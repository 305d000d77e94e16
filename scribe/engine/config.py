"""Configuration loaded from environment variables.

All settings have sensible defaults. Override via SCRIBE_* env vars.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_NEWLINES = {"lf": "\n", "crlf": "\r\n"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FormattingOptions:
    """Whitespace conventions used when rendering generated code."""

    indent: str = "    "
    newline: str = "\n"

    @classmethod
    def from_settings(
        cls,
        indent_size: int = 4,
        use_tabs: bool = False,
        newline: str = "lf",
    ) -> FormattingOptions:
        if use_tabs:
            indent = "\t"
        else:
            indent = " " * max(1, indent_size)
        if newline not in _NEWLINES:
            logger.warning("Unknown newline style %r; using lf", newline)
            newline = "lf"
        return cls(indent=indent, newline=_NEWLINES[newline])


@dataclass
class EditorConfig:
    """Editor feature configuration."""

    indent_size: int = 4
    use_tabs: bool = False
    newline: str = "lf"  # "lf" or "crlf"

    # Logging
    log_level: str = "INFO"

    # Rename presentation override ("inline" or "panel"). When unset the
    # user preference decides.
    rename_ui: str | None = None
    rename_theme: str | None = None

    formatting: FormattingOptions = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.formatting = FormattingOptions.from_settings(
            indent_size=self.indent_size,
            use_tabs=self.use_tabs,
            newline=self.newline,
        )

    @classmethod
    def from_env(cls) -> EditorConfig:
        """Load configuration from SCRIBE_* environment variables."""
        scribe_vars = {
            k: v for k, v in os.environ.items() if k.startswith("SCRIBE_")
        }
        if scribe_vars:
            logger.info(
                "EditorConfig.from_env: SCRIBE_* env overrides: %s",
                ", ".join(f"{k}={v}" for k, v in sorted(scribe_vars.items())),
            )
        else:
            logger.debug("EditorConfig.from_env: no SCRIBE_* env vars set, using defaults")

        try:
            indent_size = int(os.getenv("SCRIBE_INDENT_SIZE", str(cls.indent_size)))
        except ValueError:
            logger.warning(
                "Invalid SCRIBE_INDENT_SIZE=%r; using %d",
                os.getenv("SCRIBE_INDENT_SIZE"), cls.indent_size,
            )
            indent_size = cls.indent_size

        rename_ui = os.getenv("SCRIBE_RENAME_UI")
        if rename_ui is not None and rename_ui not in ("inline", "panel"):
            logger.warning("Ignoring invalid SCRIBE_RENAME_UI=%r", rename_ui)
            rename_ui = None

        return cls(
            indent_size=indent_size,
            use_tabs=os.getenv("SCRIBE_USE_TABS", "0").lower() in _TRUE_VALUES,
            newline=os.getenv("SCRIBE_NEWLINE", cls.newline).lower(),
            log_level=os.getenv("SCRIBE_LOG_LEVEL", cls.log_level).upper(),
            rename_ui=rename_ui,
            rename_theme=os.getenv("SCRIBE_RENAME_THEME") or None,
        )
