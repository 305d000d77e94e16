"""YAML configuration loader.

Loads an optional ``scribe.yaml`` layered over the environment config.

Example YAML:
    formatting:
      indent_size: 2
      use_tabs: false
      newline: lf

    rename:
      ui: panel       # or "inline"
      theme: light
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import yaml

from .config import EditorConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".scribe/scribe.yaml", "scribe.yaml")


def discover_yaml_config(cwd: Path) -> Path | None:
    """Return the first config file found under ``cwd``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def load_yaml_config(
    path: str | Path,
    base: EditorConfig | None = None,
) -> EditorConfig:
    """Overlay settings from a YAML file onto ``base``.

    A missing file returns ``base`` unchanged; a malformed one is logged
    and ignored.
    """
    config = base or EditorConfig()
    path = Path(path)
    if not path.is_file():
        logger.debug("load_yaml_config: %s not found; using base config", path)
        return config
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to load %s (%s); using base config", path, exc)
        return config
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top level is not a mapping", path)
        return config

    overrides: dict = {}
    formatting = data.get("formatting") or {}
    if isinstance(formatting, dict):
        if "indent_size" in formatting:
            overrides["indent_size"] = int(formatting["indent_size"])
        if "use_tabs" in formatting:
            overrides["use_tabs"] = bool(formatting["use_tabs"])
        if "newline" in formatting:
            overrides["newline"] = str(formatting["newline"]).lower()

    rename = data.get("rename") or {}
    if isinstance(rename, dict):
        ui = rename.get("ui")
        if ui in ("inline", "panel"):
            overrides["rename_ui"] = ui
        elif ui is not None:
            logger.warning("Ignoring invalid rename.ui=%r in %s", ui, path)
        if rename.get("theme"):
            overrides["rename_theme"] = str(rename["theme"])

    logger.info(
        "load_yaml_config: loaded %s (keys: %s)",
        path, ", ".join(sorted(overrides)) or "none",
    )
    return replace(config, **overrides)
