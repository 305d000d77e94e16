"""Per-user rename overlay preferences, persisted as JSON.

Stored at ~/.scribe/preferences.json. Workspace-level settings belong in
scribe.yaml; these follow the user across workspaces.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PREFS_PATH = Path.home() / ".scribe" / "preferences.json"


class RenamePresentation(str, Enum):
    INLINE = "inline"
    PANEL = "panel"


@dataclass
class UserPreferences:
    """User preference settings.

    Attributes:
        rename_ui: How an active rename is shown.
            - "inline": Flyout beside the identifier in the focused view (default).
            - "panel": Dashboard panel in every view showing the workspace.
        rename_theme: Theme name applied to rename overlays.
    """

    rename_ui: str = RenamePresentation.INLINE.value
    rename_theme: str = "dark"

    def validate(self) -> None:
        """Replace unusable values with their defaults."""
        known = {p.value for p in RenamePresentation}
        if self.rename_ui not in known:
            logger.debug("Unknown rename_ui %r; using inline", self.rename_ui)
            self.rename_ui = RenamePresentation.INLINE.value
        if not isinstance(self.rename_theme, str) or not self.rename_theme.strip():
            self.rename_theme = "dark"

    @property
    def presentation(self) -> RenamePresentation:
        return RenamePresentation(self.rename_ui)

    def save(self, path: Path | None = None) -> None:
        """Write to ``path`` via a sibling temp file so readers never see half a file."""
        target = path or PREFS_PATH
        tmp = target.with_suffix(target.suffix + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            logger.warning("Could not save preferences to %s: %s", target, exc)

    @classmethod
    def load(cls, path: Path | None = None) -> UserPreferences:
        """Read preferences; a missing or unreadable file yields defaults."""
        target = path or PREFS_PATH
        if not target.is_file():
            return cls()
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring preferences at %s: %s", target, exc)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences at %s: not a JSON object", target)
            return cls()

        names = {f.name for f in fields(cls)}
        prefs = cls(**{k: v for k, v in data.items() if k in names})
        prefs.validate()
        return prefs
