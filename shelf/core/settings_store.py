from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shelf.core.logging import get_logger
from shelf.core.settings_model import SettingsModel

logger = get_logger(__name__)


class SettingsStore:
    """Load and persist shelf user settings."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Read settings from disk, injecting expected sections."""
        if self._path.exists():
            try:
                raw = json.loads(self._path.read_text())
            except (OSError, json.JSONDecodeError):
                logger.warning("Ignoring unreadable settings file %s", self._path)
                raw = {}
        else:
            raw = {}
        return self._normalize(raw)

    def save(self, settings: dict[str, Any]) -> None:
        """Persist settings to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(settings, indent=4))

    def update_theme(self, settings: dict[str, Any], theme_name: str) -> None:
        """Store the active theme."""
        settings.setdefault("userPreferences", {})["theme"] = theme_name
        self.save(settings)

    def _normalize(self, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            data = {}
        try:
            model = SettingsModel.model_validate(data)
        except ValidationError:
            model = SettingsModel()
        return model.model_dump()
