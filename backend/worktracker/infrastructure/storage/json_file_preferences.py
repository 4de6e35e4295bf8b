"""Local JSON-file preferences store — the on-disk equivalent of app preferences.

File layout:
    <preferences_file>         — one JSON object mapping key → string value
    <preferences_file>.tmp     — transient; written then renamed over the file

Writes go to the temporary file first and are moved into place with
``os.replace``, so a crash mid-write leaves the previous file intact.
"""

import json
import logging
import os
from pathlib import Path

from worktracker.application.interfaces import PreferencesStore

logger = logging.getLogger(__name__)


class JsonFilePreferences(PreferencesStore):
    """Infrastructure adapter storing string preferences in a single JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read the preferences file, returning {} if missing or corrupt."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s — treating as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not hold a JSON object — treating as empty", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    async def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    async def set(self, key: str, value: str) -> bool:
        data = self._read_all()
        data[key] = value
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            logger.error("Could not write %s: %s", self._path, exc)
            if tmp_path.exists():
                tmp_path.unlink()
            return False
        logger.debug("Wrote key '%s' to %s (%d chars)", key, self._path, len(value))
        return True
