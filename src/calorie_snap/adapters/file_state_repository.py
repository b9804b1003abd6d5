"""Local JSON file store for the state blob."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from calorie_snap.services.state import StateLoadError, StateRepository

_logger = logging.getLogger(__name__)


@dataclass
class FileStateRepository(StateRepository):
    """Keeps each key as an entry of one JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the blob stored under a key."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a blob, replacing the file atomically.

        An unreadable file is replaced by one holding only this key.
        """
        try:
            entries = self._read()
        except StateLoadError:
            _logger.warning("Overwriting unreadable state file %s", self.path)
            entries = {}
        entries[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(entries), encoding="utf-8")
        tmp_path.replace(self.path)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise StateLoadError(f"State file {self.path} is not valid JSON") from exc
        return data if isinstance(data, dict) else {}
