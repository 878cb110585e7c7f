"""Player preference persistence."""

from __future__ import annotations

import json
from pathlib import Path


class PreferenceStore:
    """Loads and saves player preferences in a small JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._values: dict[str, str] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath.exists():
            data = json.loads(self.filepath.read_text())
            self._values = {str(k): str(v) for k, v in data.items()}

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self.filepath.write_text(json.dumps(self._values, indent=2) + "\n")

    # -- queries --------------------------------------------------------------

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self.save()

    def get_difficulty(self, default: str) -> str:
        return self._values.get("difficulty", default)

    def set_difficulty(self, difficulty: str) -> None:
        self.set("difficulty", difficulty)
