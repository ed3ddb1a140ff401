"""Key/value persistence used by the high-score table.

Both stores follow the same small contract: ``load(key)`` returns the stored
string or ``None`` and ``save(key, value)`` reports success as a bool.
Failures never raise; callers degrade to in-memory state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from logging_utils import log_debug


class MemoryStore:
    """Process-local store; also handy as a test double."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True


class JsonFileStore:
    """Keep every key in a single JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            log_debug(f"JsonFileStore read failed path={self.path}: {exc}")
            return {}
        if not isinstance(data, dict):
            log_debug(f"JsonFileStore ignoring non-object root in {self.path}")
            return {}
        return data

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> bool:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle)
        except OSError as exc:
            log_debug(f"JsonFileStore write failed path={self.path}: {exc}")
            return False
        return True
