# store.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Protocol, Union
import json
import logging
import os
import tempfile
import threading

logger = logging.getLogger(__name__)


class PersistenceStore(Protocol):
    """Named integers that outlive the process (only the high score, in practice)."""

    def get(self, key: str) -> int: ...
    def set(self, key: str, value: int) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Dict[str, int] | None = None):
        self._values: Dict[str, int] = dict(initial or {})

    def get(self, key: str) -> int:
        return self._values.get(key, 0)

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)


class JsonFileStore:
    """
    Store backed by a single JSON object on disk, e.g. {"HighScore": 42}.

    A missing or unreadable file reads as empty. Writes go to a temp file
    in the same directory and are swapped in with os.replace, so a crash
    mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, int]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Failed to read %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> int:
        with self._lock:
            value = self._load().get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Ignoring non-integer %r for %s in %s", value, key, self.path)
            return 0
        return value

    def set(self, key: str, value: int) -> None:
        with self._lock:
            data = self._load()
            data[key] = int(value)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp, self.path)
            except BaseException:
                try:
                    os.unlink(tmp)
                except FileNotFoundError:
                    pass
                raise
        logger.debug("Saved %s=%d to %s", key, value, self.path)
