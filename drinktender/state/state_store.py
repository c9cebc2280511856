"""
Persisted key/value store for DrinkTender.

Provides atomic, crash-resistant JSON storage shared by the writer and every
display surface. There is no transaction protocol: each set() rewrites the
file with the latest value and the last write wins.
"""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from drinktender.clock import SystemClock

logger = logging.getLogger(__name__)

LAST_UPDATE_KEY = "lastUpdateTime"


class StateStore(ABC):
    """
    Abstract key/value store.

    Values are JSON-compatible. Setting a key to None removes it. Every
    successful set() also stamps LAST_UPDATE_KEY with the current time.
    """

    def __init__(self, clock=None):
        self._clock = clock or SystemClock()
        self._lock = threading.RLock()

    @abstractmethod
    def _read_all(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def _write_all(self, data: Dict[str, Any]) -> bool:
        ...

    def get(self, key: str) -> Optional[Any]:
        """
        Read a single key.

        Returns:
            Stored value, or None if the key is absent
        """
        return self._read_all().get(key)

    def snapshot(self) -> Dict[str, Any]:
        """Read every key in one pass."""
        return dict(self._read_all())

    def set(self, key: str, value: Any) -> bool:
        """
        Write a single key immediately.

        The whole document is re-read and rewritten under the lock, so a
        conflict between two processes is resolved per document, not per
        field: the later write can drop a field the other process just set.

        Args:
            key: Key to write
            value: JSON-compatible value, or None to remove the key

        Returns:
            True if the write was persisted, False if it was lost
        """
        with self._lock:
            data = self._read_all()
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
            data[LAST_UPDATE_KEY] = self._clock.now().isoformat()
            persisted = self._write_all(data)
        if persisted:
            logger.debug(f"[STORE] {key} <- {value!r}")
        return persisted


class MemoryStateStore(StateStore):
    """In-process store. Visible only to surfaces in the same process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None, clock=None):
        super().__init__(clock=clock)
        self._data: Dict[str, Any] = dict(initial or {})

    def _read_all(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def _write_all(self, data: Dict[str, Any]) -> bool:
        with self._lock:
            self._data = dict(data)
        return True


class JsonStateStore(StateStore):
    """
    JSON file store with atomic writes.

    Uses a temporary file + atomic rename so a reader in another process
    never sees a half-written file. The file is re-read on every access so
    surfaces observe writes made by other processes.
    """

    def __init__(self, path, clock=None):
        """
        Initialize state store.

        Args:
            path: Path to JSON state file
            clock: Time source used to stamp lastUpdateTime
        """
        super().__init__(clock=clock)
        self.path = Path(path)
        logger.debug(f"[STORE] JsonStateStore initialized with path: {self.path}")

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[STORE] Failed to load state from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"[STORE] Ignoring state file {self.path}: top level is not an object")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
            return True
        except OSError as e:
            logger.error(f"[STORE] Failed to save state to {self.path}: {e}")
            # Clean up temp file on error
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            return False
