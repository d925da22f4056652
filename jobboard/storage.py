"""Key-value persistence for the stored session record.

``FileStore`` keeps a single JSON object on disk and plays the part of the
browser's local storage; ``MemoryStore`` is the in-process equivalent.
"""
from __future__ import annotations

import fcntl
import json
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path

from jobboard.log import get_logger

log = get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class FileStore(KeyValueStore):
    """JSON object on disk.

    Updates hold an exclusive lock on a sidecar ``.lock`` file for the whole
    read-modify-write and land via ``os.replace``, so readers never see a
    half-written file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def _lock_path(self) -> Path:
        return self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def _updating(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._lock_path, "a", encoding="utf-8") as lock:
            _lock(lock)
            try:
                yield
            finally:
                _unlock(lock)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable storage file %s: %s", self.path.name, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring storage file %s: expected a JSON object", self.path.name)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._updating():
            data = self._read()
            data[key] = value
            self._write(data)
        log.debug("Stored %s → %s", key, self.path.name)

    def remove(self, key: str) -> None:
        with self._updating():
            data = self._read()
            if key not in data:
                return
            del data[key]
            self._write(data)
        log.debug("Removed %s from %s", key, self.path.name)
