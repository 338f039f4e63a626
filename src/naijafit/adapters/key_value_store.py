"""Key-value blob storage for JSON documents."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from naijafit.domain.errors import StorageError

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Interface for storing one JSON value per key."""

    def load(self, key: str, default: object) -> object:
        """Return the value stored at ``key`` or ``default``."""

    def save(self, key: str, value: object) -> None:
        """Store ``value`` at ``key``."""

    def update(
        self, key: str, default: object, change: Callable[[object], object]
    ) -> object:
        """Replace the value at ``key`` with ``change(current)`` atomically.

        No other ``update`` of the same key runs in between the read and the
        write. Exceptions raised by ``change`` abort the write.
        """


@dataclass
class _KeyLocks:
    _guard: threading.Lock = field(default_factory=threading.Lock)
    _locks: dict[str, threading.Lock] = field(default_factory=dict)

    def get(self, key: str) -> threading.Lock:
        # Keys are a fixed set of collection names, so the map stays small.
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store keeping encoded JSON strings."""

    _entries: dict[str, str] = field(default_factory=dict)
    _key_locks: _KeyLocks = field(default_factory=_KeyLocks, repr=False)

    def load(self, key: str, default: object) -> object:
        """Return a decoded copy of the stored value."""
        raw = self._entries.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def save(self, key: str, value: object) -> None:
        """Encode and store a value."""
        self._entries[key] = json.dumps(value)

    def update(
        self, key: str, default: object, change: Callable[[object], object]
    ) -> object:
        """Apply ``change`` to the stored value under the key's lock."""
        with self._key_locks.get(key):
            value = change(self.load(key, default))
            self.save(key, value)
            return value


@dataclass
class JsonFileStore(KeyValueStore):
    """Stores each key as ``<root>/<key>.json``.

    Writes go to a temporary file that replaces the target, so a failed save
    leaves the previous value in place. An unreadable file raises
    ``StorageError`` instead of being treated as empty.
    """

    root: Path
    _key_locks: _KeyLocks = field(default_factory=_KeyLocks, repr=False)

    def load(self, key: str, default: object) -> object:
        """Read and decode a key's file."""
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            _logger.error("Unreadable store file: key=%s path=%s", key, path)
            raise StorageError(f"Corrupt data for {key}") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read {key}") from exc

    def save(self, key: str, value: object) -> None:
        """Encode a value and atomically replace the key's file."""
        path = self._path(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(value, handle, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Failed to write {key}") from exc

    def update(
        self, key: str, default: object, change: Callable[[object], object]
    ) -> object:
        """Read, change and rewrite a key's file under the key's lock."""
        with self._key_locks.get(key):
            value = change(self.load(key, default))
            self.save(key, value)
            return value

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"
