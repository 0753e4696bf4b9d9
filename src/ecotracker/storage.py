"""Key-value stores holding opaque string blobs.

The stores mirror the browser ``localStorage`` contract used by the original
apps: string keys, string values, and no interpretation of the values.
:class:`JsonFileStore` keeps every entry in a single JSON object on disk.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Protocol

import portalocker

logger = logging.getLogger(__name__)

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore"]


class KeyValueStore(Protocol):
    """Protocol implemented by every store backend."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None``."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""


class MemoryStore:
    """In-process store, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


@contextmanager
def _acquire_store_lock(path: Path) -> Iterator[IO[bytes]]:
    """Hold an exclusive lock on ``<path>.lock`` for read-modify-write cycles."""
    lock_path = path.with_suffix(path.suffix + ".lock")
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    with lock_path.open("a+b") as lock_fp:
        portalocker.lock(lock_fp, portalocker.LOCK_EX)
        try:
            yield lock_fp
        finally:
            portalocker.unlock(lock_fp)


class JsonFileStore:
    """Store backed by a single JSON object file.

    Reads tolerate a missing or corrupt file (treated as empty, logged at
    WARNING for corruption). Writes replace the file atomically and
    propagate :class:`OSError`.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with _acquire_store_lock(self.path):
            items = self._read()
            items[key] = value
            self._write(items)

    def remove_item(self, key: str) -> None:
        with _acquire_store_lock(self.path):
            items = self._read()
            if key not in items:
                return
            del items[key]
            self._write(items)

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt store file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring non-object store file %s", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, ensure_ascii=False, indent=2, sort_keys=True)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
