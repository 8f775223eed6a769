"""
Local Key-Value Store Implementations

DESIGN DECISION: One file per key inside a data directory.
The store mirrors browser local storage: a handful of keys, each holding
one complete string value that is always rewritten as a whole.

Writes go to a temporary file first and are moved into place with
os.replace, so a crash mid-write leaves the previous value intact.
"""

import os
from pathlib import Path
from typing import Optional

from expense_tracker.services.storage.interface import KeyValueStore, StorageError


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Used in tests and for throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class LocalFileStore(KeyValueStore):
    """
    File-backed store.

    Each key maps to `<data_dir>/<key>.json`. The directory is created on
    first write.
    """

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid store key: {key!r}")
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            # Undecodable bytes surface as a corrupt value, not a read failure
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}: {e}")

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}")
