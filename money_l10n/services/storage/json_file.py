"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object on disk is enough for a translation
cache of short notification strings and a couple of preferences.

TRADEOFFS:
- The whole file is rewritten on every put (fine for small caches)
- No cross-process locking (one app process owns the file)

Writes go to a temporary file that replaces the real one, so a crash
mid-write never leaves a truncated cache behind.
A file that isn't a JSON object (truncated or hand-edited) is read as an
empty store and replaced on the next put.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Union

from money_l10n.audit import get_logger
from money_l10n.services.storage.interface import KeyValueStore, StorageError


logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as one JSON object."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the file once; later calls use the in-memory copy."""
        if self._data is not None:
            return self._data

        if not self._path.exists():
            self._data = {}
            return self._data

        try:
            with self._path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        except ValueError as e:
            # Corrupt file: start empty, the next put rewrites it
            logger.warning("store_file_corrupt", path=str(self._path), error=str(e))
            raw = {}

        if not isinstance(raw, dict):
            logger.warning("store_file_not_object", path=str(self._path), type=type(raw).__name__)
            raw = {}

        self._data = {str(k): str(v) for k, v in raw.items()}
        return self._data

    def _flush(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            data = dict(self._load())
            data[key] = value
            self._flush(data)
            self._data = data
