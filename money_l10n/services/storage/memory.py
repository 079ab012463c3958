"""In-memory key-value store, used in tests and as the default cache."""

import threading
from typing import Optional

from money_l10n.services.storage.interface import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents last as long as the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
