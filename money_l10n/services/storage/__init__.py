"""
Storage Services Package

Provides the key-value interface and its implementations.
"""

from money_l10n.services.storage.interface import (
    KeyValueStore,
    StorageError,
)
from money_l10n.services.storage.json_file import JsonFileKeyValueStore
from money_l10n.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
