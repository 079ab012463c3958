"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for the little
persistent state this package keeps (cached translations, the last
exchange rate, the currency preference). This allows us to:
1. Use an in-memory map for tests
2. Use a JSON file on a desktop or server
3. Plug in a platform store (shared preferences, keychain) later
4. Keep the pipeline decoupled from where bytes end up

The interface is intentionally tiny - string keys, string values.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for string key-value storage.

    Implementations must make put() of the same key and value idempotent;
    concurrent writers racing on one key are allowed.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Look up a value.

        Args:
            key: The key to read

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StorageError: If the backend can't be read
        """
        pass

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
