"""
Abstract Storage Interface

DESIGN DECISION: The repository talks to a tiny key-value interface.
This allows us to:
1. Keep the whole collection under one fixed key, like browser local storage
2. Use in-memory storage for testing
3. Swap the on-disk layout without touching the repository

The interface is intentionally simple - get, set, remove.
Values are opaque strings; the repository owns their format.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a local key-value store.

    Any storage implementation (in-memory, files on disk, ...)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The store key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: The store key
            value: The full new value

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is a no-op.

        Args:
            key: The store key
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
