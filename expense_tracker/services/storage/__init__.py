"""
Storage Services Package

Provides the key-value store abstraction, its local implementations and
the expense repository built on top of them.
"""

from expense_tracker.services.storage.interface import (
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.local_store import (
    InMemoryKeyValueStore,
    LocalFileStore,
)
from expense_tracker.services.storage.repository import (
    DEFAULT_NAMESPACE_KEY,
    ExpenseRepository,
    generate_expense_id,
)

__all__ = [
    # Interfaces
    "KeyValueStore",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Local implementations
    "InMemoryKeyValueStore",
    "LocalFileStore",
    # Repository
    "DEFAULT_NAMESPACE_KEY",
    "ExpenseRepository",
    "generate_expense_id",
]
