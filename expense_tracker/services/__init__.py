"""Services package."""

from expense_tracker.services.storage import (
    DEFAULT_NAMESPACE_KEY,
    ExpenseRepository,
    InMemoryKeyValueStore,
    KeyValueStore,
    LocalFileStore,
    NotFoundError,
    StorageError,
    generate_expense_id,
)

__all__ = [
    "DEFAULT_NAMESPACE_KEY",
    "ExpenseRepository",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "LocalFileStore",
    "NotFoundError",
    "StorageError",
    "generate_expense_id",
]
