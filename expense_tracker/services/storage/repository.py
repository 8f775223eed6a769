"""
Expense Repository

Owns the durable expense collection. The whole collection lives as one JSON
array under a single store key; every mutation is a full
read-modify-write of that array.

DESIGN DECISION: Corrupt stored data is never fatal.
If the blob is not valid JSON, not an array, or any record fails schema
validation, the collection is treated as empty and the event is logged.
The next successful mutation overwrites the bad blob.
"""

import json
import time
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from expense_tracker.activity import ActivityLogger
from expense_tracker.models.expense import Expense, ExpenseInput
from expense_tracker.services.storage.interface import (
    KeyValueStore,
    NotFoundError,
    StorageError,
)


DEFAULT_NAMESPACE_KEY = "expense-tracker-data"

_EXPENSE_LIST = TypeAdapter(list[Expense])


def generate_expense_id() -> str:
    """
    Create a new opaque expense id.

    Millisecond timestamp plus 48 bits of uuid4 entropy, e.g.
    `1736070000000-3f9a1c0b7d2e`.
    """
    return f"{int(time.time() * 1000)}-{uuid4().hex[:12]}"


class ExpenseRepository:
    """
    CRUD over the expense collection in a key-value store.

    Single writer, synchronous. No locking is done.
    """

    def __init__(
        self,
        store: KeyValueStore,
        namespace_key: str = DEFAULT_NAMESPACE_KEY,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._key = namespace_key
        self._activity = activity_logger or ActivityLogger()

    @property
    def namespace_key(self) -> str:
        return self._key

    def _load(self) -> list[Expense]:
        try:
            raw = self._store.get(self._key)
        except StorageError as e:
            self._activity.log_error("storage_read_failed", str(e), {"key": self._key})
            raise
        if raw is None:
            return []

        try:
            # JSON numbers are read as Decimal, never as float
            data = json.loads(raw, parse_float=Decimal)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return _EXPENSE_LIST.validate_python(data)
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            self._activity.log_storage_corrupt(self._key, str(e))
            return []

    def _save(self, expenses: list[Expense]) -> None:
        payload = json.dumps(
            [expense.to_record() for expense in expenses],
            ensure_ascii=False,
        )
        try:
            self._store.set(self._key, payload)
        except StorageError as e:
            self._activity.log_error("storage_write_failed", str(e), {"key": self._key})
            raise

    def list(self) -> list[Expense]:
        """
        Return every stored expense, in stored order.

        Empty if the store key is absent or its value is corrupt.
        """
        return self._load()

    def get(self, expense_id: str) -> Optional[Expense]:
        """Return one expense by id, or None."""
        for expense in self._load():
            if expense.id == expense_id:
                return expense
        return None

    def create(self, fields: ExpenseInput) -> Expense:
        """
        Persist a new expense with a freshly assigned id.

        Args:
            fields: Validated expense fields

        Returns:
            The stored Expense
        """
        expenses = self._load()
        existing_ids = {expense.id for expense in expenses}

        expense_id = generate_expense_id()
        while expense_id in existing_ids:
            expense_id = generate_expense_id()

        expense = Expense(id=expense_id, **fields.model_dump(exclude={"id"}))
        expenses.append(expense)
        self._save(expenses)

        self._activity.log_expense_created(
            expense.id, expense.category.value, str(expense.amount)
        )
        return expense

    def update(self, expense_id: str, fields: ExpenseInput) -> Expense:
        """
        Replace every field of an expense except its id.

        Raises:
            NotFoundError: If no expense has this id
        """
        expenses = self._load()

        for index, current in enumerate(expenses):
            if current.id == expense_id:
                updated = Expense(id=expense_id, **fields.model_dump(exclude={"id"}))
                expenses[index] = updated
                self._save(expenses)
                self._activity.log_expense_updated(
                    expense_id, updated.category.value, str(updated.amount)
                )
                return updated

        self._activity.log_expense_not_found(expense_id, "update")
        raise NotFoundError(f"Expense not found: {expense_id}")

    def delete(self, expense_id: str) -> None:
        """Delete an expense by id. Deleting an absent id is a no-op."""
        expenses = self._load()
        remaining = [expense for expense in expenses if expense.id != expense_id]
        existed = len(remaining) != len(expenses)

        # Full rewrite even for a no-op, matching every other mutation
        self._save(remaining)
        self._activity.log_expense_deleted(expense_id, existed)
