"""
Activity Models for the Expense Tracker

Every significant action in the core is described by an ActivityEvent and
written to the structured log. This provides:
1. Traceability of mutations and exports while debugging
2. A visible record when stored data had to be discarded as corrupt

DESIGN DECISION: Events are log records only. They are never persisted
next to the expenses, so there is no audit trail to migrate or clean up.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Repository
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"
    STORAGE_CORRUPT = "storage_corrupt"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Export
    EXPORT_COMPLETED = "export_completed"
    EXPORT_EMPTY = "export_empty"

    # System events
    SYSTEM_ERROR = "system_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEvent(BaseModel):
    """A single activity event."""

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: ActivityEventType = Field(
        ...,
        description="Type of event"
    )
    severity: ActivitySeverity = Field(
        default=ActivitySeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'export', 'store')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.expense_created(expense_id, "Food", "12.50")
        event = ActivityEventBuilder.export_empty("csv", "expenses")
    """

    @staticmethod
    def expense_created(
        expense_id: str,
        category: str,
        amount: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_CREATED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense created: {category} {amount}",
            details={
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: str,
        category: str,
        amount: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense updated: {category} {amount}",
            details={
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: str, existed: bool) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense deleted" if existed else "Delete ignored: expense not present"
            ),
            details={"existed": existed},
        )

    @staticmethod
    def expense_not_found(expense_id: str, operation: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_NOT_FOUND,
            severity=ActivitySeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense not found during {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def storage_corrupt(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_CORRUPT,
            severity=ActivitySeverity.WARNING,
            entity_type="store",
            entity_id=key,
            description="Stored expenses are unreadable; treating collection as empty",
            error_message=error_message,
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            entity_type="expense",
            description=f"Expense validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def export_completed(
        export_format: str,
        filename: str,
        record_count: int,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPORT_COMPLETED,
            entity_type="export",
            entity_id=filename,
            description=f"Exported {record_count} expenses as {export_format}",
            details={
                "format": export_format,
                "record_count": record_count,
            },
        )

    @staticmethod
    def export_empty(export_format: str, filename: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPORT_EMPTY,
            severity=ActivitySeverity.WARNING,
            entity_type="export",
            entity_id=filename,
            description="No expenses to export with the selected filters",
            details={"format": export_format},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SYSTEM_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
