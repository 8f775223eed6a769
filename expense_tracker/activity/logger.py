"""
Activity Logger

DESIGN DECISION: Every mutation, export and storage recovery is logged.
This provides:
1. Traceability while debugging
2. A visible trace when corrupt stored data is discarded

The activity logger:
- Writes structured JSON lines through structlog
- Never persists events next to the expenses
- Never raises into the caller because a log line failed
"""

import logging
from typing import Optional

import structlog

from expense_tracker.models.activity import ActivityEvent, ActivityEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route the structured log to stderr at the given level.

    structlog hands finished lines to the stdlib logger, so the stdlib
    level is what filters them.
    """
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger("expense_tracker").setLevel(level.upper())


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger_name: str = "expense_tracker.activity"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Returns False when the log write itself failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("activity_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("activity_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception:
            return False

        return True

    def log_expense_created(self, expense_id: str, category: str, amount: str) -> None:
        self.log(ActivityEventBuilder.expense_created(expense_id, category, amount))

    def log_expense_updated(self, expense_id: str, category: str, amount: str) -> None:
        self.log(ActivityEventBuilder.expense_updated(expense_id, category, amount))

    def log_expense_deleted(self, expense_id: str, existed: bool) -> None:
        self.log(ActivityEventBuilder.expense_deleted(expense_id, existed))

    def log_expense_not_found(self, expense_id: str, operation: str) -> None:
        self.log(ActivityEventBuilder.expense_not_found(expense_id, operation))

    def log_storage_corrupt(self, key: str, error_message: str) -> None:
        """Log that the stored blob was discarded."""
        self.log(ActivityEventBuilder.storage_corrupt(key, error_message))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(ActivityEventBuilder.validation_failed(issues))

    def log_export_completed(
        self,
        export_format: str,
        filename: str,
        record_count: int,
    ) -> None:
        self.log(
            ActivityEventBuilder.export_completed(export_format, filename, record_count)
        )

    def log_export_empty(self, export_format: str, filename: str) -> None:
        self.log(ActivityEventBuilder.export_empty(export_format, filename))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(ActivityEventBuilder.system_error(error_type, error_message, details))
