"""
Export Engine

Turns an already filtered, already ordered list of expenses into a
downloadable document.

GUARANTEES:
- Rows appear in the order given; the engine never re-sorts
- The input list is never mutated and storage is never touched
- Same input + same format gives byte-identical content
- An empty list is refused with ExportEmptyError; no document is produced
"""

import csv
import io
import json
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from expense_tracker.formatting import format_currency, format_plain_amount
from expense_tracker.models.expense import Expense
from expense_tracker.queries.aggregation import describe_date_range, export_stats


CSV_HEADER = ["Date", "Category", "Amount", "Description"]


class ExportError(Exception):
    """Error while producing an export."""
    pass


class ExportEmptyError(ExportError):
    """No expenses matched the export selection."""
    pass


class ExportFormat(str, Enum):
    """
    Supported export formats.

    REPORT is a plain-text summary report, written with a .txt extension.
    """
    CSV = "csv"
    JSON = "json"
    REPORT = "report"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.JSON: "json",
    ExportFormat.REPORT: "txt",
}

_MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.JSON: "application/json",
    ExportFormat.REPORT: "text/plain;charset=utf-8",
}


class ExportDocument(BaseModel):
    """A rendered export, ready to hand to the user."""

    filename: str = Field(
        ...,
        description="Stem plus the format extension"
    )
    export_format: ExportFormat
    media_type: str
    content: bytes
    record_count: int = Field(ge=1)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def write_to(self, directory: Union[str, Path]) -> Path:
        """Write the document into `directory` and return its path."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / self.filename
        path.write_bytes(self.content)
        return path


# =============================================================================
# RENDERERS
# =============================================================================

def render_csv(expenses: list[Expense]) -> str:
    """Quoted CSV with a Date,Category,Amount,Description header."""
    buf = io.StringIO()
    buf.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for expense in expenses:
        writer.writerow([
            expense.date.isoformat(),
            expense.category.value,
            format_plain_amount(expense.amount),
            expense.description,
        ])
    return buf.getvalue()


def render_json(expenses: list[Expense]) -> str:
    """JSON array of the expense records, in the given order."""
    return json.dumps(
        [expense.to_record() for expense in expenses],
        indent=2,
        ensure_ascii=False,
    )


def render_report(expenses: list[Expense], currency_symbol: str = "$") -> str:
    """
    Plain-text summary report.

    Header figures (records, total, date range, per-category counts)
    followed by a fixed-width table of every expense.
    """
    stats = export_stats(expenses)

    lines = [
        "Expense Report",
        "==============",
        "",
        f"Total Records: {stats.total_records}",
        f"Total Amount: {format_currency(stats.total_amount, currency_symbol)}",
        f"Date Range: {describe_date_range(stats.first_date, stats.last_date)}",
        "",
        "By Category:",
    ]
    for category, count in stats.category_counts.items():
        noun = "record" if count == 1 else "records"
        lines.append(f"  {category.value}: {count} {noun}")

    lines.append("")
    lines.append(f"{'Date':<10}  {'Category':<14}  {'Amount':>12}  Description")
    lines.append(f"{'-' * 10}  {'-' * 14}  {'-' * 12}  {'-' * 11}")
    for expense in expenses:
        amount = format_currency(expense.amount, currency_symbol)
        lines.append(
            f"{expense.date.isoformat():<10}  {expense.category.value:<14}  "
            f"{amount:>12}  {expense.description}"
        )

    return "\n".join(lines) + "\n"


# =============================================================================
# ENTRY POINTS
# =============================================================================

def default_export_stem(
    today: Optional[date] = None,
    prefix: str = "expenses-export",
) -> str:
    """Default filename stem, e.g. 'expenses-export-2025-01-05'."""
    day = today if today is not None else date.today()
    return f"{prefix}-{day.isoformat()}"


def export_expenses(
    export_format: Union[ExportFormat, str],
    filename: str,
    expenses: list[Expense],
    currency_symbol: str = "$",
) -> ExportDocument:
    """
    Render `expenses` in the requested format.

    Args:
        export_format: csv, json or report
        filename: Filename stem; the format extension is appended
        expenses: Filtered list, in the order rows should appear
        currency_symbol: Used by the report format only

    Raises:
        ExportEmptyError: If `expenses` is empty
        ExportError: If the format is unknown
    """
    try:
        fmt = ExportFormat(export_format)
    except ValueError:
        raise ExportError(f"Unsupported export format: {export_format}")

    if not expenses:
        raise ExportEmptyError("No expenses to export with the selected filters")

    if fmt == ExportFormat.CSV:
        text = render_csv(expenses)
    elif fmt == ExportFormat.JSON:
        text = render_json(expenses)
    else:
        text = render_report(expenses, currency_symbol)

    return ExportDocument(
        filename=f"{filename}.{fmt.extension}",
        export_format=fmt,
        media_type=fmt.media_type,
        content=text.encode("utf-8"),
        record_count=len(expenses),
    )
