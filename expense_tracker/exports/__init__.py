"""Export engine package."""

from expense_tracker.exports.engine import (
    ExportDocument,
    ExportEmptyError,
    ExportError,
    ExportFormat,
    default_export_stem,
    export_expenses,
    render_csv,
    render_json,
    render_report,
)

__all__ = [
    "ExportDocument",
    "ExportEmptyError",
    "ExportError",
    "ExportFormat",
    "default_export_stem",
    "export_expenses",
    "render_csv",
    "render_json",
    "render_report",
]
