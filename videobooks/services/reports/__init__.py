"""Spreadsheet report package."""

from videobooks.services.reports.exporter import (
    DAILY_COLUMNS,
    DAILY_SHEET,
    PAYMENT_COLUMNS,
    PAYMENTS_SHEET,
    PROJECT_COLUMNS,
    PROJECTS_SHEET,
    SUMMARY_FIELDS,
    SUMMARY_SHEET,
    NothingToExportError,
    ReportExporter,
    ReportFile,
    client_report_filename,
    daily_report_filename,
    sanitize_filename,
)

__all__ = [
    "DAILY_COLUMNS",
    "DAILY_SHEET",
    "PAYMENT_COLUMNS",
    "PAYMENTS_SHEET",
    "PROJECT_COLUMNS",
    "PROJECTS_SHEET",
    "SUMMARY_FIELDS",
    "SUMMARY_SHEET",
    "NothingToExportError",
    "ReportExporter",
    "ReportFile",
    "client_report_filename",
    "daily_report_filename",
    "sanitize_filename",
]
