"""
Excel report export.

Two reports, both written as .xlsx workbooks with openpyxl:

Client report, "<client>_report.xlsx":
    Summary   Field | Value, then the SUMMARY_FIELDS rows
    Projects  PROJECT_COLUMNS, one row per project
    Payments  PAYMENT_COLUMNS, one row per payment

Daily report, "daily_report_<YYYY-MM-DD>.xlsx":
    Daily Report   Date | <day>
                   DAILY_COLUMNS, one row per payment on that day
                   Total | <sum>

Sheet names and column orders are constants so other tools can read
the files back.
"""

import io
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from videobooks.config import ReportSettings, get_settings
from videobooks.models.records import Client, ClientLedger, Payment
from videobooks.queries.summaries import find_client, local_day, payments_on_date, total_amount


XLSX_EXTENSION = "xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SUMMARY_SHEET = "Summary"
PROJECTS_SHEET = "Projects"
PAYMENTS_SHEET = "Payments"
DAILY_SHEET = "Daily Report"

SUMMARY_COLUMNS = ["Field", "Value"]
SUMMARY_FIELDS = [
    "Client",
    "Client Since",
    "Total Projects",
    "Total Earned",
    "Total Paid",
    "Outstanding Balance",
]
PROJECT_COLUMNS = ["Date", "Videos", "Rate per Video", "Total"]
PAYMENT_COLUMNS = ["Date", "Amount", "Notes"]
DAILY_COLUMNS = ["Client", "Amount", "Notes"]
DAILY_DATE_LABEL = "Date"
DAILY_TOTAL_LABEL = "Total"

MAX_FILENAME_STEM = 100

_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f\s]+')
_WINDOWS_RESERVED = {
    "CON", "PRN", "AUX", "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


class NothingToExportError(Exception):
    """The requested report would have no rows; no file was produced."""
    pass


@dataclass(frozen=True)
class ReportFile:
    """A generated workbook, ready to hand to the user as a download."""
    filename: str
    content: bytes
    media_type: str = XLSX_MEDIA_TYPE


def sanitize_filename(name: str, fallback: str = "client") -> str:
    """
    Make a string safe to use as a file name stem on common filesystems.

    Characters illegal on Windows/macOS/Linux, control characters and
    whitespace runs become "_". Leading/trailing dots and underscores are
    trimmed, Windows device names get a leading "_", and an empty result
    becomes `fallback`.
    """
    stem = _ILLEGAL_FILENAME_CHARS.sub("_", name or "")
    stem = stem.strip("._")[:MAX_FILENAME_STEM].rstrip("._")
    if not stem:
        return fallback
    if stem.split(".")[0].upper() in _WINDOWS_RESERVED:
        stem = f"_{stem}"
    return stem


def cell_value(value):
    """Strip characters Excel cannot store (control characters) from text cells."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def client_report_filename(client_name: str) -> str:
    return f"{sanitize_filename(client_name)}_report.{XLSX_EXTENSION}"


def daily_report_filename(day: date) -> str:
    return f"daily_report_{day.isoformat()}.{XLSX_EXTENSION}"


class ReportExporter:
    """Builds spreadsheet reports from already-aggregated data."""

    def __init__(self, settings: Optional[ReportSettings] = None):
        self._settings = settings or get_settings().reports

    def export_client_report(self, ledger: ClientLedger) -> ReportFile:
        """
        Summary, Projects and Payments sheets for one client.

        A client with no projects or payments still gets a workbook,
        with zero totals and header-only detail sheets.
        """
        summary = ledger.summary

        wb = Workbook()
        ws = wb.active
        ws.title = SUMMARY_SHEET
        self._write_header(ws, SUMMARY_COLUMNS)
        rows = [
            summary.client.name,
            summary.client.created_at,
            summary.total_projects,
            summary.total_earned,
            summary.total_paid,
            summary.outstanding_balance,
        ]
        for row_idx, (label, value) in enumerate(zip(SUMMARY_FIELDS, rows), start=2):
            ws.cell(row=row_idx, column=1, value=label).font = Font(bold=True)
            cell = ws.cell(row=row_idx, column=2, value=cell_value(value))
            if isinstance(value, datetime):
                cell.number_format = self._settings.date_format
            elif isinstance(value, Decimal):
                cell.number_format = self._settings.money_format

        ws = wb.create_sheet(PROJECTS_SHEET)
        self._write_header(ws, PROJECT_COLUMNS)
        for row_idx, project in enumerate(ledger.projects, start=2):
            self._write_row(ws, row_idx, [
                project.created_at,
                project.number_of_videos,
                project.charge_per_video,
                project.total,
            ])

        ws = wb.create_sheet(PAYMENTS_SHEET)
        self._write_header(ws, PAYMENT_COLUMNS)
        for row_idx, payment in enumerate(ledger.payments, start=2):
            self._write_row(ws, row_idx, [payment.date, payment.amount, payment.notes])

        return ReportFile(
            filename=client_report_filename(summary.client.name),
            content=self._save(wb),
        )

    def export_daily_report(
        self,
        payments: Iterable[Payment],
        clients: Iterable[Client],
        on: Union[date, datetime],
    ) -> ReportFile:
        """
        Every payment received on one local calendar day, with a total row.

        Raises:
            NothingToExportError: If no payment falls on that day
        """
        day = local_day(on)
        matching = payments_on_date(payments, day)
        if not matching:
            raise NothingToExportError(f"No payments recorded on {day.isoformat()}")

        clients = list(clients)

        wb = Workbook()
        ws = wb.active
        ws.title = DAILY_SHEET

        ws.cell(row=1, column=1, value=DAILY_DATE_LABEL).font = Font(bold=True)
        date_cell = ws.cell(row=1, column=2, value=day)
        date_cell.number_format = self._settings.date_format

        self._write_header(ws, DAILY_COLUMNS, row=2)
        row_idx = 3
        for payment in matching:
            client = find_client(clients, payment.client_id)
            name = client.name if client else self._settings.unknown_client_label
            self._write_row(ws, row_idx, [name, payment.amount, payment.notes])
            row_idx += 1

        ws.cell(row=row_idx, column=1, value=DAILY_TOTAL_LABEL).font = Font(bold=True)
        total_cell = ws.cell(row=row_idx, column=2, value=total_amount(matching))
        total_cell.font = Font(bold=True)
        total_cell.number_format = self._settings.money_format

        return ReportFile(
            filename=daily_report_filename(day),
            content=self._save(wb),
        )

    def _write_header(self, ws: Worksheet, columns: list[str], row: int = 1) -> None:
        for col_idx, title in enumerate(columns, start=1):
            ws.cell(row=row, column=col_idx, value=title).font = Font(bold=True)
            letter = get_column_letter(col_idx)
            ws.column_dimensions[letter].width = max(
                ws.column_dimensions[letter].width or 0, len(title) + 6, 14
            )

    def _write_row(self, ws: Worksheet, row_idx: int, values: list) -> None:
        for col_idx, value in enumerate(values, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=cell_value(value))
            if isinstance(value, (date, datetime)):
                cell.number_format = self._settings.date_format
            elif isinstance(value, Decimal):
                cell.number_format = self._settings.money_format

    def _save(self, wb: Workbook) -> bytes:
        output = io.BytesIO()
        wb.save(output)
        return output.getvalue()
