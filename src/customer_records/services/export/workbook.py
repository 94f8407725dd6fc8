"""Shared formatting helpers for text and spreadsheet exports."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

EXCEL_DATE_FORMAT = "yyyy-mm-dd"
EXCEL_DATETIME_FORMAT = "yyyy-mm-dd hh:mm:ss"
EXCEL_AMOUNT_FORMAT = "#,##0.00"

PROFILE_HEADER_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
REPORT_HEADER_FILL = PatternFill(start_color="ADD8E6", end_color="ADD8E6", fill_type="solid")

_CENTS = Decimal("0.01")


def quantize_amount(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """Plain two-decimal rendering, e.g. ``1500000.50``."""
    return f"{quantize_amount(amount):.2f}"


def format_currency(amount: Decimal, currency_code: str) -> str:
    """Thousands-separated rendering with a currency label, e.g. ``$5,000,000.00 COP``."""
    return f"${quantize_amount(amount):,.2f} {currency_code}"


def to_naive_utc(value: datetime) -> datetime:
    """Excel cells cannot carry a timezone; aware values are shifted to UTC first."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_date(value: datetime) -> str:
    return to_naive_utc(value).strftime(DATE_FORMAT)


def format_datetime(value: datetime) -> str:
    return to_naive_utc(value).strftime(DATETIME_FORMAT)


def write_header_row(worksheet: Worksheet, row: int, labels: list[str], fill: PatternFill) -> None:
    for column, label in enumerate(labels, start=1):
        cell = worksheet.cell(row=row, column=column, value=label)
        cell.font = Font(bold=True)
        cell.fill = fill


def _display_width(cell: Cell) -> int:
    value = cell.value
    if value is None:
        return 0
    if isinstance(value, (datetime, date)):
        # rendered through the cell's number format, not str()
        return len(cell.number_format)
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return len(f"{value:,.2f}")
    return max((len(line) for line in str(value).splitlines()), default=0)


def autosize_columns(worksheet: Worksheet, padding: int = 2) -> None:
    """Size each column to its widest cell; merged ranges are skipped since they span columns."""

    merged: set[tuple[int, int]] = set()
    for cell_range in worksheet.merged_cells.ranges:
        merged.update(cell_range.cells)

    widths: dict[int, int] = {}
    for row in worksheet.iter_rows():
        for cell in row:
            if (cell.row, cell.column) in merged:
                continue
            width = _display_width(cell)
            if width > widths.get(cell.column, 0):
                widths[cell.column] = width

    for column, width in widths.items():
        worksheet.column_dimensions[get_column_letter(column)].width = width + padding


def workbook_to_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
