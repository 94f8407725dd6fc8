"""Loyalty eligibility report workbook."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from ..loyalty import EligibleCustomer
from .workbook import (
    EXCEL_AMOUNT_FORMAT,
    REPORT_HEADER_FILL,
    autosize_columns,
    format_currency,
    format_date,
    quantize_amount,
    workbook_to_bytes,
    write_header_row,
)

REPORT_TITLE = "Reporte de Fidelización de Clientes"
REPORT_COLUMNS = [
    "Tipo Documento",
    "Número Documento",
    "Nombre",
    "Apellido",
    "Correo",
    "Teléfono",
    "Monto Total Compras",
]
HEADER_ROW = 5


def render_eligibility_report(
    eligible: Sequence[EligibleCustomer],
    window_start: datetime,
    window_end: datetime,
    threshold: Decimal,
    currency_code: str = "COP",
) -> bytes:
    """Build the report workbook; rows follow the order of ``eligible``."""

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Clientes Fidelizables"

    title = worksheet.cell(row=1, column=1, value=REPORT_TITLE)
    title.font = Font(bold=True, size=16)
    worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=6)

    period = worksheet.cell(
        row=2, column=1, value=f"Período: {format_date(window_start)} a {format_date(window_end)}"
    )
    period.font = Font(italic=True)
    worksheet.merge_cells(start_row=2, start_column=1, end_row=2, end_column=6)

    minimum = worksheet.cell(row=3, column=1, value=f"Monto mínimo: {format_currency(threshold, currency_code)}")
    minimum.font = Font(italic=True)
    worksheet.merge_cells(start_row=3, start_column=1, end_row=3, end_column=6)

    write_header_row(worksheet, HEADER_ROW, REPORT_COLUMNS, REPORT_HEADER_FILL)

    row = HEADER_ROW + 1
    for entry in eligible:
        customer = entry.customer
        values = [
            customer.document_type.name,
            customer.document_number,
            customer.first_name,
            customer.last_name,
            customer.email,
            customer.phone,
        ]
        for column, value in enumerate(values, start=1):
            worksheet.cell(row=row, column=column, value=value)
        total_cell = worksheet.cell(row=row, column=len(values) + 1, value=quantize_amount(entry.qualifying_total))
        total_cell.number_format = EXCEL_AMOUNT_FORMAT
        row += 1

    autosize_columns(worksheet)
    return workbook_to_bytes(workbook)
