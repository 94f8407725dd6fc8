"""Serialize a customer profile and its purchases into CSV, text or spreadsheet bytes."""

from __future__ import annotations

import csv
import io
from typing import Callable

from openpyxl import Workbook
from openpyxl.styles import Font

from ...models.domain import Customer
from .workbook import (
    EXCEL_AMOUNT_FORMAT,
    EXCEL_DATE_FORMAT,
    EXCEL_DATETIME_FORMAT,
    PROFILE_HEADER_FILL,
    autosize_columns,
    format_amount,
    format_date,
    format_datetime,
    quantize_amount,
    to_naive_utc,
    workbook_to_bytes,
    write_header_row,
)

TEXT_RULE = "-" * 100
PURCHASE_COLUMNS = ["Número Factura", "Fecha", "Monto", "Descripción", "Estado"]

_PROFILE_FIELDS: list[tuple[str, Callable[[Customer], object]]] = [
    ("Tipo de Documento", lambda c: c.document_type.name),
    ("Número de Documento", lambda c: c.document_number),
    ("Nombre", lambda c: c.first_name),
    ("Apellido", lambda c: c.last_name),
    ("Correo", lambda c: c.email),
    ("Teléfono", lambda c: c.phone),
    ("Fecha de Registro", lambda c: c.registered_at),
]


def _profile_rows(customer: Customer) -> list[tuple[str, str]]:
    rows = []
    for label, getter in _PROFILE_FIELDS:
        value = getter(customer)
        rows.append((label, format_datetime(value) if label == "Fecha de Registro" else str(value or "")))
    return rows


def render_customer_csv(customer: Customer) -> bytes:
    """Profile block, blank line, then the purchases table.

    Values are written through ``csv.writer``, so a value containing a comma or
    a quote is quoted (``"Laptop, 15 pulgadas"``) instead of being emitted raw;
    rows with such values differ from a naive comma join but stay parseable.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Field", "Value"])
    writer.writerows(_profile_rows(customer))
    writer.writerow([])
    writer.writerow(["Compras"])
    writer.writerow(PURCHASE_COLUMNS)
    for purchase in customer.purchases:
        writer.writerow(
            [
                purchase.invoice_number,
                format_date(purchase.purchase_date),
                format_amount(purchase.amount),
                purchase.description or "",
                purchase.status.name,
            ]
        )
    return buffer.getvalue().encode("utf-8")


def render_customer_txt(customer: Customer) -> bytes:
    lines = ["INFORMACIÓN DEL CLIENTE", "=" * len("INFORMACIÓN DEL CLIENTE")]
    lines.extend(f"{label}: {value}" for label, value in _profile_rows(customer))
    lines.append("")
    lines.extend(["COMPRAS", "=" * len("COMPRAS")])
    lines.append(f"{'Número Factura':<20} {'Fecha':<12} {'Monto':<15} {'Estado':<15} Descripción")
    lines.append(TEXT_RULE)
    # rows keep the bare 10-char date and the status padding even without a description
    for purchase in customer.purchases:
        lines.append(
            f"{purchase.invoice_number:<20} "
            f"{format_date(purchase.purchase_date)} "
            f"{format_amount(purchase.amount):>15} "
            f"{purchase.status.name:<15} "
            f"{purchase.description or ''}"
        )
    return ("\n".join(lines) + "\n").encode("utf-8")


def render_customer_excel(customer: Customer) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Cliente"

    title = worksheet.cell(row=1, column=1, value="Información del Cliente")
    title.font = Font(bold=True, size=14)

    row = 3
    for label, getter in _PROFILE_FIELDS:
        worksheet.cell(row=row, column=1, value=f"{label}:")
        value = getter(customer)
        if label == "Fecha de Registro":
            cell = worksheet.cell(row=row, column=2, value=to_naive_utc(value))
            cell.number_format = EXCEL_DATETIME_FORMAT
        else:
            worksheet.cell(row=row, column=2, value=str(value or ""))
        row += 1

    row += 2
    section = worksheet.cell(row=row, column=1, value="Compras")
    section.font = Font(bold=True, size=14)
    row += 1

    write_header_row(worksheet, row, PURCHASE_COLUMNS, PROFILE_HEADER_FILL)
    row += 1

    for purchase in customer.purchases:
        worksheet.cell(row=row, column=1, value=purchase.invoice_number)
        date_cell = worksheet.cell(row=row, column=2, value=to_naive_utc(purchase.purchase_date))
        date_cell.number_format = EXCEL_DATE_FORMAT
        amount_cell = worksheet.cell(row=row, column=3, value=quantize_amount(purchase.amount))
        amount_cell.number_format = EXCEL_AMOUNT_FORMAT
        worksheet.cell(row=row, column=4, value=purchase.description or "")
        worksheet.cell(row=row, column=5, value=purchase.status.name)
        row += 1

    autosize_columns(worksheet)
    return workbook_to_bytes(workbook)
