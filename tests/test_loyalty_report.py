from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO

import pytest
from openpyxl import load_workbook

from src.customer_records.models.domain import Customer, DocumentType
from src.customer_records.services.export import render_eligibility_report
from src.customer_records.services.loyalty import EligibleCustomer

NIT = DocumentType(id=1, name="NIT", code="NIT")
CC = DocumentType(id=2, name="Cédula", code="CC")

WINDOW_START = datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc)
WINDOW_END = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _customer(cid: int, document_type: DocumentType = CC) -> Customer:
    return Customer(
        id=cid,
        document_type=document_type,
        document_number=str(900000 + cid),
        first_name=f"Name {cid}",
        last_name=f"Surname {cid}",
        email=f"c{cid}@example.com",
        phone=f"300000{cid:04d}",
        registered_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def _load(payload: bytes):
    return load_workbook(BytesIO(payload)).active


def test_report_header_block():
    worksheet = _load(render_eligibility_report([], WINDOW_START, WINDOW_END, Decimal("5000000")))

    assert worksheet.title == "Clientes Fidelizables"
    assert worksheet["A1"].value == "Reporte de Fidelización de Clientes"
    assert worksheet["A1"].font.bold
    assert worksheet["A2"].value == "Período: 2026-02-15 a 2026-03-15"
    assert worksheet["A3"].value == "Monto mínimo: $5,000,000.00 COP"
    merged = {str(cell_range) for cell_range in worksheet.merged_cells.ranges}
    assert {"A1:F1", "A2:F2", "A3:F3"} <= merged


def test_report_without_eligible_customers_has_only_headers():
    worksheet = _load(render_eligibility_report([], WINDOW_START, WINDOW_END, Decimal("5000000")))

    headers = [cell.value for cell in worksheet[5]]
    assert headers == [
        "Tipo Documento",
        "Número Documento",
        "Nombre",
        "Apellido",
        "Correo",
        "Teléfono",
        "Monto Total Compras",
    ]
    assert all(cell.font.bold for cell in worksheet[5])
    assert worksheet["A5"].fill.fgColor.rgb.endswith("ADD8E6")
    assert worksheet.max_row == 5


def test_report_rows_follow_evaluator_order():
    eligible = [
        EligibleCustomer(customer=_customer(9, NIT), qualifying_total=Decimal("7250000.255")),
        EligibleCustomer(customer=_customer(3), qualifying_total=Decimal("5500000")),
    ]

    worksheet = _load(render_eligibility_report(eligible, WINDOW_START, WINDOW_END, Decimal("5000000")))

    assert worksheet.max_row == 7
    assert [worksheet["A6"].value, worksheet["B6"].value, worksheet["C6"].value] == ["NIT", "900009", "Name 9"]
    assert worksheet["G6"].value == pytest.approx(7250000.26)
    assert worksheet["G6"].number_format == "#,##0.00"
    assert worksheet["B7"].value == "900003"
    assert worksheet["F7"].value == "3000000003"
    assert worksheet["G7"].value == pytest.approx(5500000)


def test_report_threshold_and_currency_are_configurable():
    worksheet = _load(
        render_eligibility_report([], WINDOW_START, WINDOW_END, Decimal("1234.5"), currency_code="USD")
    )
    assert worksheet["A3"].value == "Monto mínimo: $1,234.50 USD"
