from datetime import datetime, timedelta, timezone
from decimal import Decimal
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from src.customer_records.data.customers_repository import InMemoryCustomerRepository
from src.customer_records.main import create_app
from src.customer_records.models.domain import Customer, DocumentType, Purchase, PurchaseStatus

NIT = DocumentType(id=1, name="NIT", code="NIT")
CC = DocumentType(id=2, name="Cédula", code="CC")
COMPLETED = PurchaseStatus(id=1, name="completada", code="completed")


def _customer(cid: int, number: str, amounts: list[str], active: bool = True) -> Customer:
    recent = datetime.now(timezone.utc) - timedelta(days=3)
    return Customer(
        id=cid,
        document_type=CC,
        document_number=number,
        first_name=f"Name {cid}",
        last_name=f"Surname {cid}",
        email=f"c{cid}@example.com",
        phone="3000000000",
        registered_at=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
        active=active,
        purchases=tuple(
            Purchase(
                id=cid * 100 + index,
                customer_id=cid,
                invoice_number=f"F-{cid}-{index}",
                purchase_date=recent,
                amount=Decimal(amount),
                status=COMPLETED,
            )
            for index, amount in enumerate(amounts)
        ),
    )


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from src.customer_records.services.customers import service as customer_service

    repository = InMemoryCustomerRepository(
        [
            _customer(1, "123", ["3000000", "2500000"]),
            _customer(2, "456", ["100"]),
            _customer(3, "789", ["9000000"], active=False),
        ],
        [NIT, CC],
    )
    monkeypatch.setattr(customer_service, "get_customer_repository", lambda: repository)
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_document_types(api_client: TestClient):
    response = api_client.get("/api/document-types")

    assert response.status_code == 200
    assert [item["code"] for item in response.json()] == ["NIT", "CC"]


def test_lookup_by_document(api_client: TestClient):
    response = api_client.get("/api/customers/lookup", params={"document_type_id": 2, "document_number": " 123 "})

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == 1
    assert payload["document_type"]["code"] == "CC"
    assert payload["total_purchases"] == 2
    assert payload["total_completed_amount"] == 5500000
    assert all(isinstance(purchase["amount"], float) for purchase in payload["purchases"])


def test_lookup_errors(api_client: TestClient):
    blank = api_client.get("/api/customers/lookup", params={"document_type_id": 2, "document_number": "  "})
    missing = api_client.get("/api/customers/lookup", params={"document_type_id": 2, "document_number": "789"})

    assert blank.status_code == 400
    assert missing.status_code == 404


@pytest.mark.parametrize(
    "fmt, extension, media_prefix",
    [
        ("csv", "csv", "text/csv"),
        ("TXT", "txt", "text/plain"),
        ("Excel", "xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    ],
)
def test_export_download(api_client: TestClient, fmt, extension, media_prefix):
    response = api_client.get("/api/customers/1/export", params={"format": fmt})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(media_prefix)
    assert response.headers["content-disposition"] == f'attachment; filename="customer_1.{extension}"'


def test_export_defaults_to_excel(api_client: TestClient):
    response = api_client.get("/api/customers/1/export")

    assert response.status_code == 200
    assert response.content.startswith(b"PK")


def test_export_csv_body(api_client: TestClient):
    response = api_client.get("/api/customers/1/export", params={"format": "csv"})

    lines = response.content.decode("utf-8").splitlines()
    assert lines[0] == "Field,Value"
    assert [line.split(",")[0] for line in lines[-2:]] == ["F-1-0", "F-1-1"]


def test_export_errors(api_client: TestClient):
    assert api_client.get("/api/customers/1/export", params={"format": "pdf"}).status_code == 400
    assert api_client.get("/api/customers/404/export", params={"format": "csv"}).status_code == 404
    assert api_client.get("/api/customers/3/export", params={"format": "csv"}).status_code == 404
    assert api_client.get("/api/customers/404/export", params={"format": "pdf"}).status_code == 404


def test_loyalty_report_download(api_client: TestClient):
    response = api_client.get("/api/reports/loyalty")

    assert response.status_code == 200
    today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    assert response.headers["content-disposition"] == f'attachment; filename="eligibility_report_{today}.xlsx"'

    worksheet = load_workbook(BytesIO(response.content)).active
    assert worksheet.max_row == 6
    assert worksheet["B6"].value == "123"
