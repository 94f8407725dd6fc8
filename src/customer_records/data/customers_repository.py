"""Data access for customers, their purchases and document types."""

from __future__ import annotations

import functools
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Customer, DocumentType, Purchase, PurchaseStatus
from ..services.loyalty import as_utc


class CustomerRepository(ABC):
    """Read-only source of fully materialized customer aggregates."""

    @abstractmethod
    def find_active_by_document(self, document_type_id: int, document_number: str) -> Optional[Customer]:
        ...

    @abstractmethod
    def find_active_with_purchases(self, customer_id: int) -> Optional[Customer]:
        ...

    @abstractmethod
    def find_candidates_in_window(self, window_start: datetime, window_end: datetime) -> list[Customer]:
        """Active customers with at least one purchase in range, ordered by id.

        This is only a pre-filter; the loyalty evaluator re-checks dates and status.
        """

    @abstractmethod
    def list_document_types(self) -> list[DocumentType]:
        ...


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(
        self,
        customers: Iterable[Customer] = (),
        document_types: Iterable[DocumentType] = (),
    ) -> None:
        self._customers = tuple(sorted(customers, key=lambda customer: customer.id))
        self._document_types = tuple(document_types)

    def find_active_by_document(self, document_type_id: int, document_number: str) -> Optional[Customer]:
        wanted = (document_number or "").strip()
        for customer in self._customers:
            if not customer.active or customer.document_type.id != document_type_id:
                continue
            if customer.document_number.strip() == wanted:
                return customer
        return None

    def find_active_with_purchases(self, customer_id: int) -> Optional[Customer]:
        for customer in self._customers:
            if customer.id == customer_id and customer.active:
                return customer
        return None

    def find_candidates_in_window(self, window_start: datetime, window_end: datetime) -> list[Customer]:
        start, end = as_utc(window_start), as_utc(window_end)
        return [
            customer
            for customer in self._customers
            if customer.active
            and any(start <= as_utc(p.purchase_date) <= end for p in customer.purchases)
        ]

    def list_document_types(self) -> list[DocumentType]:
        return sorted((t for t in self._document_types if t.active), key=lambda t: t.id)


_CUSTOMER_SELECT = "*, document_types(*), purchases(*, purchase_statuses(*))"


class SupabaseCustomerRepository(CustomerRepository):
    """Customer repository backed by the Supabase (PostgREST) tables."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def find_active_by_document(self, document_type_id: int, document_number: str) -> Optional[Customer]:
        wanted = (document_number or "").strip()
        response = (
            self._client.table("customers")
            .select(_CUSTOMER_SELECT)
            .eq("document_type_id", document_type_id)
            .eq("active", True)
            .execute()
        )
        # PostgREST cannot trim a column in a filter, so compare here
        for row in response.data or []:
            if str(row.get("document_number") or "").strip() == wanted:
                return customer_from_row(row)
        return None

    def find_active_with_purchases(self, customer_id: int) -> Optional[Customer]:
        response = (
            self._client.table("customers")
            .select(_CUSTOMER_SELECT)
            .eq("id", customer_id)
            .eq("active", True)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return customer_from_row(rows[0]) if rows else None

    def find_candidates_in_window(self, window_start: datetime, window_end: datetime) -> list[Customer]:
        purchases = (
            self._client.table("purchases")
            .select("customer_id")
            .gte("purchase_date", as_utc(window_start).isoformat())
            .lte("purchase_date", as_utc(window_end).isoformat())
            .execute()
        )
        customer_ids = sorted({row["customer_id"] for row in purchases.data or []})
        if not customer_ids:
            return []
        response = (
            self._client.table("customers")
            .select(_CUSTOMER_SELECT)
            .in_("id", customer_ids)
            .eq("active", True)
            .order("id")
            .execute()
        )
        customers = [customer_from_row(row) for row in response.data or []]
        return sorted(customers, key=lambda customer: customer.id)

    def list_document_types(self) -> list[DocumentType]:
        response = self._client.table("document_types").select("*").eq("active", True).order("id").execute()
        return [document_type_from_row(row) for row in response.data or []]


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value is None or value == "":
        raise ValueError("Missing datetime value")
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _parse_amount(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Unable to parse amount from value '{value}'") from exc


def document_type_from_row(row: Mapping[str, Any]) -> DocumentType:
    return DocumentType(
        id=int(row["id"]),
        name=str(row["name"]),
        code=str(row["code"]),
        active=bool(row.get("active", True)),
    )


def status_from_row(row: Mapping[str, Any]) -> PurchaseStatus:
    return PurchaseStatus(
        id=int(row["id"]),
        name=str(row["name"]),
        code=str(row["code"]),
        active=bool(row.get("active", True)),
    )


def purchase_from_row(
    row: Mapping[str, Any],
    customer_id: int,
    statuses: Optional[Mapping[int, PurchaseStatus]] = None,
) -> Purchase:
    embedded = row.get("purchase_statuses")
    if isinstance(embedded, Mapping):
        status = status_from_row(embedded)
    else:
        status_id = row.get("status_id")
        status = (statuses or {}).get(int(status_id)) if status_id is not None else None
        if status is None:
            raise ValueError(f"Purchase {row.get('invoice_number')} references unknown status {status_id!r}")
    created_at = row.get("created_at")
    return Purchase(
        id=int(row["id"]),
        customer_id=customer_id,
        invoice_number=str(row["invoice_number"]),
        purchase_date=_parse_datetime(row["purchase_date"]),
        amount=_parse_amount(row["amount"]),
        status=status,
        description=row.get("description") or None,
        created_at=_parse_datetime(created_at) if created_at else None,
    )


def customer_from_row(
    row: Mapping[str, Any],
    document_types: Optional[Mapping[int, DocumentType]] = None,
    statuses: Optional[Mapping[int, PurchaseStatus]] = None,
) -> Customer:
    """Map a customer row (embedded relations or id references) onto the domain record."""

    embedded = row.get("document_types")
    if isinstance(embedded, Mapping):
        document_type = document_type_from_row(embedded)
    else:
        type_id = row.get("document_type_id")
        document_type = (document_types or {}).get(int(type_id)) if type_id is not None else None
        if document_type is None:
            raise ValueError(f"Customer {row.get('id')} references unknown document type {type_id!r}")

    customer_id = int(row["id"])
    purchase_rows = list(row.get("purchases") or [])
    if isinstance(embedded, Mapping):
        # embedded collections come back in no guaranteed order
        purchase_rows.sort(key=lambda item: int(item["id"]))
    purchases = tuple(purchase_from_row(item, customer_id, statuses) for item in purchase_rows)

    return Customer(
        id=customer_id,
        document_type=document_type,
        document_number=str(row["document_number"]),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        email=str(row.get("email") or ""),
        phone=str(row.get("phone") or ""),
        registered_at=_parse_datetime(row["registered_at"]),
        active=bool(row.get("active", True)),
        purchases=purchases,
    )


@functools.lru_cache(maxsize=1)
def load_customer_dataset(source: Optional[Path] = None) -> InMemoryCustomerRepository:
    """Load customers, purchases and reference data from the configured JSON file."""

    json_path = source or settings.customer_file
    if not json_path.exists():
        raise FileNotFoundError(f"Customer file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8-sig") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Customer file '{json_path}' must contain a JSON object.")

    document_types = {t.id: t for t in map(document_type_from_row, payload.get("document_types") or [])}
    statuses = {s.id: s for s in map(status_from_row, payload.get("purchase_statuses") or [])}
    customers = [customer_from_row(row, document_types, statuses) for row in payload.get("customers") or []]

    invoices: set[str] = set()
    documents: set[tuple[int, str]] = set()
    for customer in customers:
        if customer.active:
            document_key = (customer.document_type.id, customer.document_number.strip())
            if document_key in documents:
                raise ValueError(f"Duplicate active document {document_key[1]!r} in {json_path}")
            documents.add(document_key)
        for purchase in customer.purchases:
            if purchase.invoice_number in invoices:
                raise ValueError(f"Duplicate invoice number '{purchase.invoice_number}' in {json_path}")
            invoices.add(purchase.invoice_number)

    logging.info(f"Loaded {len(customers)} customers from {json_path}")
    return InMemoryCustomerRepository(customers, document_types.values())


@functools.lru_cache(maxsize=1)
def get_customer_repository() -> CustomerRepository:
    """Database first, then the JSON dataset, then an empty repository."""

    client = get_supabase_client()
    if client is not None:
        return SupabaseCustomerRepository(client)
    try:
        return load_customer_dataset()
    except FileNotFoundError as exc:
        logging.warning(f"{exc}; serving an empty customer repository")
        return InMemoryCustomerRepository()


def clear_repository_cache() -> None:
    """Forget the cached repository and dataset, e.g. after the customer file changes."""

    get_customer_repository.cache_clear()
    load_customer_dataset.cache_clear()
