"""Customer lookup, export and loyalty report orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...config import settings
from ...data.customers_repository import CustomerRepository, get_customer_repository
from ...exceptions import CustomerNotFoundError, ExportFailedError
from ...models.domain import Customer
from ..export import XLSX_MEDIA_TYPE, render_eligibility_report, resolve_format
from ..loyalty import default_report_window, select_eligible, summarize_completed


@dataclass(slots=True, frozen=True)
class ExportArtifact:
    """Fully rendered export, ready to be sent as a download."""

    content: bytes
    file_name: str
    media_type: str


def _repository(repository: Optional[CustomerRepository]) -> CustomerRepository:
    return repository if repository is not None else get_customer_repository()


def build_customer_profile(customer: Customer) -> dict:
    summary = summarize_completed(customer, settings.completed_status_code)
    document_type = customer.document_type
    return {
        "id": customer.id,
        "document_type": {"id": document_type.id, "name": document_type.name, "code": document_type.code},
        "document_number": customer.document_number,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "email": customer.email,
        "phone": customer.phone,
        "registered_at": customer.registered_at,
        "purchases": [
            {
                "id": purchase.id,
                "invoice_number": purchase.invoice_number,
                "purchase_date": purchase.purchase_date,
                "amount": purchase.amount,
                "description": purchase.description,
                "status": purchase.status.name,
            }
            for purchase in customer.purchases
        ],
        "total_purchases": summary.count,
        "total_completed_amount": summary.total,
    }


def lookup_customer(
    document_type_id: int,
    document_number: str,
    *,
    repository: Optional[CustomerRepository] = None,
) -> dict:
    """Find an active customer by document and return its profile with all-time totals."""

    trimmed = (document_number or "").strip()
    if not trimmed:
        raise ValueError("Document number is required")

    customer = _repository(repository).find_active_by_document(document_type_id, trimmed)
    if customer is None:
        logging.info(f"No active customer for document type {document_type_id} / '{trimmed}'")
        raise CustomerNotFoundError("Customer not found")
    return build_customer_profile(customer)


def list_document_types(*, repository: Optional[CustomerRepository] = None) -> list[dict]:
    return [
        {"id": document_type.id, "name": document_type.name, "code": document_type.code}
        for document_type in _repository(repository).list_document_types()
    ]


def export_customer(
    customer_id: int,
    fmt: str,
    *,
    repository: Optional[CustomerRepository] = None,
) -> ExportArtifact:
    customer = _repository(repository).find_active_with_purchases(customer_id)
    if customer is None:
        raise CustomerNotFoundError("Customer not found")

    export_format = resolve_format(fmt)

    try:
        content = export_format.render(customer)
    except Exception as exc:
        logging.exception(f"Failed to render {export_format.key} export for customer {customer_id}")
        raise ExportFailedError(f"Unable to export customer {customer_id} as {export_format.key}") from exc

    return ExportArtifact(
        content=content,
        file_name=f"customer_{customer_id}.{export_format.extension}",
        media_type=export_format.media_type,
    )


def generate_eligibility_report(
    *,
    now: Optional[datetime] = None,
    repository: Optional[CustomerRepository] = None,
) -> ExportArtifact:
    """Render the loyalty report for the rolling window ending at ``now``."""

    window_start, window_end = default_report_window(now, settings.loyalty_window_months)
    candidates = _repository(repository).find_candidates_in_window(window_start, window_end)
    eligible = select_eligible(
        candidates,
        window_start,
        window_end,
        settings.loyalty_threshold,
        settings.completed_status_code,
    )
    logging.info(
        f"Loyalty report {window_start.date()}..{window_end.date()}: "
        f"{len(eligible)} of {len(candidates)} candidates eligible"
    )

    try:
        content = render_eligibility_report(
            eligible,
            window_start,
            window_end,
            settings.loyalty_threshold,
            settings.currency_code,
        )
    except Exception as exc:
        logging.exception("Failed to render loyalty eligibility report")
        raise ExportFailedError("Unable to generate the loyalty eligibility report") from exc

    return ExportArtifact(
        content=content,
        file_name=f"eligibility_report_{window_end:%Y-%m-%d}.xlsx",
        media_type=XLSX_MEDIA_TYPE,
    )
