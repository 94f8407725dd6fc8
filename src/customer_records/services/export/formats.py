"""Export format registry keyed by the normalized format name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ...exceptions import UnsupportedFormatError
from ...models.domain import Customer
from .customer import render_customer_csv, render_customer_excel, render_customer_txt

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(slots=True, frozen=True)
class ExportFormat:
    key: str
    extension: str
    media_type: str
    render: Callable[[Customer], bytes]


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "csv": ExportFormat("csv", "csv", "text/csv; charset=utf-8", render_customer_csv),
    "excel": ExportFormat("excel", "xlsx", XLSX_MEDIA_TYPE, render_customer_excel),
    "txt": ExportFormat("txt", "txt", "text/plain; charset=utf-8", render_customer_txt),
}


def resolve_format(name: str | None) -> ExportFormat:
    """Look up a format case-insensitively; unknown names raise ``UnsupportedFormatError``."""

    normalized = (name or "").strip().lower()
    export_format = EXPORT_FORMATS.get(normalized)
    if export_format is None:
        raise UnsupportedFormatError(name or "", tuple(EXPORT_FORMATS))
    return export_format


def render_customer(customer: Customer, fmt: str) -> bytes:
    return resolve_format(fmt).render(customer)
