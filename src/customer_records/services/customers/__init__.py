"""Customer service helpers."""

from .service import (
    ExportArtifact,
    build_customer_profile,
    export_customer,
    generate_eligibility_report,
    list_document_types,
    lookup_customer,
)

__all__ = [
    "ExportArtifact",
    "build_customer_profile",
    "export_customer",
    "generate_eligibility_report",
    "list_document_types",
    "lookup_customer",
]
