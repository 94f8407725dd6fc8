"""Route group exports."""

from . import customers, document_types, health, reports

__all__ = ["customers", "document_types", "health", "reports"]
