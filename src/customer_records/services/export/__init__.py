"""Export services."""

from .customer import render_customer_csv, render_customer_excel, render_customer_txt
from .formats import EXPORT_FORMATS, XLSX_MEDIA_TYPE, ExportFormat, render_customer, resolve_format
from .report import render_eligibility_report

__all__ = [
    "EXPORT_FORMATS",
    "XLSX_MEDIA_TYPE",
    "ExportFormat",
    "render_customer",
    "render_customer_csv",
    "render_customer_excel",
    "render_customer_txt",
    "render_eligibility_report",
    "resolve_format",
]
