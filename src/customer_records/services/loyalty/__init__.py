"""Loyalty eligibility helpers."""

from .evaluator import (
    COMPLETED_STATUS_CODE,
    DEFAULT_LOYALTY_THRESHOLD,
    CompletedSummary,
    EligibleCustomer,
    WindowEvaluation,
    as_utc,
    default_report_window,
    evaluate_window,
    select_eligible,
    summarize_completed,
)

__all__ = [
    "COMPLETED_STATUS_CODE",
    "DEFAULT_LOYALTY_THRESHOLD",
    "CompletedSummary",
    "EligibleCustomer",
    "WindowEvaluation",
    "as_utc",
    "default_report_window",
    "evaluate_window",
    "select_eligible",
    "summarize_completed",
]
