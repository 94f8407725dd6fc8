"""Loyalty eligibility rules computed from a customer's purchase history."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ...models.domain import Customer, Purchase

COMPLETED_STATUS_CODE = "completed"
DEFAULT_LOYALTY_THRESHOLD = Decimal("5000000")


@dataclass(slots=True, frozen=True)
class WindowEvaluation:
    qualifying_total: Decimal
    is_eligible: bool


@dataclass(slots=True, frozen=True)
class EligibleCustomer:
    """A customer that met the threshold, with the windowed total that qualified it."""

    customer: Customer
    qualifying_total: Decimal


@dataclass(slots=True, frozen=True)
class CompletedSummary:
    """All-time completed purchase count and total, as shown on a profile."""

    count: int
    total: Decimal


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to already be UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_completed(purchase: Purchase, completed_code: str = COMPLETED_STATUS_CODE) -> bool:
    return purchase.status.code == completed_code


def evaluate_window(
    customer: Customer,
    window_start: datetime,
    window_end: datetime,
    threshold: Decimal = DEFAULT_LOYALTY_THRESHOLD,
    completed_code: str = COMPLETED_STATUS_CODE,
) -> WindowEvaluation:
    """Sum completed purchases dated inside the inclusive window and compare to the threshold."""

    start = as_utc(window_start)
    end = as_utc(window_end)
    total = Decimal("0")
    for purchase in customer.purchases:
        if not is_completed(purchase, completed_code):
            continue
        if start <= as_utc(purchase.purchase_date) <= end:
            total += purchase.amount
    return WindowEvaluation(qualifying_total=total, is_eligible=total >= threshold)


def select_eligible(
    customers: Iterable[Customer],
    window_start: datetime,
    window_end: datetime,
    threshold: Decimal = DEFAULT_LOYALTY_THRESHOLD,
    completed_code: str = COMPLETED_STATUS_CODE,
) -> list[EligibleCustomer]:
    """Filter customers down to the eligible ones, keeping their input order."""

    eligible: list[EligibleCustomer] = []
    for customer in customers:
        evaluation = evaluate_window(customer, window_start, window_end, threshold, completed_code)
        if evaluation.is_eligible:
            eligible.append(EligibleCustomer(customer=customer, qualifying_total=evaluation.qualifying_total))
    return eligible


def summarize_completed(customer: Customer, completed_code: str = COMPLETED_STATUS_CODE) -> CompletedSummary:
    completed: Sequence[Purchase] = [p for p in customer.purchases if is_completed(p, completed_code)]
    return CompletedSummary(count=len(completed), total=sum((p.amount for p in completed), Decimal("0")))


def subtract_months(value: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month's length."""

    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def default_report_window(now: Optional[datetime] = None, months: int = 1) -> tuple[datetime, datetime]:
    """Rolling ``[now - months, now]`` window evaluated at call time."""

    end = as_utc(now) if now is not None else datetime.now(timezone.utc)
    return subtract_months(end, months), end
