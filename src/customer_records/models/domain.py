"""Domain models for customers, purchases and their reference data."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(slots=True, frozen=True)
class DocumentType:
    """Identity document kind (NIT, CC, PA, ...)."""

    id: int
    name: str
    code: str
    active: bool = True


@dataclass(slots=True, frozen=True)
class PurchaseStatus:
    """Lifecycle state of a purchase (completed, pending, cancelled, ...)."""

    id: int
    name: str
    code: str
    active: bool = True


@dataclass(slots=True)
class Purchase:
    """A single invoiced purchase owned by one customer."""

    id: int
    customer_id: int
    invoice_number: str
    purchase_date: datetime
    amount: Decimal
    status: PurchaseStatus
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Purchase {self.invoice_number} has a negative amount: {self.amount}")


@dataclass(slots=True)
class Customer:
    """Represents a registered customer together with its purchase history."""

    id: int
    document_type: DocumentType
    document_number: str
    first_name: str
    last_name: str
    email: str
    phone: str
    registered_at: datetime
    active: bool = True
    purchases: tuple[Purchase, ...] = field(default_factory=tuple)
