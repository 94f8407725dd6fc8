"""Customer-facing API schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_serializer


class DocumentTypeModel(BaseModel):
    id: int
    name: str
    code: str


class PurchaseModel(BaseModel):
    id: int
    invoice_number: str
    purchase_date: datetime
    amount: Decimal
    description: Optional[str] = None
    status: str

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, value: Decimal) -> float:
        return float(value)


class CustomerProfileResponse(BaseModel):
    id: int
    document_type: DocumentTypeModel
    document_number: str
    first_name: str
    last_name: str
    email: str
    phone: str
    registered_at: datetime
    purchases: List[PurchaseModel]
    total_purchases: int
    total_completed_amount: Decimal

    @field_serializer("total_completed_amount", when_used="json")
    def _total_as_number(self, value: Decimal) -> float:
        return float(value)
