"""Document type catalogue endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from ...schemas.customers import DocumentTypeModel
from ...services.customers import list_document_types

router = APIRouter(prefix="/document-types", tags=["document-types"])


@router.get("", response_model=List[DocumentTypeModel], status_code=status.HTTP_200_OK)
def get_document_types() -> List[DocumentTypeModel]:
    return [DocumentTypeModel(**entry) for entry in list_document_types()]
