"""Customer lookup and export endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query, status
from fastapi.responses import Response

from ...exceptions import CustomerNotFoundError, ExportFailedError, UnsupportedFormatError
from ...schemas.customers import CustomerProfileResponse
from ...services.customers import export_customer, lookup_customer

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/lookup", response_model=CustomerProfileResponse, status_code=status.HTTP_200_OK)
def find_customer(
    document_type_id: int = Query(..., description="Document type identifier"),
    document_number: str = Query(..., description="Document number; surrounding whitespace is ignored"),
) -> CustomerProfileResponse:
    if not document_number.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Document number is required")
    try:
        profile = lookup_customer(document_type_id, document_number)
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CustomerProfileResponse.model_validate(profile)


@router.get("/{customer_id}/export", response_class=Response, status_code=status.HTTP_200_OK)
def download_customer_export(
    customer_id: int = Path(..., description="Customer identifier"),
    fmt: str = Query(default="excel", alias="format", description="Export format: csv, excel or txt"),
) -> Response:
    try:
        artifact = export_customer(customer_id, fmt)
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ExportFailedError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.file_name}"'},
    )
