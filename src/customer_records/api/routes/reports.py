"""Loyalty report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from ...exceptions import ExportFailedError
from ...services.customers import generate_eligibility_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/loyalty", response_class=Response, status_code=status.HTTP_200_OK)
def download_loyalty_report() -> Response:
    """Eligibility report for the rolling window ending now."""
    try:
        artifact = generate_eligibility_report()
    except ExportFailedError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.file_name}"'},
    )
