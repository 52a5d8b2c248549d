"""
Report endpoints, mounted under ``/reports``.

Submitting goes through ``ReportService`` so every new report starts
with ``status = "new"``.  Listing and reading reports use the generic
collection routes.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from wazaifi_api.app.api.deps import get_report_service
from wazaifi_api.app.services.report_service import ReportService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_report(
    body: Dict[str, Any] = Body(...),
    service: ReportService = Depends(get_report_service),
) -> Dict[str, Any]:
    return await service.submit(body)


@router.patch("/{report_id}/resolve")
async def resolve_report(
    report_id: str,
    service: ReportService = Depends(get_report_service),
) -> Dict[str, Any]:
    """Mark a report ``resolved``.  Any request body is ignored."""
    return await service.resolve(report_id)
