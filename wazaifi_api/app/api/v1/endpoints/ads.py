"""Ad moderation, mounted under ``/ads``."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from wazaifi_api.app.api.deps import get_report_service
from wazaifi_api.app.schemas.moderation import AdApprovalRequest
from wazaifi_api.app.services.report_service import ReportService

router = APIRouter()


@router.patch("/{ad_id}/approval")
async def set_ad_approval(
    ad_id: str,
    payload: AdApprovalRequest,
    service: ReportService = Depends(get_report_service),
) -> Dict[str, Any]:
    """Set the moderation ``status`` of an ad."""
    return await service.set_ad_status(ad_id, payload.status)
