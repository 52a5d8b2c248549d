"""Service identity / health endpoint."""

from typing import Any, Dict

from fastapi import APIRouter, Request

from wazaifi_api.app.core.storage import COLLECTIONS

router = APIRouter()


@router.get("/")
async def get_info(request: Request) -> Dict[str, Any]:
    """Return the server banner and the available collections."""
    settings = request.app.state.settings
    return {
        "message": f"{settings.project_name} server running",
        "version": settings.api_version,
        "collections": list(COLLECTIONS),
    }
