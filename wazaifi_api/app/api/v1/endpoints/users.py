"""
User social-graph and moderation endpoints.

Mounted under ``/users``.  These paths have fixed segments
(``toggle-follow``, ``approval``, ``block``) and are registered before
the generic collection routes.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from wazaifi_api.app.api.deps import get_user_service
from wazaifi_api.app.schemas.user import ToggleFollowRequest, UserApprovalRequest, UserBlockRequest
from wazaifi_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/toggle-follow")
async def toggle_follow(
    payload: ToggleFollowRequest,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Follow or unfollow a user.

    Returns ``following`` (the new state) and both updated users as
    ``follower`` and ``followed``.
    """
    return await service.toggle_follow(payload.followerId, payload.followingId)


@router.patch("/{user_id}/approval")
async def set_user_approval(
    user_id: str,
    payload: UserApprovalRequest,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    return await service.set_approval(user_id, payload.approvalStatus)


@router.patch("/{user_id}/block")
async def set_user_block(
    user_id: str,
    payload: UserBlockRequest,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    return await service.set_blocked(user_id, payload.isBlocked)
