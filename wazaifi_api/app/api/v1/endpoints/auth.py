"""
Signup and login.

The login mechanism is a placeholder: it compares plain-text
passwords and returns the stored user document as is, password
included.  No token or session is issued.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from wazaifi_api.app.api.deps import get_user_service
from wazaifi_api.app.schemas.user import LoginRequest, SignupRequest
from wazaifi_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a user.  New accounts start ``pending`` and unblocked."""
    return await service.signup(payload.username, payload.password, payload.extra_fields())


@router.post("/login")
async def login(
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    return await service.login(payload.username, payload.password)
