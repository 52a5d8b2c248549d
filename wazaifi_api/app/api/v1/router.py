"""
Top‑level router for version 1 of the API.

Order matters: FastAPI matches routes in registration order, so the
domain routers with fixed path segments (``/signup``,
``/users/toggle-follow``, ``/reports/{id}/resolve``...) are included
before the generic ``/{collection}`` routes that would otherwise
swallow them.
"""

from fastapi import APIRouter

from .endpoints import ads, auth, collections, info, reports, users

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(ads.router, prefix="/ads", tags=["ads"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
# Must stay last.
router.include_router(collections.router, tags=["collections"])
