"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter``.  They are aggregated in
``router.py``; domain routers come first so their fixed paths win
over the generic ``/{collection}/{id}`` routes.
"""
