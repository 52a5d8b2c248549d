"""
Generic collection endpoints.

``/{collection}`` and ``/{collection}/{doc_id}`` give list, get,
insert, patch and delete on any of the five collections.  Query
string parameters of a list request are equality filters.  A PATCH on
a post or an ad that carries ``likers`` is a like update and also
creates a notification.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Request, status

from wazaifi_api.app.api.deps import get_document_service, get_like_service
from wazaifi_api.app.services.document_service import DocumentService
from wazaifi_api.app.services.like_service import LikeService, is_like_update

router = APIRouter()


@router.get("/{collection}")
async def list_documents(
    collection: str,
    request: Request,
    service: DocumentService = Depends(get_document_service),
) -> List[Dict[str, Any]]:
    """List a collection, e.g. ``GET /posts?userId=42``."""
    return await service.list(collection, dict(request.query_params))


@router.get("/{collection}/{doc_id}")
async def get_document(
    collection: str,
    doc_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Dict[str, Any]:
    return await service.get(collection, doc_id)


@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
async def insert_document(
    collection: str,
    body: Dict[str, Any] = Body(...),
    service: DocumentService = Depends(get_document_service),
) -> Dict[str, Any]:
    """Create a document.  ``id`` and ``createdAt`` are always generated."""
    return await service.insert(collection, body)


@router.patch("/{collection}/{doc_id}")
async def patch_document(
    collection: str,
    doc_id: str,
    body: Dict[str, Any] = Body(...),
    service: DocumentService = Depends(get_document_service),
    likes: LikeService = Depends(get_like_service),
) -> Dict[str, Any]:
    """Merge the body into a document (like update for posts/ads with ``likers``)."""
    if is_like_update(collection, body):
        return await likes.update_likes(collection, doc_id, body)
    return await service.patch(collection, doc_id, body)


@router.delete("/{collection}/{doc_id}")
async def delete_document(
    collection: str,
    doc_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Dict[str, Any]:
    """Delete a document and return it."""
    return await service.delete(collection, doc_id)
