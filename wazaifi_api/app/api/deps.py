"""
FastAPI dependencies.

The collection store is created once per application and kept on
``app.state``; services are cheap wrappers built per request.
"""

from fastapi import Request

from wazaifi_api.app.core.storage import CollectionStore
from wazaifi_api.app.services.document_service import DocumentService
from wazaifi_api.app.services.like_service import LikeService
from wazaifi_api.app.services.report_service import ReportService
from wazaifi_api.app.services.user_service import UserService


def get_store(request: Request) -> CollectionStore:
    return request.app.state.store


def get_document_service(request: Request) -> DocumentService:
    return DocumentService(get_store(request))


def get_user_service(request: Request) -> UserService:
    return UserService(get_store(request))


def get_like_service(request: Request) -> LikeService:
    return LikeService(get_store(request))


def get_report_service(request: Request) -> ReportService:
    return ReportService(get_store(request))
