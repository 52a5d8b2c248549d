"""
Reports and ad moderation.

Reports are created with ``status = "new"`` whatever the client sends
and are closed through ``resolve``.  Ads carry a free-form moderation
``status`` set by ``set_ad_status``.
"""

import logging
from typing import Any, Mapping

from wazaifi_api.app.core.storage import CollectionStore, Document
from wazaifi_api.app.schemas.document import ReportDocument
from wazaifi_api.app.services.document_service import DocumentService, stamp


class ReportService:
    """Moderation workflow for ``reports`` and ``ads``."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store
        self.documents = DocumentService(store)

    async def submit(self, body: Mapping[str, Any]) -> Document:
        """File a new report.  A submitted ``status`` is ignored."""
        report = ReportDocument(**{**stamp(body), "status": "new"}).model_dump()

        def append(reports):
            reports.append(report)
            return report

        created = await self.store.update("reports", append)
        logging.getLogger(__name__).info("Report %s submitted", created["id"])
        return created

    async def resolve(self, report_id: Any) -> Document:
        return await self.documents.set_field("reports", report_id, "status", "resolved", "Report")

    async def set_ad_status(self, ad_id: Any, status: str) -> Document:
        return await self.documents.set_field("ads", ad_id, "status", status, "Ad")
