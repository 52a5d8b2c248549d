"""Request bodies for ad moderation."""

from pydantic import BaseModel, Field


class AdApprovalRequest(BaseModel):
    """New moderation status of an ad (e.g. ``approved`` or ``rejected``)."""

    status: str = Field(..., examples=["approved"])
