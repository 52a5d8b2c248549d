"""
Shapes of stored documents.

Every document has an ``id`` and a ``createdAt`` timestamp.  The
per-collection models add the fields the domain operations rely on
and allow any extra field a client submits, so the stored JSON keeps
whatever the client sent.  Models are used when a domain operation
creates a document; reads return the stored mapping unchanged.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Document(BaseModel):
    id: str
    createdAt: str

    model_config = {"extra": "allow"}


class UserDocument(Document):
    username: str
    password: str
    approvalStatus: Literal["pending", "approved", "rejected"] = "pending"
    isBlocked: bool = False
    followers: List[str] = Field(default_factory=list)
    following: List[str] = Field(default_factory=list)


class NotificationDocument(Document):
    type: str
    collection: str
    targetId: str
    likerId: Optional[str] = None
    message: str


class ReportDocument(Document):
    status: Literal["new", "resolved"] = "new"

