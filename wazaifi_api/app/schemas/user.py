"""
Request bodies for account and social-graph endpoints.

Credentials are plain strings; hashing and sessions are deliberately
out of scope for this service.  ``SignupRequest`` accepts extra fields
which are stored on the new user document.
"""

from typing import Any

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    username: str = Field("", examples=["layla"])
    password: str = Field("", examples=["secret"])

    model_config = {"extra": "allow"}

    def extra_fields(self) -> dict:
        """Submitted fields other than the credentials."""
        return dict(self.model_extra or {})


class LoginRequest(BaseModel):
    username: str = Field("", examples=["layla"])
    password: str = Field("", examples=["secret"])


class ToggleFollowRequest(BaseModel):
    followerId: Any = Field(None, description="User who follows or unfollows")
    followingId: Any = Field(None, description="User being followed or unfollowed")


class UserApprovalRequest(BaseModel):
    approvalStatus: str = Field(..., examples=["approved"])


class UserBlockRequest(BaseModel):
    isBlocked: bool = Field(..., examples=[True])
