"""
Business logic for users.

Covers signup, login, the follow/unfollow toggle and the two user
moderation transitions (approval and blocking).

Passwords are stored and compared verbatim and ``login`` returns the
full user document, password included.  Credential handling is a
placeholder in this service; do not expose it beyond a trusted
network without replacing it.
"""

import logging
from typing import Any, Dict, List

from wazaifi_api.app.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from wazaifi_api.app.core.storage import CollectionStore, Document
from wazaifi_api.app.schemas.document import UserDocument
from wazaifi_api.app.services.document_service import (
    DocumentService,
    ensure_unique_username,
    find_index,
    new_id,
    normalize_value,
    now_iso,
)

USERS = "users"


class UserService:
    """Account and social-graph operations on the ``users`` collection."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store
        self.documents = DocumentService(store)

    async def signup(self, username: str, password: str, extra: Dict[str, Any]) -> Document:
        """Create a pending, unblocked user with no followers.

        Username uniqueness is checked under the ``users`` lock, so two
        concurrent signups with the same name cannot both succeed.
        Extra submitted fields are stored too, but cannot override the
        fields set here.
        """
        logger = logging.getLogger(__name__)
        if not username or not password:
            raise ValidationError("Username and password are required")

        fields = {
            **extra,
            "id": new_id(),
            "createdAt": now_iso(),
            "username": username,
            "password": password,
            "approvalStatus": "pending",
            "isBlocked": False,
            "followers": [],
            "following": [],
        }
        user = UserDocument(**fields).model_dump()

        def add(users: List[Document]) -> Document:
            ensure_unique_username(users, username)
            users.append(user)
            return user

        try:
            created = await self.store.update(USERS, add)
        except ConflictError:
            logger.info("Signup rejected: username %r taken", username)
            raise
        logger.info("Registered user %s (%s)", created["id"], username)
        return created

    async def login(self, username: str, password: str) -> Document:
        """Return the user whose username and password both match exactly."""
        users = await self.store.read_all(USERS)
        for user in users:
            if user.get("username") == username and user.get("password") == password:
                logging.getLogger(__name__).info("User %s logged in", user.get("id"))
                return user
        logging.getLogger(__name__).warning("Failed login for username %r", username)
        raise AuthError("Invalid credentials")

    async def toggle_follow(self, follower_id: Any, following_id: Any) -> Dict[str, Any]:
        """Follow ``following_id`` if not yet followed, otherwise unfollow.

        Both users are updated in memory and written back with a single
        ``write_all`` of the users collection, so the follower's
        ``following`` and the followed user's ``followers`` always agree.

        A user cannot follow themself: ``follower_id == following_id``
        raises ``ValidationError``, as does a missing id.  An unknown id
        raises ``NotFoundError``.
        """
        logger = logging.getLogger(__name__)
        if follower_id in (None, "") or following_id in (None, ""):
            raise ValidationError("followerId and followingId are required")

        def toggle(users: List[Document]) -> Dict[str, Any]:
            follower_index = find_index(users, follower_id)
            following_index = find_index(users, following_id)
            if follower_index is None or following_index is None:
                raise NotFoundError(USERS, follower_id if follower_index is None else following_id, "User")
            if follower_index == following_index:
                raise ValidationError("Users cannot follow themselves")

            follower = dict(users[follower_index])
            followed = dict(users[following_index])
            follower_key = normalize_value(follower["id"])
            followed_key = normalize_value(followed["id"])
            old_following = list(follower.get("following") or [])
            following = [uid for uid in old_following if normalize_value(uid) != followed_key]
            followers = [uid for uid in followed.get("followers") or [] if normalize_value(uid) != follower_key]

            # Nothing removed means the link did not exist yet.
            now_following = len(following) == len(old_following)
            if now_following:
                following.append(followed["id"])
                followers.append(follower["id"])
            follower["following"] = following
            followed["followers"] = followers
            users[follower_index] = follower
            users[following_index] = followed
            return {"following": now_following, "follower": follower, "followed": followed}

        result = await self.store.update(USERS, toggle)
        logger.info(
            "User %s %s user %s",
            result["follower"]["id"],
            "followed" if result["following"] else "unfollowed",
            result["followed"]["id"],
        )
        return result

    async def set_approval(self, user_id: Any, approval_status: str) -> Document:
        return await self.documents.set_field(USERS, user_id, "approvalStatus", approval_status, "User")

    async def set_blocked(self, user_id: Any, is_blocked: bool) -> Document:
        return await self.documents.set_field(USERS, user_id, "isBlocked", is_blocked, "User")
