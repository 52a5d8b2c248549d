"""
Likes on posts and ads, with like notifications.

A PATCH on a post or an ad whose body carries ``likers`` is routed
here instead of the plain document patch.  The target's ``likers`` are
replaced by the supplied list (duplicates dropped, order kept),
``likesCount`` is recomputed, and one ``like`` notification is appended
to ``notifications``.

The two collections are written one after the other while holding both
locks.  They are not written as one transaction: if the notification
write fails (or the process dies between the writes) the like stays
recorded and the notification is missing.  The failure is logged and
the request fails with a storage error; nothing is rolled back.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from wazaifi_api.app.core.errors import NotFoundError, StorageError, ValidationError
from wazaifi_api.app.core.storage import CollectionStore, Document
from wazaifi_api.app.schemas.document import NotificationDocument
from wazaifi_api.app.services.document_service import (
    IMMUTABLE_FIELDS,
    find_index,
    new_id,
    normalize_value,
    now_iso,
)

logger = logging.getLogger(__name__)

LIKEABLE_COLLECTIONS = {"posts": "post", "ads": "ad"}
NOTIFICATIONS = "notifications"


def is_like_update(collection: str, changes: Mapping[str, Any]) -> bool:
    """Whether a patch on ``collection`` must go through ``LikeService``."""
    return collection in LIKEABLE_COLLECTIONS and "likers" in changes


def unique_likers(likers: List[Any]) -> List[Any]:
    seen = set()
    result = []
    for liker in likers:
        key = normalize_value(liker)
        if key in seen:
            continue
        seen.add(key)
        result.append(liker)
    return result


def pick_liker(explicit: Any, previous: List[Any], current: List[Any]) -> Optional[str]:
    """Liker named in the notification.

    An explicit ``likerId`` wins; otherwise the last liker that was not
    in the previous list; otherwise nobody (an unlike or a no-op).
    """
    if explicit not in (None, ""):
        return normalize_value(explicit)
    before = {normalize_value(liker) for liker in previous}
    added = [liker for liker in current if normalize_value(liker) not in before]
    return normalize_value(added[-1]) if added else None


class LikeService:
    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    async def update_likes(self, collection: str, doc_id: Any, changes: Mapping[str, Any]) -> Document:
        """Apply a like update and record a ``like`` notification.

        Other fields in ``changes`` are merged as in a normal patch,
        except ``likerId`` which only feeds the notification.
        """
        if collection not in LIKEABLE_COLLECTIONS:
            raise ValidationError(f"Likes are not supported on {collection}")
        likers = changes.get("likers")
        if not isinstance(likers, list):
            raise ValidationError("likers must be a list")
        likers = unique_likers(likers)
        updates = {
            key: value
            for key, value in changes.items()
            if key not in IMMUTABLE_FIELDS and key != "likerId"
        }

        async with self.store.lock(collection, NOTIFICATIONS):
            documents = await self.store.read_all(collection)
            index = find_index(documents, doc_id)
            if index is None:
                raise NotFoundError(collection, doc_id)
            previous = documents[index]
            updated = {**previous, **updates, "likers": likers, "likesCount": len(likers)}
            documents[index] = updated
            await self.store.write_all(collection, documents)
            logger.info("Updated likes on %s/%s: %d likers", collection, updated["id"], len(likers))

            notification = self._build_notification(
                collection,
                updated,
                pick_liker(changes.get("likerId"), previous.get("likers") or [], likers),
            )
            try:
                notifications = await self.store.read_all(NOTIFICATIONS)
                notifications.append(notification)
                await self.store.write_all(NOTIFICATIONS, notifications)
            except StorageError:
                logger.exception(
                    "Like on %s/%s was stored but its notification was not",
                    collection,
                    updated["id"],
                )
                raise
        logger.info("Created like notification %s for %s/%s", notification["id"], collection, updated["id"])
        return updated

    @staticmethod
    def _build_notification(collection: str, target: Document, liker_id: Optional[str]) -> Document:
        kind = LIKEABLE_COLLECTIONS[collection]
        fields = {
            "id": new_id(),
            "createdAt": now_iso(),
            "type": "like",
            "collection": collection,
            "targetId": normalize_value(target["id"]),
            "likerId": liker_id,
            "message": (
                f"User {liker_id} liked your {kind}"
                if liker_id is not None
                else f"Your {kind} now has {target['likesCount']} likes"
            ),
        }
        if target.get("userId") is not None:
            fields["recipientId"] = target["userId"]
        return NotificationDocument(**fields).model_dump()
