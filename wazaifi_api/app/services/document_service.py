"""
Generic document repository.

``DocumentService`` implements list/get/insert/patch/delete for any
collection on top of ``CollectionStore``.  It holds no state between
calls: each operation reads the whole collection and, for mutations,
writes it back while holding the collection lock.

Ids and filter values are compared after ``normalize_value``, which
maps every JSON scalar to a canonical string.  Ids arrive from URL
paths as strings while clients may store numbers or booleans in
documents, so ``?price=10`` matches a stored ``10`` and ``/posts/7``
finds a document whose id is the number ``7``.  This is the only place
where loose comparison happens.

Text and booleans are deliberately not kept apart, while numbers are
compared by their canonical text only: ``?paid=true`` matches a stored
boolean ``true``, but ``?price=10.0`` does not match a stored ``10``.

Usernames stay unique in ``users`` whichever route writes them: inserts
and patches that carry a ``username`` are checked under the ``users``
lock, like signup.
"""

from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from wazaifi_api.app.core.errors import ConflictError, NotFoundError
from wazaifi_api.app.core.storage import CollectionStore, Document, validate_collection

logger = logging.getLogger(__name__)

# Fields assigned at creation and never changed afterwards.
IMMUTABLE_FIELDS = ("id", "createdAt")
USERS = "users"


def new_id() -> str:
    """Millisecond timestamp in hex followed by 64 random bits in hex."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(8)}"


def now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. ``2024-05-01T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_value(value: Any) -> Optional[str]:
    """Canonical string form used for id and filter comparison."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(normalize_value(item) or "" for item in value)
    return str(value)


def matches(document: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """True if every filter field is present in ``document`` and equal."""
    for field, expected in filters.items():
        if field not in document:
            return False
        if normalize_value(document[field]) != normalize_value(expected):
            return False
    return True


def find_index(documents: List[Document], doc_id: Any) -> Optional[int]:
    wanted = normalize_value(doc_id)
    for index, document in enumerate(documents):
        if normalize_value(document.get("id")) == wanted:
            return index
    return None


def ensure_unique_username(users: List[Document], username: Any, skip_index: Optional[int] = None) -> None:
    """Raise ``ConflictError`` if another user already has ``username``.

    Exact, case-sensitive match.  ``skip_index`` is the user being
    renamed, which may keep its own name.
    """
    for index, existing in enumerate(users):
        if index != skip_index and existing.get("username") == username:
            raise ConflictError("Username already exists")


def stamp(body: Mapping[str, Any]) -> Document:
    """Return ``body`` with a fresh ``id`` and ``createdAt``.

    Caller-supplied values for those two fields are overwritten.
    """
    document = dict(body)
    document["id"] = new_id()
    document["createdAt"] = now_iso()
    return document


class DocumentService:
    """CRUD operations shared by every collection."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    async def list(self, collection: str, filters: Optional[Mapping[str, Any]] = None) -> List[Document]:
        """Return documents matching all ``filters``, in insertion order."""
        documents = await self.store.read_all(collection)
        if not filters:
            return documents
        result = [doc for doc in documents if matches(doc, filters)]
        logger.debug("Filtered %s by %s: %d of %d", collection, dict(filters), len(result), len(documents))
        return result

    async def get(self, collection: str, doc_id: Any) -> Document:
        documents = await self.store.read_all(collection)
        index = find_index(documents, doc_id)
        if index is None:
            raise NotFoundError(collection, doc_id)
        return documents[index]

    async def insert(self, collection: str, body: Mapping[str, Any]) -> Document:
        """Store a new document built from ``body`` and return it."""
        validate_collection(collection)
        document = stamp(body)

        def append(documents: List[Document]) -> Document:
            if collection == USERS and "username" in document:
                ensure_unique_username(documents, document["username"])
            documents.append(document)
            return document

        created = await self.store.update(collection, append)
        logger.info("Inserted %s/%s", collection, created["id"])
        return created

    async def patch(self, collection: str, doc_id: Any, changes: Mapping[str, Any]) -> Document:
        """Shallow-merge ``changes`` into an existing document.

        ``id`` and ``createdAt`` cannot be changed; attempts are ignored.
        """
        validate_collection(collection)
        updates = {key: value for key, value in changes.items() if key not in IMMUTABLE_FIELDS}

        def merge(documents: List[Document]) -> Document:
            index = find_index(documents, doc_id)
            if index is None:
                raise NotFoundError(collection, doc_id)
            if collection == USERS and "username" in updates:
                ensure_unique_username(documents, updates["username"], skip_index=index)
            documents[index] = {**documents[index], **updates}
            return documents[index]

        updated = await self.store.update(collection, merge)
        logger.info("Patched %s/%s fields=%s", collection, updated["id"], sorted(updates))
        return updated

    async def delete(self, collection: str, doc_id: Any) -> Document:
        """Remove a document and return it."""
        validate_collection(collection)

        def remove(documents: List[Document]) -> Document:
            index = find_index(documents, doc_id)
            if index is None:
                raise NotFoundError(collection, doc_id)
            return documents.pop(index)

        removed = await self.store.update(collection, remove)
        logger.info("Deleted %s/%s", collection, removed["id"])
        return removed

    async def set_field(self, collection: str, doc_id: Any, field: str, value: Any, label: str = "Document") -> Document:
        """Single-field update used by moderation transitions."""
        validate_collection(collection)

        def assign(documents: List[Document]) -> Document:
            index = find_index(documents, doc_id)
            if index is None:
                raise NotFoundError(collection, doc_id, label)
            documents[index] = {**documents[index], field: value}
            return documents[index]

        updated = await self.store.update(collection, assign)
        logger.info("Set %s/%s %s=%r", collection, updated["id"], field, value)
        return updated

