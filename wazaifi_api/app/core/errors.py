"""
Error taxonomy shared by the store, the services and the HTTP layer.

Every error carries the HTTP status it maps to; the application
registers a single exception handler that renders them as
``{"error": message}``.  Services raise these directly and never
translate or swallow them.
"""

from fastapi import status


class WazaifiError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCollectionError(WazaifiError):
    """Unknown collection name.  Raised before any storage I/O."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid collection: {name}")
        self.name = name


class ValidationError(WazaifiError):
    """A required field is missing or empty."""


class ConflictError(WazaifiError):
    """A uniqueness constraint (e.g. username) would be violated."""


class AuthError(WazaifiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(WazaifiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, collection: str, doc_id: object, label: str = "Document") -> None:
        super().__init__(f"{label} not found")
        self.collection = collection
        self.doc_id = doc_id


class StorageError(WazaifiError):
    """Underlying storage failure; fatal to the request, not to the process."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageIOError(StorageError):
    """Reading or writing a collection failed."""


class CorruptionError(StorageError):
    """Stored content is not a JSON array of documents."""
