"""
Collection storage with per-collection locking.

Every piece of persisted state lives in one of five named collections,
each stored as a JSON array of documents.  ``CollectionStore`` is the
only object that touches the durable medium.  It offers three
primitives, ``read_all``, ``write_all`` and ``exists``, plus the
locking needed to turn "read everything, compute, write everything"
into a safe operation under concurrent requests:

* ``lock(*names)`` acquires the per-collection ``asyncio.Lock`` of each
  named collection in the fixed order given by ``COLLECTIONS``, so two
  operations spanning the same pair of collections can never deadlock.
* ``write_all`` refuses to run unless the collection's lock is held.
* ``update(name, fn)`` wraps the common single-collection
  read-modify-write sequence.

Readers do not take locks.  Writes replace the stored collection
atomically (write a temporary file, fsync, ``os.replace``), so a reader
sees either the previous or the new version, never a partial one, and a
crash mid-write leaves the previous version intact.

Two backends are provided: ``JsonFileBackend`` (one ``<name>.json`` per
collection in a data directory) and ``MemoryBackend``.  Backend calls
are blocking and run in worker threads via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple, TypeVar

from .config import Settings
from .errors import CorruptionError, InvalidCollectionError, StorageIOError

logger = logging.getLogger(__name__)

# Valid collection names.  The tuple order is also the global lock order.
COLLECTIONS: Tuple[str, ...] = ("users", "notifications", "ads", "posts", "reports")

Document = Dict[str, Any]
T = TypeVar("T")


def validate_collection(name: str) -> str:
    """Return ``name`` if it is a known collection, else raise."""
    if name not in COLLECTIONS:
        logger.warning("Rejected unknown collection %r", name)
        raise InvalidCollectionError(name)
    return name


def _decode(name: str, raw: str) -> List[Document]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptionError(f"Collection {name} is not valid JSON: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise CorruptionError(f"Collection {name} is not an array of documents")
    return data


def _encode(name: str, documents: List[Document]) -> str:
    try:
        return json.dumps(documents, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as exc:
        raise StorageIOError(f"Cannot encode collection {name}: {exc}") from exc


def _fsync_directory(directory: Path) -> None:
    """Flush a rename in ``directory`` to disk.  No-op outside POSIX."""
    if os.name != "posix":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


class JsonFileBackend:
    """Stores each collection as ``<data_dir>/<name>.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def has(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> Optional[List[Document]]:
        """Return the stored documents, or ``None`` if never written."""
        path = self.path_for(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise CorruptionError(f"Collection {name} is not UTF-8 text") from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot read collection {name}: {exc}") from exc
        return _decode(name, raw)

    def save(self, name: str, documents: List[Document]) -> None:
        """Atomically replace the stored collection.

        The new content is written to a temporary file in the same
        directory and renamed over the old file, so the rename is atomic
        on POSIX and Windows alike.
        On POSIX the directory is fsynced too, so the rename itself
        survives a crash.
        """
        payload = _encode(name, documents)
        path = self.path_for(name)
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=f".{name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
            _fsync_directory(self.data_dir)
        except OSError as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise StorageIOError(f"Cannot write collection {name}: {exc}") from exc


class MemoryBackend:
    """Keeps encoded collections in a dict.

    Documents are stored as JSON text so callers never share mutable
    state with the store, exactly as with the file backend.
    """

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def has(self, name: str) -> bool:
        return name in self._data

    def load(self, name: str) -> Optional[List[Document]]:
        raw = self._data.get(name)
        if raw is None:
            return None
        return _decode(name, raw)

    def save(self, name: str, documents: List[Document]) -> None:
        self._data[name] = _encode(name, documents)


class CollectionStore:
    """Owns all access to persisted collections."""

    def __init__(self, backend) -> None:
        self.backend = backend
        self._locks: Dict[str, asyncio.Lock] = {name: asyncio.Lock() for name in COLLECTIONS}

    async def exists(self, name: str) -> bool:
        """Whether ``name`` has ever been written.

        Unknown names raise ``InvalidCollectionError`` without touching
        the backend.
        """
        validate_collection(name)
        return await asyncio.to_thread(self.backend.has, name)

    async def read_all(self, name: str) -> List[Document]:
        """Return every document in ``name`` in insertion order.

        A collection that was never written is empty, not an error.
        """
        validate_collection(name)
        documents = await asyncio.to_thread(self.backend.load, name)
        if documents is None:
            logger.debug("Collection %s not written yet; treating as empty", name)
            return []
        return documents

    async def write_all(self, name: str, documents: List[Document]) -> None:
        """Replace the whole collection.

        Only checks that the collection lock is held by some task, not by
        the caller.  Callers are expected to hold it themselves, through
        ``lock`` or ``update``.
        """
        validate_collection(name)
        if not self._locks[name].locked():
            raise RuntimeError(f"write_all({name!r}) called without holding the collection lock")
        await asyncio.to_thread(self.backend.save, name, list(documents))
        logger.debug("Wrote %d documents to %s", len(documents), name)

    @asynccontextmanager
    async def lock(self, *names: str) -> AsyncIterator[None]:
        """Hold the locks of ``names`` for the duration of the block.

        Locks are always taken in ``COLLECTIONS`` order whatever order
        the caller lists them in, and duplicates are ignored.
        """
        for name in names:
            validate_collection(name)
        ordered = sorted(set(names), key=COLLECTIONS.index)
        async with AsyncExitStack() as stack:
            for name in ordered:
                await stack.enter_async_context(self._locks[name])
            yield

    async def update(self, name: str, fn: Callable[[List[Document]], T]) -> T:
        """Run ``fn`` on the documents of ``name`` under its lock.

        ``fn`` mutates the list in place and returns the operation's
        result.  If it raises, nothing is written.
        """
        async with self.lock(name):
            documents = await self.read_all(name)
            result = fn(documents)
            await self.write_all(name, documents)
            return result


def resolve_data_dir(data_dir: str) -> Path:
    """Resolve ``data_dir`` against the project root unless absolute."""
    path = Path(data_dir)
    if path.is_absolute():
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return (base_dir / path).resolve()


def create_store(settings: Settings) -> CollectionStore:
    """Build the store selected by ``settings.storage_backend``."""
    backend_name = settings.storage_backend.lower()
    if backend_name == "memory":
        logger.info("Using in-memory collection storage")
        return CollectionStore(MemoryBackend())
    if backend_name != "json":
        raise ValueError(f"Unknown STORAGE_BACKEND {settings.storage_backend!r}; expected 'json' or 'memory'")
    data_dir = resolve_data_dir(settings.data_dir)
    logger.info("Storing collections as JSON files in %s", data_dir)
    return CollectionStore(JsonFileBackend(data_dir))
