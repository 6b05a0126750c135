"""Document-store client interface and bundled backends.

The store layer only talks to the structural protocols defined here
(:class:`DocumentStorage`, :class:`Database`, :class:`Collection`), which
makes it easy to pass test doubles while keeping the bundled backends
concrete.

Every backend raises :class:`~gpwdata.exceptions.GpwStorageError` for its
own failures.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from gpwdata.config import GpwDataConfig
from gpwdata.exceptions import GpwStorageError

_logger = logging.getLogger(__name__)

Document = dict[str, Any]


class Collection(Protocol):
    """A named set of schemaless documents."""

    async def find_all(self) -> list[Document]:
        ...

    async def delete_all(self) -> int:
        ...

    async def insert_one(self, document: Document) -> None:
        ...


class Database(Protocol):
    def get_collection(self, name: str) -> Collection:
        ...


class DocumentStorage(Protocol):
    async def get_database(self, name: str) -> Database:
        ...


# ------------------------------------------------------------------
# In-memory backend
# ------------------------------------------------------------------


class MemoryCollection:
    """Process-local collection. Documents are copied in and out."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: list[Document] = []

    async def find_all(self) -> list[Document]:
        _logger.debug("find_all %s -> %d documents", self.name, len(self._documents))
        return copy.deepcopy(self._documents)

    async def delete_all(self) -> int:
        deleted = len(self._documents)
        self._documents.clear()
        _logger.debug("delete_all %s -> %d deleted", self.name, deleted)
        return deleted

    async def insert_one(self, document: Document) -> None:
        if not isinstance(document, dict):
            raise GpwStorageError(
                f"Document must be a mapping, got {type(document).__name__}",
                operation="insert_one",
                collection=self.name,
            )
        self._documents.append(copy.deepcopy(document))
        _logger.debug("insert_one %s -> %d documents", self.name, len(self._documents))


class MemoryDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self._collections: dict[str, MemoryCollection] = {}

    def get_collection(self, name: str) -> MemoryCollection:
        collection = self._collections.get(name)
        if collection is None:
            collection = MemoryCollection(name)
            self._collections[name] = collection
        return collection


class MemoryStorage:
    """Storage client keeping every database in process memory."""

    def __init__(self) -> None:
        self._databases: dict[str, MemoryDatabase] = {}

    async def get_database(self, name: str) -> MemoryDatabase:
        database = self._databases.get(name)
        if database is None:
            database = MemoryDatabase(name)
            self._databases[name] = database
        return database


# ------------------------------------------------------------------
# JSON file backend
# ------------------------------------------------------------------


def _read_documents(path: Path, collection: str) -> list[Document]:
    if not path.exists():
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise GpwStorageError(f"Cannot read {path}: {exc}", operation="find_all", collection=collection) from exc
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GpwStorageError(
            f"Collection file {path} is not valid JSON: {exc}",
            operation="find_all",
            collection=collection,
        ) from exc
    if not isinstance(data, list) or not all(isinstance(doc, dict) for doc in data):
        raise GpwStorageError(
            f"Collection file {path} must hold a JSON array of objects",
            operation="find_all",
            collection=collection,
        )
    return data


def _write_documents(path: Path, documents: list[Document], operation: str, collection: str) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(documents, indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as exc:
        raise GpwStorageError(f"Cannot write {path}: {exc}", operation=operation, collection=collection) from exc


class JsonFileCollection:
    """Collection persisted as a JSON array in a single file.

    Each call reads or rewrites the whole file, so a single call is
    atomic on disk. Nothing makes a sequence of calls atomic.
    """

    def __init__(self, name: str, path: Path, lock: asyncio.Lock) -> None:
        self.name = name
        self.path = path
        self._lock = lock

    async def find_all(self) -> list[Document]:
        async with self._lock:
            documents = await asyncio.to_thread(_read_documents, self.path, self.name)
        _logger.debug("find_all %s -> %d documents", self.path, len(documents))
        return documents

    async def delete_all(self) -> int:
        """Empty the collection, discarding a damaged file as well."""
        async with self._lock:
            try:
                deleted = len(await asyncio.to_thread(_read_documents, self.path, self.name))
            except GpwStorageError as exc:
                _logger.warning("delete_all %s: discarding unreadable collection file: %s", self.path, exc)
                deleted = 0
            if deleted or self.path.exists():
                await asyncio.to_thread(_write_documents, self.path, [], "delete_all", self.name)
        _logger.debug("delete_all %s -> %d deleted", self.path, deleted)
        return deleted

    async def insert_one(self, document: Document) -> None:
        if not isinstance(document, dict):
            raise GpwStorageError(
                f"Document must be a mapping, got {type(document).__name__}",
                operation="insert_one",
                collection=self.name,
            )
        async with self._lock:
            documents = await asyncio.to_thread(_read_documents, self.path, self.name)
            documents.append(document)
            await asyncio.to_thread(_write_documents, self.path, documents, "insert_one", self.name)
        _logger.debug("insert_one %s -> %d documents", self.path, len(documents))


class JsonFileDatabase:
    def __init__(self, name: str, root: Path, locks: dict[Path, asyncio.Lock]) -> None:
        self.name = name
        self.root = root
        self._locks = locks

    def get_collection(self, name: str) -> JsonFileCollection:
        if not name or any(sep in name for sep in ("/", "\\")) or name in (".", ".."):
            raise GpwStorageError(f"Invalid collection name: {name!r}", operation="get_collection", collection=name)
        path = self.root / f"{name}.json"
        lock = self._locks.setdefault(path, asyncio.Lock())
        return JsonFileCollection(name, path, lock)


class JsonFileStorage:
    """Storage client persisting each collection under ``<root>/<database>/``."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self._locks: dict[Path, asyncio.Lock] = {}

    async def get_database(self, name: str) -> JsonFileDatabase:
        if not name or any(sep in name for sep in ("/", "\\")) or name in (".", ".."):
            raise GpwStorageError(f"Invalid database name: {name!r}", operation="get_database")
        return JsonFileDatabase(name, self.root / name, self._locks)


def build_storage(config: GpwDataConfig) -> DocumentStorage:
    """Return the backend selected by *config*."""
    if config.storage_path is None:
        _logger.info("Using in-memory storage")
        return MemoryStorage()
    _logger.info("Using JSON file storage at %s", config.storage_path)
    return JsonFileStorage(config.storage_path)
