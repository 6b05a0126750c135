"""Singleton collection store.

Owns the read/write protocol against one named collection that is
expected to hold at most one :class:`LocationContentViewsWrapper`:

* read: zero documents is "absent", one is unwrapped, more than one is an
  anomaly that is reported and never resolved by picking a document.
* write: delete every document, then insert exactly one. The two steps
  are not atomic and no rollback is attempted.

Neither operation raises. Every failure resolves to a value plus an
optional :class:`Diagnostic`, which is also handed to the injected sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from gpwdata._constants import COLLECTION_NAME, DATABASE_NAME
from gpwdata.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, emit
from gpwdata.models import LocationContentViewCollection, LocationContentViewsWrapper
from gpwdata.storage import Collection, DocumentStorage

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Outcome of :meth:`SingletonCollectionStore.read`.

    ``collection is None`` means no document exists (or storage could not
    be reached).
    """

    collection: LocationContentViewCollection | None
    diagnostic: Diagnostic | None = None

    @property
    def is_absent(self) -> bool:
        return self.collection is None


@dataclass(frozen=True, slots=True)
class WriteResult:
    success: bool
    diagnostic: Diagnostic | None = None


class SingletonCollectionStore:
    """Read/replace the single wrapper document of one collection."""

    def __init__(
        self,
        storage: DocumentStorage,
        *,
        database_name: str = DATABASE_NAME,
        collection_name: str = COLLECTION_NAME,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._storage = storage
        self._database_name = database_name
        self._collection_name = collection_name
        self._sink = sink

    @property
    def collection_name(self) -> str:
        return self._collection_name

    async def _collection(self) -> Collection:
        database = await self._storage.get_database(self._database_name)
        return database.get_collection(self._collection_name)

    def _report(self, diagnostic: Diagnostic) -> Diagnostic:
        emit(self._sink, diagnostic)
        return diagnostic

    async def read(self, *, suppress_absence_logging: bool = False) -> ReadResult:
        """Fetch the stored collection.

        Parameters
        ----------
        suppress_absence_logging : bool
            Skip the diagnostic for a storage fault. Used by existence
            probes, where absence is the expected outcome.
        """
        try:
            collection = await self._collection()
            documents = await collection.find_all()
        except Exception as exc:  # noqa: BLE001
            if suppress_absence_logging:
                _logger.debug("read %s: storage fault suppressed: %s", self._collection_name, exc)
                return ReadResult(None)
            return ReadResult(
                None,
                self._report(
                    Diagnostic(
                        kind=DiagnosticKind.TRANSPORT_FAULT,
                        level=logging.INFO,
                        message=f"read failed. Error={exc}",
                        operation="read",
                    )
                ),
            )

        count = len(documents)
        if count == 0:
            return ReadResult(None)

        if count > 1:
            return ReadResult(
                LocationContentViewCollection(),
                self._report(
                    Diagnostic(
                        kind=DiagnosticKind.MULTIPLE_DOCUMENTS,
                        message=f"read failed. Expected at most one document in {self._collection_name}.",
                        operation="read",
                        count=count,
                    )
                ),
            )

        try:
            wrapper = LocationContentViewsWrapper.model_validate(documents[0])
        except ValidationError as exc:
            _logger.debug("read %s: undecodable document: %s", self._collection_name, exc)
            wrapper = None

        if wrapper is None or wrapper.location_content_view_collection is None:
            return ReadResult(
                LocationContentViewCollection(),
                self._report(
                    Diagnostic(
                        kind=DiagnosticKind.PAYLOAD_MISSING,
                        message=f"read failed. Document in {self._collection_name} has no content view collection.",
                        operation="read",
                    )
                ),
            )
        return ReadResult(wrapper.location_content_view_collection)

    async def write(self, payload: LocationContentViewCollection) -> WriteResult:
        """Replace whatever is stored with a single wrapper around *payload*.

        A fault after the delete step leaves the collection empty.
        """
        try:
            document = LocationContentViewsWrapper(location_content_view_collection=payload).to_document()
            collection = await self._collection()
            deleted = await collection.delete_all()
            _logger.debug("write %s: removed %s previous document(s)", self._collection_name, deleted)
            await collection.insert_one(document)
        except Exception as exc:  # noqa: BLE001
            return WriteResult(
                False,
                self._report(
                    Diagnostic(
                        kind=DiagnosticKind.TRANSPORT_FAULT,
                        message=f"write failed. Error={exc}",
                        operation="write",
                    )
                ),
            )
        return WriteResult(True)
