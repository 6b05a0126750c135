"""Data facade exposing the remotely callable operations.

Every operation returns a plain value. Faults from storage or content
assembly are converted to ``False`` / an empty collection and reported
through the diagnostic sink; nothing is raised to the caller.

Usage::

    service = GpwDataService(MemoryStorage())
    await service.create_location_content_views(locations, products)
    views = await service.get_location_content_views()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gpwdata.assembler import BasicContentAssembler, ContentAssembler
from gpwdata.config import GpwDataConfig
from gpwdata.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, LoggingDiagnosticSink, emit
from gpwdata.models import LocationContentViewCollection, LocationData, ProductData
from gpwdata.storage import DocumentStorage
from gpwdata.store import SingletonCollectionStore

_logger = logging.getLogger(__name__)


class GpwDataService:
    """Facade over :class:`SingletonCollectionStore`.

    Parameters
    ----------
    storage : DocumentStorage or None
        Storage client. ``None`` leaves the service running but with
        storage reported as not ready.
    assembler : ContentAssembler, optional
        Defaults to a :class:`BasicContentAssembler` built from *config*.
    config : GpwDataConfig, optional
    sink : DiagnosticSink, optional
        Defaults to :class:`LoggingDiagnosticSink`.
    """

    def __init__(
        self,
        storage: DocumentStorage | None,
        *,
        assembler: ContentAssembler | None = None,
        config: GpwDataConfig | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._config = config or GpwDataConfig()
        self._sink: DiagnosticSink = sink if sink is not None else LoggingDiagnosticSink()
        self._assembler: ContentAssembler = assembler or BasicContentAssembler(
            variance=self._config.price_variance,
            seed=self._config.price_seed,
        )
        self._store: SingletonCollectionStore | None = None
        if storage is not None:
            self._store = SingletonCollectionStore(
                storage,
                database_name=self._config.database_name,
                collection_name=self._config.collection_name,
                sink=self._sink,
            )

    @property
    def store(self) -> SingletonCollectionStore | None:
        return self._store

    def _storage_missing(self, operation: str) -> None:
        emit(
            self._sink,
            Diagnostic(
                kind=DiagnosticKind.TRANSPORT_FAULT,
                level=logging.INFO if operation != "create" else logging.ERROR,
                message="storage is not configured",
                operation=operation,
            ),
        )

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def is_service_ready(self) -> bool:
        return True

    def is_storage_ready(self) -> bool:
        """Whether a storage client is configured. Performs no I/O."""
        return self._store is not None

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    async def has_location_content_views(self) -> bool:
        """Determine if data exists yet. Silent when it does not."""
        if self._store is None:
            return False
        result = await self._store.read(suppress_absence_logging=True)
        return result.collection is not None and result.collection.has_views

    async def get_location_content_views(self) -> LocationContentViewCollection:
        """Return the stored views; the sequence is ``None`` when nothing could be read."""
        if self._store is None:
            self._storage_missing("get")
            return LocationContentViewCollection()
        result = await self._store.read(suppress_absence_logging=False)
        if result.collection is None:
            return LocationContentViewCollection()
        return result.collection

    async def create_location_content_views(
        self,
        location_datas: Sequence[LocationData],
        product_datas: Sequence[ProductData],
    ) -> bool:
        """Assemble views from the inputs and replace the stored data.

        Always performs a full replace, whether or not data already exists.
        """
        try:
            views = await self._assembler.assemble(location_datas, product_datas)
            payload = LocationContentViewCollection(location_content_views=list(views))
        except Exception as exc:  # noqa: BLE001
            emit(
                self._sink,
                Diagnostic(
                    kind=DiagnosticKind.ASSEMBLY_FAULT,
                    message=f"create failed. Error={exc}",
                    operation="create",
                ),
            )
            return False

        if self._store is None:
            self._storage_missing("create")
            return False

        result = await self._store.write(payload)
        if result.success:
            _logger.info(
                "Stored %d location content views in %s",
                len(payload.location_content_views or []),
                self._store.collection_name,
            )
        return result.success
