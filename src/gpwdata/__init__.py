"""gpwdata - Async singleton-document storage service for GPW content views."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gpwdata")
except PackageNotFoundError:
    __version__ = "0+local"
from gpwdata.assembler import BasicContentAssembler, ContentAssembler
from gpwdata.config import GpwDataConfig
from gpwdata.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, LoggingDiagnosticSink
from gpwdata.exceptions import (
    GpwAssemblyError,
    GpwConfigError,
    GpwDataError,
    GpwStorageError,
)
from gpwdata.models import (
    LocationContentView,
    LocationContentViewCollection,
    LocationContentViewsWrapper,
    LocationData,
    ProductContentView,
    ProductData,
)
from gpwdata.service import GpwDataService
from gpwdata.storage import JsonFileStorage, MemoryStorage, build_storage
from gpwdata.store import ReadResult, SingletonCollectionStore, WriteResult

__all__ = [
    "__version__",
    "BasicContentAssembler",
    "ContentAssembler",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    "GpwAssemblyError",
    "GpwConfigError",
    "GpwDataConfig",
    "GpwDataError",
    "GpwDataService",
    "GpwStorageError",
    "JsonFileStorage",
    "LocationContentView",
    "LocationContentViewCollection",
    "LocationContentViewsWrapper",
    "LocationData",
    "LoggingDiagnosticSink",
    "MemoryStorage",
    "ProductContentView",
    "ProductData",
    "ReadResult",
    "SingletonCollectionStore",
    "WriteResult",
    "build_storage",
]
