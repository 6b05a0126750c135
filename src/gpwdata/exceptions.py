"""Custom exception hierarchy for gpwdata."""

from __future__ import annotations


class GpwDataError(Exception):
    """Base exception for all gpwdata errors."""


class GpwConfigError(GpwDataError):
    """Invalid or missing configuration."""


class GpwStorageError(GpwDataError):
    """Document-store failure (I/O, serialization, unreachable backend)."""

    def __init__(
        self,
        message: str,
        *,
        operation: str = "",
        collection: str = "",
    ) -> None:
        self.operation = operation
        self.collection = collection
        super().__init__(message)


class GpwAssemblyError(GpwDataError):
    """Content views could not be assembled from the given inputs."""
