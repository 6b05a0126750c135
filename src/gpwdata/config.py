"""Service configuration for gpwdata."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from gpwdata._constants import COLLECTION_NAME, DATABASE_NAME, DEFAULT_HOST, DEFAULT_PORT
from gpwdata.exceptions import GpwConfigError


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise GpwConfigError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, value: str) -> float:
    try:
        return float(value.strip())
    except ValueError as exc:
        raise GpwConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class GpwDataConfig:
    """Service configuration.

    Parameters
    ----------
    database_name : str
        Logical database holding the content-view collection.
    collection_name : str
        Collection expected to hold at most one wrapper document.
    storage_path : Path or None
        Root directory for the JSON file backend. ``None`` selects the
        in-memory backend.
    host : str
        Interface the HTTP host binds to.
    port : int
        Port the HTTP host listens on.
    price_variance : float
        Relative price jitter applied by the basic content assembler.
        ``0.0`` makes assembly fully deterministic.
    price_seed : int or None
        Seed for the assembler's random source.
    """

    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME
    storage_path: Path | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    price_variance: float = 0.0
    price_seed: int | None = None

    def __post_init__(self) -> None:
        if not self.collection_name.strip():
            raise GpwConfigError("collection_name must be non-empty")
        if not self.database_name.strip():
            raise GpwConfigError("database_name must be non-empty")
        if not 0 < self.port < 65536:
            raise GpwConfigError(f"port out of range: {self.port}")
        if not 0.0 <= self.price_variance < 1.0:
            raise GpwConfigError(f"price_variance must be in [0, 1), got {self.price_variance}")
        if self.storage_path is not None and not isinstance(self.storage_path, Path):
            object.__setattr__(self, "storage_path", Path(self.storage_path))

    @classmethod
    def from_env(cls, **overrides: Any) -> GpwDataConfig:
        """Create configuration from ``GPW_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        GpwConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "GPW_DATABASE_NAME": "database_name",
            "GPW_COLLECTION_NAME": "collection_name",
            "GPW_HOST": "host",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        path_env = env.get("GPW_STORAGE_PATH")
        if path_env:
            config_kwargs["storage_path"] = Path(path_env).expanduser()

        port_env = env.get("GPW_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_int("GPW_PORT", port_env)

        variance_env = env.get("GPW_PRICE_VARIANCE")
        if variance_env is not None and "price_variance" not in overrides:
            config_kwargs["price_variance"] = _env_float("GPW_PRICE_VARIANCE", variance_env)

        seed_env = env.get("GPW_PRICE_SEED")
        if seed_env is not None and "price_seed" not in overrides:
            config_kwargs["price_seed"] = _env_int("GPW_PRICE_SEED", seed_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
