"""Base model for persisted and wire-level GPW records.

Every record inherits from :class:`GpwBaseModel` which provides:

* ``alias_generator=to_pascal`` so snake_case fields serialize to the
  PascalCase keys used by the stored documents
  (``LocationContentViewCollection``, ``LocationContentViews``, ...).
* ``populate_by_name`` so records can be built from either spelling.
* Frozen instances; a record is a value, never mutated in place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class GpwBaseModel(BaseModel):
    """Base for GPW content records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_pascal,
    )

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-safe dict stored in / sent over the wire."""
        return self.model_dump(by_alias=True, mode="json")
