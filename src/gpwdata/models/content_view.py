"""Content-view records and the persisted singleton wrapper."""

from __future__ import annotations

from pydantic import Field

from gpwdata.models._base import GpwBaseModel
from gpwdata.models.inputs import LocationData, ProductData


class ProductContentView(GpwBaseModel):
    """One product as presented at one location."""

    product_data: ProductData
    price: int = Field(ge=0)
    quantity: int = Field(ge=0)


class LocationContentView(GpwBaseModel):
    """One location's content presentation."""

    location_data: LocationData
    product_content_views: list[ProductContentView] = Field(default_factory=list)


class LocationContentViewCollection(GpwBaseModel):
    """The aggregate returned to callers.

    ``location_content_views`` is ``None`` when no data could be read;
    callers treat ``None`` and ``[]`` alike.
    """

    location_content_views: list[LocationContentView] | None = None

    @property
    def has_views(self) -> bool:
        return bool(self.location_content_views)


class LocationContentViewsWrapper(GpwBaseModel):
    """Top-level stored document owning exactly one collection.

    Stored as ``{"LocationContentViewCollection": {"LocationContentViews": [...]}}``.
    The inner collection is ``None`` only for damaged documents.
    """

    location_content_view_collection: LocationContentViewCollection | None = None
