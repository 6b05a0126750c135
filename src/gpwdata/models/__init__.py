"""GPW content records."""

from gpwdata.models._base import GpwBaseModel
from gpwdata.models.content_view import (
    LocationContentView,
    LocationContentViewCollection,
    LocationContentViewsWrapper,
    ProductContentView,
)
from gpwdata.models.inputs import LocationData, ProductData

__all__ = [
    "GpwBaseModel",
    "LocationContentView",
    "LocationContentViewCollection",
    "LocationContentViewsWrapper",
    "LocationData",
    "ProductContentView",
    "ProductData",
]
