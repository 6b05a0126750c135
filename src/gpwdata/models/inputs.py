"""Raw inputs the content assembler turns into views."""

from __future__ import annotations

from pydantic import Field, field_validator

from gpwdata.models._base import GpwBaseModel


class LocationData(GpwBaseModel):
    """A market location.

    Parameters
    ----------
    title : str
        Display name of the location.
    price_modifier : float
        Multiplier applied to every product's base price at this location.
    """

    title: str
    price_modifier: float = Field(default=1.0, gt=0)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        title = value.strip()
        if not title:
            raise ValueError("title must be non-empty")
        return title


class ProductData(GpwBaseModel):
    """A tradeable product.

    Parameters
    ----------
    title : str
        Display name of the product.
    base_price : int
        Price before any location modifier.
    base_quantity : int
        Units available at each location.
    """

    title: str
    base_price: int = Field(ge=0)
    base_quantity: int = Field(default=0, ge=0)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        title = value.strip()
        if not title:
            raise ValueError("title must be non-empty")
        return title
