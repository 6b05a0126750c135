"""Content assembly: raw locations and products to location content views."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Protocol

from gpwdata.exceptions import GpwAssemblyError
from gpwdata.models import LocationContentView, LocationData, ProductContentView, ProductData

_logger = logging.getLogger(__name__)


class ContentAssembler(Protocol):
    """Maps raw inputs to an ordered sequence of content views. May raise."""

    async def assemble(
        self,
        locations: Sequence[LocationData],
        products: Sequence[ProductData],
    ) -> list[LocationContentView]:
        ...


class BasicContentAssembler:
    """One view per location, one product view per product, input order kept.

    Prices are ``base_price * price_modifier``, optionally jittered by up to
    ``variance`` in either direction. With ``variance=0`` (the default) the
    output depends only on the inputs.
    """

    def __init__(self, *, variance: float = 0.0, seed: int | None = None) -> None:
        if not 0.0 <= variance < 1.0:
            raise ValueError(f"variance must be in [0, 1), got {variance}")
        self._variance = variance
        self._seed = seed

    def _price(self, product: ProductData, location: LocationData, rng: random.Random) -> int:
        factor = 1.0
        if self._variance:
            factor = rng.uniform(1.0 - self._variance, 1.0 + self._variance)
        return max(0, round(product.base_price * location.price_modifier * factor))

    async def assemble(
        self,
        locations: Sequence[LocationData],
        products: Sequence[ProductData],
    ) -> list[LocationContentView]:
        rng = random.Random(self._seed)
        views: list[LocationContentView] = []
        try:
            for location in locations:
                product_views = [
                    ProductContentView(
                        product_data=product,
                        price=self._price(product, location, rng),
                        quantity=product.base_quantity,
                    )
                    for product in products
                ]
                views.append(LocationContentView(location_data=location, product_content_views=product_views))
        except (ArithmeticError, TypeError, ValueError) as exc:
            raise GpwAssemblyError(f"Cannot assemble content views: {exc}") from exc
        _logger.debug("Assembled %d location views x %d products", len(views), len(products))
        return views
