from __future__ import annotations

from pathlib import Path

import pytest

from gpwdata.diagnostics import Diagnostic
from gpwdata.models import LocationData, ProductData
from gpwdata.storage import DocumentStorage, JsonFileStorage, MemoryStorage


class RecordingSink:
    """Diagnostic sink that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[Diagnostic] = []

    def record(self, diagnostic: Diagnostic) -> None:
        self.events.append(diagnostic)

    @property
    def errors(self) -> list[Diagnostic]:
        return [event for event in self.events if event.is_error]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(params=["memory", "json"])
def storage(request: pytest.FixtureRequest, tmp_path: Path) -> DocumentStorage:
    if request.param == "memory":
        return MemoryStorage()
    return JsonFileStorage(tmp_path / "store")


@pytest.fixture
def locations() -> list[LocationData]:
    return [
        LocationData(title="Tokyo", price_modifier=1.5),
        LocationData(title="Lagos"),
    ]


@pytest.fixture
def products() -> list[ProductData]:
    return [
        ProductData(title="Coffee", base_price=10, base_quantity=40),
        ProductData(title="Silk", base_price=120, base_quantity=5),
    ]
