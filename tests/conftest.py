"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from itertools import count
from unittest.mock import AsyncMock

import pytest

from stockledger.config import Settings
from stockledger.core.entities import Movement, MovementType, Product
from stockledger.core.interfaces import ICatalogGateway, IMovementStore

_ids = count(1)


@pytest.fixture
def make_movement() -> Callable[..., Movement]:
    """Factory for movements; dates default to 2024-03-01 10:00 UTC."""

    def _make(
        quantity: int = 10,
        type: MovementType = MovementType.ENTRY,
        date: datetime | None = None,
        product_id: int = 7,
        product_name: str = "Bolt",
        **extra,
    ) -> Movement:
        return Movement(
            id=extra.pop("id", f"mv-{next(_ids)}"),
            product_id=product_id,
            product_name=product_name,
            type=type,
            quantity=quantity,
            date=date or datetime(2024, 3, 1, 10, 0, tzinfo=UTC),
            **extra,
        )

    return _make


@pytest.fixture
def make_product() -> Callable[..., Product]:
    def _make(
        id: int = 7,
        name: str = "Bolt",
        quantity: int = 5,
        threshold: int | None = 10,
        **extra,
    ) -> Product:
        return Product(
            id=id,
            name=name,
            quantity=quantity,
            stock_alert_threshold=threshold,
            **extra,
        )

    return _make


@pytest.fixture
def mock_store() -> AsyncMock:
    """In-memory stand-in for the movement store."""
    store = AsyncMock(spec=IMovementStore)
    store.all.return_value = []
    store.list_unreconciled.return_value = []
    store.delete_by_id.return_value = True
    return store


@pytest.fixture
def mock_gateway() -> AsyncMock:
    gateway = AsyncMock(spec=ICatalogGateway)
    gateway.list_products.return_value = []
    return gateway


@pytest.fixture
def utc_settings(tmp_path) -> Settings:
    """Settings pinned to UTC with a throwaway data directory."""
    return Settings(timezone="UTC", storage={"data_dir": tmp_path / "data"})
