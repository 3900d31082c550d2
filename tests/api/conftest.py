"""Fixtures for API tests: the real app with mocked store and catalog."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from stockledger.api.dependencies import get_services
from stockledger.api.main import app
from stockledger.application.services import LedgerServices, wire_services


@pytest.fixture
def services(utc_settings, mock_store, mock_gateway) -> LedgerServices:
    return wire_services(utc_settings, mock_store, mock_gateway)


@pytest.fixture
async def client(services: LedgerServices) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_services] = lambda: services
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
