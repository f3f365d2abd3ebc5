"""Integration test fixtures for the HTTP API."""

from __future__ import annotations

import re
from typing import AsyncIterator

import pytest
import respx
from httpx import ASGITransport, AsyncClient, Response

from catalogsync.api.app import create_app
from catalogsync.client import CatalogSyncClient
from fakes import metadata_payload

TOKEN_PATTERN = re.compile(r"^https://meta\.test/ipfs/(?P<token>\d+)\.json$")


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Mock outbound metadata and pinning requests; ASGI traffic is not intercepted."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def metadata_route(respx_mock):
    """Serve a valid metadata document for every token URI."""

    def _serve(request, **kwargs) -> Response:
        token_id = int(TOKEN_PATTERN.match(str(request.url)).group("token"))
        return Response(200, json=metadata_payload(token_id))

    return respx_mock.get(url__regex=TOKEN_PATTERN.pattern).mock(side_effect=_serve)


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture
async def catalog_client(ledger, mock_settings, sleep, clock) -> AsyncIterator[CatalogSyncClient]:
    """Catalog client over the fake ledger with no real waiting."""
    async with CatalogSyncClient(ledger, mock_settings, sleep=sleep, clock=clock) as client:
        yield client


@pytest.fixture
async def test_client(
    catalog_client: CatalogSyncClient,
    ledger,
    mock_settings,
    metadata_route,
) -> AsyncIterator[AsyncClient]:
    """
    Create test client with the catalog client wired into app state.

    ASGITransport does not run the lifespan, so the state it would build is
    set directly.
    """
    app = create_app(ledger, settings=mock_settings)
    app.state.catalog_client = catalog_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def unwired_client(mock_settings) -> AsyncIterator[AsyncClient]:
    """Test client for an app whose lifespan has not run."""
    app = create_app(settings=mock_settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
