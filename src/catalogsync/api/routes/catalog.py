"""Catalog endpoints: published snapshots, refresh and error dismissal."""

from __future__ import annotations

from fastapi import APIRouter, Response

from catalogsync.api.dependencies import Client
from catalogsync.api.schemas import (
    CatalogEntryResponse,
    CatalogResponse,
    FeedStateResponse,
    ListingsResponse,
)
from catalogsync.catalog.feed import CatalogFeed
from catalogsync.core.types import FeedStatus

router = APIRouter(tags=["catalog"])


def _catalog_response(feed: CatalogFeed) -> CatalogResponse:
    return CatalogResponse(
        **FeedStateResponse.state_of(feed),
        items=[CatalogEntryResponse.from_entry(e) for e in feed.snapshot],
    )


def _listings_response(account: str, feed: CatalogFeed) -> ListingsResponse:
    return ListingsResponse(
        **FeedStateResponse.state_of(feed),
        account=account,
        listed=[CatalogEntryResponse.from_entry(e) for e in feed.snapshot.listed],
        sold=[CatalogEntryResponse.from_entry(e) for e in feed.snapshot.sold],
    )


@router.get(
    "/catalog",
    response_model=CatalogResponse,
    operation_id="getCatalog",
    summary="Marketplace catalog",
    description="Unsold items from every seller. The first request runs the initial pass.",
)
async def get_catalog(client: Client) -> CatalogResponse:
    """Return the published marketplace catalog."""
    feed = client.marketplace
    if feed.status == FeedStatus.IDLE:
        await feed.refresh()
    return _catalog_response(feed)


@router.post(
    "/catalog/refresh",
    response_model=CatalogResponse,
    operation_id="refreshCatalog",
    summary="Refresh marketplace catalog",
    description="Run a new aggregation pass; also serves as the retry action after a failure.",
)
async def refresh_catalog(client: Client) -> CatalogResponse:
    """Run a marketplace pass and return the result."""
    await client.marketplace.refresh()
    return _catalog_response(client.marketplace)


@router.delete(
    "/catalog/error",
    status_code=204,
    operation_id="dismissCatalogError",
    summary="Dismiss catalog error",
)
async def dismiss_catalog_error(client: Client) -> Response:
    """Clear the marketplace error without retrying."""
    client.marketplace.dismiss_error()
    return Response(status_code=204)


@router.get(
    "/accounts/{account}/listings",
    response_model=ListingsResponse,
    operation_id="getListings",
    summary="Listings for an account",
    description="Items listed by the account, with the sold subset split out.",
)
async def get_listings(account: str, client: Client) -> ListingsResponse:
    """Return the published catalog for one seller."""
    feed = client.owned(account)
    if feed.status == FeedStatus.IDLE:
        await feed.refresh()
    return _listings_response(account, feed)


@router.post(
    "/accounts/{account}/listings/refresh",
    response_model=ListingsResponse,
    operation_id="refreshListings",
    summary="Refresh listings for an account",
)
async def refresh_listings(account: str, client: Client) -> ListingsResponse:
    """Run an ownership pass for one seller."""
    feed = client.owned(account)
    await feed.refresh()
    return _listings_response(account, feed)
