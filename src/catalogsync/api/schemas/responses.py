"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Literal

from pydantic import Field

from catalogsync.api.schemas.base import APIBaseSchema
from catalogsync.core.models import CatalogEntry
from catalogsync.core.types import ActionKind, ActionStatus, FeedStatus, MintStep
from catalogsync.core.units import format_ether

if TYPE_CHECKING:
    from catalogsync.actions.dispatcher import ActionRecord
    from catalogsync.catalog.feed import CatalogFeed


class CatalogEntryResponse(APIBaseSchema):
    """One catalog entry. Wei amounts are decimal strings."""

    item_id: int
    token_id: int
    seller: str
    price: str
    price_eth: str
    total_price: str
    total_price_eth: str
    name: str
    description: str
    image: str

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> CatalogEntryResponse:
        return cls(
            item_id=entry.item_id,
            token_id=entry.token_id,
            seller=entry.seller,
            price=str(entry.price),
            price_eth=format_ether(entry.price),
            total_price=str(entry.total_price),
            total_price_eth=format_ether(entry.total_price),
            name=entry.name,
            description=entry.description,
            image=entry.image,
        )


class FeedStateResponse(APIBaseSchema):
    """Loading and error state of a published catalog."""

    status: FeedStatus
    loading: bool
    error: str | None = None
    generation: int
    published_at: datetime | None = None

    @staticmethod
    def state_of(feed: CatalogFeed) -> dict:
        return {
            "status": feed.status,
            "loading": feed.loading,
            "error": feed.error,
            "generation": feed.generation,
            "published_at": feed.published_at,
        }


class CatalogResponse(FeedStateResponse):
    """Marketplace catalog: unsold items from every seller."""

    items: list[CatalogEntryResponse] = Field(default_factory=list)


class ListingsResponse(FeedStateResponse):
    """Catalog for one seller."""

    account: str
    listed: list[CatalogEntryResponse] = Field(default_factory=list)
    sold: list[CatalogEntryResponse] = Field(default_factory=list)


class ActionResponse(APIBaseSchema):
    """Outcome of a confirmed action."""

    kind: ActionKind
    status: ActionStatus
    step: MintStep | None = None
    item_id: int | None = None
    token_id: int | None = None
    history: list[ActionStatus] = Field(default_factory=list)
    transaction_hashes: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ActionRecord) -> ActionResponse:
        return cls(
            kind=record.kind,
            status=record.status,
            step=record.step,
            item_id=record.item_id,
            token_id=record.token_id,
            history=list(record.history),
            transaction_hashes=[
                r.transaction_hash for r in record.receipts if r.transaction_hash
            ],
        )


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]
    metadata: dict[str, int] = Field(default_factory=dict)
