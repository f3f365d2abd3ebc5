"""Main library client for standalone usage."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx

from catalogsync.actions.dispatcher import ActionDispatcher, ActionRecord
from catalogsync.catalog.aggregator import CatalogAggregator
from catalogsync.catalog.feed import CatalogFeed
from catalogsync.config import CatalogSyncSettings
from catalogsync.core.models import CatalogEntry, ListingDraft, OwnedCatalog
from catalogsync.pinning.client import PinningClient, PinningConfig
from catalogsync.resolution.base import ClockFunc, ResolverConfig, SleepFunc, default_sleep
from catalogsync.resolution.metadata import MetadataResolver
from catalogsync.resolution.pacing import RateLimitGovernor

if TYPE_CHECKING:
    from catalogsync.ledger.base import LedgerClient

logger = logging.getLogger(__name__)


class CatalogSyncClient:
    """
    Main client for the catalogsync library.

    Wires one metadata resolver and one rate-limit governor into the
    aggregator, publishes catalogs through feeds, and refreshes every
    feed after a confirmed action.

    Usage:
        async with CatalogSyncClient(ledger) as client:
            await client.marketplace.refresh()
            entries = client.marketplace.snapshot

            mine = client.owned("0xabc...")
            await mine.refresh()

            await client.purchase(entries[0])

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        ledger: LedgerClient | None,
        settings: CatalogSyncSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = default_sleep,
        clock: ClockFunc = time.monotonic,
    ) -> None:
        """
        Initialize the client.

        Args:
            ledger: Marketplace/NFT contract client
            settings: Application settings. If not provided, loaded from environment.
            transport: Optional httpx transport shared by the HTTP clients
            sleep: Suspension function used for pacing, backoff and delays
            clock: Monotonic clock used by the governor
        """
        self._settings = settings or CatalogSyncSettings()
        self._ledger = ledger

        self._resolver = MetadataResolver(
            ResolverConfig.from_settings(self._settings),
            sleep=sleep,
            transport=transport,
        )
        self._governor = RateLimitGovernor(
            self._settings.pace_interval,
            clock=clock,
            sleep=sleep,
        )
        self._pinning = PinningClient(
            PinningConfig.from_settings(self._settings),
            transport=transport,
        )
        self._aggregator = CatalogAggregator(ledger, self._resolver, self._governor)
        self._dispatcher = ActionDispatcher(
            ledger,
            on_confirmed=self.refresh_all,
            pinning=self._pinning,
            resolver=self._resolver,
            sleep=sleep,
            verify_delay=self._settings.listing_verify_delay,
        )

        self._marketplace: CatalogFeed[tuple[CatalogEntry, ...]] = CatalogFeed(
            self._load_marketplace,
            empty=(),
            error_prefix="Failed to load marketplace items",
        )
        self._owned: dict[str, CatalogFeed[OwnedCatalog]] = {}

    async def __aenter__(self) -> CatalogSyncClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def close(self) -> None:
        """Close all resources."""
        await self._resolver.close()
        await self._pinning.close()

    @property
    def settings(self) -> CatalogSyncSettings:
        return self._settings

    @property
    def resolver(self) -> MetadataResolver:
        return self._resolver

    @property
    def aggregator(self) -> CatalogAggregator:
        return self._aggregator

    @property
    def dispatcher(self) -> ActionDispatcher:
        return self._dispatcher

    @property
    def ledger_connected(self) -> bool:
        return self._ledger is not None

    @property
    def marketplace(self) -> CatalogFeed[tuple[CatalogEntry, ...]]:
        """Feed of unsold items from every seller."""
        return self._marketplace

    def owned(self, account: str) -> CatalogFeed[OwnedCatalog]:
        """Feed of items listed by ``account`` (one feed per account, case-insensitive)."""
        key = account.lower()
        feed = self._owned.get(key)
        if feed is None:

            async def _load() -> OwnedCatalog:
                return await self._aggregator.owned_by(account)

            feed = CatalogFeed(
                _load,
                empty=OwnedCatalog(),
                error_prefix="Failed to load your listed items",
            )
            self._owned[key] = feed
        return feed

    async def _load_marketplace(self) -> tuple[CatalogEntry, ...]:
        return tuple(await self._aggregator.marketplace())

    async def refresh_all(self) -> None:
        """Re-run the marketplace pass and every owned pass that has been requested."""
        await self._marketplace.refresh()
        for feed in list(self._owned.values()):
            await feed.refresh()

    async def purchase(self, entry: CatalogEntry) -> ActionRecord:
        """Buy an entry and refresh the catalogs once confirmed."""
        return await self._dispatcher.purchase(entry)

    async def mint_and_list(self, uri: str, price: int) -> ActionRecord:
        """Mint a token for ``uri`` and list it at ``price`` wei."""
        return await self._dispatcher.mint_and_list(uri, price)

    async def upload_image(self, content: bytes, filename: str, content_type: str) -> str:
        """Pin an image and return its gateway URI."""
        stamp = int(time.time() * 1000)
        cid = await self._pinning.pin_file(
            content,
            filename,
            name=f"NFT_Image_{stamp}",
            description="NFT Marketplace Image",
            content_type=content_type,
        )
        return self._pinning.gateway_uri(cid)

    async def create_listing(self, draft: ListingDraft) -> ActionRecord:
        """Pin a draft's metadata, then mint and list it."""
        return await self._dispatcher.create_listing(draft)
