"""Catalog aggregator: turns ledger records into display-ready entries."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from catalogsync.core.exceptions import MissingContextError, PassError, TokenURILookupError
from catalogsync.core.models import CatalogEntry, ItemRecord, OwnedCatalog
from catalogsync.core.types import CatalogView
from catalogsync.core.uri import is_unresolved_uri

if TYPE_CHECKING:
    from catalogsync.ledger.base import LedgerClient
    from catalogsync.resolution.metadata import MetadataResolver
    from catalogsync.resolution.pacing import RateLimitGovernor

logger = logging.getLogger(__name__)

ItemPredicate = Callable[[ItemRecord], bool]


def unsold(record: ItemRecord) -> bool:
    """Marketplace filter: only items still for sale."""
    return not record.sold


def seller_is(account: str) -> ItemPredicate:
    """Ownership filter: items listed by ``account``, sold or not."""

    def _predicate(record: ItemRecord) -> bool:
        return record.is_sold_by(account)

    return _predicate


class CatalogAggregator:
    """
    Runs aggregation passes over the marketplace item range.

    A pass reads the item count once, then walks ids 1..count strictly in
    sequence: record lookup, filter, token URI lookup, pacing, metadata
    resolution and total price lookup. Failures are isolated per record;
    only failing to read the item count aborts the pass.

    Usage:
        aggregator = CatalogAggregator(ledger, resolver, governor)
        entries = await aggregator.marketplace()
        mine = await aggregator.owned_by("0xabc...")
    """

    def __init__(
        self,
        ledger: LedgerClient | None,
        resolver: MetadataResolver,
        governor: RateLimitGovernor,
    ) -> None:
        self._ledger = ledger
        self._resolver = resolver
        self._governor = governor

    async def marketplace(self) -> list[CatalogEntry]:
        """Unsold items from every seller, in item id order."""
        return await self.aggregate(unsold, view=CatalogView.MARKETPLACE)

    async def owned_by(self, account: str | None) -> OwnedCatalog:
        """Items listed by ``account``, with the sold subset split out."""
        if not account:
            raise MissingContextError("Missing required parameter: account")

        collected = await self._collect(seller_is(account), view=CatalogView.OWNED)
        listed = tuple(entry for _, entry in collected)
        sold = tuple(entry for record, entry in collected if record.sold)

        logger.info(f"Loaded {len(listed)} listed and {len(sold)} sold items for {account}")
        return OwnedCatalog(listed=listed, sold=sold)

    async def aggregate(
        self,
        predicate: ItemPredicate,
        *,
        view: CatalogView = CatalogView.MARKETPLACE,
    ) -> list[CatalogEntry]:
        """
        Run one pass and return the entries admitted by ``predicate``.

        Raises:
            PassError: If the item count cannot be read
            MissingContextError: If no ledger client is configured
        """
        return [entry for _, entry in await self._collect(predicate, view=view)]

    async def _collect(
        self,
        predicate: ItemPredicate,
        *,
        view: CatalogView,
    ) -> list[tuple[ItemRecord, CatalogEntry]]:
        if self._ledger is None:
            raise MissingContextError("Missing required parameter: ledger client")

        start = time.monotonic()
        try:
            item_count = int(await self._ledger.item_count())
        except Exception as e:
            raise PassError(f"Could not read item count: {e}") from e

        logger.info(f"Starting {view} pass over {item_count} items")

        collected: list[tuple[ItemRecord, CatalogEntry]] = []
        for item_id in range(1, item_count + 1):
            try:
                result = await self._process_item(item_id, predicate, view)
            except TokenURILookupError as e:
                logger.warning(f"Skipping item {item_id}: {e.message}")
                continue
            except Exception as e:
                logger.exception(f"Error processing item {item_id}: {e}")
                continue

            if result is not None:
                collected.append(result)

        duration = time.monotonic() - start
        logger.info(f"Finished {view} pass: {len(collected)} entries in {duration:.2f}s")
        return collected

    async def _process_item(
        self,
        item_id: int,
        predicate: ItemPredicate,
        view: CatalogView,
    ) -> tuple[ItemRecord, CatalogEntry] | None:
        """Build the entry for one item id, or None if filtered out."""
        record = await self._ledger.items(item_id)
        logger.debug(
            f"Item {item_id}: token={record.token_id} seller={record.seller} sold={record.sold}"
        )

        if not predicate(record):
            return None

        uri = await self._lookup_token_uri(record, view)

        await self._governor.pace()
        metadata = await self._resolver.resolve(uri)

        total_price = int(await self._ledger.get_total_price(record.item_id))

        return record, CatalogEntry.assemble(record, metadata, total_price)

    async def _lookup_token_uri(self, record: ItemRecord, view: CatalogView) -> str:
        """
        Token URI for the record's token.

        The marketplace view hands unusable URIs to the resolver, which answers
        with the sentinel document. The ownership view drops such records.
        """
        try:
            uri = await self._ledger.token_uri(record.token_id)
        except Exception as e:
            raise TokenURILookupError(
                f"Error getting tokenURI for tokenId {record.token_id}: {e}",
                token_id=record.token_id,
            ) from e

        if view is CatalogView.OWNED and is_unresolved_uri(uri):
            raise TokenURILookupError(
                f"Invalid tokenURI for tokenId {record.token_id}: {uri!r}",
                token_id=record.token_id,
            )
        return uri
