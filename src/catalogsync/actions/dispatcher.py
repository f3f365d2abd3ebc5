"""Action dispatcher for purchases and new listings."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from catalogsync.core.exceptions import (
    ActionError,
    CatalogSyncError,
    IssuanceEventNotFoundError,
    MissingContextError,
    ValidationError,
)
from catalogsync.core.models import (
    ISSUANCE_EVENT,
    CatalogEntry,
    ListingDraft,
    TransactionReceipt,
)
from catalogsync.core.types import ActionKind, ActionStatus, MintStep
from catalogsync.core.units import parse_ether
from catalogsync.resolution.base import SleepFunc, default_sleep

if TYPE_CHECKING:
    from catalogsync.ledger.base import LedgerClient, Transaction
    from catalogsync.pinning.client import PinningClient
    from catalogsync.resolution.metadata import MetadataResolver

logger = logging.getLogger(__name__)

RefreshHook = Callable[[], Awaitable[Any]]


@dataclass
class ActionRecord:
    """Progress of one dispatched action: pending -> submitted -> confirmed | failed."""

    kind: ActionKind
    status: ActionStatus = ActionStatus.PENDING
    step: MintStep | None = None
    item_id: int | None = None
    token_id: int | None = None
    error: str | None = None
    receipts: list[TransactionReceipt] = field(default_factory=list)
    history: list[ActionStatus] = field(default_factory=lambda: [ActionStatus.PENDING])

    @property
    def succeeded(self) -> bool:
        return self.status == ActionStatus.CONFIRMED

    def transition(self, status: ActionStatus) -> None:
        """Move to ``status``; repeated transitions to the same status are ignored."""
        if status == self.status:
            return
        logger.info(f"{self.kind} action: {self.status} -> {status}")
        self.status = status
        self.history.append(status)


class ActionDispatcher:
    """
    Submits state-changing transactions and waits for confirmation.

    Actions report success only after every transaction is mined, then run
    the on_confirmed hook (normally a catalog refresh). Failures are raised
    as ActionError immediately; nothing is retried and nothing already
    confirmed is rolled back, so a token can end up minted but not listed.
    """

    def __init__(
        self,
        ledger: LedgerClient | None,
        *,
        on_confirmed: RefreshHook | None = None,
        pinning: PinningClient | None = None,
        resolver: MetadataResolver | None = None,
        sleep: SleepFunc = default_sleep,
        verify_delay: float = 2.0,
    ) -> None:
        self._ledger = ledger
        self._on_confirmed = on_confirmed
        self._pinning = pinning
        self._resolver = resolver
        self._sleep = sleep
        self._verify_delay = verify_delay

    def _require_ledger(self) -> LedgerClient:
        if self._ledger is None:
            raise MissingContextError("Missing required parameter: ledger client")
        return self._ledger

    async def purchase(self, entry: CatalogEntry) -> ActionRecord:
        """
        Buy a catalog entry, paying its total price.

        Raises:
            ActionError: If submission or confirmation fails
        """
        ledger = self._require_ledger()
        record = ActionRecord(kind=ActionKind.PURCHASE, item_id=entry.item_id)
        logger.info(f"Purchasing item {entry.item_id} for {entry.total_price} wei")

        await self._submit(
            record,
            lambda: ledger.purchase_item(entry.item_id, value=entry.total_price),
            failure_prefix="Failed to purchase item",
        )

        record.transition(ActionStatus.CONFIRMED)
        await self._notify_confirmed()
        return record

    async def mint_and_list(self, uri: str, price: int) -> ActionRecord:
        """
        Mint a token for ``uri`` and list it at ``price`` wei.

        Steps run strictly in order: mint, read the token id from the
        issuance event, approve the marketplace, list.

        Raises:
            IssuanceEventNotFoundError: If the mint receipt has no usable issuance event
            ActionError: If any transaction fails; ``step`` names which one
        """
        ledger = self._require_ledger()
        record = ActionRecord(kind=ActionKind.MINT_AND_LIST)
        prefix = "Failed to mint and list NFT"
        logger.info(f"Minting NFT with URI: {uri}")

        mint_receipt = await self._submit(
            record,
            lambda: ledger.mint(uri),
            step=MintStep.MINT,
            failure_prefix=prefix,
        )

        record.step = MintStep.EXTRACT_TOKEN
        try:
            token_id = self.extract_token_id(mint_receipt)
        except (TypeError, ValueError) as e:
            raise self._failed(
                record,
                f"{prefix}: malformed token id in issuance event: {e}",
                error_cls=IssuanceEventNotFoundError,
            ) from e
        if token_id is None:
            raise self._failed(
                record,
                f"{prefix}: no issuance event found in mint receipt",
                error_cls=IssuanceEventNotFoundError,
            )
        record.token_id = token_id
        logger.info(f"Minted NFT with tokenId: {token_id}")

        await self._submit(
            record,
            lambda: ledger.set_approval_for_all(ledger.marketplace_address, True),
            step=MintStep.APPROVE,
            failure_prefix=prefix,
        )
        await self._submit(
            record,
            lambda: ledger.make_item(ledger.nft_address, token_id, price),
            step=MintStep.LIST,
            failure_prefix=prefix,
        )

        record.transition(ActionStatus.CONFIRMED)
        logger.info(f"NFT {token_id} listed successfully")
        await self._notify_confirmed()
        return record

    async def create_listing(self, draft: ListingDraft) -> ActionRecord:
        """
        Pin the draft's metadata document, then mint and list it.

        Raises:
            ValidationError: If a field is blank or the price is not a valid amount
            PinningError: If the metadata upload fails
            ActionError: If minting or listing fails
        """
        missing = draft.missing_fields()
        if missing:
            raise ValidationError(
                "Please fill all fields and upload an image.",
                details={"missing": missing},
            )
        try:
            price = parse_ether(draft.price)
        except ValueError as e:
            raise ValidationError(str(e), details={"field": "price"}) from e

        if self._pinning is None:
            raise CatalogSyncError("Pinning service is not configured")

        now = datetime.now(timezone.utc)
        stamp = int(now.timestamp() * 1000)
        document = {
            "image": draft.image,
            "name": draft.name,
            "description": draft.description,
            "price": draft.price,
            "attributes": [{"trait_type": "Created", "value": now.isoformat()}],
        }
        cid = await self._pinning.pin_json(
            document,
            name=f"NFT_Metadata_{draft.name}_{stamp}",
            filename=f"metadata_{stamp}.json",
            description=f"Metadata for NFT: {draft.name}",
        )
        uri = self._pinning.gateway_uri(cid)
        logger.info(f"Metadata uploaded to: {uri}")

        await self._sleep(self._verify_delay)
        await self._verify_metadata(uri)

        return await self.mint_and_list(uri, price)

    async def _verify_metadata(self, uri: str) -> None:
        """Single best-effort fetch of freshly pinned metadata; never blocks minting."""
        if self._resolver is None:
            return
        document = await self._resolver.resolve(uri, max_attempts=1)
        if document.is_placeholder:
            logger.warning("Could not fetch metadata immediately, proceeding with mint")
        else:
            logger.info(f"Verified metadata from gateway: {document.name}")

    @staticmethod
    def extract_token_id(receipt: TransactionReceipt) -> int | None:
        """
        Token id from the receipt's issuance event, if present.

        Raises:
            TypeError, ValueError: If the event carries a token id that is not an integer
        """
        event = receipt.find_event(ISSUANCE_EVENT)
        if event is None or "tokenId" not in event.args:
            return None
        return int(event.args["tokenId"])

    async def _submit(
        self,
        record: ActionRecord,
        submit: Callable[[], Awaitable[Transaction]],
        *,
        failure_prefix: str,
        step: MintStep | None = None,
    ) -> TransactionReceipt:
        """Submit one transaction and wait for its receipt."""
        record.step = step
        try:
            transaction = await submit()
            record.transition(ActionStatus.SUBMITTED)
            receipt = await transaction.wait()
        except Exception as e:
            where = f"{step} step failed: " if step else ""
            raise self._failed(record, f"{failure_prefix}: {where}{e}") from e

        record.receipts.append(receipt)
        return receipt

    @staticmethod
    def _failed(
        record: ActionRecord,
        message: str,
        error_cls: type[ActionError] = ActionError,
    ) -> ActionError:
        record.error = message
        record.transition(ActionStatus.FAILED)
        logger.error(message)
        return error_cls(message, record=record, step=record.step)

    async def _notify_confirmed(self) -> None:
        if self._on_confirmed is None:
            return
        try:
            await self._on_confirmed()
        except Exception as e:
            logger.exception(f"Catalog refresh after confirmed action failed: {e}")
