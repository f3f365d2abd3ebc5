"""Protocols for the ledger client consumed by the catalog pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from catalogsync.core.models import ItemRecord, TransactionReceipt


@runtime_checkable
class Transaction(Protocol):
    """A submitted transaction awaiting on-chain confirmation."""

    async def wait(self) -> TransactionReceipt:
        """Block until the transaction is mined; raise if it reverted."""
        ...


@runtime_checkable
class LedgerClient(Protocol):
    """
    Async view over the marketplace and NFT contracts.

    Every call may raise a transport or contract-revert error; callers
    decide whether that aborts a pass, skips an item, or fails an action.
    """

    marketplace_address: str
    nft_address: str

    async def item_count(self) -> int: ...

    async def items(self, item_id: int) -> ItemRecord: ...

    async def get_total_price(self, item_id: int) -> int: ...

    async def purchase_item(self, item_id: int, *, value: int) -> Transaction: ...

    async def token_uri(self, token_id: int) -> str: ...

    async def mint(self, uri: str) -> Transaction: ...

    async def set_approval_for_all(self, operator: str, approved: bool) -> Transaction: ...

    async def make_item(self, token_address: str, token_id: int, price: int) -> Transaction: ...
