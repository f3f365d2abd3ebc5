"""Interfaces for the on-chain marketplace and NFT contracts."""

from catalogsync.ledger.base import LedgerClient, Transaction

__all__ = [
    "LedgerClient",
    "Transaction",
]
