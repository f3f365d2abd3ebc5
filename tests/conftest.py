"""Shared test fixtures for all tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from catalogsync.config import CatalogSyncSettings
from catalogsync.core.models import ItemRecord
from fakes import (
    ONE_ETH,
    OTHER_SELLER,
    SELLER,
    FakeClock,
    FakeLedger,
    RecordingSleep,
)

# ============================================================================
# Time Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep(clock: FakeClock) -> RecordingSleep:
    return RecordingSleep(clock)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_record() -> Callable[..., ItemRecord]:
    """Factory for ledger item records; token id defaults to 100 + item id."""

    def _make(
        item_id: int,
        *,
        token_id: int | None = None,
        seller: str = SELLER,
        price: int = ONE_ETH,
        sold: bool = False,
    ) -> ItemRecord:
        return ItemRecord(
            item_id=item_id,
            token_id=token_id if token_id is not None else 100 + item_id,
            seller=seller,
            price=price,
            sold=sold,
        )

    return _make


@pytest.fixture
def sample_records(make_record) -> list[ItemRecord]:
    """Three items: 1 unsold (seller), 2 sold (seller), 3 unsold (other seller)."""
    return [
        make_record(1),
        make_record(2, sold=True),
        make_record(3, seller=OTHER_SELLER, price=2 * ONE_ETH),
    ]


@pytest.fixture
def ledger(sample_records: list[ItemRecord]) -> FakeLedger:
    return FakeLedger(sample_records)


@pytest.fixture
def empty_ledger() -> FakeLedger:
    return FakeLedger([])


@pytest.fixture
def ledger_factory() -> type[FakeLedger]:
    """The FakeLedger class, for tests that build their own item sets."""
    return FakeLedger


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> CatalogSyncSettings:
    """Create settings for testing."""
    return CatalogSyncSettings(
        metadata_max_attempts=3,
        metadata_retry_backoff=1.0,
        metadata_timeout=5.0,
        pace_interval=0.5,
        ipfs_gateway_url="https://gateway.test/ipfs/",
        pinning_url="https://pin.test",
        pinata_api_key="test-key",
        pinata_secret_api_key="test-secret",
        listing_verify_delay=2.0,
        debug=True,
        log_level="DEBUG",
    )
