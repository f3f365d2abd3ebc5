"""Published catalog snapshots with loading and error state."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Generic, TypeVar

from catalogsync.core.exceptions import CatalogSyncError
from catalogsync.core.types import FeedStatus

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT")


class CatalogFeed(Generic[SnapshotT]):
    """
    Holds the catalog a consumer sees for one view.

    Each refresh() runs a full aggregation pass and replaces the snapshot
    only once the pass completes, so a partial catalog is never visible.
    A failed pass keeps the previous snapshot and records an error message
    that stays until the next successful pass or dismiss_error(). There is
    no cancellation: when passes overlap, the last one to finish wins.
    """

    def __init__(
        self,
        loader: Callable[[], Awaitable[SnapshotT]],
        *,
        empty: SnapshotT,
        error_prefix: str = "Failed to load catalog",
    ) -> None:
        self._loader = loader
        self._snapshot = empty
        self._error_prefix = error_prefix
        self._error: str | None = None
        self._in_flight = 0
        self._generation = 0
        self._published_at: datetime | None = None

    @property
    def snapshot(self) -> SnapshotT:
        return self._snapshot

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def generation(self) -> int:
        """Number of successful publications."""
        return self._generation

    @property
    def published_at(self) -> datetime | None:
        return self._published_at

    @property
    def status(self) -> FeedStatus:
        if self.loading:
            return FeedStatus.LOADING
        if self._error is not None:
            return FeedStatus.FAILED
        if self._published_at is None:
            return FeedStatus.IDLE
        return FeedStatus.READY

    async def refresh(self) -> bool:
        """
        Run one pass and publish its result.

        Returns:
            True if the pass completed and was published
        """
        self._in_flight += 1
        self._error = None
        try:
            snapshot = await self._loader()
        except Exception as e:
            message = e.message if isinstance(e, CatalogSyncError) else str(e)
            logger.exception(f"{self._error_prefix}: {message}")
            self._error = f"{self._error_prefix}: {message}"
            return False
        finally:
            self._in_flight -= 1

        self._snapshot = snapshot
        self._generation += 1
        self._published_at = datetime.now(timezone.utc)
        return True

    def dismiss_error(self) -> None:
        """Clear the error panel without retrying."""
        self._error = None
