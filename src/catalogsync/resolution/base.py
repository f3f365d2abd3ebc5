"""Shared configuration and HTTP plumbing for metadata resolution."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from catalogsync.config import CatalogSyncSettings

SleepFunc = Callable[[float], Awaitable[None]]
ClockFunc = Callable[[], float]


@dataclass
class RetryConfig:
    """Configuration for metadata fetch retries."""

    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after a failed 1-indexed attempt (1s, 2s, ...)."""
        return self.backoff_seconds * attempt


class ResolverConfig(BaseModel):
    """Configuration for the metadata resolver."""

    gateway_url: str = "https://gateway.pinata.cloud/ipfs/"
    timeout: float = 30.0
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @classmethod
    def from_settings(cls, settings: CatalogSyncSettings) -> ResolverConfig:
        """Build resolver configuration from application settings."""
        return cls(
            gateway_url=settings.ipfs_gateway_url,
            timeout=settings.metadata_timeout,
            retry=RetryConfig(
                max_attempts=settings.metadata_max_attempts,
                backoff_seconds=settings.metadata_retry_backoff,
            ),
        )


async def default_sleep(seconds: float) -> None:
    """Suspend for ``seconds``; indirection point for tests."""
    await asyncio.sleep(seconds)
