"""Metadata resolver with bounded retries and a sentinel fallback."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

import httpx

from catalogsync.core.exceptions import (
    InvalidMetadataError,
    InvalidURIError,
    MetadataFetchError,
)
from catalogsync.core.models import MetadataDocument
from catalogsync.core.types import FetchOutcome
from catalogsync.core.uri import is_unresolved_uri, normalize_uri
from catalogsync.resolution.base import ResolverConfig, SleepFunc, default_sleep

logger = logging.getLogger(__name__)


@dataclass
class ResolutionAttempt:
    """One fetch attempt within a single resolve() call."""

    attempt: int
    outcome: FetchOutcome
    error: str | None = None


class MetadataResolver:
    """
    Fetches token metadata documents over HTTP.

    resolve() never raises: HTTP failures, malformed JSON and documents
    without any display field are retried with linear backoff, then masked
    by the sentinel document.

    Usage:
        async with MetadataResolver() as resolver:
            document = await resolver.resolve("ipfs://Qm.../metadata.json")
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        sleep: SleepFunc = default_sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self._sleep = sleep
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        self._success_count: int = 0
        self._failure_count: int = 0
        self._fallback_count: int = 0

    @property
    def stats(self) -> dict[str, int]:
        """Attempt counters since construction."""
        return {
            "successes": self._success_count,
            "failures": self._failure_count,
            "fallbacks": self._fallback_count,
        }

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers={
                    "User-Agent": "catalogsync/1.0",
                    "Accept": "application/json",
                },
                follow_redirects=True,
                transport=self._transport,
            )
        yield self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def resolve(self, uri: str | None, max_attempts: int | None = None) -> MetadataDocument:
        """
        Resolve a metadata URI to a fully populated document.

        Args:
            uri: Metadata URI (HTTP(S) or ipfs://)
            max_attempts: Attempt budget, defaults to the configured value

        Returns:
            The fetched document, or the sentinel when every attempt failed
        """
        attempts = max_attempts if max_attempts is not None else self.config.retry.max_attempts
        try:
            return await self._resolve(uri, attempts)
        except Exception as e:
            logger.exception(f"Unexpected error resolving metadata from {uri!r}: {e}")
            return self._fallback(uri, [])

    async def _resolve(self, uri: str | None, max_attempts: int) -> MetadataDocument:
        if max_attempts < 1:
            return self._fallback(uri, [])

        if is_unresolved_uri(uri):
            error = InvalidURIError("Invalid URI provided", uri=str(uri))
            logger.warning(f"Skipping metadata fetch for invalid URI {uri!r}")
            return self._fallback(uri, [ResolutionAttempt(1, error.outcome, error.message)])

        url = normalize_uri(uri, self.config.gateway_url)
        history: list[ResolutionAttempt] = []

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Fetching metadata from {url} (attempt {attempt}/{max_attempts})")
            try:
                document = await self._fetch_once(url)
            except MetadataFetchError as e:
                self._failure_count += 1
                history.append(ResolutionAttempt(attempt, e.outcome, e.message))
                logger.warning(
                    f"Metadata fetch attempt {attempt} failed ({e.outcome}): {e.message}"
                )
                if attempt < max_attempts:
                    await self._sleep(self.config.retry.delay_after(attempt))
                continue

            self._success_count += 1
            logger.debug(f"Metadata fetch attempt {attempt} succeeded for {url}")
            return document

        return self._fallback(uri, history)

    async def _fetch_once(self, url: str) -> MetadataDocument:
        """Perform one fetch; raise MetadataFetchError on any retryable failure."""
        try:
            async with self._get_client() as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise MetadataFetchError(
                f"{type(e).__name__}: {e}",
                uri=url,
                outcome=FetchOutcome.TRANSPORT_ERROR,
            ) from e

        if not response.is_success:
            raise MetadataFetchError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                uri=url,
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise MetadataFetchError(
                f"Malformed JSON: {e}",
                uri=url,
                status_code=response.status_code,
                outcome=FetchOutcome.INVALID_JSON,
            ) from e

        if not MetadataDocument.has_display_fields(payload):
            raise InvalidMetadataError(
                "Invalid metadata structure",
                uri=url,
                status_code=response.status_code,
            )

        return MetadataDocument.from_payload(payload)

    def _fallback(self, uri: str | None, history: list[ResolutionAttempt]) -> MetadataDocument:
        self._fallback_count += 1
        last_error = history[-1].error if history else None
        logger.error(
            f"Failed to fetch metadata from {uri!r} after {len(history)} attempts: {last_error}"
        )
        return MetadataDocument.sentinel()

    async def __aenter__(self) -> MetadataResolver:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
