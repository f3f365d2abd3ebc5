"""Client for the content-pinning upload service."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator

import httpx
from pydantic import BaseModel

from catalogsync.core.exceptions import PinningError
from catalogsync.core.uri import gateway_uri

if TYPE_CHECKING:
    from catalogsync.config import CatalogSyncSettings

logger = logging.getLogger(__name__)


class PinningConfig(BaseModel):
    """Configuration for the pinning client."""

    base_url: str = "https://api.pinata.cloud"
    gateway_url: str = "https://gateway.pinata.cloud/ipfs/"
    api_key: str | None = None
    secret_api_key: str | None = None
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, settings: CatalogSyncSettings) -> PinningConfig:
        return cls(
            base_url=settings.pinning_url,
            gateway_url=settings.ipfs_gateway_url,
            api_key=settings.pinata_api_key,
            secret_api_key=settings.pinata_secret_api_key,
        )


class PinningClient:
    """
    Uploads files and JSON documents to a Pinata-compatible pinning API.

    Both upload methods return the content identifier of the pinned
    payload; use gateway_uri() to turn it into a fetchable URI.
    """

    PIN_FILE_PATH = "/pinning/pinFileToIPFS"

    def __init__(
        self,
        config: PinningConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or PinningConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
                transport=self._transport,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise PinningError(f"HTTP error: {e}") from e

    def _get_default_headers(self) -> dict[str, str]:
        headers = {"User-Agent": "catalogsync/1.0"}
        if self.config.api_key:
            headers["pinata_api_key"] = self.config.api_key
        if self.config.secret_api_key:
            headers["pinata_secret_api_key"] = self.config.secret_api_key
        return headers

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def gateway_uri(self, cid: str) -> str:
        """Public gateway URI for a pinned content identifier."""
        return gateway_uri(cid, self.config.gateway_url)

    async def pin_file(
        self,
        content: bytes,
        filename: str,
        *,
        name: str | None = None,
        description: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Pin a binary payload.

        Args:
            content: Raw file bytes
            filename: Filename reported to the service
            name: Display name for the pin's metadata sidecar
            description: Description for the pin's metadata sidecar
            content_type: MIME type of the payload

        Returns:
            Content identifier of the pinned file

        Raises:
            PinningError: If the upload fails or no identifier is returned
        """
        sidecar: dict[str, Any] = {"name": name or filename}
        if description:
            sidecar["description"] = description

        async with self._get_client() as client:
            response = await client.post(
                self.PIN_FILE_PATH,
                files={"file": (filename, content, content_type)},
                data={"pinataMetadata": json.dumps(sidecar)},
            )

        if not response.is_success:
            raise PinningError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            cid = response.json().get("IpfsHash")
        except (ValueError, AttributeError) as e:
            raise PinningError(f"Malformed pinning response: {e}") from e

        if not cid:
            raise PinningError("No IpfsHash returned from pinning service")

        logger.info(f"Pinned {filename} as {cid}")
        return cid

    async def pin_json(
        self,
        document: dict[str, Any],
        *,
        name: str,
        filename: str = "metadata.json",
        description: str | None = None,
    ) -> str:
        """Pin a JSON document; returns its content identifier."""
        return await self.pin_file(
            json.dumps(document).encode("utf-8"),
            filename,
            name=name,
            description=description,
            content_type="application/json",
        )

    async def __aenter__(self) -> PinningClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
