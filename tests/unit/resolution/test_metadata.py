"""Tests for the metadata resolver."""

from __future__ import annotations

import httpx
import pytest
from httpx import Response

from catalogsync.core.models import (
    MISSING_DESCRIPTION,
    PLACEHOLDER_IMAGE,
    SENTINEL_DESCRIPTION,
    UNKNOWN_NAME,
    MetadataDocument,
)
from catalogsync.resolution.base import ResolverConfig, RetryConfig
from catalogsync.resolution.metadata import MetadataResolver

META_URL = "https://meta.test/ipfs/101.json"

VALID_PAYLOAD = {
    "name": "Sunset #101",
    "description": "A warm evening",
    "image": "https://meta.test/ipfs/sunset.png",
}


# ============================================================================
# Success Path Tests
# ============================================================================


class TestResolveSuccess:
    """Tests for documents that resolve on some attempt."""

    async def test_first_attempt_success(
        self, resolver: MetadataResolver, respx_mock, mock_responses, sleep
    ):
        """A valid document on the first attempt is returned as-is."""
        route = respx_mock.get(META_URL).mock(return_value=mock_responses["json"](VALID_PAYLOAD))

        document = await resolver.resolve(META_URL)

        assert document.name == "Sunset #101"
        assert document.description == "A warm evening"
        assert document.image == "https://meta.test/ipfs/sunset.png"
        assert document.is_placeholder is False
        assert route.call_count == 1
        assert sleep.calls == []

    async def test_recovers_after_two_server_errors(
        self, resolver: MetadataResolver, respx_mock, sleep
    ):
        """500, 500, 200 yields the real document after two linear backoffs."""
        route = respx_mock.get(META_URL).mock(
            side_effect=[
                Response(500, text="boom"),
                Response(500, text="boom"),
                Response(200, json=VALID_PAYLOAD),
            ]
        )

        document = await resolver.resolve(META_URL)

        assert document.name == "Sunset #101"
        assert route.call_count == 3
        assert sleep.calls == [1.0, 2.0]

    async def test_partial_document_is_filled(self, resolver: MetadataResolver, respx_mock):
        """Missing display fields are replaced individually."""
        respx_mock.get(META_URL).mock(return_value=Response(200, json={"name": "Only a name"}))

        document = await resolver.resolve(META_URL)

        assert document.name == "Only a name"
        assert document.description == MISSING_DESCRIPTION
        assert document.image == PLACEHOLDER_IMAGE
        assert document.is_placeholder is False

    async def test_ipfs_uri_fetched_through_gateway(
        self, resolver: MetadataResolver, respx_mock
    ):
        """ipfs:// URIs are rewritten to the configured gateway."""
        route = respx_mock.get("https://gateway.test/ipfs/QmHash/meta.json").mock(
            return_value=Response(200, json=VALID_PAYLOAD)
        )

        document = await resolver.resolve("ipfs://QmHash/meta.json")

        assert route.called
        assert document.name == "Sunset #101"

    async def test_request_headers(self, resolver: MetadataResolver, respx_mock):
        """Requests identify the client and ask for JSON."""
        route = respx_mock.get(META_URL).mock(return_value=Response(200, json=VALID_PAYLOAD))

        await resolver.resolve(META_URL)

        request = route.calls.last.request
        assert request.headers["User-Agent"] == "catalogsync/1.0"
        assert request.headers["Accept"] == "application/json"


# ============================================================================
# Failure Path Tests
# ============================================================================


class TestResolveFailure:
    """Tests for permanent failures and the sentinel document."""

    @pytest.mark.parametrize("attempts", [1, 2, 3, 5])
    async def test_permanent_failure_uses_exact_budget(
        self, resolver: MetadataResolver, respx_mock, sleep, attempts: int
    ):
        """n failing attempts make exactly n requests, then return the sentinel."""
        route = respx_mock.get(META_URL).mock(return_value=Response(503, text="unavailable"))

        document = await resolver.resolve(META_URL, max_attempts=attempts)

        assert document == MetadataDocument.sentinel()
        assert route.call_count == attempts
        assert sleep.calls == [float(k) for k in range(1, attempts)]

    async def test_total_backoff_is_linear_sum(
        self, resolver: MetadataResolver, respx_mock, sleep
    ):
        """Total waiting is backoff * (1 + 2 + ... + (n - 1))."""
        respx_mock.get(META_URL).mock(return_value=Response(500))

        await resolver.resolve(META_URL, max_attempts=4)

        assert sleep.total == pytest.approx(1.0 + 2.0 + 3.0)

    async def test_sentinel_fields(self, resolver: MetadataResolver, respx_mock, mock_responses):
        """The sentinel carries the fixed placeholder values."""
        respx_mock.get(META_URL).mock(return_value=mock_responses["error"](404, "not found"))

        document = await resolver.resolve(META_URL)

        assert document.name == UNKNOWN_NAME
        assert document.description == SENTINEL_DESCRIPTION
        assert document.image == PLACEHOLDER_IMAGE
        assert document.is_placeholder is True

    async def test_invalid_structure_is_retried(
        self, resolver: MetadataResolver, respx_mock, sleep
    ):
        """A document with no display field consumes attempts like an HTTP error."""
        route = respx_mock.get(META_URL).mock(
            return_value=Response(200, json={"attributes": []})
        )

        document = await resolver.resolve(META_URL)

        assert document.is_placeholder is True
        assert route.call_count == 3
        assert sleep.calls == [1.0, 2.0]

    async def test_invalid_structure_and_http_errors_share_budget(
        self, resolver: MetadataResolver, respx_mock
    ):
        """Structure failures and HTTP failures count against one attempt budget."""
        route = respx_mock.get(META_URL).mock(
            side_effect=[
                Response(200, json={}),
                Response(502),
                Response(200, json=VALID_PAYLOAD),
            ]
        )

        document = await resolver.resolve(META_URL)

        assert document.name == "Sunset #101"
        assert route.call_count == 3

    async def test_non_object_payload_is_invalid(self, resolver: MetadataResolver, respx_mock):
        """A JSON array is not a metadata document."""
        respx_mock.get(META_URL).mock(return_value=Response(200, json=["name"]))

        document = await resolver.resolve(META_URL, max_attempts=1)

        assert document.is_placeholder is True

    async def test_malformed_json_is_retried(self, resolver: MetadataResolver, respx_mock):
        """Bodies that are not JSON count as failed attempts."""
        route = respx_mock.get(META_URL).mock(
            side_effect=[
                Response(200, text="<html>gateway timeout</html>"),
                Response(200, json=VALID_PAYLOAD),
            ]
        )

        document = await resolver.resolve(META_URL)

        assert document.name == "Sunset #101"
        assert route.call_count == 2

    async def test_transport_error_is_retried(
        self, resolver: MetadataResolver, respx_mock, sleep
    ):
        """Connection failures are retried and then masked by the sentinel."""
        route = respx_mock.get(META_URL).mock(side_effect=httpx.ConnectError("refused"))

        document = await resolver.resolve(META_URL)

        assert document.is_placeholder is True
        assert route.call_count == 3
        assert sleep.calls == [1.0, 2.0]

    async def test_zero_attempts_returns_sentinel(self, resolver: MetadataResolver, respx_mock):
        """A non-positive budget makes no request at all."""
        route = respx_mock.get(META_URL).mock(return_value=Response(200, json=VALID_PAYLOAD))

        document = await resolver.resolve(META_URL, max_attempts=0)

        assert document.is_placeholder is True
        assert not route.called

    async def test_unexpected_error_degrades_to_sentinel(
        self, resolver: MetadataResolver, monkeypatch
    ):
        """resolve() never raises, even for errors outside the fetch path."""

        async def _explode(url: str) -> MetadataDocument:
            raise RuntimeError("unexpected")

        monkeypatch.setattr(resolver, "_fetch_once", _explode)

        document = await resolver.resolve(META_URL)

        assert document.is_placeholder is True


# ============================================================================
# Invalid URI Tests
# ============================================================================


class TestInvalidURI:
    """Tests for URIs rejected before any network access."""

    @pytest.mark.parametrize(
        "uri",
        [
            None,
            "",
            "   ",
            "undefined",
            "https://gateway.test/ipfs/undefined",
            "ipfs://undefined/metadata.json",
        ],
    )
    async def test_invalid_uri_short_circuits(
        self, resolver: MetadataResolver, respx_mock, sleep, uri
    ):
        """Invalid URIs return the sentinel without fetching or waiting."""
        document = await resolver.resolve(uri)

        assert document == MetadataDocument.sentinel()
        assert respx_mock.calls.call_count == 0
        assert sleep.calls == []


# ============================================================================
# Statistics Tests
# ============================================================================


class TestResolverStats:
    """Tests for resolver attempt counters."""

    async def test_counters(self, resolver: MetadataResolver, respx_mock):
        respx_mock.get(META_URL).mock(
            side_effect=[Response(500), Response(200, json=VALID_PAYLOAD)]
        )
        respx_mock.get("https://meta.test/ipfs/broken.json").mock(return_value=Response(404))

        await resolver.resolve(META_URL)
        await resolver.resolve("https://meta.test/ipfs/broken.json", max_attempts=2)

        assert resolver.stats == {"successes": 1, "failures": 3, "fallbacks": 1}


class TestResolverConfig:
    """Tests for resolver configuration."""

    def test_defaults(self):
        config = ResolverConfig()

        assert config.retry.max_attempts == 3
        assert config.retry.backoff_seconds == 1.0

    def test_linear_delay(self):
        retry = RetryConfig(max_attempts=4, backoff_seconds=0.25)

        assert [retry.delay_after(k) for k in (1, 2, 3)] == [0.25, 0.5, 0.75]

    def test_from_settings(self, mock_settings):
        config = ResolverConfig.from_settings(mock_settings)

        assert config.gateway_url == "https://gateway.test/ipfs/"
        assert config.timeout == 5.0
        assert config.retry.max_attempts == 3

    async def test_transport_injection(self, sleep):
        """A custom transport is used for every request."""
        transport = httpx.MockTransport(lambda request: Response(200, json=VALID_PAYLOAD))

        async with MetadataResolver(sleep=sleep, transport=transport) as resolver:
            document = await resolver.resolve(META_URL)

        assert document.name == "Sunset #101"
