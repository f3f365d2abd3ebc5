"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import respx
from httpx import Response

from catalogsync.resolution.base import ResolverConfig, RetryConfig
from catalogsync.resolution.metadata import MetadataResolver

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Resolver Fixtures
# ============================================================================


@pytest.fixture
def resolver_config() -> ResolverConfig:
    """Create a resolver config for testing."""
    return ResolverConfig(
        gateway_url="https://gateway.test/ipfs/",
        timeout=5.0,
        retry=RetryConfig(max_attempts=3, backoff_seconds=1.0),
    )


@pytest.fixture
async def resolver(resolver_config: ResolverConfig, sleep) -> AsyncIterator[MetadataResolver]:
    """Metadata resolver with a recording sleep (no real waiting)."""
    async with MetadataResolver(resolver_config, sleep=sleep) as resolver:
        yield resolver


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: Any, status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def mock_error_response(status_code: int, message: str = "Error") -> Response:
    """Create a mock error response."""
    return Response(status_code=status_code, text=message)


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "error": mock_error_response,
    }
