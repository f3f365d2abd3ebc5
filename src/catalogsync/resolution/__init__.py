"""Metadata resolution and request pacing."""

from catalogsync.resolution.base import ResolverConfig, RetryConfig
from catalogsync.resolution.metadata import MetadataResolver, ResolutionAttempt
from catalogsync.resolution.pacing import RateLimitGovernor

__all__ = [
    # Base
    "ResolverConfig",
    "RetryConfig",
    # Resolver
    "MetadataResolver",
    "ResolutionAttempt",
    # Pacing
    "RateLimitGovernor",
]
