"""Content pinning for newly created listings."""

from catalogsync.pinning.client import PinningClient, PinningConfig

__all__ = [
    "PinningClient",
    "PinningConfig",
]
