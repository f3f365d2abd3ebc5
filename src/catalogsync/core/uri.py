"""Helpers for content-addressed metadata URIs."""

from __future__ import annotations

IPFS_SCHEME = "ipfs://"
UNRESOLVED_TOKEN = "undefined"


def is_unresolved_uri(uri: str | None) -> bool:
    """
    Check whether a URI is unusable before any network access.

    Empty values, the literal placeholder token and strings that still
    contain it (for example ``https://gateway/ipfs/undefined``) are invalid.
    """
    if not uri or not uri.strip():
        return True
    return uri == UNRESOLVED_TOKEN or UNRESOLVED_TOKEN in uri


def gateway_uri(cid: str, gateway: str) -> str:
    """Build the public gateway URI for a content identifier."""
    return f"{gateway.rstrip('/')}/{cid.lstrip('/')}"


def normalize_uri(uri: str, gateway: str) -> str:
    """Rewrite ``ipfs://`` URIs through an HTTP gateway; pass others through."""
    uri = uri.strip()
    if uri.lower().startswith(IPFS_SCHEME):
        path = uri[len(IPFS_SCHEME):]
        # ipfs://ipfs/<cid> is a common malformed variant
        if path.startswith("ipfs/"):
            path = path[len("ipfs/"):]
        return gateway_uri(path, gateway)
    return uri
