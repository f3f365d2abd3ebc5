"""FastAPI application for serving published catalogs and actions."""

from catalogsync.api.app import create_app

__all__ = ["create_app"]
