"""Catalog aggregation and publication."""

from catalogsync.catalog.aggregator import (
    CatalogAggregator,
    ItemPredicate,
    seller_is,
    unsold,
)
from catalogsync.catalog.feed import CatalogFeed

__all__ = [
    "CatalogAggregator",
    "CatalogFeed",
    "ItemPredicate",
    "seller_is",
    "unsold",
]
