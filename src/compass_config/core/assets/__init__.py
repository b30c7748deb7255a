"""Asset collections and URL resolution."""
from __future__ import annotations

from .collection import AssetCollection, AssetKind
from .resolver import AssetUrlResolver, ResolvedAsset, cache_busted_url, mtime_cache_buster

__all__ = [
    "AssetCollection",
    "AssetKind",
    "AssetUrlResolver",
    "ResolvedAsset",
    "cache_busted_url",
    "mtime_cache_buster",
]
