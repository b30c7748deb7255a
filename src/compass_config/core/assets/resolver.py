"""Resolve logical asset paths to URLs.

Resolution steps:
1. Full URLs (scheme, protocol-relative, data URIs) pass through untouched.
2. The query and fragment are split off. The query rejoins the URL before
   cache busting, the fragment is re-attached at the end.
3. The first collection, in order, that holds the asset wins.
4. The URL is made relative to the stylesheet (``relative_to``), or qualified
   with the configured asset host.
5. The cache buster is applied.

A path no collection holds is not an error: absolute web paths are returned
as they are, anything else is passed through after an
``UnresolvedAssetWarning``.
"""
from __future__ import annotations

import inspect
import logging
import os
import warnings
from urllib.parse import urljoin, urlsplit, urlunsplit
from dataclasses import dataclass
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    BinaryIO,
    Callable,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from compass_config.core.exceptions import ConfigurationError, UnresolvedAssetWarning
from compass_config.core.utils.urls import (
    has_scheme,
    is_full_url,
    relative_url,
    split_query,
)

from .collection import AssetCollection, AssetKind

if TYPE_CHECKING:
    from compass_config.core.config.data import Configuration

logger = logging.getLogger(__name__)

CacheBuster = Callable[..., Any]


@dataclass(frozen=True)
class ResolvedAsset:
    """Where a logical asset path was found."""

    collection: AssetCollection
    path: str
    real_path: Optional[Path]


def _accepts_file(buster: CacheBuster) -> bool:
    """Return True when ``buster`` takes a second (file) argument."""
    try:
        signature = inspect.signature(buster)
    except (TypeError, ValueError):
        return False
    positional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2


def cache_busted_url(url: str, buster: Union[str, Mapping[str, Any]]) -> str:
    """Apply a cache buster result to ``url``.

    ``buster`` is either a query string (without the leading "?") or a
    mapping with optional ``path`` and ``query`` replacements. A ``path``
    replaces only the path component, so scheme and host are kept. Existing
    query strings are kept and the buster query is appended with "&".
    """
    if isinstance(buster, str):
        parts: dict = {"query": buster}
    elif isinstance(buster, Mapping):
        unknown = sorted(set(buster) - {"path", "query"})
        if unknown:
            raise ConfigurationError(
                f"Cache buster returned unknown key(s): {', '.join(unknown)}",
                context={"keys": unknown},
            )
        parts = dict(buster)
    else:
        raise ConfigurationError(
            f"Cache buster must return None, a string or a mapping, got {type(buster).__name__}",
            context={"type": type(buster).__name__},
        )

    scheme, netloc, path, query, fragment = urlsplit(url)
    new_path = parts.get("path") or path
    new_query = parts.get("query")
    if query and new_query:
        new_query = f"{query}&{new_query}"
    elif query:
        new_query = query
    return urlunsplit((scheme, netloc, new_path, new_query or "", fragment))


def mtime_cache_buster(url: str, real_path: Optional[Path]) -> Optional[str]:
    """Default cache buster: the asset's modification time in seconds."""
    if real_path is not None and os.access(real_path, os.R_OK):
        return str(int(real_path.stat().st_mtime))
    logger.warning(
        "'%s' was not found (or cannot be read) in %s",
        os.path.basename(url),
        real_path.parent if real_path is not None else "any asset collection",
    )
    return None


class AssetUrlResolver:
    """Resolve logical asset paths across an ordered list of collections."""

    def __init__(
        self,
        asset_collections: Iterable[AssetCollection],
        configuration: Optional["Configuration"] = None,
    ) -> None:
        self._collections: Tuple[AssetCollection, ...] = tuple(asset_collections)
        self.configuration = configuration

    @property
    def asset_collections(self) -> Tuple[AssetCollection, ...]:
        return self._collections

    def search_locations(self, kind: Union[AssetKind, str]) -> Tuple[str, ...]:
        return tuple(
            directory
            for directory in (c.directory_for(kind) for c in self._collections)
            if directory is not None
        )

    def lookup(self, path: str, kind: Union[AssetKind, str]) -> Optional[ResolvedAsset]:
        """Return the first collection holding ``path``, or None.

        Absolute web paths ("/images/logo.png") are matched against each
        collection's web path for ``kind`` first.
        """
        kind = AssetKind.parse(kind)
        clean_path, _ = split_query(path)

        for collection in self._collections:
            if clean_path.startswith("/"):
                relative = collection.owns_url(clean_path, kind)
                if relative is None:
                    continue
            else:
                relative = clean_path
            if collection.contains(relative, kind):
                return ResolvedAsset(collection, relative, collection.path_for(relative, kind))
        return None

    def resolve(
        self,
        path: str,
        kind: Union[AssetKind, str],
        *,
        relative_to: Optional[str] = None,
        cache_buster: bool = True,
    ) -> str:
        """Return the URL for the logical asset ``path``.

        Args:
            path: Logical asset path, optionally with a query or fragment.
            kind: Asset kind ("image" or "font").
            relative_to: URL of the stylesheet; when given the result is
                relative to it and no asset host is applied.
            cache_buster: Set to False to skip cache busting.

        Raises:
            ConfigurationError: If the asset host returns a URL without a
                scheme or the cache buster returns an unsupported value.
        """
        kind = AssetKind.parse(kind)
        if is_full_url(path):
            return path

        clean_path, suffix = split_query(path)
        found = self.lookup(clean_path, kind)

        if found is None:
            if clean_path.startswith("/"):
                return path
            locations = ", ".join(self.search_locations(kind)) or "no asset collections"
            message = f"Could not find {kind.value} '{clean_path}' in {locations}"
            logger.warning(message)
            warnings.warn(UnresolvedAssetWarning(message), stacklevel=2)
            return path

        url = found.collection.url_for(found.path, kind)
        if relative_to is not None:
            url = relative_url(relative_to, url)
        else:
            url = self._apply_asset_host(url)

        query, hash_mark, fragment = suffix.partition("#")
        url += query
        if cache_buster:
            url = self._apply_cache_buster(url, found.real_path)

        return url + hash_mark + fragment

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _setting(self, name: str) -> Any:
        if self.configuration is None:
            return None
        return self.configuration.get(name)

    def _apply_asset_host(self, url: str) -> str:
        asset_host = self._setting("asset_host")
        if asset_host is None:
            return url
        host = asset_host(url)
        if not isinstance(host, str) or not has_scheme(host):
            raise ConfigurationError(
                f"The asset_host callback must return a url starting with a protocol, got {host!r}",
                context={"url": url, "host": repr(host)},
            )
        return urljoin(host, url)

    def _apply_cache_buster(self, url: str, real_path: Optional[Path]) -> str:
        buster = self._setting("asset_cache_buster")
        if buster is None:
            result = mtime_cache_buster(url, real_path)
        elif _accepts_file(buster):
            result = self._call_with_file(buster, url, real_path)
        else:
            result = buster(url)

        if result is None:
            return url
        return cache_busted_url(url, result)

    @staticmethod
    def _call_with_file(buster: CacheBuster, url: str, real_path: Optional[Path]) -> Any:
        handle: Optional[BinaryIO] = None
        if real_path is not None:
            try:
                handle = open(real_path, "rb")
            except FileNotFoundError:
                handle = None
        try:
            return buster(url, handle)
        finally:
            if handle is not None:
                handle.close()


__all__ = [
    "AssetUrlResolver",
    "ResolvedAsset",
    "CacheBuster",
    "cache_busted_url",
    "mtime_cache_buster",
]
