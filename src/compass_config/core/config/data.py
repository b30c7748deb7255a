"""Configuration data aggregated from several sources into one API.

Possible sources of configuration data:
  * built-in defaults for stand-alone projects
  * defaults supplied by the host environment (an app framework integration)
  * user supplied configuration files
  * invocation-time overrides (command line, environment variables)

Each source becomes one ``Configuration`` linked into an inheritance chain
with ``inherit_from``. The head of the chain (``root()``) owns the asset URL
resolvers; every other member delegates to it.
"""
from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Tuple

from compass_config.core.assets import AssetCollection, AssetUrlResolver
from compass_config.core.exceptions import ConfigurationError
from compass_config.core.frameworks import Framework, FrameworkRegistry
from compass_config.core.hooks import HookListener, HookRegistry
from compass_config.core.watch import Watch, WatchCallback

from .inheritance import InheritedData

logger = logging.getLogger(__name__)

# Events fired by the stylesheet and sprite compilers.
#   sprite_saved(filename)             sprite_generated(sprite_data)
#   sprite_removed(filename)           stylesheet_saved(filename)
#   stylesheet_removed(filename)       stylesheet_error(filename, message)
#   sourcemap_saved(filename)          sourcemap_removed(filename)
LIFECYCLE_EVENTS: Tuple[str, ...] = (
    "sprite_saved",
    "sprite_generated",
    "sprite_removed",
    "stylesheet_saved",
    "sourcemap_saved",
    "stylesheet_removed",
    "sourcemap_removed",
    "stylesheet_error",
)

# Attributes the resolvers' collection lists are built from.
_RESOLVER_ATTRIBUTES = frozenset(
    {
        "asset_collections",
        "sprite_load_path",
        "project_path",
        "http_path",
        "images_dir",
        "fonts_dir",
        "images_path",
        "fonts_path",
        "http_images_dir",
        "http_fonts_dir",
        "http_images_path",
        "http_fonts_path",
    }
)


class Configuration(InheritedData):
    """One named configuration scope."""

    def __init__(
        self,
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        parent: Optional["Configuration"] = None,
        frameworks: Optional[FrameworkRegistry] = None,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("A configuration needs a name", context={"name": repr(name)})
        super().__init__()
        self._resolver_lock = threading.RLock()
        self._url_resolver: Optional[AssetUrlResolver] = None
        self._sprite_resolver: Optional[AssetUrlResolver] = None
        self._watches: List[Watch] = []
        self.name = name
        self.hooks = HookRegistry(LIFECYCLE_EVENTS)
        if frameworks is None:
            frameworks = parent.frameworks if parent is not None else FrameworkRegistry()
        self.frameworks = frameworks

        if attributes:
            self.set_all(attributes)
        if parent is not None:
            self.inherit_from(parent)

    def __repr__(self) -> str:
        return f"<Configuration {self.name!r}>"

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on(self, event: str, listener: Optional[HookListener] = None) -> Any:
        """Register ``listener`` for ``event`` on this configuration."""
        return self.hooks.on(event, listener)

    def run(self, event: str, *payload: Any) -> None:
        """Fire ``event`` here, then on every configuration this one inherits from."""
        self.hooks.fire(event, *payload)
        parent = self.inherited_data
        if isinstance(parent, Configuration):
            parent.run(event, *payload)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def set_asset_host(self, asset_host: Any) -> Any:
        """Set the asset host callback; usable as a decorator.

        The callback receives the root-relative URL of an asset and must
        return a URL starting with a protocol (e.g. "https://"). Either a bare
        host or the full asset URL works: the asset path replaces the path of
        the returned URL.
        """
        self.set("asset_host", asset_host)
        return asset_host

    def set_asset_cache_buster(self, cache_buster: Any) -> Any:
        """Set the cache buster callback; usable as a decorator.

        The callback receives the asset URL and, when it accepts a second
        argument, an open binary file for the asset (or None if the file does
        not exist). It returns None, a query string without the leading "?",
        or a mapping with ``path`` and/or ``query`` replacements. Pass
        ``"none"`` to disable cache busting.
        """
        self.set("asset_cache_buster", cache_buster)
        return cache_buster

    # ------------------------------------------------------------------
    # Import paths
    # ------------------------------------------------------------------

    def add_import_path(self, *paths: Any) -> None:
        self.add_to("additional_import_paths", *paths)

    def sass_load_paths(self) -> List[str]:
        """Return the Sass load paths: project sass dir, import paths, framework stylesheets."""
        candidates: List[str] = []
        sass_path = self.get("sass_path")
        if sass_path:
            candidates.append(sass_path)
        candidates.extend(self.get("additional_import_paths"))
        candidates.extend(
            str(framework.stylesheets_dir)
            for framework in self.frameworks
            if framework.stylesheets_dir.is_dir()
        )
        load_paths: List[str] = []
        for path in candidates:
            if path not in load_paths:
                load_paths.append(path)
        return load_paths

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    def require(self, lib: str) -> Any:
        """Require an extension library and record it for serialization."""
        self.add_to("required_libraries", lib)
        return self.frameworks.require(lib)

    def load(self, framework_dir: Any) -> Framework:
        """Register the framework at ``framework_dir`` and record it."""
        self.add_to("loaded_frameworks", framework_dir)
        return self.frameworks.register_directory(framework_dir)

    def discover(self, frameworks_dir: Any) -> List[Framework]:
        """Register every framework found in ``frameworks_dir`` and record it."""
        self.add_to("framework_path", frameworks_dir)
        return self.frameworks.discover(frameworks_dir)

    # ------------------------------------------------------------------
    # Watches
    # ------------------------------------------------------------------

    def watch(self, glob: str, callback: Optional[WatchCallback] = None) -> Any:
        """Run ``callback`` when a file matching ``glob`` changes; usable as a decorator."""
        if callback is None:
            def _decorator(fn: WatchCallback) -> WatchCallback:
                self._watches.append(Watch(glob, fn))
                return fn

            return _decorator
        self._watches.append(Watch(glob, callback))
        return callback

    def watches(self) -> List[Watch]:
        """Return local watches, or the inherited ones when none are registered here."""
        if self._watches:
            return list(self._watches)
        parent = self.inherited_data
        if isinstance(parent, Configuration):
            return parent.watches()
        return []

    # ------------------------------------------------------------------
    # Asset collections and resolvers
    # ------------------------------------------------------------------

    def add_asset_collection(self, options: Any = None, **kwargs: Any) -> AssetCollection:
        """Add a location where image and font assets can be found.

        ``options`` is an ``AssetCollection`` or a mapping of its options
        (see ``AssetCollection``); keyword arguments are merged into it.
        """
        if isinstance(options, AssetCollection) and not kwargs:
            collection = options
        else:
            collection = AssetCollection.from_options({**dict(options or {}), **kwargs})
        self.add_to("asset_collections", collection)
        return collection

    def project_collection(self) -> Optional[AssetCollection]:
        """Return the collection for the project's own images and fonts.

        None when ``project_path`` is not configured.
        """
        project_path = self.get("project_path")
        if project_path is None:
            return None
        images_path = self.get("images_path")
        fonts_path = self.get("fonts_path")
        return AssetCollection(
            root_path=project_path,
            http_path=self.get("http_path"),
            images_dir=os.path.relpath(images_path, project_path) if images_path else None,
            fonts_dir=os.path.relpath(fonts_path, project_path) if fonts_path else None,
            http_images_path=self.get("http_images_path"),
            http_fonts_path=self.get("http_fonts_path"),
            name=self.name,
        )

    def _resolver_collections(self) -> List[AssetCollection]:
        collections: List[AssetCollection] = []
        project = self.project_collection()
        if project is not None:
            collections.append(project)
        collections.extend(self.get("asset_collections"))
        return collections

    def url_resolver(self) -> AssetUrlResolver:
        """Return the shared asset URL resolver owned by the root configuration."""
        root = self.root()
        if root is not self:
            return root.url_resolver()
        with self._resolver_lock:
            if self._url_resolver is None:
                collections = self._resolver_collections()
                logger.debug("Building url resolver for %r with %d collection(s)", self, len(collections))
                self._url_resolver = AssetUrlResolver(collections, self)
            return self._url_resolver

    def sprite_resolver(self) -> AssetUrlResolver:
        """Return the resolver for sprite source images.

        Searches the regular collections first, then one images-only
        collection per ``sprite_load_path`` entry.
        """
        root = self.root()
        if root is not self:
            return root.sprite_resolver()
        with self._resolver_lock:
            if self._sprite_resolver is None:
                collections = self._resolver_collections()
                http_images_path = self.get("http_images_path")
                collections.extend(
                    AssetCollection(
                        root_path=load_path,
                        http_path=http_images_path,
                        images_dir=".",
                        fonts_dir=None,
                        http_images_path=http_images_path,
                        name=f"sprite_load_path:{load_path}",
                    )
                    for load_path in self.get("sprite_load_path")
                )
                logger.debug("Building sprite resolver for %r with %d collection(s)", self, len(collections))
                self._sprite_resolver = AssetUrlResolver(collections, self)
            return self._sprite_resolver

    def invalidate_resolvers(self) -> None:
        """Drop the cached resolvers so the next lookup rebuilds them."""
        for config in (self, self.root()):
            with config._resolver_lock:
                config._url_resolver = None
                config._sprite_resolver = None

    # ------------------------------------------------------------------
    # InheritedData overrides
    # ------------------------------------------------------------------

    def add_to(self, name: str, *values: Any) -> None:
        if name == "asset_collections":
            values = tuple(self._as_collection(v) for v in values)
        super().add_to(name, *values)

    def overwrite(self, name: str, values: Iterable[Any]) -> None:
        if name == "asset_collections":
            values = [self._as_collection(v) for v in values]
        super().overwrite(name, values)

    @staticmethod
    def _as_collection(value: Any) -> AssetCollection:
        if isinstance(value, AssetCollection):
            return value
        if isinstance(value, Mapping):
            return AssetCollection.from_options(value)
        raise ConfigurationError(
            f"asset_collections entries must be asset collections or option mappings, got {type(value).__name__}",
            context={"attribute": "asset_collections"},
        )

    def _changed(self, name: str) -> None:
        if name in _RESOLVER_ATTRIBUTES:
            self.invalidate_resolvers()

    def _on_chain_changed(self) -> None:
        self.invalidate_resolvers()


__all__ = ["Configuration", "LIFECYCLE_EVENTS"]
