"""Attribute storage with inheritance across a configuration chain.

Each ``InheritedData`` instance holds the values set on it locally and an
optional reference to the data it inherits from. Reads walk the chain:

- scalars: the nearest locally set value wins, then the default
- lists: inherited entries first, then local additions, following the
  attribute's merge policy (see ``attributes.MergePolicy``)

Defaults are evaluated against ``top_level`` (the head of the chain) so that
derived defaults see values set on any layer.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Set, Tuple

from compass_config.core.exceptions import (
    ConfigurationError,
    DeprecatedAttributeError,
    UnknownAttributeError,
)

from .attributes import (
    ATTRIBUTE_SCHEMA,
    DEPRECATED_ATTRIBUTES,
    AttributeKind,
    AttributeSpec,
    MergePolicy,
)
from .defaults import default_for

logger = logging.getLogger(__name__)

NO_CACHE_BUSTER = "none"


def no_cache_buster(url: str, file: Any = None) -> None:
    return None


def _strip_trailing_separator(value: str) -> str:
    stripped = value.rstrip("/")
    return stripped if stripped else ("/" if value else value)


class InheritedData:
    """Per-instance attribute table linked into an inheritance chain."""

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        self._added: Dict[str, List[Any]] = {}
        self._removed: Dict[str, List[Any]] = {}
        self._overwritten: Set[str] = set()
        self.inherited_data: Optional[InheritedData] = None
        self.top_level: InheritedData = self

    # ------------------------------------------------------------------
    # Attribute-style access for declared attributes
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails. Replaced names raise
        # DeprecatedAttributeError, which hasattr() treats as missing.
        if name in ATTRIBUTE_SCHEMA or name in DEPRECATED_ATTRIBUTES:
            return self.get(name)
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ATTRIBUTE_SCHEMA or name in DEPRECATED_ATTRIBUTES:
            self.set(name, value)
        else:
            super().__setattr__(name, value)

    # ------------------------------------------------------------------
    # Chain management
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Optional["InheritedData"]:
        return self.inherited_data

    def root(self) -> "InheritedData":
        """Return the head of the chain that owns shared resources."""
        return self.top_level

    def chain(self) -> Tuple["InheritedData", ...]:
        """Return this data followed by everything it inherits from."""
        nodes: List[InheritedData] = []
        node: Optional[InheritedData] = self
        while node is not None:
            nodes.append(node)
            node = node.inherited_data
        return tuple(nodes)

    def inherit_from(self, data: Optional["InheritedData"]) -> "InheritedData":
        """Append ``data`` (and its chain) to the end of this chain.

        Every member of the appended chain reports this chain's
        ``top_level`` afterwards. Self references and cycles are rejected.
        """
        if data is None:
            return self
        if data is self or any(node is self for node in data.chain()):
            raise ConfigurationError(
                "A configuration cannot inherit from itself",
                context={"configuration": repr(self)},
            )
        if any(node is data for node in self.chain()):
            raise ConfigurationError(
                "Configuration is already part of this inheritance chain",
                context={"configuration": repr(data)},
            )

        tail = self.chain()[-1]
        tail.inherited_data = data
        top = self.top_level
        for node in data.chain():
            node.top_level = top
        top._on_chain_changed()
        return self

    def _changed(self, name: str) -> None:
        """Hook called after a local value of ``name`` changes."""

    def _on_chain_changed(self) -> None:
        """Hook for subclasses holding chain-dependent caches."""

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """Return the effective value of ``name`` across the chain."""
        spec = self._spec(name)
        if spec.is_list:
            return self._read_list(spec)

        node: Optional[InheritedData] = self
        while node is not None:
            if name in node._values:
                return node._values[name]
            node = node.inherited_data
        return default_for(self.top_level, name)

    def local(self, name: str) -> Any:
        """Return only the value set on this instance (no inheritance)."""
        spec = self._spec(name)
        if spec.is_list:
            return list(self._added.get(name, []))
        return self._values.get(name)

    def is_set(self, name: str) -> bool:
        self._spec(name)
        return name in self._values or name in self._added or name in self._overwritten

    def is_overwritten(self, name: str) -> bool:
        """Return True when the local list of ``name`` replaces inherited entries."""
        return name in self._overwritten

    def _read_list(self, spec: AttributeSpec) -> List[Any]:
        name = spec.name
        local = self._added.get(name, [])

        if name in self._overwritten or (spec.merge is MergePolicy.CLOBBER and local):
            result: List[Any] = []
        elif self.inherited_data is not None:
            result = self.inherited_data._read_list(spec)
        else:
            result = default_for(self.top_level, name)

        for value in local:
            if spec.merge is MergePolicy.DEDUP and value in result:
                continue
            result.append(value)

        removed = self._removed.get(name)
        if removed:
            result = [value for value in result if value not in removed]
        return result

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        """Set ``name`` locally.

        Scalars overwrite any previous local value and shadow ancestors.
        For list attributes ``value`` (one item or an iterable of items) is
        appended to the local additions; ``None`` clears the local state.
        """
        spec = self._spec(name)
        if spec.is_list:
            if value is None:
                self.unset(name)
                return
            self.add_to(name, *self._as_items(value))
            return
        self._values[name] = self._coerce_scalar(spec, value)
        self._changed(name)

    def set_all(self, attributes: Mapping[str, Any]) -> None:
        """Set every declared attribute in ``attributes``; unknown keys are ignored."""
        for key, value in attributes.items():
            if key in ATTRIBUTE_SCHEMA or key in DEPRECATED_ATTRIBUTES:
                self.set(key, value)
            else:
                logger.debug("Ignoring unknown configuration key %r on %r", key, self)

    def add_to(self, name: str, *values: Any) -> None:
        spec = self._list_spec(name)
        items = self._added.setdefault(name, [])
        items.extend(self._coerce_item(spec, v) for v in values)
        self._changed(name)

    def remove_from(self, name: str, *values: Any) -> None:
        spec = self._list_spec(name)
        removed = self._removed.setdefault(name, [])
        removed.extend(self._coerce_item(spec, v) for v in values)
        self._changed(name)

    def overwrite(self, name: str, values: Iterable[Any]) -> None:
        """Replace the inherited list of ``name`` with ``values``."""
        spec = self._list_spec(name)
        self._overwritten.add(name)
        self._removed.pop(name, None)
        self._added[name] = [self._coerce_item(spec, v) for v in values]
        self._changed(name)

    def unset(self, name: str) -> None:
        """Forget every local setting of ``name``."""
        self._spec(name)
        self._values.pop(name, None)
        self._added.pop(name, None)
        self._removed.pop(name, None)
        self._overwritten.discard(name)
        self._changed(name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _spec(self, name: str) -> AttributeSpec:
        replacement = DEPRECATED_ATTRIBUTES.get(name)
        if replacement is not None:
            raise DeprecatedAttributeError(name, replacement)
        spec = ATTRIBUTE_SCHEMA.get(name)
        if spec is None:
            raise UnknownAttributeError(name)
        return spec

    def _list_spec(self, name: str) -> AttributeSpec:
        spec = self._spec(name)
        if not spec.is_list:
            raise ConfigurationError(
                f"{name} is not a list attribute",
                context={"attribute": name},
            )
        return spec

    @staticmethod
    def _as_items(value: Any) -> List[Any]:
        if isinstance(value, (str, bytes, os.PathLike, Mapping)) or not isinstance(value, Iterable):
            return [value]
        return list(value)

    @staticmethod
    def _coerce_item(spec: AttributeSpec, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            value = os.fspath(value)
        if spec.strip_separator and isinstance(value, str):
            value = _strip_trailing_separator(value)
        return value

    def _coerce_scalar(self, spec: AttributeSpec, value: Any) -> Any:
        name = spec.name
        if value is None:
            return None

        if spec.kind is AttributeKind.STRING:
            if isinstance(value, os.PathLike):
                value = os.fspath(value)
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"{name} must be a string, got {type(value).__name__}",
                    context={"attribute": name},
                )
            if name == "http_path" and value == "relative":
                raise ConfigurationError(
                    '"relative" is no longer a valid value for http_path. '
                    "Please set relative_assets = True instead.",
                    context={"attribute": name, "replacement": "relative_assets"},
                )
            return _strip_trailing_separator(value) if spec.strip_separator else value

        if spec.kind is AttributeKind.BOOLEAN:
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be a boolean, got {type(value).__name__}",
                    context={"attribute": name},
                )
            return value

        if spec.kind is AttributeKind.MAPPING:
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"{name} must be a mapping, got {type(value).__name__}",
                    context={"attribute": name},
                )
            return dict(value)

        # AttributeKind.CALLABLE
        if name == "asset_cache_buster" and isinstance(value, str):
            if value.lstrip(":") == NO_CACHE_BUSTER:
                return no_cache_buster
            raise ConfigurationError(
                f"Unexpected cache buster: {value!r}",
                context={"attribute": name, "value": value},
            )
        if not callable(value):
            raise ConfigurationError(
                f"{name} must be callable, got {type(value).__name__}",
                context={"attribute": name},
            )
        return value


__all__ = ["InheritedData", "NO_CACHE_BUSTER", "no_cache_buster"]
