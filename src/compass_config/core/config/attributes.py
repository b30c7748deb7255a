"""Declared configuration attributes.

Every attribute a Configuration understands is listed here once. The table
drives the generic ``get``/``set`` pair, bulk ``set_all``, attribute-style
access, file validation and serialization:

- kind: what sort of value the attribute holds
- merge: how list values combine across the inheritance chain
  (APPEND: inherited + local, DEDUP: like APPEND but skips values already
  present, CLOBBER: local additions replace the inherited list)
- strip_separator: trailing "/" is removed on write
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple


class AttributeKind(Enum):
    """Value kind of a declared attribute."""

    STRING = "string"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    CALLABLE = "callable"
    LIST = "list"


class MergePolicy(Enum):
    """How a list attribute combines with inherited values."""

    OVERRIDE = "override"   # scalars: nearest value wins
    APPEND = "append"
    DEDUP = "dedup"
    CLOBBER = "clobber"


@dataclass(frozen=True)
class AttributeSpec:
    name: str
    kind: AttributeKind
    merge: MergePolicy = MergePolicy.OVERRIDE
    strip_separator: bool = False

    @property
    def is_list(self) -> bool:
        return self.kind is AttributeKind.LIST

    @property
    def is_callable(self) -> bool:
        return self.kind is AttributeKind.CALLABLE


def _is_path_name(name: str) -> bool:
    return "dir" in name or "path" in name


def _scalar(name: str, kind: AttributeKind = AttributeKind.STRING) -> AttributeSpec:
    return AttributeSpec(
        name=name,
        kind=kind,
        strip_separator=kind is AttributeKind.STRING and _is_path_name(name),
    )


def _list(name: str, merge: MergePolicy = MergePolicy.APPEND, *, paths: bool = False) -> AttributeSpec:
    return AttributeSpec(name=name, kind=AttributeKind.LIST, merge=merge, strip_separator=paths)


_STRING_ATTRIBUTES = (
    # What kind of project, and where is it?
    "project_type",
    "project_path",
    "http_path",
    # Where the various bits of the project live, relative to project_path
    "css_dir",
    "sass_dir",
    "images_dir",
    "javascripts_dir",
    "fonts_dir",
    "extensions_dir",
    "generated_images_dir",
    # How the project is built
    "environment",
    "output_style",
    "preferred_syntax",
    "sprite_engine",
    # Filesystem locations
    "css_path",
    "sass_path",
    "images_path",
    "javascripts_path",
    "fonts_path",
    "extensions_path",
    "generated_images_path",
    # Web locations
    "http_stylesheets_path",
    "http_images_path",
    "http_javascripts_path",
    "http_fonts_path",
    "http_generated_images_path",
    "http_stylesheets_dir",
    "http_images_dir",
    "http_javascripts_dir",
    "http_fonts_dir",
    "http_generated_images_dir",
    # Caching
    "cache_dir",
    "cache_path",
)

_BOOLEAN_ATTRIBUTES = (
    "line_comments",
    "relative_assets",
    "disable_warnings",
    "sourcemap",
    "cache",
)

_MAPPING_ATTRIBUTES = (
    "sass_options",
    "chunky_png_options",
)

_CALLABLE_ATTRIBUTES = (
    "asset_host",
    "asset_cache_buster",
)

ATTRIBUTES: Tuple[AttributeSpec, ...] = (
    *(_scalar(n) for n in _STRING_ATTRIBUTES),
    *(_scalar(n, AttributeKind.BOOLEAN) for n in _BOOLEAN_ATTRIBUTES),
    *(_scalar(n, AttributeKind.MAPPING) for n in _MAPPING_ATTRIBUTES),
    *(_scalar(n, AttributeKind.CALLABLE) for n in _CALLABLE_ATTRIBUTES),
    _list("additional_import_paths", MergePolicy.DEDUP, paths=True),
    _list("sprite_load_path", MergePolicy.CLOBBER, paths=True),
    _list("required_libraries"),
    _list("loaded_frameworks", paths=True),
    _list("framework_path", paths=True),
    _list("asset_collections"),
)

ATTRIBUTE_SCHEMA: Mapping[str, AttributeSpec] = {spec.name: spec for spec in ATTRIBUTES}

# Old attribute names mapped to their replacement.
DEPRECATED_ATTRIBUTES: Dict[str, str] = {
    "http_url": "http_path",
    "images_url": "http_images_path",
}


def get_spec(name: str) -> Optional[AttributeSpec]:
    """Return the declared spec for ``name`` or None when it is not declared."""
    return ATTRIBUTE_SCHEMA.get(name)


def list_attribute_names() -> Tuple[str, ...]:
    return tuple(spec.name for spec in ATTRIBUTES if spec.is_list)


__all__ = [
    "AttributeKind",
    "MergePolicy",
    "AttributeSpec",
    "ATTRIBUTES",
    "ATTRIBUTE_SCHEMA",
    "DEPRECATED_ATTRIBUTES",
    "get_spec",
    "list_attribute_names",
]
