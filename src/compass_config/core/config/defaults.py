"""Built-in default values.

Static defaults live in the bundled ``data/config/defaults.yaml``. Derived
defaults are computed from other attributes of the configuration they are
evaluated against (always the root of the chain, so every layer is visible).
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from compass_config.data import read_yaml
from compass_config.core.utils.urls import url_join

from .attributes import ATTRIBUTE_SCHEMA

if TYPE_CHECKING:
    from .inheritance import InheritedData

DefaultFn = Callable[["InheritedData"], Any]


def _project_relative(dir_attr: str) -> DefaultFn:
    def _default(config: "InheritedData") -> Optional[str]:
        project_path = config.get("project_path")
        directory = config.get(dir_attr)
        if project_path is None or directory is None:
            return None
        return os.path.join(project_path, directory)

    return _default


def _http_root_relative(http_dir_attr: str, dir_attr: str) -> DefaultFn:
    def _default(config: "InheritedData") -> str:
        directory = config.get(http_dir_attr)
        if directory is None:
            directory = config.get(dir_attr)
        return url_join(config.get("http_path"), directory)

    return _default


def _is_production(config: "InheritedData") -> bool:
    return config.get("environment") == "production"


def _sprite_load_path(config: "InheritedData") -> list:
    images_path = config.get("images_path")
    return [images_path] if images_path else []


DERIVED_DEFAULTS: Dict[str, DefaultFn] = {
    "output_style": lambda c: "compressed" if _is_production(c) else "expanded",
    "line_comments": lambda c: not _is_production(c),
    "generated_images_dir": lambda c: c.get("images_dir"),
    "css_path": _project_relative("css_dir"),
    "sass_path": _project_relative("sass_dir"),
    "images_path": _project_relative("images_dir"),
    "javascripts_path": _project_relative("javascripts_dir"),
    "fonts_path": _project_relative("fonts_dir"),
    "extensions_path": _project_relative("extensions_dir"),
    "generated_images_path": _project_relative("generated_images_dir"),
    "cache_path": _project_relative("cache_dir"),
    "http_stylesheets_path": _http_root_relative("http_stylesheets_dir", "css_dir"),
    "http_images_path": _http_root_relative("http_images_dir", "images_dir"),
    "http_javascripts_path": _http_root_relative("http_javascripts_dir", "javascripts_dir"),
    "http_fonts_path": _http_root_relative("http_fonts_dir", "fonts_dir"),
    "http_generated_images_path": _http_root_relative(
        "http_generated_images_dir", "generated_images_dir"
    ),
    "sprite_load_path": _sprite_load_path,
}


def static_defaults() -> Dict[str, Any]:
    """Return the bundled static defaults (read once, cached)."""
    return read_yaml("config", "defaults.yaml")


def default_for(config: "InheritedData", name: str) -> Any:
    """Return the default value of ``name`` evaluated against ``config``.

    List attributes always default to a (fresh) list; everything else
    defaults to None when neither a derived nor a static default exists.
    """
    derived = DERIVED_DEFAULTS.get(name)
    if derived is not None:
        value = derived(config)
    else:
        value = static_defaults().get(name)

    spec = ATTRIBUTE_SCHEMA.get(name)
    if spec is not None and spec.is_list:
        return list(value or [])
    return value


__all__ = ["DERIVED_DEFAULTS", "static_defaults", "default_for"]
