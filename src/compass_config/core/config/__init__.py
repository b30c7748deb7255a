"""Hierarchical project configuration.

Usage:
    from compass_config.core.config import Configuration

    defaults = Configuration("defaults", {"project_path": "/srv/site"})
    user = Configuration("user", {"images_dir": "img"})
    user.inherit_from(defaults)

    user.get("images_path")          # "/srv/site/img"
    user.url_resolver().resolve("logo.png", "image")

    # Layered sources (defaults, host environment, file, invocation)
    from compass_config.core.config import layered_configuration
    config = layered_configuration(user="config/compass.yaml")
"""
from __future__ import annotations

from .attributes import (
    ATTRIBUTE_SCHEMA,
    ATTRIBUTES,
    DEPRECATED_ATTRIBUTES,
    AttributeKind,
    AttributeSpec,
    MergePolicy,
)
from .data import LIFECYCLE_EVENTS, Configuration
from .inheritance import NO_CACHE_BUSTER, InheritedData, no_cache_buster
from .loader import (
    configuration_from_file,
    env_overrides,
    layered_configuration,
    load_config_file,
    serialize,
    write_config_file,
)

__all__ = [
    "ATTRIBUTE_SCHEMA",
    "ATTRIBUTES",
    "DEPRECATED_ATTRIBUTES",
    "AttributeKind",
    "AttributeSpec",
    "MergePolicy",
    "Configuration",
    "LIFECYCLE_EVENTS",
    "InheritedData",
    "NO_CACHE_BUSTER",
    "no_cache_buster",
    "configuration_from_file",
    "env_overrides",
    "layered_configuration",
    "load_config_file",
    "serialize",
    "write_config_file",
]
