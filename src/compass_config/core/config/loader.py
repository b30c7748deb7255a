"""
Configuration sources: YAML files, environment variables and layered chains.

Sources (lowest to highest priority when layered):
1. Built-in defaults (bundled data, see ``defaults.py``)
2. Host-environment defaults (supplied by an app framework integration)
3. User configuration (YAML file)
4. Invocation-time overrides (command line mapping, COMPASS_* environment)

List values read from files may start with a directive: ``"="`` replaces the
inherited list, ``"+"`` (or no directive) appends to it.
"""
from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from compass_config.core.exceptions import ConfigSchemaError, ConfigurationError
from compass_config.core.frameworks import FrameworkRegistry
from compass_config.core.utils.io import read_yaml, write_yaml
from compass_config.core.utils.merge import split_list_directive
from compass_config.data import read_yaml as read_data_yaml

from .attributes import ATTRIBUTE_SCHEMA, ATTRIBUTES, AttributeKind
from .data import Configuration

logger = logging.getLogger(__name__)

ENV_PREFIX = "COMPASS_"
SCHEMA_NAME = "configuration.schema.yaml"


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def load_schema() -> Dict[str, Any]:
    """Return the bundled JSON Schema for configuration files."""
    return read_data_yaml("schemas", SCHEMA_NAME)


def validate_config_mapping(data: Mapping[str, Any], *, source: str = "<mapping>") -> None:
    """Validate ``data`` against the bundled configuration schema.

    Raises:
        ConfigSchemaError: With every violation listed, sorted by path.
    """
    validator = jsonschema.Draft202012Validator(load_schema())
    errors: List[str] = []
    for error in sorted(validator.iter_errors(dict(data)), key=lambda e: str(list(e.path))):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    if errors:
        raise ConfigSchemaError(
            f"Invalid configuration in {source}:\n" + "\n".join(f"- {e}" for e in errors),
            context={"source": source, "errors": errors},
        )


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and validate a YAML configuration file.

    An empty file yields an empty mapping.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigSchemaError: If the content is not a mapping or fails validation.
    """
    path = Path(path)
    data = read_yaml(path, default={}, raise_on_error=True)
    if not isinstance(data, dict):
        raise ConfigSchemaError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {path}",
            context={"source": str(path)},
        )
    validate_config_mapping(data, source=str(path))
    return data


def apply_mapping(config: Configuration, data: Mapping[str, Any]) -> Configuration:
    """Set ``data`` on ``config``, honouring list directives.

    Unknown keys are ignored, as with ``Configuration.set_all``.
    """
    plain: Dict[str, Any] = {}
    for key, value in data.items():
        spec = ATTRIBUTE_SCHEMA.get(key)
        if spec is not None and spec.is_list and isinstance(value, list):
            replace, items = split_list_directive(value)
            if replace:
                config.overwrite(key, items)
            else:
                config.add_to(key, *items)
        else:
            plain[key] = value
    config.set_all(plain)
    return config


def configuration_from_file(
    path: Union[str, Path],
    *,
    name: Optional[str] = None,
    frameworks: Optional[FrameworkRegistry] = None,
) -> Configuration:
    """Build a Configuration named after the file (or ``name``) from a YAML file."""
    path = Path(path)
    data = load_config_file(path)
    config = Configuration(name or path.stem, frameworks=frameworks)
    return apply_mapping(config, data)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

def _as_bool(v: str) -> Optional[bool]:
    low = v.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    return None


def _as_int(v: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
        return int(v)
    return None


def _as_float(v: str) -> Optional[float]:
    s = v.strip()
    if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
        return float(s)
    return None


def _as_json(v: str) -> Optional[Any]:
    s = v.strip()
    if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            return None
    return None


def coerce_env_value(value: str) -> Any:
    """Coerce an environment string to bool, int, float or JSON, else a stripped string."""
    for caster in (_as_bool, _as_int, _as_float, _as_json):
        result = caster(value)
        if result is not None:
            return result
    return value.strip()


def env_overrides(
    environ: Optional[Mapping[str, str]] = None,
    *,
    prefix: str = ENV_PREFIX,
) -> Dict[str, Any]:
    """Collect attribute overrides from ``PREFIX<ATTRIBUTE>`` environment variables.

    Keys are matched case-insensitively against declared attributes; other
    variables with the prefix are ignored. String attributes keep the raw
    value, boolean attributes require "true"/"false", list attributes accept
    a JSON list or an ``os.pathsep`` separated string.

    Raises:
        ConfigurationError: If a boolean variable holds anything but true/false.
    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for key in sorted(environ):
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):].lower()
        spec = ATTRIBUTE_SCHEMA.get(name)
        if spec is None or spec.is_callable:
            logger.debug("Ignoring environment override %s", key)
            continue
        raw = environ[key]

        if spec.kind is AttributeKind.STRING:
            overrides[name] = raw.strip()
        elif spec.kind is AttributeKind.BOOLEAN:
            value = _as_bool(raw)
            if value is None:
                raise ConfigurationError(
                    f"{key} must be 'true' or 'false', got {raw!r}",
                    context={"variable": key},
                )
            overrides[name] = value
        elif spec.is_list:
            value = _as_json(raw)
            if isinstance(value, list):
                overrides[name] = value
            else:
                overrides[name] = [p for p in raw.split(os.pathsep) if p]
        else:
            overrides[name] = coerce_env_value(raw)
    return overrides


# ---------------------------------------------------------------------------
# Layering
# ---------------------------------------------------------------------------

def layered_configuration(
    *,
    defaults: Optional[Mapping[str, Any]] = None,
    environment: Optional[Mapping[str, Any]] = None,
    user: Optional[Union[Mapping[str, Any], str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    frameworks: Optional[FrameworkRegistry] = None,
) -> Configuration:
    """Build the configuration chain and return its root.

    Layers, low to high priority: ``defaults`` (project defaults),
    ``environment`` (host-environment defaults), ``user`` (mapping or YAML
    file path), ``overrides`` merged with ``COMPASS_*`` variables from
    ``environ`` (explicit overrides win). Empty layers are skipped; the
    invocation layer always exists so the root is stable.
    """
    registry = frameworks if frameworks is not None else FrameworkRegistry()
    chain: List[Configuration] = []

    if defaults:
        chain.append(apply_mapping(Configuration("defaults", frameworks=registry), defaults))
    if environment:
        chain.append(apply_mapping(Configuration("environment", frameworks=registry), environment))
    if user is not None:
        if isinstance(user, Mapping):
            chain.append(apply_mapping(Configuration("user", frameworks=registry), user))
        else:
            chain.append(configuration_from_file(user, name="user", frameworks=registry))

    invocation = {**env_overrides(environ), **dict(overrides or {})}
    root = apply_mapping(Configuration("invocation", frameworks=registry), invocation)

    for layer in reversed(chain):
        root.inherit_from(layer)
    return root


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _serializable_collection(collection: Any) -> Dict[str, Any]:
    return {
        key: value
        for key, value in (
            ("root_path", collection.root_path),
            ("http_path", collection.http_path),
            ("images_dir", collection.images_dir),
            ("fonts_dir", collection.fonts_dir),
            ("http_images_path", collection.http_images_path),
            ("http_fonts_path", collection.http_fonts_path),
            ("name", collection.name),
        )
        if value is not None
    }


def serialize(config: Configuration) -> Dict[str, Any]:
    """Return the values set locally on ``config`` as plain data.

    Callables (asset host, cache buster) cannot be serialized and are left
    out. Lists that overwrite their inherited value carry the "=" directive.
    """
    data: Dict[str, Any] = {}
    for spec in ATTRIBUTES:
        if spec.is_callable or not config.is_set(spec.name):
            continue
        value = config.local(spec.name)
        if spec.is_list:
            if spec.name == "asset_collections":
                value = [_serializable_collection(c) for c in value]
            if config.is_overwritten(spec.name):
                value = ["=", *value]
            elif not value:
                continue
        data[spec.name] = value
    return data


def write_config_file(path: Union[str, Path], config: Configuration) -> Path:
    """Write the locally set values of ``config`` to ``path`` as YAML."""
    path = Path(path)
    write_yaml(path, serialize(config))
    return path


__all__ = [
    "ENV_PREFIX",
    "load_schema",
    "validate_config_mapping",
    "load_config_file",
    "apply_mapping",
    "configuration_from_file",
    "coerce_env_value",
    "env_overrides",
    "layered_configuration",
    "serialize",
    "write_config_file",
]
