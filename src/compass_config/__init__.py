"""
compass-config - project configuration for stylesheet compilers

Layered, inheritable configuration with asset collections, asset URL
resolution, lifecycle hooks, file watches and extension frameworks.
"""

from compass_config.core.assets import AssetCollection, AssetKind, AssetUrlResolver
from compass_config.core.config import (
    LIFECYCLE_EVENTS,
    Configuration,
    configuration_from_file,
    layered_configuration,
)
from compass_config.core.exceptions import (
    CompassError,
    ConfigSchemaError,
    ConfigurationError,
    DeprecatedAttributeError,
    ReentrantDispatchError,
    UndefinedHookError,
    UnknownAttributeError,
    UnresolvedAssetWarning,
)
from compass_config.core.frameworks import Framework, FrameworkRegistry
from compass_config.core.hooks import HookRegistry
from compass_config.core.watch import Watch

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "AssetCollection",
    "AssetKind",
    "AssetUrlResolver",
    "Configuration",
    "LIFECYCLE_EVENTS",
    "configuration_from_file",
    "layered_configuration",
    "CompassError",
    "ConfigSchemaError",
    "ConfigurationError",
    "DeprecatedAttributeError",
    "ReentrantDispatchError",
    "UndefinedHookError",
    "UnknownAttributeError",
    "UnresolvedAssetWarning",
    "Framework",
    "FrameworkRegistry",
    "HookRegistry",
    "Watch",
]
