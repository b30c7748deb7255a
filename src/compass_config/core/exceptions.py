from __future__ import annotations

from typing import Any, Dict, Mapping


class CompassError(Exception):
    """Base exception for compass-config."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(CompassError, ValueError):
    """Raised when a configuration value or operation is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CompassError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnknownAttributeError(ConfigurationError, AttributeError):
    """Raised when reading or writing an attribute that is not declared."""

    def __init__(self, attribute: str) -> None:
        message = f"Unknown configuration attribute: {attribute}"
        ConfigurationError.__init__(self, message, context={"attribute": attribute})
        AttributeError.__init__(self, message)


class DeprecatedAttributeError(ConfigurationError, AttributeError):
    """Raised when reading or writing an attribute name that was replaced."""

    def __init__(self, attribute: str, replacement: str) -> None:
        message = (
            f"{attribute} is no longer a valid configuration attribute. "
            f"Please use {replacement} instead."
        )
        ConfigurationError.__init__(
            self, message, context={"attribute": attribute, "replacement": replacement}
        )
        AttributeError.__init__(self, message)


class ConfigSchemaError(ConfigurationError):
    """Raised when a configuration file fails schema validation."""


class UndefinedHookError(CompassError, LookupError):
    """Raised when registering on or firing an event that was never defined."""

    def __init__(self, event: str) -> None:
        CompassError.__init__(self, f"Undefined hook event: {event}", context={"event": event})
        LookupError.__init__(self, f"Undefined hook event: {event}")


class ReentrantDispatchError(CompassError, RuntimeError):
    """Raised when an event is fired from inside one of its own listeners."""

    def __init__(self, event: str) -> None:
        message = f"Event '{event}' fired while it is already being dispatched"
        CompassError.__init__(self, message, context={"event": event})
        RuntimeError.__init__(self, message)


class UnresolvedAssetWarning(UserWarning):
    """Emitted when a logical asset path matches no registered collection."""


__all__ = [
    "CompassError",
    "ConfigurationError",
    "UnknownAttributeError",
    "DeprecatedAttributeError",
    "ConfigSchemaError",
    "UndefinedHookError",
    "ReentrantDispatchError",
    "UnresolvedAssetWarning",
]
