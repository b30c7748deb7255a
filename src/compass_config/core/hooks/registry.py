"""Named lifecycle event channels.

Extensions register listeners on named events without knowing about each
other. Firing an event calls every listener once, in registration order,
synchronously. The listener list is snapshotted before dispatch, so a
listener registering another listener only affects later fires.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from compass_config.core.exceptions import ReentrantDispatchError, UndefinedHookError

logger = logging.getLogger(__name__)

HookListener = Callable[..., Any]


class HookRegistry:
    """Ordered listeners per declared event."""

    def __init__(self, events: Tuple[str, ...] = ()) -> None:
        self._listeners: Dict[str, List[HookListener]] = {}
        self._dispatching: Set[str] = set()
        for event in events:
            self.define(event)

    def define(self, event: str) -> None:
        """Declare ``event``. Declaring an existing event is a no-op."""
        self._listeners.setdefault(event, [])

    def is_defined(self, event: str) -> bool:
        return event in self._listeners

    @property
    def events(self) -> Tuple[str, ...]:
        return tuple(self._listeners)

    def on(self, event: str, listener: Optional[HookListener] = None) -> Any:
        """Append ``listener`` to ``event``.

        Without ``listener`` this returns a decorator:

            @hooks.on("stylesheet_saved")
            def notify(filename): ...
        """
        if event not in self._listeners:
            raise UndefinedHookError(event)

        if listener is None:
            def _decorator(fn: HookListener) -> HookListener:
                self._listeners[event].append(fn)
                return fn

            return _decorator

        self._listeners[event].append(listener)
        return listener

    def listeners(self, event: str) -> Tuple[HookListener, ...]:
        if event not in self._listeners:
            raise UndefinedHookError(event)
        return tuple(self._listeners[event])

    def fire(self, event: str, *payload: Any) -> None:
        """Invoke every listener of ``event`` with ``payload``."""
        if event not in self._listeners:
            raise UndefinedHookError(event)
        if event in self._dispatching:
            raise ReentrantDispatchError(event)

        listeners = tuple(self._listeners[event])
        if not listeners:
            return

        logger.debug("Firing %s to %d listener(s)", event, len(listeners))
        self._dispatching.add(event)
        try:
            for listener in listeners:
                listener(*payload)
        finally:
            self._dispatching.discard(event)


__all__ = ["HookRegistry", "HookListener"]
