"""File watch registrations.

Only the registration side lives here; the file-system watcher that calls
``Watch.run`` belongs to the host application.
"""
from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from typing import Any, Callable

WatchCallback = Callable[..., Any]


@dataclass(frozen=True)
class Watch:
    """A glob pattern paired with the callback to run when a match changes."""

    glob: str
    callback: WatchCallback

    def matches(self, relative_path: str) -> bool:
        return fnmatch.fnmatch(relative_path, self.glob)

    def run(self, base: str, relative: str, action: str) -> Any:
        """Invoke the callback with the project base, the changed path and the action.

        ``action`` is one of "added", "modified" or "removed".
        """
        return self.callback(base, relative, action)


__all__ = ["Watch", "WatchCallback"]
