"""Extension framework registry.

A framework is a directory holding ``stylesheets/`` and ``templates/``.
Configurations call through a registry instance handed to them at
construction instead of a module-level singleton, so tests and host
applications can isolate or share registrations explicitly.
"""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Framework:
    """A registered extension framework."""

    name: str
    path: Path

    @property
    def stylesheets_dir(self) -> Path:
        return self.path / "stylesheets"

    @property
    def templates_dir(self) -> Path:
        return self.path / "templates"


class FrameworkRegistry:
    """Registered frameworks in registration order, keyed by name.

    Registering a name again replaces the earlier framework in place.
    """

    def __init__(self) -> None:
        self._frameworks: Dict[str, Framework] = {}

    def require(self, lib: str) -> ModuleType:
        """Import the extension library ``lib``."""
        logger.debug("Requiring extension library %s", lib)
        return importlib.import_module(lib)

    def register_directory(self, directory: PathLike, name: Optional[str] = None) -> Framework:
        """Register the framework found at ``directory``."""
        path = Path(directory)
        framework = Framework(name=name or path.name, path=path)
        self._frameworks[framework.name] = framework
        logger.debug("Registered framework %s at %s", framework.name, path)
        return framework

    def discover(self, frameworks_dir: PathLike) -> List[Framework]:
        """Register every framework directory directly below ``frameworks_dir``.

        Directories are visited in sorted order; names starting with "_" are
        skipped. A missing directory registers nothing.
        """
        root = Path(frameworks_dir)
        if not root.exists():
            return []
        found: List[Framework] = []
        for child in sorted(root.iterdir()):
            if not child.is_dir():
                continue
            if child.name.startswith("_"):
                continue
            found.append(self.register_directory(child))
        return found

    def get(self, name: str) -> Optional[Framework]:
        return self._frameworks.get(name)

    def names(self) -> List[str]:
        return list(self._frameworks)

    def __iter__(self) -> Iterator[Framework]:
        return iter(list(self._frameworks.values()))

    def __len__(self) -> int:
        return len(self._frameworks)


__all__ = ["Framework", "FrameworkRegistry"]
