"""Extension framework registration."""
from __future__ import annotations

from .registry import Framework, FrameworkRegistry

__all__ = ["Framework", "FrameworkRegistry"]
