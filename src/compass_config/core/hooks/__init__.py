"""Lifecycle hooks for configurations and extensions."""
from __future__ import annotations

from .registry import HookListener, HookRegistry

__all__ = ["HookListener", "HookRegistry"]
