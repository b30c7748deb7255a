"""Shared helpers for compass-config."""
from __future__ import annotations

from .io import atomic_write, read_yaml, write_yaml
from .merge import split_list_directive
from .urls import has_scheme, is_full_url, relative_url, split_query, url_join

__all__ = [
    "atomic_write",
    "read_yaml",
    "write_yaml",
    "split_list_directive",
    "has_scheme",
    "is_full_url",
    "relative_url",
    "split_query",
    "url_join",
]
