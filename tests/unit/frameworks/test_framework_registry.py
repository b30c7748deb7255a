"""Tests for FrameworkRegistry."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from compass_config.core.frameworks import FrameworkRegistry


def test_register_directory_uses_directory_name(tmp_path: Path) -> None:
    registry = FrameworkRegistry()
    framework = registry.register_directory(tmp_path / "blueprint")

    assert framework.name == "blueprint"
    assert framework.stylesheets_dir == tmp_path / "blueprint" / "stylesheets"
    assert framework.templates_dir == tmp_path / "blueprint" / "templates"


def test_register_again_replaces_in_place(tmp_path: Path) -> None:
    registry = FrameworkRegistry()
    registry.register_directory(tmp_path / "a")
    registry.register_directory(tmp_path / "b")
    replacement = registry.register_directory(tmp_path / "elsewhere", name="a")

    assert registry.names() == ["a", "b"]
    assert registry.get("a") is replacement
    assert len(registry) == 2


def test_discover_is_sorted_and_skips_private_entries(tmp_path: Path) -> None:
    for name in ("susy", "blueprint", "_templates"):
        (tmp_path / name).mkdir()
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    registry = FrameworkRegistry()
    found = registry.discover(tmp_path)

    assert [f.name for f in found] == ["blueprint", "susy"]
    assert [f.name for f in registry] == ["blueprint", "susy"]


def test_discover_missing_directory_registers_nothing(tmp_path: Path) -> None:
    registry = FrameworkRegistry()

    assert registry.discover(tmp_path / "missing") == []
    assert len(registry) == 0


def test_require_imports_module() -> None:
    registry = FrameworkRegistry()

    assert registry.require("json") is json
    with pytest.raises(ImportError):
        registry.require("compass_config_no_such_extension")


def test_get_unknown_framework() -> None:
    assert FrameworkRegistry().get("missing") is None
