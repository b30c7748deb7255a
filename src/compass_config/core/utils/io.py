"""Reading and writing configuration files as YAML."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

import yaml


def ensure_parent_dir(path: Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def atomic_write(path: Path, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write a configuration file so readers never see it half written.

    ``write_fn`` fills a temporary file next to ``path``, which then replaces
    ``path`` in one step. Missing parent directories are created.
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile("w", encoding=encoding, dir=str(path.parent), delete=False) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Load a configuration file.

    An empty document yields ``default``. A missing or unparsable file also
    yields ``default`` unless ``raise_on_error`` is set, in which case
    FileNotFoundError or the YAML error propagates.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"Configuration file not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError:
        if raise_on_error:
            raise
        return default
    return data if data is not None else default


def write_yaml(path: Path, data: Any) -> None:
    """Write ``data`` to ``path`` with sorted keys."""

    def _writer(f: TextIO) -> None:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True, allow_unicode=True)

    atomic_write(Path(path), _writer)


__all__ = ["ensure_parent_dir", "atomic_write", "read_yaml", "write_yaml"]
