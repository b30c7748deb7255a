"""Asset collections: one searchable root for images and fonts.

A collection never touches the filesystem when it is built. Membership is
checked at resolution time, so a collection may point at a directory that
only appears later (e.g. generated sprite output).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from compass_config.core.exceptions import ConfigurationError
from compass_config.core.utils.urls import url_join


class AssetKind(Enum):
    """Kinds of asset a collection can serve."""

    IMAGE = "image"
    FONT = "font"

    @classmethod
    def parse(cls, value: Union["AssetKind", str]) -> "AssetKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown asset kind: {value!r}",
                context={"kind": str(value)},
            ) from None


@dataclass(frozen=True)
class AssetCollection:
    """A root directory with image/font sub-paths and the URL they are served at.

    Options:
        root_path: Filesystem root of the collection (required).
        http_path: Web root of the collection. Defaults to "/".
        images_dir: Image directory under ``root_path``. ``None`` serves no images.
        fonts_dir: Font directory under ``root_path``. ``None`` serves no fonts.
        http_images_path: URL of the image directory.
            Defaults to ``http_path`` + ``images_dir``.
        http_fonts_path: URL of the font directory.
            Defaults to ``http_path`` + ``fonts_dir``.
        name: Label used in diagnostics.
    """

    root_path: str
    http_path: str = "/"
    images_dir: Optional[str] = "images"
    fonts_dir: Optional[str] = "fonts"
    http_images_path: Optional[str] = None
    http_fonts_path: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.root_path:
            raise ConfigurationError("An asset collection requires a root_path")
        object.__setattr__(self, "root_path", os.fspath(self.root_path))
        if self.http_images_path is None and self.images_dir is not None:
            object.__setattr__(self, "http_images_path", url_join(self.http_path, self.images_dir))
        if self.http_fonts_path is None and self.fonts_dir is not None:
            object.__setattr__(self, "http_fonts_path", url_join(self.http_path, self.fonts_dir))

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "AssetCollection":
        """Build a collection from an options mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown asset collection option(s): {', '.join(unknown)}",
                context={"options": unknown},
            )
        return cls(**dict(options))

    @property
    def label(self) -> str:
        return self.name or self.root_path

    def directory_for(self, kind: Union[AssetKind, str]) -> Optional[str]:
        """Return the filesystem directory serving ``kind``, or None."""
        kind = AssetKind.parse(kind)
        subdir = self.images_dir if kind is AssetKind.IMAGE else self.fonts_dir
        if subdir is None:
            return None
        return os.path.normpath(os.path.join(self.root_path, subdir))

    def http_path_for_kind(self, kind: Union[AssetKind, str]) -> Optional[str]:
        kind = AssetKind.parse(kind)
        return self.http_images_path if kind is AssetKind.IMAGE else self.http_fonts_path

    def path_for(self, path: str, kind: Union[AssetKind, str]) -> Optional[Path]:
        """Return where ``path`` would live on disk, or None if ``kind`` is not served."""
        directory = self.directory_for(kind)
        if directory is None:
            return None
        return Path(directory) / path.lstrip("/")

    def contains(self, path: str, kind: Union[AssetKind, str]) -> bool:
        real_path = self.path_for(path, kind)
        return real_path is not None and real_path.exists()

    def url_for(self, path: str, kind: Union[AssetKind, str]) -> str:
        return url_join(self.http_path_for_kind(kind), path)

    def owns_url(self, url: str, kind: Union[AssetKind, str]) -> Optional[str]:
        """Return ``url`` relative to this collection's web path for ``kind``.

        Returns None when ``url`` is not below that web path.
        """
        prefix = self.http_path_for_kind(kind)
        if prefix is None:
            return None
        prefix = prefix.rstrip("/") + "/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):]


__all__ = ["AssetKind", "AssetCollection"]
