"""Tests for AssetCollection."""
from __future__ import annotations

from pathlib import Path

import pytest

from compass_config.core.assets import AssetCollection, AssetKind
from compass_config.core.exceptions import ConfigurationError


class TestOptions:
    def test_web_paths_default_to_http_path_plus_dir(self) -> None:
        collection = AssetCollection(root_path="/srv/vendor", http_path="/vendor/")

        assert collection.http_images_path == "/vendor/images"
        assert collection.http_fonts_path == "/vendor/fonts"

    def test_explicit_web_paths_are_kept(self) -> None:
        collection = AssetCollection(
            root_path="/srv/vendor",
            http_images_path="https://img.example.com",
            fonts_dir=None,
        )

        assert collection.http_images_path == "https://img.example.com"
        assert collection.http_fonts_path is None

    def test_root_path_is_required(self) -> None:
        with pytest.raises(ConfigurationError, match="root_path"):
            AssetCollection(root_path="")

    def test_pathlike_root_is_stored_as_string(self, tmp_path: Path) -> None:
        assert AssetCollection(root_path=tmp_path).root_path == str(tmp_path)  # type: ignore[arg-type]

    def test_from_options_rejects_unknown_keys(self) -> None:
        with pytest.raises(ConfigurationError) as exc:
            AssetCollection.from_options({"root_path": "/srv", "sprite_dir": "s", "cdn": "x"})
        assert exc.value.context == {"options": ["cdn", "sprite_dir"]}

    def test_label_prefers_name(self) -> None:
        assert AssetCollection(root_path="/srv", name="vendor").label == "vendor"
        assert AssetCollection(root_path="/srv").label == "/srv"

    def test_building_does_not_touch_the_filesystem(self, tmp_path: Path) -> None:
        collection = AssetCollection(root_path=str(tmp_path / "not-yet"))
        assert not collection.contains("logo.png", AssetKind.IMAGE)


class TestMembership:
    def test_contains_checks_kind_directory(self, project_dir: Path) -> None:
        collection = AssetCollection(root_path=str(project_dir))

        assert collection.contains("logo.png", "image")
        assert collection.contains("icons/close.png", AssetKind.IMAGE)
        assert collection.contains("body.woff", "font")
        assert not collection.contains("body.woff", "image")
        assert not collection.contains("missing.png", "image")

    def test_kind_without_directory_is_never_served(self, project_dir: Path) -> None:
        collection = AssetCollection(root_path=str(project_dir), fonts_dir=None)

        assert collection.directory_for("font") is None
        assert collection.path_for("body.woff", "font") is None
        assert not collection.contains("body.woff", "font")

    def test_path_for(self, project_dir: Path) -> None:
        collection = AssetCollection(root_path=str(project_dir))

        assert collection.path_for("/icons/close.png", "image") == project_dir / "images" / "icons" / "close.png"

    def test_unknown_kind(self, project_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="video"):
            AssetCollection(root_path=str(project_dir)).contains("clip.mp4", "video")


class TestUrls:
    def test_url_for_normalizes_separators_and_dots(self) -> None:
        collection = AssetCollection(root_path="/srv", http_images_path="/img/")

        assert collection.url_for("./icons//close.png", "image") == "/img/icons/close.png"

    def test_url_for_keeps_scheme(self) -> None:
        collection = AssetCollection(root_path="/srv", http_fonts_path="https://fonts.example.com/")

        assert collection.url_for("body.woff", "font") == "https://fonts.example.com/body.woff"

    def test_owns_url(self) -> None:
        collection = AssetCollection(root_path="/srv", http_path="/vendor")

        assert collection.owns_url("/vendor/images/icons/close.png", "image") == "icons/close.png"
        assert collection.owns_url("/vendor/fonts/body.woff", "image") is None
        assert collection.owns_url("/vendor/imagesx/a.png", "image") is None
