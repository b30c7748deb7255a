"""Tests for the attribute table and built-in defaults."""
from __future__ import annotations

import os

import pytest

from compass_config.core.config import ATTRIBUTE_SCHEMA, Configuration, MergePolicy
from compass_config.core.config.attributes import get_spec, list_attribute_names
from compass_config.core.config.defaults import static_defaults


class TestAttributeTable:
    def test_list_attributes_and_their_merge_policies(self) -> None:
        assert set(list_attribute_names()) == {
            "additional_import_paths",
            "sprite_load_path",
            "required_libraries",
            "loaded_frameworks",
            "framework_path",
            "asset_collections",
        }
        assert ATTRIBUTE_SCHEMA["additional_import_paths"].merge is MergePolicy.DEDUP
        assert ATTRIBUTE_SCHEMA["sprite_load_path"].merge is MergePolicy.CLOBBER
        assert ATTRIBUTE_SCHEMA["required_libraries"].merge is MergePolicy.APPEND

    def test_path_named_attributes_strip_separators(self) -> None:
        assert get_spec("images_dir").strip_separator
        assert get_spec("http_images_path").strip_separator
        assert not get_spec("environment").strip_separator
        assert not get_spec("relative_assets").strip_separator

    def test_undeclared_name_has_no_spec(self) -> None:
        assert get_spec("http_url") is None

    def test_static_defaults_only_name_declared_attributes(self) -> None:
        assert set(static_defaults()) <= set(ATTRIBUTE_SCHEMA)


class TestDerivedDefaults:
    def test_filesystem_paths_follow_project_path(self) -> None:
        config = Configuration("solo", {"project_path": "/srv/site"})

        assert config.css_path == os.path.join("/srv/site", "stylesheets")
        assert config.sass_path == os.path.join("/srv/site", "sass")
        assert config.images_path == os.path.join("/srv/site", "images")
        assert config.fonts_path == os.path.join("/srv/site", "fonts")
        assert config.cache_path == os.path.join("/srv/site", ".sass-cache")

    def test_filesystem_paths_are_none_without_project_path(self) -> None:
        config = Configuration("solo")

        assert config.css_path is None
        assert config.images_path is None

    def test_generated_images_follow_images_dir(self) -> None:
        config = Configuration("solo", {"project_path": "/srv", "images_dir": "img"})

        assert config.generated_images_dir == "img"
        assert config.generated_images_path == os.path.join("/srv", "img")
        assert config.http_generated_images_path == "/img"

    def test_web_paths_follow_http_path(self) -> None:
        config = Configuration("solo", {"http_path": "/static/"})

        assert config.http_path == "/static"
        assert config.http_stylesheets_path == "/static/stylesheets"
        assert config.http_images_path == "/static/images"
        assert config.http_javascripts_path == "/static/javascripts"
        assert config.http_fonts_path == "/static/fonts"

    def test_http_dir_overrides_the_filesystem_dir(self) -> None:
        config = Configuration("solo", {"images_dir": "img", "http_images_dir": "assets/img"})

        assert config.http_images_path == "/assets/img"

    def test_explicit_web_path_wins(self) -> None:
        config = Configuration("solo", {"http_images_path": "https://cdn.example.com/img"})

        assert config.http_images_path == "https://cdn.example.com/img"

    @pytest.mark.parametrize(
        "environment, output_style, line_comments",
        [("development", "expanded", True), ("production", "compressed", False)],
    )
    def test_environment_drives_output(
        self, environment: str, output_style: str, line_comments: bool
    ) -> None:
        config = Configuration("solo", {"environment": environment})

        assert config.output_style == output_style
        assert config.line_comments is line_comments

    def test_sprite_load_path_defaults_to_images_path(self) -> None:
        config = Configuration("solo", {"project_path": "/srv"})

        assert config.sprite_load_path == [os.path.join("/srv", "images")]
        assert Configuration("bare").sprite_load_path == []
