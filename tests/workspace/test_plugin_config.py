# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the plugin configuration module."""

from pathlib import Path

import pytest

from sassplugin.workspace import PluginConfigError, SassPluginOptions, load_plugin_config

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a plugin config file and return its path."""
    config_file = tmp_path / ".sassplugin.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_config_yields_defaults(tmp_path: Path) -> None:
    config = load_plugin_config(_write_config(tmp_path, ""))
    assert config == SassPluginOptions()
    assert config.cache is True
    assert config.importer is False
    assert config.compiler_overrides() == {}


def test_full_config(tmp_path: Path) -> None:
    content = """\
include-paths:
  - ./shared
macros:
  $assets: ./assets/
importer: true
cache: false
indented-syntax: true
resources:
  - ./theme.scss
output-style: compressed
source-map: false
precision: 8
"""
    config = load_plugin_config(_write_config(tmp_path, content))

    assert config.include_paths == ["./shared"]
    assert config.macros == {"$assets": "./assets/"}
    assert config.importer is True
    assert config.cache is False
    assert config.indented_syntax is True
    assert config.resources == ["./theme.scss"]
    assert config.compiler_overrides() == {"source_map": False, "output_style": "compressed", "precision": 8}


def test_field_names_accepted() -> None:
    options = SassPluginOptions(include_paths=["/a"], indented_syntax=True)
    assert options.include_paths == ["/a"]
    assert options.indented_syntax is True


def test_callable_importer_kept() -> None:
    def hook(url, prev):
        return None

    assert SassPluginOptions(importer=hook).importer is hook


# ###############
# Error Cases
# ###############


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PluginConfigError, match="Cannot read plugin config"):
        load_plugin_config(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    with pytest.raises(PluginConfigError, match="Invalid YAML"):
        load_plugin_config(_write_config(tmp_path, "macros: [unclosed\n"))


def test_non_mapping_raises(tmp_path: Path) -> None:
    with pytest.raises(PluginConfigError, match="must be a YAML mapping"):
        load_plugin_config(_write_config(tmp_path, "- a\n- b\n"))


def test_unknown_key_raises(tmp_path: Path) -> None:
    with pytest.raises(PluginConfigError, match="Invalid plugin config"):
        load_plugin_config(_write_config(tmp_path, "include_dirs: [a]\n"))


def test_invalid_output_style_raises(tmp_path: Path) -> None:
    with pytest.raises(PluginConfigError, match="Invalid plugin config"):
        load_plugin_config(_write_config(tmp_path, "output-style: pretty\n"))
