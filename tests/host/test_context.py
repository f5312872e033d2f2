# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the workflow context and extension overrides."""

from pathlib import Path

import pytest

from sassplugin.host.context import ExtensionOverrides, WorkflowContext

# ###############
# WorkflowContext
# ###############


def test_defaults_derive_from_home_dir(tmp_path: Path) -> None:
    context = WorkflowContext(home_dir=tmp_path)
    assert context.app_root == tmp_path
    assert context.modules_dir == tmp_path / "node_modules"
    assert context.use_cache is False
    assert context.cache is None


def test_modules_dir_follows_app_root(tmp_path: Path) -> None:
    context = WorkflowContext(home_dir=tmp_path / "src", app_root=tmp_path)
    assert context.modules_dir == tmp_path / "node_modules"


def test_allow_extension(tmp_path: Path) -> None:
    context = WorkflowContext(home_dir=tmp_path)
    context.allow_extension(".scss")
    context.allow_extension(".scss")
    assert context.allowed_extensions == {".scss"}


def test_create_file_sets_bundle_path(tmp_path: Path) -> None:
    (tmp_path / "styles").mkdir()
    source = tmp_path / "styles" / "main.scss"
    source.write_text(".a {}", encoding="utf-8")

    file = WorkflowContext(home_dir=tmp_path).create_file(source)

    assert file.abs_path == source.resolve()
    assert file.bundle_path == "styles/main.scss"
    assert file.contents is None


def test_create_file_outside_home_dir_fails(tmp_path: Path) -> None:
    context = WorkflowContext(home_dir=tmp_path / "project")
    with pytest.raises(ValueError):
        context.create_file(tmp_path / "elsewhere.scss")


# ###############
# ExtensionOverrides
# ###############


class TestExtensionOverrides:
    def test_existing_override_is_used(self, tmp_path: Path) -> None:
        (tmp_path / "theme.dark.scss").write_text("", encoding="utf-8")
        overrides = ExtensionOverrides([".dark.scss"])
        assert overrides.get_path_override(str(tmp_path / "theme.scss")) == str(tmp_path / "theme.dark.scss")

    def test_missing_override_file(self, tmp_path: Path) -> None:
        overrides = ExtensionOverrides([".dark.scss"])
        assert overrides.get_path_override(str(tmp_path / "theme.scss")) is None

    def test_other_extension_untouched(self, tmp_path: Path) -> None:
        (tmp_path / "theme.dark.scss").write_text("", encoding="utf-8")
        overrides = ExtensionOverrides([".dark.scss"])
        assert overrides.get_path_override(str(tmp_path / "theme.sass")) is None

    def test_already_overridden_path_untouched(self, tmp_path: Path) -> None:
        (tmp_path / "theme.dark.scss").write_text("", encoding="utf-8")
        overrides = ExtensionOverrides([".dark.scss"])
        assert overrides.get_path_override(str(tmp_path / "theme.dark.scss")) is None

    def test_leading_dot_optional_and_order_respected(self, tmp_path: Path) -> None:
        (tmp_path / "theme.print.scss").write_text("", encoding="utf-8")
        (tmp_path / "theme.dark.scss").write_text("", encoding="utf-8")
        overrides = ExtensionOverrides(["print.scss", ".dark.scss"])
        assert overrides.get_path_override(str(tmp_path / "theme.scss")) == str(tmp_path / "theme.print.scss")
