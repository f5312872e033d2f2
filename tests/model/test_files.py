# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the stylesheet file model."""

import os
import time
from pathlib import Path

from sassplugin.cache.static_cache import StaticCache
from sassplugin.host.context import WorkflowContext
from sassplugin.model import StylesheetFile

# ###############
# Helpers
# ###############


def _file(tmp_path: Path, content: str | None = ".a {}", **context_kwargs) -> StylesheetFile:
    source = tmp_path / "main.scss"
    if content is not None:
        source.write_text(content, encoding="utf-8")
        t = time.time() - 2
        os.utime(source, (t, t))
    context = WorkflowContext(home_dir=tmp_path, **context_kwargs)
    return StylesheetFile(abs_path=source, context=context, bundle_path="main.scss")


# ###############
# Contents
# ###############


def test_abs_dir(tmp_path: Path) -> None:
    assert _file(tmp_path).abs_dir == str(tmp_path)


def test_load_contents(tmp_path: Path) -> None:
    file = _file(tmp_path)
    file.load_contents()
    assert file.contents == ".a {}"


def test_load_contents_keeps_existing_text(tmp_path: Path) -> None:
    file = _file(tmp_path)
    file.contents = ".b {}"
    file.load_contents()
    assert file.contents == ".b {}"


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    file = _file(tmp_path, content=None)
    file.load_contents()
    assert file.contents == ""


def test_string_dependencies_are_unique(tmp_path: Path) -> None:
    file = _file(tmp_path)
    file.add_string_dependency("fuse-box-css")
    file.add_string_dependency("fuse-box-css")
    assert file.string_dependencies == ["fuse-box-css"]


def test_add_error(tmp_path: Path) -> None:
    file = _file(tmp_path)
    file.add_error("boom")
    assert file.errors == ["boom"]


# ###############
# Cache lookup
# ###############


class TestIsCssCached:
    def test_without_cache(self, tmp_path: Path) -> None:
        file = _file(tmp_path)
        assert file.is_css_cached("sass") is False
        assert file.cached is False

    def test_cache_disabled(self, tmp_path: Path) -> None:
        cache = StaticCache(tmp_path / ".cache")
        file = _file(tmp_path, cache=cache, use_cache=False)
        file.contents = ".out{}"
        cache.write_static_cache(file, None, "sass")
        assert file.is_css_cached("sass") is False

    def test_miss(self, tmp_path: Path) -> None:
        file = _file(tmp_path, cache=StaticCache(tmp_path / ".cache"), use_cache=True)
        assert file.is_css_cached("sass") is False
        assert file.contents is None

    def test_hit_restores_output(self, tmp_path: Path) -> None:
        cache = StaticCache(tmp_path / ".cache")
        file = _file(tmp_path, cache=cache, use_cache=True)
        file.contents = ".out{}"
        cache.write_static_cache(file, '{"version":3}', "sass")

        fresh = StylesheetFile(abs_path=file.abs_path, context=file.context, bundle_path="main.scss")
        assert fresh.is_css_cached("sass") is True
        assert fresh.contents == ".out{}"
        assert fresh.source_map == '{"version":3}'
        assert fresh.cached is True
