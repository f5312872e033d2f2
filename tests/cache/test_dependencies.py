# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the default dependency extraction."""

from pathlib import Path

from sassplugin.cache.dependencies import DependencyOptions, extract_css_dependencies
from sassplugin.compiler.options import ImportTarget
from sassplugin.host.context import WorkflowContext

# ###############
# Helpers
# ###############


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _extract(tmp_path: Path, content: str, **kwargs) -> list[str]:
    context = WorkflowContext(home_dir=tmp_path)
    main = _write(tmp_path / "main.scss", content)
    file = context.create_file(main)
    kwargs.setdefault("paths", [file.abs_dir])
    return extract_css_dependencies(file, DependencyOptions(content=content, **kwargs))


# ###############
# Resolution
# ###############


def test_no_imports(tmp_path: Path) -> None:
    assert _extract(tmp_path, ".a {}") == []


def test_partial_is_found(tmp_path: Path) -> None:
    _write(tmp_path / "_vars.scss", "")
    assert _extract(tmp_path, "@import 'vars';") == [str(tmp_path / "_vars.scss")]


def test_plain_file_preferred_over_partial(tmp_path: Path) -> None:
    _write(tmp_path / "vars.scss", "")
    _write(tmp_path / "_vars.scss", "")
    assert _extract(tmp_path, "@import 'vars';") == [str(tmp_path / "vars.scss")]


def test_explicit_extension(tmp_path: Path) -> None:
    _write(tmp_path / "reset.css", "")
    assert _extract(tmp_path, "@import 'reset.css';") == [str(tmp_path / "reset.css")]


def test_include_paths_searched_in_order(tmp_path: Path) -> None:
    _write(tmp_path / "first" / "_grid.scss", "")
    _write(tmp_path / "second" / "_grid.scss", "")
    result = _extract(
        tmp_path,
        "@import 'grid';",
        paths=[str(tmp_path / "first"), str(tmp_path / "second")],
    )
    assert result == [str(tmp_path / "first" / "_grid.scss")]


def test_nested_imports_followed(tmp_path: Path) -> None:
    _write(tmp_path / "lib" / "_a.scss", "@import 'b';")
    _write(tmp_path / "lib" / "_b.scss", "")
    assert _extract(tmp_path, "@import 'lib/a';") == [
        str(tmp_path / "lib" / "_a.scss"),
        str(tmp_path / "lib" / "_b.scss"),
    ]


def test_cycles_terminate(tmp_path: Path) -> None:
    _write(tmp_path / "_a.scss", "@import 'b';")
    _write(tmp_path / "_b.scss", "@import 'a';\n@import 'main';")
    assert _extract(tmp_path, "@import 'a';") == [str(tmp_path / "_a.scss"), str(tmp_path / "_b.scss")]


def test_missing_and_external_imports_ignored(tmp_path: Path) -> None:
    content = "@import 'missing';\n@import 'https://fonts.example.com/x.css';\n@import url(foo.css);"
    assert _extract(tmp_path, content) == []


def test_extensions_restrict_candidates(tmp_path: Path) -> None:
    _write(tmp_path / "theme.sass", "")
    _write(tmp_path / "theme.scss", "")
    assert _extract(tmp_path, "@import theme", extensions=["css", "sass"]) == [str(tmp_path / "theme.sass")]


def test_importer_rewrites_target(tmp_path: Path) -> None:
    vendor = _write(tmp_path / "vendor" / "lib" / "_grid.scss", "")

    def importer(url, prev):
        return ImportTarget(file=url.replace("~", str(tmp_path / "vendor") + "/"))

    assert _extract(tmp_path, "@import '~lib/grid';", importer=importer) == [str(vendor)]


def test_importer_passthrough_is_skipped(tmp_path: Path) -> None:
    _write(tmp_path / "_vars.scss", "")

    def importer(url, prev):
        return ImportTarget(url=url)

    assert _extract(tmp_path, "@import 'vars';", importer=importer) == []
