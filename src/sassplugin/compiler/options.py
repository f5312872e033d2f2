# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the options passed to the stylesheet compiler."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sassplugin.compiler.macros import apply_macros

if TYPE_CHECKING:
    from sassplugin.host.context import ExtensionOverrides
    from sassplugin.model.files import StylesheetFile
    from sassplugin.workspace.config import SassPluginOptions

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ImportTarget:
    """Answer of an import hook.

    Exactly one of the attributes is normally set: ``file`` loads a file from
    disk, ``url`` leaves the import untouched, ``contents`` provides the
    source text directly (``file`` or ``url`` then name it).
    """

    file: str | None = None
    url: str | None = None
    contents: str | None = None


ImporterHook = Callable[[str, str], ImportTarget | None]


@dataclass
class CompileOptions:
    """Everything the compiler needs for one compile.

    Attributes:
        data: Source text to compile, including any resources prelude.
        file: Virtual file name of the entry, used in diagnostics.
        source_map: Whether a source map is requested.
        out_file: Output file name recorded in the source map.
        source_map_contents: Whether sources are embedded in the map.
        include_paths: Directories searched for imports, in priority order.
        macros: The macro table of this compile.
        importer: Optional import hook.
        indented_syntax: Whether *data* uses the indented dialect.
        functions: Custom functions passed through to the compiler.
        output_style: Compiler output style.
        precision: Numeric precision, if overridden.
    """

    data: str
    file: str
    source_map: bool = True
    out_file: str | None = None
    source_map_contents: bool = True
    include_paths: list[str] = field(default_factory=list)
    macros: dict[str, str] = field(default_factory=dict)
    importer: ImporterHook | None = None
    indented_syntax: bool = False
    functions: dict[str, Callable[..., Any]] = field(default_factory=dict)
    output_style: str = "nested"
    precision: int | None = None


def build_compile_options(
    file: StylesheetFile,
    plugin_options: SassPluginOptions,
    macros: dict[str, str],
    resources: str | None = None,
) -> CompileOptions:
    """Merge defaults with the user's options for one compile of *file*.

    User overrides win over the defaults.  ``include_paths`` and ``macros``
    are always recomputed: user include paths come first and the file's own
    directory is appended last.
    """
    context = file.context
    contents = file.contents or ""
    options = CompileOptions(
        data=resources + contents if resources else contents,
        file=f"{context.home_dir}/{file.bundle_path}",
        out_file=file.bundle_path,
    )
    for name, value in plugin_options.compiler_overrides().items():
        setattr(options, name, value)

    options.include_paths = [*plugin_options.include_paths, file.abs_dir]
    options.macros = macros
    options.indented_syntax = plugin_options.indented_syntax
    options.functions = dict(plugin_options.functions)

    if plugin_options.importer is True:
        options.importer = make_macro_importer(macros, context.extension_overrides)
    elif callable(plugin_options.importer):
        options.importer = plugin_options.importer
    return options


def make_macro_importer(
    macros: dict[str, str],
    extension_overrides: ExtensionOverrides | None = None,
) -> ImporterHook:
    """Return an import hook that expands *macros* in import URLs.

    External ``http:``/``https:`` URLs are passed through untouched.  The
    expanded path may be remapped by *extension_overrides*.
    """

    def importer(url: str, prev: str) -> ImportTarget:
        if _EXTERNAL_URL_RE.search(url):
            return ImportTarget(url=url)
        path = os.path.normpath(apply_macros(url, macros))
        if extension_overrides is not None:
            path = extension_overrides.get_path_override(path) or path
        return ImportTarget(file=path)

    return importer


# ################
# Implementation
# ################

_EXTERNAL_URL_RE = re.compile(r"https?:")
