# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Stylesheet compilation: import resolution, inlining, macros and the compiler backend.

The transform itself lives in :mod:`sassplugin.compiler.plugin` and is
exported from the top-level package.
"""

from sassplugin.compiler.backend import (
    STDIN_SENTINEL,
    LibsassCompiler,
    RenderError,
    RenderResult,
    StyleCompiler,
    get_compiler,
    get_resources,
    render,
    set_compiler,
)
from sassplugin.compiler.inliner import IMPORT_PATTERN, ImportStatement, find_imports, inline
from sassplugin.compiler.macros import apply_macros, build_macros
from sassplugin.compiler.options import CompileOptions, ImportTarget, build_compile_options, make_macro_importer
from sassplugin.compiler.resolver import (
    ALTERNATE_EXTENSION,
    DEFAULT_EXTENSION,
    fetch_file,
    resolve_import_path,
    swap_dialect_extension,
)

__all__ = [
    "ALTERNATE_EXTENSION",
    "DEFAULT_EXTENSION",
    "IMPORT_PATTERN",
    "STDIN_SENTINEL",
    "CompileOptions",
    "ImportStatement",
    "ImportTarget",
    "LibsassCompiler",
    "RenderError",
    "RenderResult",
    "StyleCompiler",
    "apply_macros",
    "build_compile_options",
    "build_macros",
    "fetch_file",
    "find_imports",
    "get_compiler",
    "get_resources",
    "inline",
    "make_macro_importer",
    "render",
    "resolve_import_path",
    "set_compiler",
    "swap_dialect_extension",
]
