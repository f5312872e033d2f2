# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""The stylesheet transform registered with the host bundler.

For each file the transform runs, strictly in this order:

1. Cache check.  A valid cached artifact ends the pass for this file.
2. Content load.  Empty sources are skipped.
3. Dependency extraction over the source and include paths.
4. Compilation, the only point where the transform waits.
5. Result application, plus a cache write when caching is enabled.

A failed compile never raises out of :meth:`SassPluginClass.transform`.  The
file's contents are cleared and one diagnostic is recorded on the file, so
the rest of the bundle still builds.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sassplugin.cache.dependencies import DependencyOptions
from sassplugin.compiler.backend import STDIN_SENTINEL, RenderError, StyleCompiler, get_compiler, get_resources, render
from sassplugin.compiler.macros import build_macros
from sassplugin.compiler.options import CompileOptions, build_compile_options
from sassplugin.workspace.config import SassPluginOptions

if TYPE_CHECKING:
    from sassplugin.host.context import WorkflowContext
    from sassplugin.model.files import StylesheetFile

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

TRANSFORM_TAG = "sass"
CSS_RUNTIME_DEPENDENCY = "fuse-box-css"
EXTENSIONS = (".scss", ".sass")


class SassPluginClass:
    """Compile ``.scss``/``.sass`` modules to CSS.

    Args:
        options: User options, as a model or a mapping using either the field
            names or the configuration file keys.
        compiler: Compiler to use instead of the process-wide one.
    """

    test = r"\.(scss|sass)$"

    def __init__(
        self,
        options: SassPluginOptions | Mapping[str, Any] | None = None,
        compiler: StyleCompiler | None = None,
    ) -> None:
        if options is None:
            options = SassPluginOptions()
        elif not isinstance(options, SassPluginOptions):
            options = SassPluginOptions.model_validate(options)
        self.options = options
        self.context: WorkflowContext | None = None
        self._compiler = compiler

    def init(self, context: WorkflowContext) -> None:
        for extension in EXTENSIONS:
            context.allow_extension(extension)
        self.context = context

    async def transform(self, file: StylesheetFile) -> None:
        """Compile *file* in place.

        On success ``file.contents`` holds the CSS and ``file.source_map`` the
        map.  On failure the contents are emptied and a diagnostic of the form
        ``<message>\\n      at <file>:<line>:<column>`` is added to
        ``file.errors``.
        """
        file.add_string_dependency(CSS_RUNTIME_DEPENDENCY)
        context = file.context
        use_cache = self.options.cache and context.use_cache

        cache_hit = use_cache and file.is_css_cached(TRANSFORM_TAG)
        file.bust_css_cache = True
        if cache_hit:
            logger.debug("Using cached CSS for '%s'", file.abs_path)
            return

        file.load_contents()
        if not file.contents:
            return

        compiler = self._compiler or get_compiler()
        resources = get_resources(self.options.resources) if self.options.resources else None
        macros = build_macros(file, self.options.macros)
        options = build_compile_options(file, self.options, macros, resources)

        css_dependencies = context.extract_css_dependencies(file, self._dependency_options(file, options))
        file.css_dependencies = css_dependencies

        error, result = await render(compiler, options)
        if error is not None:
            self._apply_error(file, error)
            return
        assert result is not None

        file.source_map = result.map
        file.contents = result.css
        if use_cache and context.cache is not None:
            file.dependencies = list(css_dependencies)
            try:
                context.cache.write_static_cache(file, file.source_map, TRANSFORM_TAG)
            finally:
                file.dependencies = []

    def _dependency_options(self, file: StylesheetFile, options: CompileOptions) -> DependencyOptions:
        return DependencyOptions(
            paths=options.include_paths,
            content=file.contents or "",
            sass_style=True,
            importer=options.importer,
            extensions=["css", "sass" if options.indented_syntax else "scss"],
        )

    def _apply_error(self, file: StylesheetFile, error: RenderError) -> None:
        error_file = str(file.abs_path) if error.file == STDIN_SENTINEL else os.path.abspath(error.file)
        file.contents = ""
        file.add_error(f"{error.message}\n      at {error_file}:{error.line}:{error.column}")
        logger.warning("Failed to compile '%s': %s", file.abs_path, error.message)


def SassPlugin(
    options: SassPluginOptions | Mapping[str, Any] | None = None,
    compiler: StyleCompiler | None = None,
) -> SassPluginClass:
    """Create the stylesheet transform."""
    return SassPluginClass(options, compiler=compiler)
