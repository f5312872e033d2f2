# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""SCSS/Sass transform for a module bundler."""

from sassplugin.compiler.plugin import TRANSFORM_TAG, SassPlugin, SassPluginClass
from sassplugin.host.context import ExtensionOverrides, WorkflowContext
from sassplugin.model.files import StylesheetFile
from sassplugin.workspace.config import SassPluginOptions

__all__ = [
    "TRANSFORM_TAG",
    "ExtensionOverrides",
    "SassPlugin",
    "SassPluginClass",
    "SassPluginOptions",
    "StylesheetFile",
    "WorkflowContext",
]
