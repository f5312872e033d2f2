# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration of the stylesheet transform."""

from sassplugin.workspace.config import (
    CONFIG_FILE_NAME,
    PluginConfigError,
    SassPluginOptions,
    load_plugin_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "PluginConfigError",
    "SassPluginOptions",
    "load_plugin_config",
]
