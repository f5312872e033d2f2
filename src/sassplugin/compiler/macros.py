# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Path alias macros substituted into import URLs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sassplugin.model.files import StylesheetFile

# ###############
# Public Interface
# ###############

HOME_DIR_MACRO = "$homeDir"
APP_ROOT_MACRO = "$appRoot"
MODULES_MACRO = "~"


def build_macros(file: StylesheetFile, user_macros: Mapping[str, str] | None = None) -> dict[str, str]:
    """Build the macro table for one compile of *file*.

    The home-directory, app-root and package-root aliases always come first.
    User macros are merged on top; on a key collision the user value wins but
    the key keeps its original position.
    """
    context = file.context
    macros = {
        HOME_DIR_MACRO: str(context.home_dir),
        APP_ROOT_MACRO: str(context.app_root),
        MODULES_MACRO: f"{context.modules_dir}/",
    }
    macros.update(user_macros or {})
    return macros


def apply_macros(url: str, macros: Mapping[str, str]) -> str:
    """Replace the first occurrence of each macro key in *url*, in table order.

    Substitution is purely textual, so a key that appears inside an earlier
    macro's replacement is substituted again.
    """
    for key, value in macros.items():
        url = url.replace(key, value, 1)
    return url
