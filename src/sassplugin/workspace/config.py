# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Options model and YAML loader for the stylesheet transform."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".sassplugin.yaml"


class PluginConfigError(Exception):
    """Raised when the plugin configuration cannot be read or is invalid."""


class SassPluginOptions(BaseModel):
    """User options of the stylesheet transform.

    Attributes:
        include_paths: Extra directories searched for imports, with the lowest
            priority after the compiler's own lookup.
        macros: Extra macros; they override the default aliases on collision.
        importer: ``True`` enables the built-in macro-aware import hook; a
            callable is used as the hook verbatim.
        cache: Whether the static cache short-circuit is used.
        indented_syntax: Sources use the indented dialect.
        resources: Files whose text is prepended to every compile.
        functions: Custom functions passed through to the compiler.

    The remaining fields override the compiler defaults when set.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    include_paths: list[str] = Field(alias="include-paths", default_factory=list)
    macros: dict[str, str] = Field(default_factory=dict)
    importer: bool | Callable[..., Any] = False
    cache: bool = True
    indented_syntax: bool = Field(alias="indented-syntax", default=False)
    resources: list[str] = Field(default_factory=list)
    functions: dict[str, Callable[..., Any]] = Field(default_factory=dict)

    data: str | None = None
    file: str | None = None
    source_map: bool | None = Field(alias="source-map", default=None)
    source_map_contents: bool | None = Field(alias="source-map-contents", default=None)
    out_file: str | None = Field(alias="out-file", default=None)
    output_style: Literal["nested", "expanded", "compact", "compressed"] | None = Field(
        alias="output-style", default=None
    )
    precision: int | None = None

    def compiler_overrides(self) -> dict[str, Any]:
        """Return the compiler option overrides the user has set."""
        overrides: dict[str, Any] = {}
        for name in _OVERRIDE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                overrides[name] = value
        return overrides


def load_plugin_config(path: Path) -> SassPluginOptions:
    """Load and validate the plugin configuration file.

    An empty file yields the default options.

    Args:
        path: Path to the ``.sassplugin.yaml`` file.

    Returns:
        A validated SassPluginOptions instance.

    Raises:
        PluginConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PluginConfigError(f"Cannot read plugin config '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise PluginConfigError(f"Invalid YAML in plugin config '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise PluginConfigError(f"{path}: plugin config must be a YAML mapping")

    try:
        return SassPluginOptions.model_validate(data)
    except ValidationError as exc:
        raise PluginConfigError(f"Invalid plugin config '{path}': {exc}") from exc


# ################
# Implementation
# ################

_OVERRIDE_FIELDS = ("data", "file", "source_map", "source_map_contents", "out_file", "output_style", "precision")
