# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""The host bundler's view of one stylesheet module."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sassplugin.host.context import WorkflowContext

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(eq=False)
class StylesheetFile:
    """A stylesheet source module owned by the host bundler.

    The transform mutates the file in place.  Identity is the absolute path.

    Attributes:
        abs_path: Absolute path of the source file.
        context: The bundler context the file belongs to.
        bundle_path: Logical path of the module inside the bundle.
        contents: Source text before compilation, CSS text afterwards.
            ``None`` until loaded.
        source_map: Source map produced by the compiler, if any.
        errors: Formatted diagnostics recorded while processing the file.
        dependencies: Dependency record handed to the cache store.  Only
            non-empty while a cache entry is being written.
        css_dependencies: Files referenced by the last compile, kept for
            watch-mode invalidation.
        string_dependencies: Named runtime modules the bundle must include.
        bust_css_cache: Set once the cache state has been consulted; the host
            revalidates the file on the next change.
        cached: True if the contents were restored from the cache.
    """

    abs_path: Path
    context: WorkflowContext
    bundle_path: str
    contents: str | None = None
    source_map: str | None = None
    errors: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    css_dependencies: list[str] | None = None
    string_dependencies: list[str] = field(default_factory=list)
    bust_css_cache: bool = False
    cached: bool = False

    @property
    def abs_dir(self) -> str:
        return str(self.abs_path.parent)

    def load_contents(self) -> None:
        """Read the source text unless it is already loaded.

        A file that no longer exists loads as empty text.
        """
        if self.contents is not None:
            return
        try:
            self.contents = self.abs_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Stylesheet '%s' vanished before it could be loaded", self.abs_path)
            self.contents = ""

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_string_dependency(self, name: str) -> None:
        if name not in self.string_dependencies:
            self.string_dependencies.append(name)

    def is_css_cached(self, tag: str) -> bool:
        """Return True and restore the cached output if a valid entry exists."""
        cache = self.context.cache
        if not self.context.use_cache or cache is None:
            return False
        if not cache.is_valid(self, tag):
            return False
        entry = cache.read_entry(self, tag)
        self.contents = entry.contents
        self.source_map = entry.source_map
        self.cached = True
        return True
