# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Bundler-side collaborators the stylesheet transform talks to.

The transform only relies on the small surface defined here: extension
registration, dependency extraction, the static cache and optional path
overrides.  Hosts embed the transform by constructing a
:class:`WorkflowContext` and creating files through it.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from sassplugin.cache.dependencies import DependencyOptions, extract_css_dependencies
from sassplugin.cache.static_cache import StaticCache
from sassplugin.model.files import StylesheetFile

# ###############
# Public Interface
# ###############


class ExtensionOverrides:
    """Remap file paths to override variants that exist on disk.

    An override such as ``.dark.scss`` applies to paths ending in ``.scss``:
    ``theme.scss`` is remapped to ``theme.dark.scss`` when that file exists.
    Overrides are tried in the order given.
    """

    def __init__(self, overrides: Sequence[str]) -> None:
        self.overrides = [o if o.startswith(".") else f".{o}" for o in overrides]

    def get_path_override(self, path: str) -> str | None:
        """Return the override path for *path*, or ``None`` if none applies."""
        for override in self.overrides:
            base_extension = "." + override.rsplit(".", 1)[-1]
            if not path.endswith(base_extension) or path.endswith(override):
                continue
            candidate = path[: -len(base_extension)] + override
            if os.path.isfile(candidate):
                return candidate
        return None


@dataclass
class WorkflowContext:
    """State shared by all files of one bundling pass.

    Attributes:
        home_dir: Root directory of the project sources.
        app_root: Application root; defaults to *home_dir*.
        modules_dir: Directory of installed packages, the target of the ``~``
            macro; defaults to ``app_root / "node_modules"``.
        use_cache: Whether the static cache is consulted and written.
        cache: The static cache store.
        extension_overrides: Optional path remapping for resolved imports.
        allowed_extensions: Source extensions registered by transforms.
    """

    home_dir: Path
    app_root: Path | None = None
    modules_dir: Path | None = None
    use_cache: bool = False
    cache: StaticCache | None = None
    extension_overrides: ExtensionOverrides | None = None
    allowed_extensions: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.app_root is None:
            self.app_root = self.home_dir
        if self.modules_dir is None:
            self.modules_dir = self.app_root / "node_modules"

    def allow_extension(self, extension: str) -> None:
        self.allowed_extensions.add(extension)

    def extract_css_dependencies(self, file: StylesheetFile, options: DependencyOptions) -> list[str]:
        return extract_css_dependencies(file, options)

    def create_file(self, path: Path) -> StylesheetFile:
        """Create the file object for *path*, which must be under *home_dir*."""
        abs_path = path.resolve()
        bundle_path = abs_path.relative_to(self.home_dir.resolve()).as_posix()
        return StylesheetFile(abs_path=abs_path, context=self, bundle_path=bundle_path)
