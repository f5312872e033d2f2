# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Default dependency extraction for stylesheet sources.

Walks the ``@import`` graph of a stylesheet the way the compiler would look
files up (include paths in order, partials, guessed extensions) and records
every file it reaches.  The result drives cache invalidation and watch-mode
recompiles, so it only has to be a faithful superset of what a compile reads.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sassplugin.compiler.inliner import find_imports

if TYPE_CHECKING:
    from sassplugin.model.files import StylesheetFile

# ###############
# Public Interface
# ###############


@dataclass
class DependencyOptions:
    """Inputs of one dependency extraction.

    Attributes:
        paths: Directories searched in order.
        content: Source text of the entry file.
        sass_style: Whether partial (``_name``) lookups are attempted.
        importer: Optional import hook; a returned ``file`` replaces the target.
        extensions: Recognised extensions, without the leading dot.
    """

    paths: Sequence[str]
    content: str
    sass_style: bool = True
    importer: Callable[[str, str], Any] | None = None
    extensions: Sequence[str] = field(default_factory=lambda: ["css", "scss"])


def extract_css_dependencies(file: StylesheetFile, options: DependencyOptions) -> list[str]:
    """Return the absolute paths of all files reachable from *options.content*.

    Paths are ordered by discovery and never repeated.  Imports that cannot be
    found on disk are ignored.
    """
    found: list[str] = []
    visited = {str(file.abs_path)}
    _collect(options.content, str(file.abs_path), options, found, visited)
    return found


# ################
# Implementation
# ################

_EXTERNAL_RE = re.compile(r"^(?:https?:)?//|^url\(", re.IGNORECASE)


def _collect(
    content: str,
    origin: str,
    options: DependencyOptions,
    found: list[str],
    visited: set[str],
) -> None:
    for statement in find_imports(content):
        target = statement.target
        if _EXTERNAL_RE.match(target):
            continue
        if options.importer is not None:
            target = _apply_importer(options.importer, target, origin)
            if target is None:
                continue
        resolved = _resolve(target, os.path.dirname(origin), options)
        if resolved is None or resolved in visited:
            continue
        visited.add(resolved)
        found.append(resolved)
        try:
            with open(resolved, encoding="utf-8") as handle:
                nested = handle.read()
        except OSError:
            continue
        _collect(nested, resolved, options, found, visited)


def _apply_importer(importer: Callable[[str, str], Any], target: str, origin: str) -> str | None:
    """Run the import hook and return the path it points at.

    ``None`` means the hook passed the import through as an external URL.
    """
    result = importer(target, origin)
    if result is None:
        return target
    file = getattr(result, "file", None)
    if file:
        return file
    if getattr(result, "url", None):
        return None
    return target


def _resolve(target: str, origin_dir: str, options: DependencyOptions) -> str | None:
    search_dirs = [origin_dir, *options.paths]
    for directory in search_dirs:
        for candidate in _candidates(target, options):
            path = os.path.normpath(os.path.join(directory, candidate))
            if os.path.isfile(path):
                return os.path.abspath(path)
    return None


def _candidates(target: str, options: DependencyOptions) -> list[str]:
    head, name = os.path.split(target)
    names = [name]
    if options.sass_style and not name.startswith("_"):
        names.append(f"_{name}")
    has_extension = any(name.endswith(f".{ext}") for ext in options.extensions)
    result: list[str] = []
    for base in names:
        if has_extension:
            result.append(os.path.join(head, base))
        else:
            result.extend(os.path.join(head, f"{base}.{ext}") for ext in options.extensions)
    return result
