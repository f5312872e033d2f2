# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Textual ``@import`` inlining.

Produces one flattened stylesheet by replacing every ``@import`` statement
with the fully inlined contents of its target.  This works independently of
the compiler's own import handling, e.g. for inspecting what a compile unit
contains or for compilers without import support.

Known limitations:

* There is no cycle detection.  A file that imports itself (directly or
  through another file) recurses until a read fails or the interpreter's
  recursion limit is hit.
* Every time an import is processed, line breaks are stripped from the
  *whole* working text of the importing file, not only around the removed
  statement.  Line numbers in the flattened output therefore do not match
  the sources.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sassplugin.compiler.resolver import DEFAULT_EXTENSION, fetch_file, resolve_import_path

# ###############
# Public Interface
# ###############

IMPORT_PATTERN = re.compile(r"""@import\s+(?:'([^']+)'|"([^"]+)"|([^\s;]+))[ \t]*;?""")


@dataclass(frozen=True)
class ImportStatement:
    """A single ``@import`` occurrence found in a source text.

    Attributes:
        text: The matched statement text, including the terminating ``;``
            when present.
        target: The unquoted import target.
    """

    text: str
    target: str


def find_imports(source: str) -> list[ImportStatement]:
    """Return all ``@import`` statements in *source*, in source order."""
    statements: list[ImportStatement] = []
    for match in IMPORT_PATTERN.finditer(source):
        target = next((group for group in match.groups() if group is not None), "")
        statements.append(ImportStatement(text=match.group(0), target=target))
    return statements


def inline(
    file_path: str,
    accumulated: str = "",
    *,
    root: str | None = None,
    default_extension: str = DEFAULT_EXTENSION,
) -> str:
    """Recursively inline the ``@import`` graph rooted at *file_path*.

    Each imported file is resolved against the directory of the file that
    imports it.  The inlined text of an import is appended to the end of the
    importing file's remaining text, in statement order.

    Args:
        file_path: Stylesheet to read.  The default extension is appended when
            its last path segment has no dot.
        accumulated: Prefix prepended to the returned text.
        root: Working-directory root used to resolve relative imports.
        default_extension: Extension guessed for targets without one.

    Returns:
        *accumulated* followed by the flattened text of *file_path*.

    Raises:
        OSError: If a read fails for a reason other than a missing file.
        RecursionError: If the import graph contains a cycle.
    """
    parts = file_path.split("/")
    name = parts.pop()
    if name and "." not in name:
        file_path += default_extension

    current = fetch_file(file_path)
    for statement in find_imports(current):
        path_to_read = resolve_import_path(parts, statement.target, root=root, default_extension=default_extension)
        # Earlier passes may have stripped the line breaks inside this statement.
        text = statement.text if statement.text in current else _strip_line_breaks(statement.text)
        current = current.replace(text, "", 1).strip()
        current = _strip_line_breaks(current)
        current += inline(path_to_read, root=root, default_extension=default_extension)

    return f"{accumulated}{current}"


# ################
# Implementation
# ################

_LINE_BREAK_RE = re.compile(r"\r?\n|\r")


def _strip_line_breaks(text: str) -> str:
    return _LINE_BREAK_RE.sub("", text)
