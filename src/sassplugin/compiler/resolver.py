# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Import path resolution and raw stylesheet reads.

Import targets are resolved relative to the directory of the file that
contains the ``@import`` statement, never relative to the entry file.  Reads
fall back once to the alternate dialect extension (``.scss`` <-> ``.sass``)
before giving up; an import that cannot be found contributes no text.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_EXTENSION = ".scss"
ALTERNATE_EXTENSION = ".sass"


def resolve_import_path(
    containing_parts: Sequence[str],
    import_target: str,
    *,
    root: str | None = None,
    default_extension: str = DEFAULT_EXTENSION,
) -> str:
    """Return the candidate path to read for an ``@import`` target.

    Args:
        containing_parts: Path segments of the directory holding the importing
            file (the file name itself already removed).
        import_target: The unquoted target of the ``@import`` statement.
        root: Working-directory root.  Defaults to :func:`os.getcwd`.
        default_extension: Appended when the target's last segment has no dot.

    Returns:
        The path to read.  An empty target resolves to the empty string.
    """
    if not import_target:
        return ""

    if "." not in import_target.rsplit("/", 1)[-1]:
        import_target += default_extension

    if import_target.startswith("/"):
        return import_target

    root = os.getcwd() if root is None else root
    directory = "/".join(containing_parts).replace(root, "", 1)
    return os.path.normpath(f"{root}/{directory}/{import_target}")


def swap_dialect_extension(path: str) -> str:
    """Return *path* with ``.scss`` replaced by ``.sass`` or vice versa."""
    if path.endswith(DEFAULT_EXTENSION):
        return path[: -len(DEFAULT_EXTENSION)] + ALTERNATE_EXTENSION
    if path.endswith(ALTERNATE_EXTENSION):
        return path[: -len(ALTERNATE_EXTENSION)] + DEFAULT_EXTENSION
    return path


def fetch_file(path: str) -> str:
    """Read *path* as UTF-8 text, falling back to the other dialect extension.

    Raises:
        OSError: For any read failure other than a missing file.
    """
    try:
        return _read_text(path)
    except FileNotFoundError:
        pass

    fallback = swap_dialect_extension(path)
    logger.info("File not found: '%s'. Trying '%s' instead.", path, fallback)
    try:
        return _read_text(fallback)
    except OSError:
        logger.debug("Unresolved stylesheet '%s' contributes no content", path)
        return ""


# ################
# Implementation
# ################


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as handle:
        return handle.read()
