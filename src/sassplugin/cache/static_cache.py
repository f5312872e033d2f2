# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-backed static cache for compiled stylesheets.

One JSON entry is stored per source file and transform tag.  An entry is
reused when it is strictly newer than its source file and none of the
dependencies recorded with it has disappeared or changed since it was
written.  The format is versioned so schema changes invalidate old entries.
"""

from __future__ import annotations

import hashlib
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from sassplugin.model.files import StylesheetFile

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

CACHE_FORMAT_VERSION = "1"
CACHE_ENTRY_SUFFIX = ".json"


class CacheError(Exception):
    """Raised when a cache entry cannot be read, written, or is invalid."""


class CacheEntry(BaseModel):
    """A compiled stylesheet as persisted in the static cache."""

    model_config = ConfigDict(extra="forbid")

    v: str = CACHE_FORMAT_VERSION
    path: str
    tag: str
    contents: str
    source_map: str | None = None
    dependencies: list[str] = Field(default_factory=list)


class StaticCache:
    """Static cache rooted at *cache_dir*."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def entry_path(self, file: StylesheetFile, tag: str) -> Path:
        digest = hashlib.sha1(str(file.abs_path).encode("utf-8")).hexdigest()
        return self.cache_dir / tag / (digest + CACHE_ENTRY_SUFFIX)

    def is_valid(self, file: StylesheetFile, tag: str) -> bool:
        """Return True if a reusable entry exists for *file* under *tag*."""
        entry_path = self.entry_path(file, tag)
        if not _is_up_to_date(file.abs_path, entry_path):
            return False
        try:
            entry = self.read_entry(file, tag)
        except CacheError as exc:
            logger.debug("Ignoring unusable cache entry: %s", exc)
            return False
        entry_mtime = entry_path.stat().st_mtime
        for dependency in entry.dependencies:
            dep = Path(dependency)
            if not dep.exists() or dep.stat().st_mtime > entry_mtime:
                return False
        return True

    def read_entry(self, file: StylesheetFile, tag: str) -> CacheEntry:
        """Read the entry for *file* under *tag*.

        Raises:
            CacheError: If the entry is missing, unreadable, or invalid.
        """
        entry_path = self.entry_path(file, tag)
        try:
            raw = entry_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CacheError(f"Cannot read cache entry '{entry_path}': {exc}") from exc
        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as exc:
            raise CacheError(f"Invalid cache entry '{entry_path}': {exc}") from exc
        if entry.v != CACHE_FORMAT_VERSION:
            raise CacheError(f"Unsupported cache format version in '{entry_path}': {entry.v!r}")
        return entry

    def write_static_cache(self, file: StylesheetFile, source_map: str | None, tag: str) -> None:
        """Persist the file's current contents and dependency record.

        Raises:
            CacheError: If the entry cannot be written.
        """
        entry = CacheEntry(
            path=str(file.abs_path),
            tag=tag,
            contents=file.contents or "",
            source_map=source_map,
            dependencies=list(file.dependencies),
        )
        entry_path = self.entry_path(file, tag)
        try:
            entry_path.parent.mkdir(parents=True, exist_ok=True)
            entry_path.write_text(entry.model_dump_json(), encoding="utf-8")
        except OSError as exc:
            raise CacheError(f"Cannot write cache entry '{entry_path}': {exc}") from exc

    def clear(self, tag: str | None = None) -> None:
        """Remove all entries, or only those stored under *tag*."""
        target = self.cache_dir if tag is None else self.cache_dir / tag
        if target.exists():
            shutil.rmtree(target)


# ################
# Implementation
# ################


def _is_up_to_date(source_file: Path, entry: Path) -> bool:
    """Return True if *entry* exists and is strictly newer than *source_file*."""
    if not entry.exists() or not source_file.exists():
        return False
    return entry.stat().st_mtime > source_file.stat().st_mtime
