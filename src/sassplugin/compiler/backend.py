# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""The external stylesheet compiler and process-wide compiler state.

Compilers are callback based: :meth:`StyleCompiler.render` starts a compile
and later calls ``done(error, result)`` exactly once.  :func:`render` wraps
that into an awaitable.  The default compiler is backed by libsass and runs
each compile on a worker thread.

The compiler handle and the resources prelude are initialised lazily on
first use, once per process, and are never modified afterwards.
"""

from __future__ import annotations

import asyncio
import base64
import importlib
import json
import logging
import re
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Protocol

from sassplugin.compiler.options import CompileOptions, ImporterHook

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

STDIN_SENTINEL = "stdin"


@dataclass(frozen=True)
class RenderResult:
    """Output of a successful compile."""

    css: str
    map: str | None = None


@dataclass(frozen=True)
class RenderError:
    """A structured compile error.

    Attributes:
        message: Compiler message without the location.
        file: File the error originates from; :data:`STDIN_SENTINEL` for the
            inline entry source.
        line: 1-based line, 0 if unknown.
        column: 1-based column, 0 if unknown.
    """

    message: str
    file: str = STDIN_SENTINEL
    line: int = 0
    column: int = 0


RenderCallback = Callable[[RenderError | None, RenderResult | None], None]


class StyleCompiler(Protocol):
    """A callback-style stylesheet compiler."""

    def render(self, options: CompileOptions, done: RenderCallback) -> None: ...


class LibsassCompiler:
    """Compile stylesheets with libsass on a thread pool."""

    def __init__(self, sass: ModuleType, executor: ThreadPoolExecutor | None = None) -> None:
        self._sass = sass
        self._executor = executor or ThreadPoolExecutor(thread_name_prefix="sassplugin")

    def render(self, options: CompileOptions, done: RenderCallback) -> None:
        self._executor.submit(self._run, options, done)

    def compile(self, options: CompileOptions) -> RenderResult:
        """Compile synchronously.

        Raises:
            sass.CompileError: If the source does not compile.
        """
        kwargs: dict[str, Any] = {
            "string": options.data,
            "output_style": options.output_style,
            "include_paths": list(options.include_paths),
            "indented": options.indented_syntax,
            "custom_functions": options.functions,
        }
        if options.precision is not None:
            kwargs["precision"] = options.precision
        if options.importer is not None:
            kwargs["importers"] = [(0, _libsass_importer(options.importer))]
        if options.source_map:
            kwargs["source_map_embed"] = True
            kwargs["source_map_contents"] = options.source_map_contents
        css = self._sass.compile(**kwargs)
        result = split_embedded_map(css)
        if result.map is None:
            return result
        return RenderResult(css=result.css, map=_label_source_map(result.map, options))

    def _run(self, options: CompileOptions, done: RenderCallback) -> None:
        try:
            result = self.compile(options)
        except self._sass.CompileError as exc:
            done(parse_compile_error(str(exc)), None)
        except Exception as exc:
            logger.exception("Stylesheet compiler failed unexpectedly")
            done(RenderError(message=str(exc)), None)
        else:
            done(None, result)


def parse_compile_error(text: str) -> RenderError:
    """Turn a libsass error message into a :class:`RenderError`."""
    match = _LOCATION_RE.search(text)
    first_line = text.strip().splitlines()[0] if text.strip() else text
    message = first_line.removeprefix("Error: ").strip()
    if match is None:
        return RenderError(message=message)
    return RenderError(
        message=message,
        file=match.group("file"),
        line=int(match.group("line")),
        column=int(match.group("column")),
    )


def split_embedded_map(css: str) -> RenderResult:
    """Split an embedded base64 source map off the end of *css*."""
    match = _EMBEDDED_MAP_RE.search(css)
    if match is None:
        return RenderResult(css=css)
    source_map = base64.b64decode(match.group(1)).decode("utf-8")
    return RenderResult(css=css[: match.start()].rstrip() + "\n", map=source_map)


def get_compiler() -> StyleCompiler:
    """Return the process-wide compiler, creating it on first use."""
    global _compiler
    if _compiler is None:
        with _state_lock:
            if _compiler is None:
                _compiler = LibsassCompiler(importlib.import_module("sass"))
    return _compiler


def set_compiler(compiler: StyleCompiler | None) -> None:
    """Install *compiler* as the process-wide compiler (``None`` resets it)."""
    global _compiler
    with _state_lock:
        _compiler = compiler


def get_resources(paths: Sequence[str]) -> str | None:
    """Return the resources prelude, reading *paths* on the first call only.

    Later calls return the text loaded by the first call regardless of their
    arguments.  ``None`` means there is no prelude.

    Raises:
        OSError: If a resource file cannot be read on first use.
    """
    global _resources, _resources_loaded
    if not _resources_loaded:
        with _state_lock:
            if not _resources_loaded:
                chunks = []
                for path in paths:
                    with open(path, encoding="utf-8") as handle:
                        chunks.append(handle.read())
                _resources = "\n".join(chunks) + "\n" if chunks else None
                _resources_loaded = True
    return _resources


async def render(compiler: StyleCompiler, options: CompileOptions) -> tuple[RenderError | None, RenderResult | None]:
    """Run one compile and wait for its single outcome.

    The compiler may call back from any thread.  Only the first callback
    counts.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[tuple[RenderError | None, RenderResult | None]] = loop.create_future()

    def settle(error: RenderError | None, result: RenderResult | None) -> None:
        if not future.done():
            future.set_result((error, result))

    def done(error: RenderError | None, result: RenderResult | None) -> None:
        loop.call_soon_threadsafe(settle, error, result)

    compiler.render(options, done)
    return await future


# ################
# Implementation
# ################

_LOCATION_RE = re.compile(r"on line (?P<line>\d+):(?P<column>\d+) of (?P<file>\S+)")
_EMBEDDED_MAP_RE = re.compile(
    r"/\*# sourceMappingURL=data:application/json;(?:charset=utf-8;)?base64,([A-Za-z0-9+/=]+) \*/\s*$"
)

_state_lock = threading.Lock()
_compiler: StyleCompiler | None = None
_resources: str | None = None
_resources_loaded = False


def _libsass_importer(hook: ImporterHook) -> Callable[[str, str], list[tuple[str, ...]] | None]:
    """Adapt an import hook to libsass's tuple-based importer protocol."""

    def importer(path: str, prev: str) -> list[tuple[str, ...]] | None:
        target = hook(path, prev)
        if target is None:
            return None
        if target.contents is not None:
            return [(target.file or target.url or path, target.contents)]
        if target.file:
            return [(target.file,)]
        return None

    return importer


def _label_source_map(source_map: str, options: CompileOptions) -> str:
    """Name the map's output and entry source after *options* instead of ``stdin``."""
    data = json.loads(source_map)
    if options.out_file:
        data["file"] = options.out_file
    data["sources"] = [options.file if source == STDIN_SENTINEL else source for source in data.get("sources", [])]
    return json.dumps(data)
