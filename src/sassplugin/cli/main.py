# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the sassplugin command-line interface."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sassplugin.cache.dependencies import DependencyOptions, extract_css_dependencies
from sassplugin.cache.static_cache import CacheError, StaticCache
from sassplugin.compiler.inliner import inline
from sassplugin.compiler.plugin import SassPlugin
from sassplugin.host.context import WorkflowContext
from sassplugin.workspace.config import CONFIG_FILE_NAME, PluginConfigError, SassPluginOptions, load_plugin_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the sassplugin CLI."""
    parser = argparse.ArgumentParser(
        prog="sassplugin",
        description="sassplugin - SCSS/Sass transform for module bundlers",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a stylesheet to CSS",
        description="Compile one stylesheet through the full transform pipeline.",
    )
    compile_parser.add_argument("file", help="Stylesheet to compile")
    compile_parser.add_argument(
        "-c",
        "--config",
        help=f"Plugin configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    compile_parser.add_argument("-o", "--out", help="Write CSS to this file instead of stdout")
    compile_parser.add_argument("--cache-dir", help="Enable the static cache in this directory")

    # inline subcommand
    inline_parser = subparsers.add_parser(
        "inline",
        help="Print a stylesheet with all imports inlined",
        description="Textually inline the @import graph of a stylesheet.",
    )
    inline_parser.add_argument("file", help="Stylesheet to inline")

    # deps subcommand
    deps_parser = subparsers.add_parser(
        "deps",
        help="List the files a stylesheet depends on",
        description="Print the dependency record of a stylesheet, one path per line.",
    )
    deps_parser.add_argument("file", help="Stylesheet to analyse")
    deps_parser.add_argument(
        "-I",
        "--include-path",
        action="append",
        default=[],
        dest="include_paths",
        help="Additional directory searched for imports (repeatable)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "compile":
        return _cmd_compile(args)
    if args.command == "inline":
        return _cmd_inline(args)
    if args.command == "deps":
        return _cmd_deps(args)
    return 0


def _load_options(config: str | None) -> SassPluginOptions:
    if config is not None:
        return load_plugin_config(Path(config))
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_plugin_config(default)
    return SassPluginOptions()


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    source = Path(args.file).resolve()
    if not source.is_file():
        print(f"Error: file '{source}' does not exist.", file=sys.stderr)
        return 1

    try:
        options = _load_options(args.config)
    except PluginConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    cache = StaticCache(Path(args.cache_dir).resolve()) if args.cache_dir else None
    home_dir = Path.cwd().resolve()
    if home_dir not in source.parents:
        home_dir = source.parent
    context = WorkflowContext(home_dir=home_dir, use_cache=cache is not None, cache=cache)
    plugin = SassPlugin(options)
    plugin.init(context)
    file = context.create_file(source)

    try:
        asyncio.run(plugin.transform(file))
    except (CacheError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if file.errors:
        for error in file.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    css = file.contents or ""
    if args.out is None:
        sys.stdout.write(css)
        return 0

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(css, encoding="utf-8")
    if file.source_map:
        out.with_name(out.name + ".map").write_text(file.source_map, encoding="utf-8")
    print(f"Compiled '{source}' -> '{out}'.")
    return 0


def _cmd_inline(args: argparse.Namespace) -> int:
    """Handle the inline subcommand."""
    source = Path(args.file).resolve()
    try:
        sys.stdout.write(inline(str(source), root=str(source.parent)))
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except RecursionError:
        print(f"Error: circular @import detected while inlining '{args.file}'.", file=sys.stderr)
        return 1
    sys.stdout.write("\n")
    return 0


def _cmd_deps(args: argparse.Namespace) -> int:
    """Handle the deps subcommand."""
    source = Path(args.file).resolve()
    if not source.is_file():
        print(f"Error: file '{source}' does not exist.", file=sys.stderr)
        return 1

    context = WorkflowContext(home_dir=source.parent)
    file = context.create_file(source)
    try:
        file.load_contents()
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    dependencies = extract_css_dependencies(
        file,
        DependencyOptions(
            paths=[*args.include_paths, file.abs_dir],
            content=file.contents or "",
            extensions=["css", "sass" if source.suffix == ".sass" else "scss"],
        ),
    )
    for dependency in dependencies:
        print(dependency)
    return 0
