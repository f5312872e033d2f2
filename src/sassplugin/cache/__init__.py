# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Static cache store and dependency extraction used for incremental builds."""

from sassplugin.cache.dependencies import DependencyOptions, extract_css_dependencies
from sassplugin.cache.static_cache import CACHE_FORMAT_VERSION, CacheEntry, CacheError, StaticCache

__all__ = [
    "CACHE_FORMAT_VERSION",
    "CacheEntry",
    "CacheError",
    "DependencyOptions",
    "StaticCache",
    "extract_css_dependencies",
]
