# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Host-side data model for stylesheet modules."""

from sassplugin.model.files import StylesheetFile

__all__ = ["StylesheetFile"]
