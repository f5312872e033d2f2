# Copyright 2026 SassPlugin Contributors
# SPDX-License-Identifier: Apache-2.0

"""Host bundler context."""

from sassplugin.host.context import ExtensionOverrides, WorkflowContext

__all__ = ["ExtensionOverrides", "WorkflowContext"]
