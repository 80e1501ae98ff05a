# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool discovery, probing, invocation and build-on-demand."""

from __future__ import annotations

from .builder import BuildReport, ToolBuilder, ToolStatus, collect_tool_statuses
from .catalog import (
    COMPILER,
    DEFAULT_CATALOG,
    FORMATTER,
    LANGUAGE_SERVER,
    LINTER,
    PACKAGE_MANAGER,
    ToolCatalog,
    ToolSpec,
)
from .invocation import ToolInvoker, ToolMode, build_command
from .probe import ProcessProbe
from .resolver import ToolResolver

__all__ = [
    "BuildReport",
    "COMPILER",
    "DEFAULT_CATALOG",
    "FORMATTER",
    "LANGUAGE_SERVER",
    "LINTER",
    "PACKAGE_MANAGER",
    "ProcessProbe",
    "ToolBuilder",
    "ToolCatalog",
    "ToolInvoker",
    "ToolMode",
    "ToolResolver",
    "ToolSpec",
    "ToolStatus",
    "build_command",
    "collect_tool_statuses",
]
