# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and convenience hooks."""

from __future__ import annotations

from importlib import metadata

from .bridge import DiagnosticBridge
from .config import Config
from .diagnostics import DiagnosticPublisher
from .models import Diagnostic, DiagnosticCounts, DocumentSnapshot, TextRange, ToolDescriptor
from .parsers import ErrorTextParser
from .scheduling import ValidationScheduler
from .severity import Severity
from .tooling import ProcessProbe, ToolResolver

__all__ = [
    "Config",
    "Diagnostic",
    "DiagnosticBridge",
    "DiagnosticCounts",
    "DiagnosticPublisher",
    "DocumentSnapshot",
    "ErrorTextParser",
    "ProcessProbe",
    "Severity",
    "TextRange",
    "ToolDescriptor",
    "ToolResolver",
    "ValidationScheduler",
    "__version__",
]

try:
    __version__ = metadata.version("diagbridge")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
