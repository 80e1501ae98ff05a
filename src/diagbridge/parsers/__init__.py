# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers converting toolchain output into diagnostics."""

from __future__ import annotations

from .base import (
    LineTextAccessor,
    Recognizer,
    ReportedPosition,
    extract_position,
    find_token_end,
    range_for_position,
)
from .toolchain import TOOLCHAIN_RECOGNIZERS, ErrorTextParser

__all__ = [
    "ErrorTextParser",
    "LineTextAccessor",
    "Recognizer",
    "ReportedPosition",
    "TOOLCHAIN_RECOGNIZERS",
    "extract_position",
    "find_token_end",
    "range_for_position",
]
