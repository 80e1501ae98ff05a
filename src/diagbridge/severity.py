# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels a toolchain diagnostic can carry."""

    ERROR = "error"
    WARNING = "warning"


WARNING_MARKER: Final[str] = "warning"


def severity_from_message(message: str, default: Severity = Severity.ERROR) -> Severity:
    """Infer severity from the free-text diagnostic ``message``.

    The toolchain reports no structured severity, so any message mentioning
    ``warning`` (case-insensitively) is downgraded to :attr:`Severity.WARNING`.

    Args:
        message: Diagnostic message extracted from tool output.
        default: Severity returned when the message carries no warning marker.

    Returns:
        Severity: Severity derived from the message text.
    """
    if WARNING_MARKER in message.lower():
        return Severity.WARNING
    return default


__all__ = ["Severity", "WARNING_MARKER", "severity_from_message"]
