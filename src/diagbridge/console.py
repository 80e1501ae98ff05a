# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich console for CLI output."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def _console_for(color: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=tty,
        no_color=not color,
        emoji=False,
        soft_wrap=True,
    )


def shared_console(*, color: bool | None = None) -> Console:
    """Return the process-wide console used for status lines.

    Colour follows the terminal; ``color=False`` forces plain output and
    ``color=True`` still yields plain output when stdout is not a terminal.
    The console writes to whatever ``sys.stdout`` is at print time.
    """

    tty = detect_tty()
    enabled = tty if color is None else color and tty
    return _console_for(enabled, tty)


__all__ = ["detect_tty", "shared_console"]
