# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed by the CLI commands."""

from __future__ import annotations

from typing import Final, Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from .console import shared_console

StatusLevel = Literal["info", "ok", "warn", "fail"]

_LEVEL_STYLES: Final[dict[StatusLevel, str]] = {
    "info": "cyan",
    "ok": "green",
    "warn": "yellow",
    "fail": "bold red",
}


def status(level: StatusLevel, msg: str, *, console: Console | None = None) -> None:
    """Print ``msg`` styled for ``level``.

    ``msg`` is printed as plain text, so paths and tool output containing
    square brackets are never read as markup.
    """

    target = console or shared_console()
    target.print(Text(msg, style=_LEVEL_STYLES[level]))


def section(title: str, *, console: Console | None = None) -> None:
    """Print a header separating one phase of a command from the next."""

    target = console or shared_console()
    target.print()
    if target.is_terminal:
        target.print(Rule(title))
    else:
        target.print(f"--- {title} ---", markup=False)


def info(msg: str, *, console: Console | None = None) -> None:
    status("info", msg, console=console)


def ok(msg: str, *, console: Console | None = None) -> None:
    status("ok", msg, console=console)


def warn(msg: str, *, console: Console | None = None) -> None:
    status("warn", msg, console=console)


def fail(msg: str, *, console: Console | None = None) -> None:
    status("fail", msg, console=console)


__all__ = ["StatusLevel", "fail", "info", "ok", "section", "status", "warn"]
