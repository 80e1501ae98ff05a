# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .check import check_command, format_command, lint_command
from .tools import build_command, tools_command

app = typer.Typer(help="Toolchain diagnostics bridge.", no_args_is_help=True, add_completion=False)
app.command("check")(check_command)
app.command("lint")(lint_command)
app.command("format")(format_command)
app.command("tools")(tools_command)
app.command("build")(build_command)

__all__ = ["app"]
