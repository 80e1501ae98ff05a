# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``tools`` and ``build`` commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ..config_loader import ConfigLoader
from ..errors import ConfigError, ToolBuildError
from ..console import shared_console
from ..logging import fail, info, ok, section, warn
from ..tooling.builder import ToolBuilder, collect_tool_statuses
from ..tooling.resolver import ToolResolver
from .rendering import render_tool_statuses


def run_tools(root: Path, *, console: Console | None = None) -> int:
    """Print the availability of every catalog tool; ``1`` when any is missing."""

    console = console or shared_console()
    try:
        config = ConfigLoader.for_root(root).load()
    except ConfigError as exc:
        fail(f"Failed to load configuration: {exc}", console=console)
        return 2
    statuses = collect_tool_statuses(ToolResolver(config))
    render_tool_statuses(console, statuses)
    missing = [status for status in statuses if not status.found]
    if missing:
        warn("To build the tools, run: diagbridge build", console=console)
        return 1
    return 0


def run_build(root: Path, *, console: Console | None = None) -> int:
    """Build the toolchain with Cargo and report which tools are now available."""

    console = console or shared_console()
    try:
        config = ConfigLoader.for_root(root).load()
    except ConfigError as exc:
        fail(f"Failed to load configuration: {exc}", console=console)
        return 2
    workspace = config.workspace_root or root.resolve()
    builder = ToolBuilder(ToolResolver(config), workspace, timeout=config.build_timeout_seconds)
    section("Building Tools", console=console)
    info(f"Tools directory: {builder.tools_dir}", console=console)

    try:
        report = builder.build(progress=lambda message, _percent: info(message, console=console))
    except ToolBuildError as exc:
        fail(str(exc), console=console)
        return 1

    if report.output:
        console.print(report.output, markup=False, highlight=False)
    render_tool_statuses(console, report.statuses)
    if report.ok:
        ok("All tools built successfully!", console=console)
        return 0
    if report.returncode != 0:
        fail(f"cargo build exited with status {report.returncode}.", console=console)
    for status in report.missing:
        warn(f"Still missing: {status.friendly_name} ({status.executable})", console=console)
    return 1


RootOption = Annotated[Path, typer.Option("--root", "-r", help="Workspace root.")]


def tools_command(root: RootOption = Path(".")) -> None:
    """Show which toolchain executables were found and where."""

    raise typer.Exit(code=run_tools(root))


def build_command(root: RootOption = Path(".")) -> None:
    """Build the toolchain from source with ``cargo build --release``."""

    raise typer.Exit(code=run_build(root))


__all__ = ["build_command", "run_build", "run_tools", "tools_command"]
