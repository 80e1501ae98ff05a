# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``check``, ``lint`` and ``format`` commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ..bridge import DiagnosticBridge
from ..config_loader import PROJECT_CONFIG_NAME, ConfigLoader
from ..errors import BridgeError, ConfigError, ToolNotFoundError
from ..console import shared_console
from ..logging import fail, ok, warn
from ..models import DiagnosticCounts
from ..tooling.catalog import COMPILER, FORMATTER, LINTER
from ..tooling.invocation import ToolMode
from .rendering import render_diagnostics

_MODE_TOOLS = {
    ToolMode.CHECK: COMPILER,
    ToolMode.LINT: LINTER,
    ToolMode.FORMAT: FORMATTER,
}


def run_tool_on_file(path: Path, root: Path, mode: ToolMode, *, console: Console | None = None) -> int:
    """Run the tool for ``mode`` on ``path`` and print the diagnostics.

    Returns:
        int: ``0`` when no error diagnostics were produced, ``1`` on errors or
        when the tool could not be run, ``2`` on invalid configuration.
    """

    console = console or shared_console()
    try:
        config = ConfigLoader.for_root(root).load()
    except ConfigError as exc:
        fail(f"Failed to load configuration: {exc}", console=console)
        return 2

    bridge = DiagnosticBridge(config)
    tool = _MODE_TOOLS[mode]
    try:
        outcome, diagnostics = bridge.run_tool(path, tool=tool, mode=mode)
    except ToolNotFoundError as exc:
        spec = bridge.resolver.spec_for(exc.logical_name)
        fail(f"{spec.friendly_name} ({spec.executable}) not found.", console=console)
        hint = f"tool_override_paths.{spec.logical_name} in {root / PROJECT_CONFIG_NAME}"
        warn(f"Run 'diagbridge build' or set {hint}.", console=console)
        return 1
    except (BridgeError, OSError) as exc:
        fail(str(exc), console=console)
        return 1

    render_diagnostics(console, path.name, diagnostics)
    counts = DiagnosticCounts.from_diagnostics(diagnostics)
    if mode is ToolMode.FORMAT and outcome.ok:
        ok(f"{path.name} formatted successfully!", console=console)
    if counts.errors:
        return 1
    return 0 if outcome.ok or diagnostics else 1


FileArgument = Annotated[Path, typer.Argument(..., exists=True, dir_okay=False, help="Source file to process.")]
RootOption = Annotated[Path, typer.Option("--root", "-r", help="Workspace root.")]


def check_command(path: FileArgument, root: RootOption = Path(".")) -> None:
    """Check a file with the compiler and report diagnostics."""

    raise typer.Exit(code=run_tool_on_file(path, root, ToolMode.CHECK))


def lint_command(path: FileArgument, root: RootOption = Path(".")) -> None:
    """Run the linter with warnings enabled."""

    raise typer.Exit(code=run_tool_on_file(path, root, ToolMode.LINT))


def format_command(path: FileArgument, root: RootOption = Path(".")) -> None:
    """Format a file in place."""

    raise typer.Exit(code=run_tool_on_file(path, root, ToolMode.FORMAT))


__all__ = ["check_command", "format_command", "lint_command", "run_tool_on_file"]
