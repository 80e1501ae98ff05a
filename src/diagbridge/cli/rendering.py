# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich renderables for diagnostics and tool status."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..models import Diagnostic, DiagnosticCounts
from ..severity import Severity
from ..tooling.builder import ToolStatus

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}


def render_diagnostics(console: Console, title: str, diagnostics: Sequence[Diagnostic]) -> None:
    """Print ``diagnostics`` as a table using 1-based positions."""

    if not diagnostics:
        console.print(f"[green]No problems found in {title}.[/green]")
        return
    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity", style="bold")
    table.add_column("Message", overflow="fold")
    for diagnostic in diagnostics:
        style = _SEVERITY_STYLES.get(diagnostic.severity, "white")
        table.add_row(
            str(diagnostic.line + 1),
            str(diagnostic.column + 1),
            f"[{style}]{diagnostic.severity.value}[/]",
            diagnostic.message,
        )
    console.print(table)
    summary = DiagnosticCounts.from_diagnostics(diagnostics).summary()
    if summary:
        console.print(summary)


def render_tool_statuses(console: Console, statuses: Sequence[ToolStatus]) -> None:
    table = Table(title="Toolchain Status", box=box.SIMPLE, expand=True)
    table.add_column("Tool", style="bold")
    table.add_column("Executable")
    table.add_column("Status")
    table.add_column("Path", overflow="fold")
    for status in statuses:
        state = "[green]found[/]" if status.found else "[red]missing[/]"
        table.add_row(status.friendly_name, status.executable, state, status.path or "-")
    console.print(table)


__all__ = ["render_diagnostics", "render_tool_statuses"]
