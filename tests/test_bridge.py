# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests driving the bridge against scripted tools."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from diagbridge.bridge import DiagnosticBridge
from diagbridge.config import Config
from diagbridge.errors import ToolNotFoundError
from diagbridge.models import DocumentSnapshot, TextRange
from diagbridge.severity import Severity
from diagbridge.tooling import FORMATTER, ToolMode

pytestmark = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses /bin/sh scripts")

COMPILER_SCRIPT = """\
if [ "$1" = "--help" ]; then exit 0; fi
echo "Parser error at line 2, column 5: Expected expression" >&2
exit 1"""

CLEAN_EXIT_SCRIPT = """\
if [ "$1" = "--help" ]; then exit 0; fi
echo "Lexer error at line 1, column 1: warning: unused binding 'main'"
exit 0"""

FORMATTER_SCRIPT = """\
if [ "$1" = "--write" ]; then echo "formatted $2"; exit 0; fi
exit 2"""


@pytest.fixture
def source_file(workspace: Path) -> Path:
    path = workspace / "src" / "main.vey"
    path.parent.mkdir()
    path.write_text("fn main() {\n    = 1;\n}\n", encoding="utf-8")
    return path


def test_saved_document_gets_compiler_diagnostics(workspace: Path, source_file: Path, timers, write_script) -> None:
    write_script(workspace / "compiler" / "target" / "release" / "veyc", COMPILER_SCRIPT)
    bridge = DiagnosticBridge(Config(workspace_root=workspace), timer_factory=timers)

    bridge.opened("doc", source_file)
    timers.fire_pending()

    diagnostics = bridge.diagnostics("doc")
    assert [item.message for item in diagnostics] == ["Expected expression"]
    assert diagnostics[0].range == TextRange.on_line(1, 4, 5)
    assert bridge.counts("doc").errors == 1

    bridge.closed("doc")
    assert bridge.diagnostics("doc") == ()


def test_missing_compiler_degrades_to_no_diagnostics(workspace: Path, source_file: Path, timers) -> None:
    missing: list[ToolNotFoundError] = []
    bridge = DiagnosticBridge(Config(workspace_root=workspace), timer_factory=timers, on_tool_missing=missing.append)

    bridge.saved("doc", source_file)
    timers.fire_pending()

    assert bridge.diagnostics("doc") == ()
    assert [error.logical_name for error in missing] == ["compiler"]


def test_run_tool_publishes_under_file_uri(workspace: Path, source_file: Path, write_script) -> None:
    write_script(workspace / "compiler" / "target" / "debug" / "veyc", COMPILER_SCRIPT)
    bridge = DiagnosticBridge(Config(workspace_root=workspace))

    outcome, diagnostics = bridge.run_tool(source_file)

    assert outcome.returncode == 1
    assert len(diagnostics) == 1
    assert bridge.diagnostics(source_file.resolve().as_uri()) == tuple(diagnostics)


def test_run_tool_in_format_mode_passes_write_flag(workspace: Path, source_file: Path, write_script) -> None:
    write_script(workspace / "tools" / "target" / "release" / "veyra-fmt", FORMATTER_SCRIPT)
    bridge = DiagnosticBridge(Config(workspace_root=workspace))

    outcome, diagnostics = bridge.run_tool(source_file, tool=FORMATTER, mode=ToolMode.FORMAT)

    assert outcome.ok
    assert outcome.command[1] == "--write"
    assert outcome.stdout.strip() == f"formatted {source_file.resolve()}"
    assert diagnostics == []
    assert bridge.publisher.documents() == ()


def test_validate_now_uses_snapshot_text(workspace: Path, source_file: Path, write_script) -> None:
    write_script(workspace / "compiler" / "target" / "release" / "veyc", COMPILER_SCRIPT)
    bridge = DiagnosticBridge(Config(workspace_root=workspace))
    snapshot = DocumentSnapshot(uri="file:///unsaved", path=source_file, text="one line only")

    diagnostics = bridge.validate_now(snapshot)

    assert diagnostics[0].range == TextRange.on_line(0, 4, 8)
    assert bridge.diagnostics("file:///unsaved") == tuple(diagnostics)


def test_validate_now_skips_documents_without_file(workspace: Path) -> None:
    bridge = DiagnosticBridge(Config(workspace_root=workspace))

    assert bridge.validate_now(DocumentSnapshot(uri="untitled:1", text="x")) == []


def test_zero_exit_with_recognizable_output_still_yields_diagnostics(
    workspace: Path,
    source_file: Path,
    timers,
    write_script,
) -> None:
    write_script(workspace / "compiler" / "target" / "release" / "veyc", CLEAN_EXIT_SCRIPT)
    bridge = DiagnosticBridge(Config(workspace_root=workspace), timer_factory=timers)

    outcome, diagnostics = bridge.validator.run(source_file)

    assert outcome.ok
    assert [item.severity for item in diagnostics] == [Severity.WARNING]
    assert diagnostics[0].range == TextRange.on_line(0, 0, 2)

    bridge.saved("doc", source_file)
    timers.fire_pending()

    assert bridge.diagnostics("doc") == tuple(diagnostics)
    assert bridge.counts("doc").warnings == 1
    assert bridge.counts("doc").errors == 0
