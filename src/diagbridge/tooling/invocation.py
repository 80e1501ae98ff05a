# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command construction and execution for toolchain invocations."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from ..models import ToolOutcome
from ..process import CommandOptions, run_command
from .probe import CommandRunner

LOGGER = logging.getLogger(__name__)


class ToolMode(str, Enum):
    """Invocation variants understood by the toolchain binaries."""

    CHECK = "check"
    FORMAT = "format"
    LINT = "lint"

    @property
    def flags(self) -> tuple[str, ...]:
        return _MODE_FLAGS[self]


_MODE_FLAGS: dict[ToolMode, tuple[str, ...]] = {
    ToolMode.CHECK: (),
    ToolMode.FORMAT: ("--write",),
    ToolMode.LINT: ("--warnings",),
}


def build_command(tool_path: str, document: Path, mode: ToolMode = ToolMode.CHECK) -> tuple[str, ...]:
    """Return the argument list running ``tool_path`` on ``document`` in ``mode``."""

    return (tool_path, *mode.flags, str(document))


class ToolInvoker:
    """Run a resolved tool against a document and capture its output.

    Spawn failures and timeouts propagate as :class:`~diagbridge.errors.ProcessSpawnError`
    and :class:`~diagbridge.errors.ProcessTimeoutError`; a non-zero exit does not.
    """

    def __init__(self, *, timeout: float, runner: CommandRunner = run_command) -> None:
        self._timeout = timeout
        self._runner = runner

    def invoke(
        self,
        tool: str,
        tool_path: str,
        document: Path,
        mode: ToolMode = ToolMode.CHECK,
        *,
        cwd: Path | None = None,
    ) -> ToolOutcome:
        command = build_command(tool_path, document, mode)
        LOGGER.debug("Running %s", " ".join(command))
        completed = self._runner(command, options=CommandOptions(cwd=cwd, timeout=self._timeout))
        return ToolOutcome(
            tool=tool,
            mode=mode.value,
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


__all__ = ["ToolInvoker", "ToolMode", "build_command"]
