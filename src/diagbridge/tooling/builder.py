# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool status reporting and build-on-demand escalation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..errors import ProcessSpawnError, ProcessTimeoutError, ToolBuildError
from ..process import CommandOptions, run_command
from .catalog import BUILDABLE_TOOLS
from .probe import CommandRunner
from .resolver import ToolResolver

LOGGER = logging.getLogger(__name__)

TOOLS_DIR: Final[str] = "tools"
CARGO: Final[str] = "cargo"
CARGO_VERSION_COMMAND: Final[tuple[str, ...]] = (CARGO, "--version")
CARGO_BUILD_COMMAND: Final[tuple[str, ...]] = (CARGO, "build", "--release")

ProgressCallback = Callable[[str, int], None]


@dataclass(slots=True)
class ToolStatus:
    """Availability of one catalog tool as discovered by the resolver."""

    logical_name: str
    friendly_name: str
    executable: str
    description: str
    path: str | None

    @property
    def found(self) -> bool:
        return self.path is not None


@dataclass(slots=True)
class BuildReport:
    """Outcome of a build-on-demand run."""

    tools_dir: Path
    returncode: int
    output: str
    statuses: list[ToolStatus] = field(default_factory=list)

    @property
    def missing(self) -> list[ToolStatus]:
        return [status for status in self.statuses if not status.found]

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.missing


def collect_tool_statuses(resolver: ToolResolver, names: Iterable[str] | None = None) -> list[ToolStatus]:
    """Resolve every catalog tool (or ``names``) and report availability."""

    selected = list(names) if names is not None else [spec.logical_name for spec in resolver.catalog]
    statuses: list[ToolStatus] = []
    for name in selected:
        spec = resolver.spec_for(name)
        statuses.append(
            ToolStatus(
                logical_name=spec.logical_name,
                friendly_name=spec.friendly_name,
                executable=spec.executable,
                description=spec.description,
                path=resolver.resolve(name),
            ),
        )
    return statuses


class ToolBuilder:
    """Compile the toolchain from the workspace sources with Cargo."""

    def __init__(
        self,
        resolver: ToolResolver,
        workspace_root: Path,
        *,
        timeout: float,
        runner: CommandRunner = run_command,
        expected_tools: Iterable[str] = BUILDABLE_TOOLS,
    ) -> None:
        self._resolver = resolver
        self._workspace_root = workspace_root
        self._timeout = timeout
        self._runner = runner
        self._expected = tuple(expected_tools)

    @property
    def tools_dir(self) -> Path:
        return self._workspace_root / TOOLS_DIR

    def check_cargo(self) -> str:
        """Return the ``cargo --version`` banner.

        Raises:
            ToolBuildError: When Cargo is not installed or does not run.
        """
        try:
            completed = self._runner(CARGO_VERSION_COMMAND, options=CommandOptions(timeout=self._timeout))
        except (ProcessSpawnError, ProcessTimeoutError) as exc:
            raise ToolBuildError(f"Cargo is not available: {exc}") from exc
        if completed.returncode != 0:
            raise ToolBuildError(f"'cargo --version' exited with status {completed.returncode}")
        return completed.stdout.strip()

    def build(self, progress: ProgressCallback | None = None) -> BuildReport:
        """Run ``cargo build --release`` and re-check every expected tool.

        Args:
            progress: Optional callback receiving a message and percentage.

        Returns:
            BuildReport: Build output plus the post-build tool statuses.

        Raises:
            ToolBuildError: When the tools directory is missing, Cargo is
                unavailable, or the build cannot be run to completion.
        """

        def report(message: str, percent: int) -> None:
            LOGGER.info(message)
            if progress is not None:
                progress(message, percent)

        if not self.tools_dir.is_dir():
            raise ToolBuildError(f"Tools directory not found: {self.tools_dir}")
        report("Checking Rust installation...", 10)
        banner = self.check_cargo()
        LOGGER.debug("Using %s", banner)
        report("Building tools with Cargo...", 20)
        try:
            completed = self._runner(
                CARGO_BUILD_COMMAND,
                options=CommandOptions(cwd=self.tools_dir, timeout=self._timeout),
            )
        except (ProcessSpawnError, ProcessTimeoutError) as exc:
            raise ToolBuildError(f"Build failed: {exc}") from exc
        output = "\n".join(part for part in (completed.stdout, completed.stderr) if part)
        report("Verifying build...", 90)
        statuses = collect_tool_statuses(self._resolver, self._expected)
        result = BuildReport(
            tools_dir=self.tools_dir,
            returncode=completed.returncode,
            output=output,
            statuses=statuses,
        )
        if result.ok:
            report("Build complete!", 100)
        else:
            LOGGER.warning(
                "Build finished with status %d; missing: %s",
                completed.returncode,
                ", ".join(status.friendly_name for status in result.missing) or "none",
            )
        return result


__all__ = [
    "BuildReport",
    "CARGO_BUILD_COMMAND",
    "ProgressCallback",
    "ToolBuilder",
    "ToolStatus",
    "collect_tool_statuses",
]
