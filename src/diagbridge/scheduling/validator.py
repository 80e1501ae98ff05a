# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""One-shot document validation through the external toolchain."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ToolNotFoundError
from ..models import Diagnostic, DocumentSnapshot, ToolOutcome
from ..parsers import ErrorTextParser
from ..tooling.catalog import COMPILER
from ..tooling.invocation import ToolInvoker, ToolMode
from ..tooling.resolver import ToolResolver

LOGGER = logging.getLogger(__name__)


class DocumentValidator:
    """Resolve the tool, run it on a saved document and parse its output.

    Raises :class:`~diagbridge.errors.ToolNotFoundError` when the tool cannot
    be resolved and lets process spawn/timeout errors propagate, so callers
    can decide how each failure degrades.
    """

    def __init__(
        self,
        resolver: ToolResolver,
        invoker: ToolInvoker,
        parser: ErrorTextParser,
        *,
        tool: str = COMPILER,
        mode: ToolMode = ToolMode.CHECK,
    ) -> None:
        self._resolver = resolver
        self._invoker = invoker
        self._parser = parser
        self._tool = tool
        self._mode = mode

    @property
    def tool(self) -> str:
        return self._tool

    def run(self, path: Path, *, snapshot: DocumentSnapshot | None = None) -> tuple[ToolOutcome, list[Diagnostic]]:
        """Validate ``path`` and return the raw outcome with parsed diagnostics.

        Args:
            path: Location of the persisted document handed to the tool.
            snapshot: Text used for line bounds; read from ``path`` when omitted.

        Returns:
            tuple[ToolOutcome, list[Diagnostic]]: Process result and diagnostics.

        Raises:
            ToolNotFoundError: When no candidate for the tool is runnable.
            ProcessSpawnError: When the tool cannot be started.
            ProcessTimeoutError: When the tool exceeds its time budget.
            OSError: When ``path`` cannot be read for line bounds.
        """

        tool_path = self._resolver.resolve(self._tool)
        if tool_path is None:
            raise ToolNotFoundError(self._tool, self._resolver.candidate_paths(self._tool))
        document = snapshot or DocumentSnapshot.from_path(path)
        outcome = self._invoker.invoke(self._tool, tool_path, path, self._mode)
        output = outcome.combined_output
        diagnostics = self._parser.parse_document(output, document)
        if not diagnostics and output.strip() and not outcome.ok:
            LOGGER.warning(
                "%s exited with status %d but its output matched no known error format",
                self._tool,
                outcome.returncode,
            )
            LOGGER.debug("Unparsed output: %s", output)
        return outcome, diagnostics

    def __call__(self, path: Path) -> list[Diagnostic]:
        _, diagnostics = self.run(path)
        return diagnostics


__all__ = ["DocumentValidator"]
