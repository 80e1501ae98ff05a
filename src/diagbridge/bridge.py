# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Facade wiring resolver, parser, scheduler and publisher together."""

from __future__ import annotations

from pathlib import Path

from .config import Config
from .diagnostics.publisher import DiagnosticPublisher
from .models import Diagnostic, DiagnosticCounts, DocumentSnapshot, ToolOutcome
from .parsers import ErrorTextParser
from .scheduling import DocumentValidator, TimerFactory, ToolMissingHandler, ValidationScheduler, start_thread_timer
from .tooling.catalog import COMPILER
from .tooling.invocation import ToolInvoker, ToolMode
from .tooling.probe import ProcessProbe
from .tooling.resolver import ToolResolver


class DiagnosticBridge:
    """Single entry point an editor host drives with document lifecycle events."""

    def __init__(
        self,
        config: Config,
        *,
        resolver: ToolResolver | None = None,
        invoker: ToolInvoker | None = None,
        publisher: DiagnosticPublisher | None = None,
        timer_factory: TimerFactory = start_thread_timer,
        on_tool_missing: ToolMissingHandler | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or ToolResolver(config, probe=ProcessProbe(timeout=config.probe_timeout_seconds))
        self.invoker = invoker or ToolInvoker(timeout=config.timeout_seconds)
        self.parser = ErrorTextParser(deduplicate=config.deduplicate_diagnostics)
        self.publisher = publisher or DiagnosticPublisher()
        self.validator = DocumentValidator(self.resolver, self.invoker, self.parser, tool=COMPILER)
        self.scheduler = ValidationScheduler(
            self.validator,
            self.publisher,
            debounce=config.debounce_seconds,
            timer_factory=timer_factory,
            on_tool_missing=on_tool_missing,
        )

    def opened(self, document_id: str, path: Path | None = None) -> None:
        self.scheduler.opened(document_id, path)

    def changed(self, document_id: str, path: Path | None = None) -> None:
        self.scheduler.changed(document_id, path)

    def saved(self, document_id: str, path: Path | None = None) -> None:
        self.scheduler.saved(document_id, path)

    def closed(self, document_id: str) -> None:
        self.scheduler.closed(document_id)

    def diagnostics(self, document_id: str) -> tuple[Diagnostic, ...]:
        return self.publisher.get(document_id)

    def counts(self, document_id: str) -> DiagnosticCounts:
        return self.publisher.counts(document_id)

    def validate_now(self, snapshot: DocumentSnapshot) -> list[Diagnostic]:
        """Check ``snapshot`` with the compiler right away and publish under its URI.

        Snapshots without a file on disk are cleared rather than validated.

        Raises:
            ToolNotFoundError: When the compiler cannot be resolved.
            ProcessSpawnError: When the compiler cannot be started.
            ProcessTimeoutError: When the compiler exceeds the configured timeout.
        """

        if snapshot.path is None:
            self.publisher.clear(snapshot.uri)
            return []
        _, diagnostics = self.validator.run(snapshot.path, snapshot=snapshot)
        self._publish(snapshot.uri, diagnostics)
        return diagnostics

    def run_tool(
        self,
        path: Path,
        *,
        tool: str = COMPILER,
        mode: ToolMode = ToolMode.CHECK,
    ) -> tuple[ToolOutcome, list[Diagnostic]]:
        """Run ``tool`` on ``path`` synchronously, bypassing the scheduler.

        Only check-mode results are published; format and lint runs are
        reported to the caller alone.

        Raises:
            ToolNotFoundError: When ``tool`` cannot be resolved.
            ProcessSpawnError: When the tool cannot be started.
            ProcessTimeoutError: When the tool exceeds the configured timeout.
        """

        snapshot = DocumentSnapshot.from_path(path)
        validator = DocumentValidator(self.resolver, self.invoker, self.parser, tool=tool, mode=mode)
        outcome, diagnostics = validator.run(snapshot.path or path, snapshot=snapshot)
        if mode is ToolMode.CHECK:
            self._publish(snapshot.uri, diagnostics)
        return outcome, diagnostics

    def _publish(self, document_id: str, diagnostics: list[Diagnostic]) -> None:
        if diagnostics:
            self.publisher.set(document_id, diagnostics)
        else:
            self.publisher.clear(document_id)

    def shutdown(self) -> None:
        self.scheduler.close_all()


__all__ = ["DiagnosticBridge"]
