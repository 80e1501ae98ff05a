# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Debounced, per-document validation scheduling."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path
from threading import RLock

from ..diagnostics.publisher import DiagnosticPublisher
from ..errors import BridgeError, ToolNotFoundError
from ..models import Diagnostic
from .state import TimerFactory, ValidationPhase, ValidationState, start_thread_timer

LOGGER = logging.getLogger(__name__)

ValidateFn = Callable[[Path], list[Diagnostic]]
ToolMissingHandler = Callable[[ToolNotFoundError], None]


class ValidationScheduler:
    """Debounce document events and run at most one validation per document.

    Each open document moves through ``IDLE -> SCHEDULED -> RUNNING -> IDLE``.
    A change while scheduled re-arms the debounce timer; any event while
    running only marks a follow-up run, which is scheduled as soon as the
    current run completes. Closing a document while it runs keeps its state
    until the run finishes; the result of that run is never published, and a
    reopen in the meantime waits for it before validating again. Failures of
    the validator or of the tool-missing hook are logged, never raised.
    """

    def __init__(
        self,
        validate: ValidateFn,
        publisher: DiagnosticPublisher,
        *,
        debounce: float,
        timer_factory: TimerFactory = start_thread_timer,
        on_tool_missing: ToolMissingHandler | None = None,
    ) -> None:
        self._validate = validate
        self._publisher = publisher
        self._debounce = debounce
        self._timer_factory = timer_factory
        self._on_tool_missing = on_tool_missing
        self._states: dict[str, ValidationState] = {}
        self._lock = RLock()
        self._sequence = itertools.count(1)

    # Document events -------------------------------------------------

    def opened(self, document_id: str, path: Path | None = None) -> None:
        self._request(document_id, path, rearm=False)

    def changed(self, document_id: str, path: Path | None = None) -> None:
        self._request(document_id, path, rearm=True)

    def saved(self, document_id: str, path: Path | None = None) -> None:
        self._request(document_id, path, rearm=False)

    def closed(self, document_id: str) -> None:
        """Cancel pending work for ``document_id`` and drop its diagnostics."""

        with self._lock:
            state = self._states.get(document_id)
            if state is not None:
                state.cancel_timer()
                state.rerun_requested = False
                if state.in_flight:
                    state.closed = True
                    state.discard_result = True
                else:
                    del self._states[document_id]
            self._publisher.clear(document_id)

    def close_all(self) -> None:
        with self._lock:
            for document_id in self.documents():
                self.closed(document_id)

    # Introspection ---------------------------------------------------

    def phase(self, document_id: str) -> ValidationPhase | None:
        with self._lock:
            state = self._live(document_id)
            return state.phase if state is not None else None

    def last_diagnostics(self, document_id: str) -> tuple[Diagnostic, ...]:
        with self._lock:
            state = self._live(document_id)
            return state.last_diagnostics if state is not None else ()

    def documents(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(document_id for document_id, state in self._states.items() if not state.closed)

    def flush(self, document_id: str) -> bool:
        """Run a pending validation for ``document_id`` immediately.

        Returns:
            bool: ``True`` when a scheduled run was started.
        """

        with self._lock:
            state = self._live(document_id)
            if state is None or state.pending_timer is None:
                return False
            generation = state.timer_generation
        self._on_timer(document_id, generation)
        return True

    # Internals -------------------------------------------------------

    def _live(self, document_id: str) -> ValidationState | None:
        state = self._states.get(document_id)
        if state is None or state.closed:
            return None
        return state

    def _request(self, document_id: str, path: Path | None, *, rearm: bool) -> None:
        with self._lock:
            state = self._states.get(document_id)
            if state is None:
                state = ValidationState(document_id=document_id)
                self._states[document_id] = state
            elif state.closed:
                state.closed = False
                state.path = None
                state.last_diagnostics = ()
            if path is not None:
                state.path = path
            if state.in_flight:
                state.rerun_requested = True
                return
            if state.pending_timer is not None and not rearm:
                return
            self._arm(state)

    def _arm(self, state: ValidationState) -> None:
        state.cancel_timer()
        generation = state.timer_generation
        callback = partial(self._on_timer, state.document_id, generation)
        state.pending_timer = self._timer_factory(self._debounce, callback)

    def _on_timer(self, document_id: str, generation: int) -> None:
        with self._lock:
            state = self._live(document_id)
            if state is None or state.timer_generation != generation or state.pending_timer is None:
                return
            state.cancel_timer()
            state.in_flight = True
            sequence = next(self._sequence)
            state.latest_sequence = sequence
            path = state.path
        self._execute(document_id, path, sequence)

    def _execute(self, document_id: str, path: Path | None, sequence: int) -> None:
        diagnostics: list[Diagnostic] = []
        try:
            if path is None:
                LOGGER.debug("Document %s has no file on disk; nothing to validate", document_id)
            else:
                diagnostics = self._validate(path)
        except ToolNotFoundError as exc:
            LOGGER.info("Validation skipped for %s: %s", document_id, exc)
            self._report_tool_missing(document_id, exc)
        except (BridgeError, OSError) as exc:
            LOGGER.warning("Validation of %s failed: %s", document_id, exc)
        except Exception:  # noqa: BLE001
            LOGGER.exception("Validator raised unexpectedly for %s", document_id)
        finally:
            self._complete(document_id, sequence, diagnostics)

    def _report_tool_missing(self, document_id: str, error: ToolNotFoundError) -> None:
        if self._on_tool_missing is None:
            return
        try:
            self._on_tool_missing(error)
        except Exception:  # noqa: BLE001
            LOGGER.exception("Tool-missing handler failed for %s", document_id)

    def _complete(self, document_id: str, sequence: int, diagnostics: list[Diagnostic]) -> None:
        with self._lock:
            state = self._states.get(document_id)
            if state is None or state.latest_sequence != sequence:
                LOGGER.debug("Discarding stale validation run %d for %s", sequence, document_id)
                return
            state.in_flight = False
            if state.closed:
                del self._states[document_id]
                LOGGER.debug("Dropping run %d for closed document %s", sequence, document_id)
                return
            if state.discard_result:
                state.discard_result = False
                LOGGER.debug("Discarding run %d started before %s was reopened", sequence, document_id)
            else:
                state.last_diagnostics = tuple(diagnostics)
                if diagnostics:
                    self._publisher.set(document_id, diagnostics)
                else:
                    self._publisher.clear(document_id)
            if state.rerun_requested:
                state.rerun_requested = False
                self._arm(state)


__all__ = ["ToolMissingHandler", "ValidateFn", "ValidationScheduler"]
