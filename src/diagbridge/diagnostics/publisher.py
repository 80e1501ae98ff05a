# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document diagnostic store with aggregate counts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from threading import Lock

from ..models import Diagnostic, DiagnosticCounts

LOGGER = logging.getLogger(__name__)

PublishListener = Callable[[str, tuple[Diagnostic, ...]], None]


class DiagnosticPublisher:
    """Hold the current diagnostic set for each document.

    Writes replace a document's whole set at once; there is no merging.
    Presentation layers read through :meth:`get` and :meth:`counts` or
    subscribe to be told after every write. A cleared document is reported to
    listeners with an empty tuple.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._diagnostics: dict[str, tuple[Diagnostic, ...]] = {}
        self._counts: dict[str, DiagnosticCounts] = {}
        self._listeners: list[PublishListener] = []

    def subscribe(self, listener: PublishListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable removing it again."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def set(self, document_id: str, diagnostics: Iterable[Diagnostic]) -> None:
        """Replace the diagnostics of ``document_id`` and recompute its counts."""

        snapshot = tuple(diagnostics)
        counts = DiagnosticCounts.from_diagnostics(snapshot)
        with self._lock:
            self._diagnostics[document_id] = snapshot
            self._counts[document_id] = counts
            listeners = list(self._listeners)
        self._notify(listeners, document_id, snapshot)

    def clear(self, document_id: str) -> None:
        """Remove the entry for ``document_id`` entirely."""

        with self._lock:
            existed = self._diagnostics.pop(document_id, None) is not None
            self._counts.pop(document_id, None)
            listeners = list(self._listeners)
        if existed:
            self._notify(listeners, document_id, ())

    def get(self, document_id: str) -> tuple[Diagnostic, ...]:
        with self._lock:
            return self._diagnostics.get(document_id, ())

    def counts(self, document_id: str) -> DiagnosticCounts:
        with self._lock:
            return self._counts.get(document_id, DiagnosticCounts())

    def total_counts(self) -> DiagnosticCounts:
        with self._lock:
            values: Sequence[DiagnosticCounts] = list(self._counts.values())
        return sum(values, DiagnosticCounts())

    def documents(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._diagnostics)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._diagnostics

    @staticmethod
    def _notify(listeners: Sequence[PublishListener], document_id: str, diagnostics: tuple[Diagnostic, ...]) -> None:
        for listener in listeners:
            try:
                listener(document_id, diagnostics)
            except Exception:  # noqa: BLE001
                LOGGER.exception("Diagnostic listener failed for %s", document_id)


__all__ = ["DiagnosticPublisher", "PublishListener"]
