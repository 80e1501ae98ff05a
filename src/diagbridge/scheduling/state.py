# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-document validation state and timer primitives."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from ..models import Diagnostic


class TimerHandle(Protocol):
    """Anything that can cancel a pending callback."""

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def start_thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Start a daemon :class:`threading.Timer` calling ``callback`` after ``delay`` seconds."""

    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class ValidationPhase(str, Enum):
    """Lifecycle phase of a document's validation pipeline."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"


@dataclass(slots=True)
class ValidationState:
    """Mutable bookkeeping for one open document, owned by the scheduler.

    A document closed while its run is in flight keeps its state with
    ``closed`` set until that run completes, so a reopened document never has
    two processes running at once. ``discard_result`` marks the in-flight run
    as started before the close.
    """

    document_id: str
    path: Path | None = None
    pending_timer: TimerHandle | None = None
    timer_generation: int = 0
    in_flight: bool = False
    rerun_requested: bool = False
    latest_sequence: int = 0
    last_diagnostics: tuple[Diagnostic, ...] = ()
    closed: bool = False
    discard_result: bool = False

    @property
    def phase(self) -> ValidationPhase:
        if self.in_flight:
            return ValidationPhase.RUNNING
        if self.pending_timer is not None:
            return ValidationPhase.SCHEDULED
        return ValidationPhase.IDLE

    def cancel_timer(self) -> None:
        if self.pending_timer is not None:
            self.pending_timer.cancel()
            self.pending_timer = None
        self.timer_generation += 1


__all__ = [
    "TimerFactory",
    "TimerHandle",
    "ValidationPhase",
    "ValidationState",
    "start_thread_timer",
]
