# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation scheduling."""

from __future__ import annotations

from .scheduler import ToolMissingHandler, ValidateFn, ValidationScheduler
from .state import TimerFactory, TimerHandle, ValidationPhase, ValidationState, start_thread_timer
from .validator import DocumentValidator

__all__ = [
    "DocumentValidator",
    "TimerFactory",
    "TimerHandle",
    "ToolMissingHandler",
    "ValidateFn",
    "ValidationPhase",
    "ValidationScheduler",
    "ValidationState",
    "start_thread_timer",
]
