# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the bridge."""

from __future__ import annotations

from collections.abc import Sequence


class BridgeError(Exception):
    """Base class for failures raised by the diagnostic bridge."""


class ConfigError(BridgeError):
    """Raised when configuration input is invalid."""


class ToolNotFoundError(BridgeError):
    """Raised when every candidate location for a tool failed to probe."""

    def __init__(self, logical_name: str, candidates: Sequence[str] = ()) -> None:
        super().__init__(f"Tool '{logical_name}' was not found ({len(candidates)} candidate(s) probed)")
        self.logical_name = logical_name
        self.candidates = tuple(candidates)


class ProcessSpawnError(BridgeError):
    """Raised when an external tool could not be started."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        head = command[0] if command else "<empty>"
        super().__init__(f"Failed to start '{head}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class ProcessTimeoutError(BridgeError):
    """Raised when an external tool exceeded its time budget."""

    def __init__(self, command: Sequence[str], timeout: float) -> None:
        head = command[0] if command else "<empty>"
        super().__init__(f"Command '{head}' timed out after {timeout:.1f}s")
        self.command = tuple(command)
        self.timeout = timeout


class ToolBuildError(BridgeError):
    """Raised when building the toolchain on demand fails."""


__all__ = [
    "BridgeError",
    "ConfigError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
    "ToolBuildError",
    "ToolNotFoundError",
]
