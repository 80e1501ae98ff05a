# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; commands are argument lists built
# from resolved tool paths and never pass through a shell.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess

from .errors import ProcessSpawnError, ProcessTimeoutError


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    capture_output: bool = True
    discard_stdin: bool = True

    def with_timeout(self, timeout: float | None) -> CommandOptions:
        """Return a copy of the options with ``timeout`` applied.

        Raises:
            ValueError: When ``timeout`` is negative.
        """
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be non-negative")
        return replace(self, timeout=timeout)


def has_directory_part(path: str) -> bool:
    """Return ``True`` when ``path`` names a location rather than a bare command."""
    return os.sep in path or bool(os.altsep and os.altsep in path) or Path(path).is_absolute()


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` and return the argument list.

    Raises:
        ValueError: If no arguments are provided.
        ProcessSpawnError: If a bare executable name is not on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    if has_directory_part(head):
        return [head, *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise ProcessSpawnError(args, f"executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` and capture its output as text.

    The exit status is never checked here; callers decide what a non-zero exit
    means for their tool.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options, defaults to captured output and no timeout.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata.

    Raises:
        ProcessSpawnError: If the executable is missing or cannot be started.
        ProcessTimeoutError: If the command exceeded ``options.timeout``.
    """

    resolved = options or CommandOptions()
    normalized = _normalize_args(args)
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=resolved.capture_output,
            text=True,
            errors="replace",
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL if resolved.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise ProcessTimeoutError(normalized, resolved.timeout or 0.0) from exc
    except OSError as exc:
        raise ProcessSpawnError(normalized, exc.strerror or str(exc)) from exc

    return subprocess.CompletedProcess(
        args=completed.args,
        returncode=completed.returncode,
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
    )


__all__ = ["CommandOptions", "has_directory_part", "run_command"]
