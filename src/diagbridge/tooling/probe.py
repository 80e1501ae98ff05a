# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Availability checks for candidate tool executables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..errors import ProcessSpawnError, ProcessTimeoutError
from ..process import CommandOptions, has_directory_part, run_command

LOGGER = logging.getLogger(__name__)

PROBE_FLAG: Final[str] = "--help"
DEFAULT_PROBE_TIMEOUT: Final[float] = 5.0

CommandRunner = Callable[..., CompletedProcess[str]]


class ProcessProbe:
    """Decide whether a candidate executable can actually be run.

    Paths with a directory part must exist as regular files before a process
    is spawned. The candidate is then invoked with ``--help``; any exit status
    counts as available, since a legitimate binary may exit non-zero on help.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        flag: str = PROBE_FLAG,
        runner: CommandRunner = run_command,
    ) -> None:
        self._timeout = timeout
        self._flag = flag
        self._runner = runner

    def is_available(self, path: str) -> bool:
        """Return ``True`` when ``path`` exists (if pathlike) and spawns cleanly."""

        if not path:
            return False
        if has_directory_part(path) and not Path(path).is_file():
            return False
        command: Sequence[str] = (path, self._flag)
        try:
            completed = self._runner(command, options=CommandOptions(timeout=self._timeout))
        except (ProcessSpawnError, ProcessTimeoutError) as exc:
            LOGGER.debug("Probe of %s failed: %s", path, exc)
            return False
        if completed.returncode < 0:
            LOGGER.debug("Probe of %s terminated by signal %d", path, -completed.returncode)
            return False
        return True


__all__ = ["CommandRunner", "DEFAULT_PROBE_TIMEOUT", "PROBE_FLAG", "ProcessProbe"]
