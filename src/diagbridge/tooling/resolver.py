# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map logical tool names onto runnable executables."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from ..config import Config
from ..errors import ToolNotFoundError
from ..models import ToolDescriptor
from .catalog import DEFAULT_CATALOG, ToolCatalog, ToolSpec
from .probe import ProcessProbe

LOGGER = logging.getLogger(__name__)

TARGET_DIR = "target"


class ToolResolver:
    """Resolve a logical tool name to the first runnable candidate.

    Candidates are considered in a fixed priority order: the configured
    override, the bare executable name (looked up on ``PATH`` at spawn time),
    build outputs under the workspace root, then build outputs under up to
    ``config.ancestor_depth`` ancestors, nearest first. Within one location the
    build profiles are tried in configured order (release before debug).

    Nothing is cached; each call probes again, so a tool built after a miss is
    found on the next call.
    """

    def __init__(
        self,
        config: Config,
        *,
        probe: ProcessProbe | None = None,
        catalog: ToolCatalog = DEFAULT_CATALOG,
        platform: str | None = None,
    ) -> None:
        self._config = config
        self._probe = probe or ProcessProbe(timeout=config.probe_timeout_seconds)
        self._catalog = catalog
        self._platform = platform

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    def spec_for(self, logical_name: str) -> ToolSpec:
        return self._catalog.get(logical_name)

    def _override_for(self, spec: ToolSpec) -> str | None:
        return self._config.override_for(spec.logical_name) or self._config.override_for(spec.executable)

    def _search_roots(self) -> list[Path]:
        root = self._config.workspace_root
        if root is None:
            return []
        roots = [root]
        current = root
        for _ in range(self._config.ancestor_depth):
            parent = current.parent
            if parent == current:
                break
            roots.append(parent)
            current = parent
        return roots

    def candidate_paths(self, logical_name: str) -> tuple[str, ...]:
        """Return the ordered, de-duplicated candidate list for ``logical_name``."""

        spec = self.spec_for(logical_name)
        executable = spec.executable_name(self._platform)
        ordered: list[str] = []
        override = self._override_for(spec)
        if override:
            ordered.append(override)
        ordered.append(executable)
        for base in self._search_roots():
            for subdir in spec.build_subdirs:
                location = base / subdir if subdir else base
                for profile in self._config.build_profiles:
                    ordered.append(str(location / TARGET_DIR / profile / executable))
        return tuple(dict.fromkeys(ordered))

    def _first_available(self, candidates: tuple[str, ...]) -> str | None:
        for candidate in candidates:
            if self._probe.is_available(candidate):
                return candidate
        return None

    def resolve(self, logical_name: str) -> str | None:
        """Return the first runnable candidate for ``logical_name`` or ``None``."""

        candidates = self.candidate_paths(logical_name)
        resolved = self._first_available(candidates)
        if resolved is None:
            LOGGER.info("Tool %s not found after probing %d candidate(s)", logical_name, len(candidates))
        else:
            LOGGER.debug("Tool %s resolved to %s", logical_name, resolved)
        return resolved

    def describe(self, logical_name: str) -> ToolDescriptor:
        """Resolve ``logical_name`` and return the attempt as a :class:`ToolDescriptor`."""

        candidates = self.candidate_paths(logical_name)
        return ToolDescriptor(
            logical_name=logical_name,
            candidate_paths=candidates,
            resolved_path=self._first_available(candidates),
            probed_at=datetime.now(timezone.utc),
        )

    def require(self, logical_name: str) -> str:
        """Return the resolved path for ``logical_name``.

        Raises:
            ToolNotFoundError: When every candidate failed to probe.
        """

        descriptor = self.describe(logical_name)
        if descriptor.resolved_path is None:
            raise ToolNotFoundError(logical_name, descriptor.candidate_paths)
        return descriptor.resolved_path


__all__ = ["TARGET_DIR", "ToolResolver"]
