# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog of the toolchain executables the bridge knows how to locate."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Final

WINDOWS_SUFFIX: Final[str] = ".exe"
DEFAULT_BUILD_SUBDIRS: Final[tuple[str, ...]] = ("tools", "")

COMPILER: Final[str] = "compiler"
FORMATTER: Final[str] = "formatter"
LINTER: Final[str] = "linter"
PACKAGE_MANAGER: Final[str] = "package-manager"
LANGUAGE_SERVER: Final[str] = "language-server"


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static description of one logical tool.

    ``build_subdirs`` lists project-relative directories whose
    ``target/<profile>`` folders hold locally built binaries; an empty string
    stands for the project root itself.
    """

    logical_name: str
    executable: str
    friendly_name: str
    description: str = ""
    build_subdirs: tuple[str, ...] = DEFAULT_BUILD_SUBDIRS

    def executable_name(self, platform: str | None = None) -> str:
        """Return the on-disk file name of the executable for ``platform``."""
        target = platform if platform is not None else sys.platform
        if target.startswith("win") and not self.executable.endswith(WINDOWS_SUFFIX):
            return f"{self.executable}{WINDOWS_SUFFIX}"
        return self.executable


class ToolCatalog:
    """Lookup of :class:`ToolSpec` entries by logical or executable name."""

    def __init__(self, specs: Iterable[ToolSpec]) -> None:
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs:
            self._specs[spec.logical_name] = spec
        self._by_executable: Mapping[str, ToolSpec] = {spec.executable: spec for spec in self._specs.values()}

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs or name in self._by_executable

    def get(self, name: str) -> ToolSpec:
        """Return the spec for ``name``.

        Unknown names describe an ad-hoc tool whose executable shares the name
        and whose build outputs follow the default layout.
        """
        spec = self._specs.get(name) or self._by_executable.get(name)
        if spec is not None:
            return spec
        return ToolSpec(logical_name=name, executable=name, friendly_name=name)


DEFAULT_CATALOG: Final[ToolCatalog] = ToolCatalog(
    (
        ToolSpec(
            logical_name=COMPILER,
            executable="veyc",
            friendly_name="Compiler",
            description="Language compiler and syntax checker",
            build_subdirs=("compiler", ""),
        ),
        ToolSpec(
            logical_name=FORMATTER,
            executable="veyra-fmt",
            friendly_name="Formatter",
            description="Code formatter",
        ),
        ToolSpec(
            logical_name=LINTER,
            executable="veyra-lint",
            friendly_name="Linter",
            description="Static analyzer",
        ),
        ToolSpec(
            logical_name=PACKAGE_MANAGER,
            executable="veyra-pkg",
            friendly_name="Package Manager",
            description="Project manager",
        ),
        ToolSpec(
            logical_name=LANGUAGE_SERVER,
            executable="veyra-lsp",
            friendly_name="Language Server",
            description="Language server",
            build_subdirs=("tools", "tools/lsp", ""),
        ),
    ),
)

# Tools that ``cargo build`` in the tools workspace is expected to produce.
BUILDABLE_TOOLS: Final[tuple[str, ...]] = (FORMATTER, LINTER, PACKAGE_MANAGER)


__all__ = [
    "BUILDABLE_TOOLS",
    "COMPILER",
    "DEFAULT_CATALOG",
    "FORMATTER",
    "LANGUAGE_SERVER",
    "LINTER",
    "PACKAGE_MANAGER",
    "ToolCatalog",
    "ToolSpec",
]
