# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the diagbridge package."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .severity import Severity

DEFAULT_SOURCE = "toolchain"


class TextRange(BaseModel):
    """Zero-based, half-open span of document text."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(ge=0)
    start_column: int = Field(ge=0)
    end_line: int = Field(ge=0)
    end_column: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> TextRange:
        """Reject ranges whose end precedes their start."""
        if (self.end_line, self.end_column) < (self.start_line, self.start_column):
            raise ValueError("range end precedes range start")
        return self

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> TextRange:
        """Return a single-line range covering ``start``..``end`` on ``line``."""
        return cls(start_line=line, start_column=start, end_line=line, end_column=end)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.start_line, self.start_column, self.end_line, self.end_column)


class Diagnostic(BaseModel):
    """Structured problem report produced from toolchain output."""

    model_config = ConfigDict(frozen=True)

    range: TextRange
    message: str
    severity: Severity = Severity.ERROR
    source: str = DEFAULT_SOURCE

    @property
    def line(self) -> int:
        return self.range.start_line

    @property
    def column(self) -> int:
        return self.range.start_column


class DiagnosticCounts(BaseModel):
    """Aggregate error and warning totals for a diagnostic set."""

    model_config = ConfigDict(frozen=True)

    errors: int = 0
    warnings: int = 0

    @classmethod
    def from_diagnostics(cls, diagnostics: Sequence[Diagnostic]) -> DiagnosticCounts:
        errors = sum(1 for item in diagnostics if item.severity is Severity.ERROR)
        warnings = sum(1 for item in diagnostics if item.severity is Severity.WARNING)
        return cls(errors=errors, warnings=warnings)

    def __add__(self, other: DiagnosticCounts) -> DiagnosticCounts:
        return DiagnosticCounts(errors=self.errors + other.errors, warnings=self.warnings + other.warnings)

    @property
    def total(self) -> int:
        return self.errors + self.warnings

    def summary(self) -> str:
        """Return the status text shown for these counts, empty when clean."""
        if self.errors:
            return f"{self.errors} error(s), {self.warnings} warning(s)"
        if self.warnings:
            return f"{self.warnings} warning(s)"
        return ""


class ToolDescriptor(BaseModel):
    """Snapshot of a single resolution attempt for a logical tool."""

    model_config = ConfigDict(frozen=True)

    logical_name: str
    candidate_paths: tuple[str, ...] = Field(default_factory=tuple)
    resolved_path: str | None = None
    probed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def found(self) -> bool:
        return self.resolved_path is not None


def coerce_output_text(value: object) -> str:
    """Normalise stdout/stderr payloads into a single string.

    Args:
        value: Output payload captured from a subprocess.

    Returns:
        str: Text representation with bytes decoded leniently.
    """

    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="ignore")
    if isinstance(value, (list, tuple)):
        return "\n".join(str(item) for item in value)
    return str(value)


class ToolOutcome(BaseModel):
    """Result bundle produced by one external tool invocation."""

    model_config = ConfigDict(validate_assignment=True)

    tool: str
    mode: str
    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _coerce_output(cls, value: object) -> str:
        return coerce_output_text(value)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def combined_output(self) -> str:
        """Return stdout followed by stderr as one text blob."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


class DocumentSnapshot(BaseModel):
    """Immutable view of a document's text at a point in time."""

    model_config = ConfigDict(frozen=True)

    uri: str
    path: Path | None = None
    text: str = ""
    _lines: tuple[str, ...] = PrivateAttr(default_factory=tuple)

    @model_validator(mode="after")
    def _split_lines(self) -> DocumentSnapshot:
        self._lines = tuple(self.text.replace("\r\n", "\n").split("\n"))
        return self

    @classmethod
    def from_path(cls, path: Path, *, uri: str | None = None) -> DocumentSnapshot:
        """Read ``path`` from disk and return a snapshot of its persisted content."""
        resolved = path.resolve()
        text = resolved.read_text(encoding="utf-8", errors="replace")
        return cls(uri=uri or resolved.as_uri(), path=resolved, text=text)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        """Return the text of line ``index`` without its terminator."""
        return self._lines[index]


__all__ = [
    "DEFAULT_SOURCE",
    "Diagnostic",
    "DiagnosticCounts",
    "DocumentSnapshot",
    "TextRange",
    "ToolDescriptor",
    "ToolOutcome",
    "coerce_output_text",
]
