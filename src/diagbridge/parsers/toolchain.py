# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Recognizers and parser for free-text toolchain error output."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Final

from ..models import DEFAULT_SOURCE, Diagnostic, DocumentSnapshot
from ..severity import severity_from_message
from .base import LineTextAccessor, Recognizer, range_for_position

LOGGER = logging.getLogger(__name__)

_LINE_COLUMN: Final[str] = r"line\s+(?P<line>\d+),\s+column\s+(?P<column>\d+)"

# Order matters: results are reported recognizer by recognizer.
TOOLCHAIN_RECOGNIZERS: Final[tuple[Recognizer, ...]] = (
    Recognizer(
        name="phase-error",
        pattern=re.compile(
            rf"(?:Lexer|Parser|Syntax|Parse)\s+error\s+at\s+{_LINE_COLUMN}:\s+(?P<message>.+?)(?:\n|$)",
            re.IGNORECASE,
        ),
    ),
    Recognizer(
        name="error-struct",
        pattern=re.compile(
            r"(?:ParseError|LexError)\s*\{\s*line:\s*(?P<line>\d+),\s*column:\s*(?P<column>\d+),"
            r"\s*message:\s*\"(?P<message>[^\"]+)\"",
        ),
    ),
    Recognizer(
        name="error-at",
        pattern=re.compile(rf"Error\s+at\s+{_LINE_COLUMN}:\s+(?P<message>.+?)(?:\n|$)", re.IGNORECASE),
    ),
    Recognizer(
        name="error-prefix",
        pattern=re.compile(
            r"error:\s*line\s+(?P<line>\d+),\s+column\s+(?P<column>\d+):\s*(?P<message>.+?)(?:\n|$)",
            re.IGNORECASE,
        ),
    ),
)


class ErrorTextParser:
    """Turn raw toolchain output into an ordered list of diagnostics.

    Every recognizer is applied to the whole text and all matches are kept.
    Because phrasings overlap (``Parser error at line ...`` also satisfies the
    generic ``Error at line ...`` form), identical ``(range, message)`` pairs
    are collapsed unless ``deduplicate`` is disabled.
    """

    def __init__(
        self,
        recognizers: Sequence[Recognizer] = TOOLCHAIN_RECOGNIZERS,
        *,
        deduplicate: bool = True,
        source: str = DEFAULT_SOURCE,
    ) -> None:
        self._recognizers = tuple(recognizers)
        self._deduplicate = deduplicate
        self._source = source

    @property
    def recognizers(self) -> tuple[Recognizer, ...]:
        return self._recognizers

    def parse(self, raw_text: str, line_count: int, line_text: LineTextAccessor) -> list[Diagnostic]:
        """Parse ``raw_text`` against a document of ``line_count`` lines.

        Args:
            raw_text: Concatenated stdout and stderr of a tool invocation.
            line_count: Number of lines in the document snapshot.
            line_text: Accessor returning the text of a 0-based line.

        Returns:
            list[Diagnostic]: Diagnostics ordered by recognizer then by match
            position. Empty when nothing was recognised.
        """

        if not raw_text:
            return []
        diagnostics: list[Diagnostic] = []
        seen: set[tuple[tuple[int, int, int, int], str]] = set()
        for recognizer in self._recognizers:
            for position in recognizer.iter_positions(raw_text):
                text_range = range_for_position(position, line_count, line_text)
                key = (text_range.as_tuple(), position.message)
                if self._deduplicate and key in seen:
                    continue
                seen.add(key)
                diagnostics.append(
                    Diagnostic(
                        range=text_range,
                        message=position.message,
                        severity=severity_from_message(position.message),
                        source=self._source,
                    ),
                )
        if not diagnostics and raw_text.strip():
            LOGGER.debug("No diagnostics parsed from %d characters of tool output", len(raw_text))
        return diagnostics

    def parse_document(self, raw_text: str, snapshot: DocumentSnapshot) -> list[Diagnostic]:
        """Parse ``raw_text`` using ``snapshot`` for line bounds and token ranges."""

        return self.parse(raw_text, snapshot.line_count, snapshot.line_text)


__all__ = ["ErrorTextParser", "TOOLCHAIN_RECOGNIZERS"]
