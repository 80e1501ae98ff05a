# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Final

from ..models import TextRange

LineTextAccessor = Callable[[int], str]

TOKEN_DELIMITERS: Final[frozenset[str]] = frozenset("{}()[];,.")


@dataclass(frozen=True, slots=True)
class ReportedPosition:
    """Location and message exactly as the tool reported them (1-based)."""

    line: int
    column: int
    message: str


Extractor = Callable[[re.Match[str]], ReportedPosition | None]


def extract_position(match: re.Match[str]) -> ReportedPosition | None:
    """Read the ``line``, ``column`` and ``message`` named groups from ``match``.

    Args:
        match: Regex match produced by a recognizer pattern.

    Returns:
        ReportedPosition | None: Extracted position, or ``None`` when the
        numeric groups do not parse or the message is blank.
    """

    try:
        line = int(match.group("line"))
        column = int(match.group("column"))
    except (IndexError, TypeError, ValueError):
        return None
    message = (match.group("message") or "").strip()
    if not message:
        return None
    return ReportedPosition(line=line, column=column, message=message)


@dataclass(frozen=True, slots=True)
class Recognizer:
    """One known phrasing of toolchain error output."""

    name: str
    pattern: re.Pattern[str]
    extractor: Extractor = extract_position

    def iter_positions(self, text: str) -> Iterator[ReportedPosition]:
        """Yield every position this recognizer finds in ``text``, in order."""

        for match in self.pattern.finditer(text):
            position = self.extractor(match)
            if position is not None:
                yield position


def _is_word_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def find_token_end(line: str, start: int) -> int:
    """Return the exclusive end column of the token beginning at ``start``.

    Leading whitespace is skipped; a delimiter is a one-character token;
    otherwise the run of ASCII letters, digits and underscores is consumed.
    The result is always at least ``start + 1``.
    """

    end = start
    while end < len(line) and line[end].isspace():
        end += 1
    if end < len(line) and line[end] in TOKEN_DELIMITERS:
        return end + 1
    while end < len(line) and _is_word_char(line[end]):
        end += 1
    return max(end, start + 1)


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def range_for_position(position: ReportedPosition, line_count: int, line_text: LineTextAccessor) -> TextRange:
    """Convert a reported 1-based position into a clamped 0-based range.

    Args:
        position: Position extracted from tool output.
        line_count: Number of lines in the current document snapshot.
        line_text: Accessor returning the text of a 0-based line.

    Returns:
        TextRange: Token range when the column falls inside the line,
        otherwise a range covering the whole line.
    """

    if line_count <= 0:
        return TextRange.on_line(0, 0, 0)
    line = clamp(position.line - 1, 0, line_count - 1)
    text = line_text(line)
    column = clamp(position.column - 1, 0, len(text))
    if column < len(text):
        return TextRange.on_line(line, column, find_token_end(text, column))
    return TextRange.on_line(line, 0, len(text))


__all__ = [
    "Extractor",
    "LineTextAccessor",
    "Recognizer",
    "ReportedPosition",
    "TOKEN_DELIMITERS",
    "clamp",
    "extract_position",
    "find_token_end",
    "range_for_position",
]
