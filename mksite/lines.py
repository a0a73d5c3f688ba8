"""Line views and prefix-based line classification."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple, Optional

MAX_HEADING_LEVEL = 6
CODE_FENCE = "```"


class LineKind(Enum):
    BLANK = "blank"
    CODE_FENCE = "code_fence"
    HEADING = "heading"
    UNORDERED_ITEM = "unordered_item"
    ORDERED_ITEM = "ordered_item"
    TEXT = "text"


class Line(NamedTuple):
    """A view into the document: ``length`` characters starting at ``start``."""

    source: str
    start: int
    length: int

    @property
    def text(self) -> str:
        return self.source[self.start:self.start + self.length]


def iter_lines(text: str) -> Iterator[Line]:
    start = 0
    end = len(text)
    while start < end:
        newline = text.find("\n", start)
        stop = end if newline == -1 else newline
        length = stop - start
        if length and text[stop - 1] == "\r":
            length -= 1
        yield Line(text, start, length)
        start = stop + 1


class LineSequence:
    """Finite, single-pass sequence of lines with one line of lookahead."""

    def __init__(self, text: str) -> None:
        self._lines = iter_lines(text)
        self._pending: Optional[Line] = None

    def __iter__(self) -> "LineSequence":
        return self

    def __next__(self) -> Line:
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        return next(self._lines)

    def peek(self) -> Optional[Line]:
        if self._pending is None:
            self._pending = next(self._lines, None)
        return self._pending


def is_blank(line: str) -> bool:
    return all(char in " \t" for char in line)


def is_code_fence(line: str) -> bool:
    return line.startswith(CODE_FENCE) and line[3:4] != "`"


def heading_level(line: str) -> int:
    level = 0
    while level < len(line) and line[level] == "#":
        level += 1
        if level > MAX_HEADING_LEVEL:
            return 0
    if level and level < len(line) and line[level] == " ":
        return level
    return 0


def heading_text(line: str) -> str:
    return line[heading_level(line):].strip()


def is_unordered_item(line: str) -> bool:
    return line.startswith("- ")


def _digit_run(line: str) -> int:
    count = 0
    while count < len(line) and "0" <= line[count] <= "9":
        count += 1
    return count


def is_ordered_item(line: str) -> bool:
    digits = _digit_run(line)
    return digits > 0 and line[digits:digits + 2] == ". "


def list_item_offset(line: str) -> int:
    if is_unordered_item(line):
        return 2
    if is_ordered_item(line):
        return _digit_run(line) + 2
    return 0


def classify_line(line: str) -> LineKind:
    if is_blank(line):
        return LineKind.BLANK
    if is_code_fence(line):
        return LineKind.CODE_FENCE
    if heading_level(line):
        return LineKind.HEADING
    if is_unordered_item(line):
        return LineKind.UNORDERED_ITEM
    if is_ordered_item(line):
        return LineKind.ORDERED_ITEM
    return LineKind.TEXT
