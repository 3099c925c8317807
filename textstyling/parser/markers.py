"""Literal markers that open elements, and position-based matchers to find them.

A marker either has to open a line
(``"> "``, ``"+ "``, ``"* "``) or may appear anywhere (the backtick).
"Opening a line" is always relative to the string being scanned, so
position 0 of any segment counts as a line start.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

QUOTE_MARKER = "> "
BULLET_PLUS = "+ "
BULLET_STAR = "* "
CODE_MARKER = "`"
LINE_SEPARATOR = "\n"

# A line starts right after any of these.
LINE_TERMINATORS = frozenset("\n\r\u0085\u2028\u2029")


# ---------------------------------------------------------------------------
# Marker set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParserConfig:
    """Marker set threaded through every parsing call."""

    quote_marker: str = QUOTE_MARKER
    bullet_markers: tuple[str, ...] = (BULLET_PLUS, BULLET_STAR)
    code_marker: str = CODE_MARKER
    line_separator: str = LINE_SEPARATOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "bullet_markers", tuple(self.bullet_markers))

        markers = self.markers
        if not all(markers):
            raise ValueError("Markers must not be empty.")
        if len(set(markers)) != len(markers):
            raise ValueError(f"Duplicate marker in {list(markers)!r}.")
        for marker in markers:
            if marker[0] in LINE_TERMINATORS:
                raise ValueError(f"Marker {marker!r} starts with a line terminator.")
        if len(self.code_marker) != 1:
            raise ValueError(
                f"Code marker must be a single character, got {self.code_marker!r}."
            )
        if not self.line_separator:
            raise ValueError("Line separator must not be empty.")

    @property
    def markers(self) -> tuple[str, ...]:
        return (self.quote_marker, *self.bullet_markers, self.code_marker)


DEFAULT_CONFIG = ParserConfig()


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


class MarkerMatch(NamedTuple):
    start: int
    end: int
    marker: str


def is_line_start(text: str, pos: int) -> bool:
    """Return True if *pos* opens a line of *text*."""
    if pos == 0:
        return True
    prev = text[pos - 1]
    if prev not in LINE_TERMINATORS:
        return False
    # "\r\n" is a single terminator.
    return not (prev == "\r" and text.startswith("\n", pos))


def line_starts(text: str) -> list[int]:
    """Sorted positions after a line terminator of *text*.

    Position 0 is left out: whether a segment's first character opens a
    line depends on where the segment begins, not on *text*.
    """
    starts = []
    for terminator in LINE_TERMINATORS:
        pos = text.find(terminator)
        while pos != -1:
            if is_line_start(text, pos + 1):
                starts.append(pos + 1)
            pos = text.find(terminator, pos + 1)
    starts.sort()
    return starts


def find_at_line_start(text: str, prefix: str, start: int = 0, end: int | None = None) -> int:
    """Return the lowest index in [*start*, *end*) where *prefix* opens a line, or -1."""
    if end is None:
        end = len(text)
    pos = text.find(prefix, start, end)
    while pos != -1:
        if is_line_start(text, pos):
            return pos
        pos = text.find(prefix, pos + 1, end)
    return -1


def end_of_paragraph(
    text: str,
    start: int,
    separator: str = LINE_SEPARATOR,
    end: int | None = None,
) -> int:
    """Position just after the next *separator* in [*start*, *end*).

    Without a further separator the paragraph runs to *end*, which
    defaults to the end of *text*.
    """
    if end is None:
        end = len(text)
    pos = text.find(separator, start, end)
    if pos == -1:
        return end
    return pos + len(separator)
