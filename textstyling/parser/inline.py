"""Inline pass: bullet points and code spans inside quote-free text.

Every segment is split the same way.  The leftmost marker wins: a bullet
marker where a line opens, or a code marker anywhere.  The text before
that marker is split again as a segment of its own, and a bullet body is
split again for nested code spans and bullets.  Code spans are opaque.

Segments are ranges of one text.  Nested segments go on an explicit
stack, so nesting depth is bounded by memory and not by the interpreter's
recursion limit.  Each segment remembers where it last found a marker, so
the text is read a bounded number of times however many elements it holds.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass, field

from textstyling.models import Element, ElementType
from textstyling.parser.markers import (
    DEFAULT_CONFIG,
    MarkerMatch,
    ParserConfig,
    line_starts,
)

logger = logging.getLogger(__name__)


def find_elements(segment: str, config: ParserConfig | None = None) -> list[Element]:
    """Split *segment* into bullet points and text.

    The returned elements cover the whole segment.  A backtick without a
    closing partner is kept as plain text together with the rest of the
    segment.
    """
    config = config or DEFAULT_CONFIG
    return InlineScanner(segment, config).scan(0, len(segment))


@dataclass
class _Segment:
    """A range of the scanned text being split; ``origin`` opens a line."""

    origin: int
    end: int
    cursor: int
    elements: list[Element] = field(default_factory=list)
    # Set while the range is a bullet body.
    bullet: MarkerMatch | None = None
    # Marker to handle once the text before it has been split.
    pending: MarkerMatch | None = None
    # Next known position of a searched string, -1 once there is none left.
    seen: dict[str, int] = field(default_factory=dict)

    def find(self, text: str, needle: str, start: int) -> int:
        """``text.find(needle, start, self.end)``, for non-decreasing *start*."""
        pos = self.seen.get(needle)
        if pos is None or -1 < pos < start:
            pos = text.find(needle, start, self.end)
            self.seen[needle] = pos
        return pos

    def narrowed(self, origin: int, end: int, bullet: MarkerMatch | None = None) -> _Segment:
        """A sub-range that reuses what this segment already found."""
        seen = {}
        for needle, pos in self.seen.items():
            if pos == -1 or (pos >= origin and pos + len(needle) > end):
                seen[needle] = -1
            elif pos >= origin:
                seen[needle] = pos
        return _Segment(origin, end, origin, bullet=bullet, seen=seen)


class InlineScanner:
    """Runs the inline pass over ranges of one text."""

    def __init__(self, text: str, config: ParserConfig = DEFAULT_CONFIG):
        self.text = text
        self.config = config
        self._line_starts = line_starts(text)

    def scan(self, start: int, end: int) -> list[Element]:
        """Split ``text[start:end]``; *start* counts as a line start."""
        root = _Segment(start, end, start)
        stack = [root]

        while stack:
            segment = stack[-1]
            if segment.pending is not None:
                match, segment.pending = segment.pending, None
            else:
                match = self._next_marker(segment)
                if match is None:
                    self._close(stack)
                    continue
                if segment.cursor < match.start:
                    # A bullet right after a code span is found here.
                    segment.pending = match
                    stack.append(segment.narrowed(segment.cursor, match.start))
                    continue

            if match.marker == self.config.code_marker:
                self._code_span(segment, match)
            else:
                # A bullet point never spans more than one paragraph.
                separator = self.config.line_separator
                pos = segment.find(self.text, separator, match.end)
                body_end = segment.end if pos == -1 else pos + len(separator)
                segment.cursor = body_end
                stack.append(segment.narrowed(match.end, body_end, bullet=match))

        return root.elements

    def _next_marker(self, segment: _Segment) -> MarkerMatch | None:
        text = self.text
        code_marker = self.config.code_marker
        code = segment.find(text, code_marker, segment.cursor)
        limit = segment.end - 1 if code == -1 else code

        # Bullets are only tried where a line opens, up to and including
        # the code marker's position.
        for pos in self._line_starts_between(segment, limit):
            for marker in self.config.bullet_markers:
                if text.startswith(marker, pos, segment.end):
                    return MarkerMatch(pos, pos + len(marker), marker)

        if code == -1:
            return None
        return MarkerMatch(code, code + len(code_marker), code_marker)

    def _line_starts_between(self, segment: _Segment, limit: int):
        if segment.cursor == segment.origin:
            yield segment.origin
        starts = self._line_starts
        i = bisect_left(starts, max(segment.cursor, segment.origin + 1))
        while i < len(starts) and starts[i] <= limit:
            yield starts[i]
            i += 1

    def _code_span(self, segment: _Segment, match: MarkerMatch) -> None:
        closing = segment.find(self.text, match.marker, match.end)
        if closing == -1:
            logger.debug("Unterminated code span at offset %d", match.start)
            segment.elements.append(
                Element(ElementType.TEXT, self.text[match.start:segment.end])
            )
            segment.cursor = segment.end
        else:
            segment.elements.append(
                Element(ElementType.TEXT, self.text[match.end:closing], marker=match.marker)
            )
            segment.cursor = closing + len(match.marker)

    def _close(self, stack: list[_Segment]) -> None:
        segment = stack.pop()
        if segment.cursor < segment.end:
            segment.elements.append(
                Element(ElementType.TEXT, self.text[segment.cursor:segment.end])
            )
        if not stack:
            return

        parent = stack[-1]
        if segment.bullet is None:
            parent.elements.extend(segment.elements)
            return

        body = self.text[segment.origin:segment.end]
        children = segment.elements
        if _is_plain(children, body):
            children = []
        parent.elements.append(
            Element(ElementType.BULLET_POINT, body, children, marker=segment.bullet.marker)
        )


def _is_plain(children: list[Element], body: str) -> bool:
    """True when *children* is just the unparsed *body* again."""
    if len(children) != 1:
        return False
    only = children[0]
    return only.kind is ElementType.TEXT and not only.is_code and only.text == body
