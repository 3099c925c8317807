"""Parser — split a document into quotes and inline runs.

Supported markup:

* Paragraphs starting with ``"> "`` become quotes.  Quotes can't contain
  other elements.
* Text enclosed in backticks becomes an inline code span.
* Lines starting with ``"+ "`` or ``"* "`` become bullet points.  Bullet
  points can contain nested elements, like code.

Anything else, malformed markup included, is plain text.  Parsing never
fails.
"""

from __future__ import annotations

import logging

from textstyling.models import Element, ElementType, TextMarkdown
from textstyling.parser.inline import InlineScanner
from textstyling.parser.markers import (
    DEFAULT_CONFIG,
    ParserConfig,
    end_of_paragraph,
    find_at_line_start,
)

logger = logging.getLogger(__name__)


def parse(text: str, config: ParserConfig | None = None) -> TextMarkdown:
    """Parse *text* and return its top-level elements in source order."""
    config = config or DEFAULT_CONFIG
    scanner = InlineScanner(text, config)
    quote_marker = config.quote_marker
    elements: list[Element] = []
    cursor = 0

    while True:
        start = find_at_line_start(text, quote_marker, cursor)
        if start == -1:
            break

        if cursor < start:
            elements.extend(scanner.scan(cursor, start))

        # A quote runs to the end of its paragraph.
        body_start = start + len(quote_marker)
        end_of_quote = end_of_paragraph(text, body_start, config.line_separator)
        elements.append(
            Element(ElementType.QUOTE, text[body_start:end_of_quote], marker=quote_marker)
        )
        cursor = end_of_quote

    if cursor < len(text):
        elements.extend(scanner.scan(cursor, len(text)))

    logger.debug("Parsed %d characters into %d top-level elements", len(text), len(elements))
    return TextMarkdown(elements)
