"""Report rendering — text outline, JSON and source outputs."""

from __future__ import annotations

import json
from typing import Any

import textstyling
from textstyling.models import Element, ElementType, TextMarkdown

# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------

_KIND_COLORS = {
    ElementType.QUOTE: "\033[95m",         # magenta
    ElementType.BULLET_POINT: "\033[94m",  # blue
    ElementType.TEXT: "\033[90m",          # grey
}
_CODE_COLOR = "\033[93m"  # yellow
_RESET = "\033[0m"
_INDENT = "  "


def _label(element: Element, color: bool = True) -> str:
    label = "CODE" if element.is_code else element.kind.name
    if not color:
        return label
    prefix = _CODE_COLOR if element.is_code else _KIND_COLORS.get(element.kind, "")
    return f"{prefix}{label}{_RESET}"


def _outline(roots: tuple[Element, ...], color: bool, show_markers: bool) -> list[str]:
    lines = []
    stack = [(element, 0) for element in reversed(roots)]
    while stack:
        element, depth = stack.pop()
        line = f"{_INDENT * depth}{_label(element, color)} {element.text!r}"
        if show_markers and element.marker:
            line += f"  (marker {element.marker!r})"
        lines.append(line)
        stack.extend((child, depth + 1) for child in reversed(element.children))
    return lines


def render_text(result: TextMarkdown, color: bool = True, show_markers: bool = False) -> str:
    """Produce an indented outline of the tree plus a per-kind summary."""
    lines: list[str] = []

    if not result:
        lines.append("(empty document)")
    lines.extend(_outline(result.elements, color, show_markers))

    counts = result.count_by_kind()
    code = sum(1 for e in result.walk() if e.is_code)
    lines.append("-" * 60)
    lines.append(
        f"Elements: {counts[ElementType.QUOTE]} quote, "
        f"{counts[ElementType.BULLET_POINT]} bullet point, "
        f"{counts[ElementType.TEXT]} text ({code} code)"
    )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

def _element_to_dict(element: Element) -> dict[str, Any]:
    return {
        "kind": str(element.kind),
        "text": element.text,
        "marker": element.marker,
        "children": [_element_to_dict(c) for c in element.children],
    }


def render_json(result: TextMarkdown) -> str:
    """Produce stable JSON output (elements in source order)."""
    counts = result.count_by_kind()
    doc: dict[str, Any] = {
        "tool": "textstyling",
        "version": textstyling.__version__,
        "summary": {
            "top_level": len(result),
            "quote": counts[ElementType.QUOTE],
            "bullet_point": counts[ElementType.BULLET_POINT],
            "text": counts[ElementType.TEXT],
            "code": sum(1 for e in result.walk() if e.is_code),
        },
        "elements": [_element_to_dict(e) for e in result],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Source output
# ---------------------------------------------------------------------------

def render_source(result: TextMarkdown) -> str:
    """Rebuild the document the tree was parsed from."""
    return result.source()
