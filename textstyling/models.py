"""Data models used throughout textstyling."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Element type
# ---------------------------------------------------------------------------


class ElementType(enum.Enum):
    """Kind of markdown element a node represents."""

    QUOTE = "quote"
    BULLET_POINT = "bullet_point"
    TEXT = "text"

    @classmethod
    def from_str(cls, label: str) -> ElementType:
        return cls[label.upper()]

    def __str__(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Element:
    """One node of the parsed tree.

    ``text`` never includes the opening marker.  ``marker`` records which
    marker was consumed (``""`` for plain text) and takes no part in
    equality.
    """

    kind: ElementType
    text: str
    children: tuple[Element, ...] = ()
    marker: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        # Accept any sequence for children but store an immutable tuple.
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_code(self) -> bool:
        """True for an inline code span (its backticks were stripped)."""
        return self.kind is ElementType.TEXT and bool(self.marker)

    def walk(self) -> Iterator[Element]:
        """Yield this element and its descendants in pre-order."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def source(self) -> str:
        """Rebuild the exact markup this element was parsed from."""
        parts: list[str] = []
        # Holds elements still to rebuild and closing markers still to write.
        stack: list[Element | str] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            parts.append(item.marker)
            if item.is_code:
                stack.append(item.marker)
            if item.children:
                stack.extend(reversed(item.children))
            else:
                parts.append(item.text)
        return "".join(parts)


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class TextMarkdown(Sequence[Element]):
    """Ordered top-level elements of a parsed document."""

    elements: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    def __getitem__(self, index):
        return self.elements[index]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextMarkdown):
            return self.elements == other.elements
        if isinstance(other, (list, tuple)):
            return self.elements == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.elements)

    # ---- helpers ----
    def walk(self) -> Iterator[Element]:
        """Yield every element of the tree in document order."""
        for element in self.elements:
            yield from element.walk()

    def count_by_kind(self) -> dict[ElementType, int]:
        """Count all nodes (nested ones included) per kind."""
        counts = {kind: 0 for kind in ElementType}
        for element in self.walk():
            counts[element.kind] += 1
        return counts

    def source(self) -> str:
        return "".join(element.source() for element in self.elements)
