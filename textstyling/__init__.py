"""Parse a small markdown subset into a tree of typed elements."""

from textstyling.models import Element, ElementType, TextMarkdown
from textstyling.parser import ParserConfig, find_elements, parse

__version__ = "0.1.0"

__all__ = [
    "Element",
    "ElementType",
    "ParserConfig",
    "TextMarkdown",
    "__version__",
    "find_elements",
    "parse",
]
