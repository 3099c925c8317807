"""Recursive parser for the supported markdown subset."""

from textstyling.parser.inline import find_elements
from textstyling.parser.markers import DEFAULT_CONFIG, ParserConfig
from textstyling.parser.parser import parse

__all__ = ["DEFAULT_CONFIG", "ParserConfig", "find_elements", "parse"]
