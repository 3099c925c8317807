"""Tests for report rendering."""

import json

import textstyling
from textstyling.parser import parse
from textstyling.report import render_json, render_source, render_text

_DOC = "intro\n> quoted\n+ see `x` here\n"


class TestTextOutput:
    def test_outline(self):
        output = render_text(parse(_DOC), color=False)
        lines = output.splitlines()
        assert lines[0] == "TEXT 'intro\\n'"
        assert lines[1] == "QUOTE 'quoted\\n'"
        assert lines[2] == "BULLET_POINT 'see `x` here\\n'"
        assert lines[3] == "  TEXT 'see '"
        assert lines[4] == "  CODE 'x'"
        assert lines[5] == "  TEXT ' here\\n'"

    def test_summary(self):
        output = render_text(parse(_DOC), color=False)
        assert output.splitlines()[-1] == "Elements: 1 quote, 1 bullet point, 4 text (1 code)"

    def test_show_markers(self):
        output = render_text(parse("> q"), color=False, show_markers=True)
        assert "(marker '> ')" in output

    def test_color(self):
        assert "\033[" in render_text(parse("> q"))
        assert "\033[" not in render_text(parse("> q"), color=False)

    def test_empty_document(self):
        assert "(empty document)" in render_text(parse(""), color=False)

    def test_deep_nesting(self):
        lines = render_text(parse("+ " * 1500), color=False).splitlines()
        assert lines[0].startswith("BULLET_POINT '+ + ")
        assert lines[1499] == "  " * 1499 + "BULLET_POINT ''"
        assert lines[-1].startswith("Elements: 0 quote, 1500 bullet point")


class TestJsonOutput:
    def test_valid_json(self):
        doc = json.loads(render_json(parse(_DOC)))
        assert doc["tool"] == "textstyling"
        assert doc["version"] == textstyling.__version__

    def test_summary_counts(self):
        doc = json.loads(render_json(parse(_DOC)))
        assert doc["summary"] == {
            "top_level": 3,
            "quote": 1,
            "bullet_point": 1,
            "text": 4,
            "code": 1,
        }

    def test_nested_elements(self):
        doc = json.loads(render_json(parse(_DOC)))
        bullet = doc["elements"][2]
        assert bullet["kind"] == "bullet_point"
        assert bullet["marker"] == "+ "
        assert [c["text"] for c in bullet["children"]] == ["see ", "x", " here\n"]
        assert bullet["children"][1]["marker"] == "`"


class TestSourceOutput:
    def test_rebuilds_input(self):
        assert render_source(parse(_DOC)) == _DOC
