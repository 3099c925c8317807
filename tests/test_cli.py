"""Integration tests for the CLI."""

import json

import pytest
from click.testing import CliRunner

import textstyling.config as config_mod
from textstyling.cli import main


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_mod, "USER_CONFIG_PATH", tmp_path / "no_home" / "config.yml")


@pytest.fixture
def doc(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("> quoted\n+ item `x`\n")
    return path


@pytest.fixture
def crlf_doc(tmp_path):
    path = tmp_path / "windows.md"
    path.write_bytes(b"> a\r\n+ b `c`\r\n")
    return path


class TestParseCommand:
    def test_help(self):
        result = CliRunner().invoke(main, ["parse", "--help"])
        assert result.exit_code == 0
        assert "--format" in result.output

    def test_text_output(self, doc):
        result = CliRunner().invoke(main, ["parse", "--no-color", str(doc)])
        assert result.exit_code == 0
        assert "QUOTE 'quoted\\n'" in result.output
        assert "  CODE 'x'" in result.output

    def test_json_output(self, doc):
        result = CliRunner().invoke(main, ["parse", "--format", "json", str(doc)])
        assert result.exit_code == 0
        parsed = json.loads(result.output)
        assert [e["kind"] for e in parsed["elements"]] == ["quote", "bullet_point"]

    def test_source_output(self, doc):
        result = CliRunner().invoke(main, ["parse", "--format", "source", str(doc)])
        assert result.exit_code == 0
        assert result.output == doc.read_text()

    def test_stdin(self):
        result = CliRunner().invoke(main, ["parse", "--format", "json", "-"], input="`a`")
        assert result.exit_code == 0
        assert json.loads(result.output)["elements"][0]["text"] == "a"

    def test_crlf_file_kept_as_is(self, crlf_doc):
        result = CliRunner().invoke(main, ["parse", "--format", "json", str(crlf_doc)])
        assert result.exit_code == 0
        elements = json.loads(result.output)["elements"]
        assert elements[0]["text"] == "a\r\n"
        assert elements[1]["children"][-1]["text"] == "\r\n"

    def test_crlf_source_output_is_byte_exact(self, crlf_doc):
        result = CliRunner().invoke(main, ["parse", "--format", "source", str(crlf_doc)])
        assert result.exit_code == 0
        assert result.stdout_bytes == crlf_doc.read_bytes()

    def test_stdin_keeps_lone_cr(self):
        result = CliRunner().invoke(
            main, ["parse", "--format", "json", "-"], input=b"x\r+ y"
        )
        assert result.exit_code == 0
        elements = json.loads(result.output)["elements"]
        assert [e["kind"] for e in elements] == ["text", "bullet_point"]
        assert elements[0]["text"] == "x\r"

    def test_project_config_applies(self, tmp_path, doc):
        (tmp_path / ".textstyling.yml").write_text("""\
parser:
  quote_marker: "| "
output:
  format: json
""")
        result = CliRunner().invoke(main, ["parse", str(doc)])
        assert result.exit_code == 0
        kinds = [e["kind"] for e in json.loads(result.output)["elements"]]
        assert kinds == ["text", "bullet_point"]

    def test_flag_overrides_config(self, tmp_path, doc):
        (tmp_path / ".textstyling.yml").write_text("output:\n  format: json\n")
        result = CliRunner().invoke(main, ["parse", "--format", "source", str(doc)])
        assert result.exit_code == 0
        assert result.output == doc.read_text()

    def test_invalid_config_exits_1(self, tmp_path, doc):
        bad = tmp_path / "bad.yml"
        bad.write_text('parser:\n  code_marker: ""\n')
        result = CliRunner().invoke(main, ["parse", "--config", str(bad), str(doc)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(main, ["parse", str(tmp_path / "missing.md")])
        assert result.exit_code == 2


class TestRoundtripCommand:
    def test_roundtrip_ok(self, doc):
        result = CliRunner().invoke(main, ["roundtrip", str(doc)])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_roundtrip_crlf(self, crlf_doc):
        result = CliRunner().invoke(main, ["roundtrip", str(crlf_doc)])
        assert result.exit_code == 0
        assert "OK: 14 characters" in result.output

    def test_roundtrip_stdin(self):
        result = CliRunner().invoke(main, ["roundtrip", "-"], input="`open\n* ``\n")
        assert result.exit_code == 0


class TestMarkersCommand:
    def test_defaults(self):
        result = CliRunner().invoke(main, ["markers"])
        assert result.exit_code == 0
        assert "'> '" in result.output
        assert "'+ ', '* '" in result.output

    def test_explicit_config(self, tmp_path):
        cfg = tmp_path / "markers.yml"
        cfg.write_text('parser:\n  bullet_markers: ["- "]\n')
        result = CliRunner().invoke(main, ["markers", "--config", str(cfg)])
        assert result.exit_code == 0
        assert "'- '" in result.output
        assert str(cfg) in result.output
