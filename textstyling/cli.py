"""CLI — click-based command-line interface."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from textstyling.config import OUTPUT_FORMATS, TextStylingConfig, load_config
from textstyling.parser import parse
from textstyling.report import render_json, render_source, render_text

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Log parser details to stderr.")
def main(verbose: bool) -> None:
    """textstyling — parse quotes, bullet points and inline code."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _read_input(path: str) -> str:
    """Read PATH (or stdin) with its line terminators left as they are."""
    if path == "-":
        data = click.get_binary_stream("stdin").read()
        return data.decode("utf-8", errors="replace")
    with open(path, encoding="utf-8", errors="replace", newline="") as fh:
        return fh.read()


def _load(path: str, config_path: str | None) -> TextStylingConfig:
    """Load config for *path*, exiting 1 on an invalid config."""
    search_path = str(Path.cwd() if path == "-" else Path(path).resolve().parent)
    try:
        return load_config(search_path=search_path, config_path=config_path)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ───────────────────────────────────────────────────────────────────
# parse
# ───────────────────────────────────────────────────────────────────

@main.command("parse")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--format", "fmt", default=None,
              type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
              help="Output format (default: text).")
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Config file to use instead of .textstyling.yml lookup.")
@click.option("--color/--no-color", "color", default=None,
              help="Colour the text outline.")
@click.option("--show-markers", "show_markers", is_flag=True, default=None,
              help="Show the consumed marker of each element.")
def parse_cmd(
    path: str,
    fmt: str | None,
    config_path: str | None,
    color: bool | None,
    show_markers: bool | None,
) -> None:
    """Parse PATH (or - for stdin) and print the element tree."""
    cfg = _load(path, config_path)

    # CLI flags override config values
    effective_fmt = (fmt or cfg.output.format).lower()
    effective_color = color if color is not None else cfg.output.color
    effective_markers = show_markers if show_markers is not None else cfg.output.show_markers

    try:
        text = _read_input(path)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    result = parse(text, cfg.parser)
    logger.debug("Config: project=%s user=%s",
                 cfg.project_config_path, cfg.user_config_path)

    if effective_fmt == "source":
        # Bytes skip newline translation on the way out.
        click.echo(render_source(result).encode("utf-8"), nl=False)
        return

    if effective_fmt == "json":
        try:
            output = render_json(result)
        except RecursionError:
            click.echo("Error: document nests too deeply for JSON output; "
                       "use --format text or source.", err=True)
            sys.exit(1)
    else:
        output = render_text(result, color=effective_color, show_markers=effective_markers)

    click.echo(output)


# ───────────────────────────────────────────────────────────────────
# roundtrip
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Config file to use instead of .textstyling.yml lookup.")
def roundtrip(path: str, config_path: str | None) -> None:
    """Check that PATH is rebuilt exactly from its parsed tree.

    Exits 0 when the rebuilt text matches, 2 otherwise.
    """
    cfg = _load(path, config_path)
    try:
        text = _read_input(path)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    rebuilt = render_source(parse(text, cfg.parser))
    if rebuilt == text:
        click.echo(f"OK: {len(text)} characters rebuilt exactly.")
        return

    offset = next(
        (i for i, (a, b) in enumerate(zip(text, rebuilt)) if a != b),
        min(len(text), len(rebuilt)),
    )
    click.echo(f"Mismatch at offset {offset}.", err=True)
    sys.exit(2)


# ───────────────────────────────────────────────────────────────────
# markers
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="Config file to use instead of .textstyling.yml lookup.")
def markers(config_path: str | None) -> None:
    """Show the effective marker set."""
    cfg = _load("-", config_path)
    p = cfg.parser
    click.echo(f"Quote:          {p.quote_marker!r}")
    click.echo(f"Bullet points:  {', '.join(repr(m) for m in p.bullet_markers) or '-'}")
    click.echo(f"Code:           {p.code_marker!r}")
    click.echo(f"Line separator: {p.line_separator!r}")
    source = cfg.project_config_path or cfg.user_config_path
    click.echo(f"Source:         {source or 'defaults'}")
