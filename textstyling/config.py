"""Settings for the parser and the report, read from YAML files.

Lookup order, first hit wins per key:

1. an explicit ``--config`` file, which then is the only file read;
2. ``.textstyling.yml`` next to the parsed file, or in a directory above
   it up to the repository root;
3. ``~/.textstyling/config.yml``;
4. the built-in marker set and a plain text outline.

Example::

    parser:
      quote_marker: "> "
      bullet_markers: ["+ ", "* "]
      code_marker: "`"
      line_separator: "\\n"
    output:
      format: text        # text | json | source
      color: true
      show_markers: false

A file that cannot be read or is not a YAML mapping is skipped.  A
readable file whose values do not form a valid marker set or output
format raises ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from textstyling.parser.markers import DEFAULT_CONFIG, ParserConfig

CONFIG_FILENAME = ".textstyling.yml"
USER_CONFIG_DIR = Path.home() / ".textstyling"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"

OUTPUT_FORMATS = ("text", "json", "source")

_SECTIONS = ("parser", "output")


@dataclass
class OutputConfig:
    """How parse results are printed."""

    format: str = "text"
    color: bool = True
    show_markers: bool = False

    def __post_init__(self) -> None:
        self.format = self.format.lower()
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {self.format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}."
            )


@dataclass
class TextStylingConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Files the values came from; None when a layer was not used.
    project_config_path: str | None = None
    user_config_path: str | None = None


def load_config(
    search_path: str | None = None,
    config_path: str | Path | None = None,
) -> TextStylingConfig:
    """Resolve the effective settings.

    *search_path* is the directory where the project file lookup starts;
    without it only the user file is read.  *config_path* replaces both
    lookups.
    """
    if config_path is not None:
        explicit = _read_mapping(Path(config_path))
        cfg = _build(_layered(explicit))
        cfg.project_config_path = str(config_path)
        return cfg

    user = _read_mapping(USER_CONFIG_PATH)
    project = None
    project_file = _find_project_config(Path(search_path)) if search_path else None
    if project_file is not None:
        project = _read_mapping(project_file)

    cfg = _build(_layered(project, user))
    cfg.project_config_path = str(project_file) if project else None
    cfg.user_config_path = str(USER_CONFIG_PATH) if user else None
    return cfg


def load_parser_config(
    search_path: str | None = None,
    config_path: str | Path | None = None,
) -> ParserConfig:
    return load_config(search_path=search_path, config_path=config_path).parser


def load_output_config(
    search_path: str | None = None,
    config_path: str | Path | None = None,
) -> OutputConfig:
    return load_config(search_path=search_path, config_path=config_path).output


def _find_project_config(start: Path) -> Path | None:
    """Nearest project file from *start* upwards, stopping at a ``.git`` directory."""
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (directory / ".git").exists():
            return None
    return None


def _read_mapping(path: Path) -> dict | None:
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else None


def _layered(*layers: dict | None) -> dict[str, dict]:
    """Combine per-section settings; earlier layers take precedence."""
    combined: dict[str, dict] = {name: {} for name in _SECTIONS}
    for layer in reversed(layers):
        for name in _SECTIONS:
            section = (layer or {}).get(name)
            if isinstance(section, dict):
                combined[name].update(section)
    return combined


def _build(settings: dict[str, dict]) -> TextStylingConfig:
    markers = settings["parser"]
    output = settings["output"]

    bullets = markers.get("bullet_markers", DEFAULT_CONFIG.bullet_markers)
    if isinstance(bullets, str):
        bullets = [bullets]
    elif not isinstance(bullets, (list, tuple)):
        bullets = []

    return TextStylingConfig(
        parser=ParserConfig(
            quote_marker=str(markers.get("quote_marker", DEFAULT_CONFIG.quote_marker)),
            bullet_markers=tuple(str(marker) for marker in bullets),
            code_marker=str(markers.get("code_marker", DEFAULT_CONFIG.code_marker)),
            line_separator=str(markers.get("line_separator", DEFAULT_CONFIG.line_separator)),
        ),
        output=OutputConfig(
            format=str(output.get("format", "text")),
            color=bool(output.get("color", True)),
            show_markers=bool(output.get("show_markers", False)),
        ),
    )
