"""Configuration paths and render defaults for classdep."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from .plantuml import DEFAULT_ROOT_COLOR, DEFAULT_ROOT_EDGE_COLOR, DEFAULT_WRAP_WIDTH

logger = logging.getLogger(__name__)

BASE_DIR = Path(os.environ.get("CLASSDEP_HOME", str(Path.home() / ".classdep"))).expanduser()
STATE_FILE = BASE_DIR / "state.json"
CONFIG_FILE = BASE_DIR / "config.toml"

DEFAULT_OUTPUT_FILE = "classdiagram.puml"
DEFAULT_VIEWER_COMMAND = "code"


@dataclass
class RenderOptions:
    wrap_width: int = DEFAULT_WRAP_WIDTH
    root_color: str = DEFAULT_ROOT_COLOR
    root_edge_color: str = DEFAULT_ROOT_EDGE_COLOR
    output_file: str = DEFAULT_OUTPUT_FILE
    viewer_command: str = DEFAULT_VIEWER_COMMAND


def load_full_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the entire TOML config, or an empty dict if missing or broken."""
    path = config_file or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def load_render_options(config_file: Optional[Path] = None) -> RenderOptions:
    section = load_full_config(config_file).get("render", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring [render] config: expected a table")
        return RenderOptions()

    defaults = RenderOptions()
    wrap_width = section.get("wrap_width", defaults.wrap_width)
    if not isinstance(wrap_width, int) or wrap_width < 1:
        logger.warning("Ignoring invalid wrap_width %r", wrap_width)
        wrap_width = defaults.wrap_width

    return RenderOptions(
        wrap_width=wrap_width,
        root_color=str(section.get("root_color", defaults.root_color)),
        root_edge_color=str(section.get("root_edge_color", defaults.root_edge_color)),
        output_file=str(section.get("output_file", defaults.output_file)),
        viewer_command=str(section.get("viewer_command", defaults.viewer_command)),
    )
