"""
Configuration for perfsheet.

Holds default input/output locations and the workbook styling object that
is passed explicitly into the renderer.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from perfsheet.core.models import CaptureKind

# Environment variables overriding default locations
ENV_HAR_DIR = "PERFSHEET_HAR_DIR"
ENV_LIGHTHOUSE_DIR = "PERFSHEET_LIGHTHOUSE_DIR"
ENV_OUTPUT = "PERFSHEET_OUTPUT"

DEFAULT_INPUT_DIRS = {
    CaptureKind.NETWORK: "harRepo",
    CaptureKind.AUDIT: "lighthouseRepo",
}

DEFAULT_OUTPUT_FILES = {
    CaptureKind.NETWORK: "output.xlsx",
    CaptureKind.AUDIT: "lighthouse-output.xlsx",
}

# File extension scanned for each capture kind
CAPTURE_EXTENSIONS = {
    CaptureKind.NETWORK: ".har",
    CaptureKind.AUDIT: ".json",
}


def get_default_input_dir(kind: CaptureKind) -> Path:
    """
    Get the directory scanned for capture files.

    Parameters
    ----
    kind : CaptureKind
        Capture kind

    Returns
    ----
    Path
        Environment override if set, otherwise a directory under the
        current working directory
    """
    env_name = ENV_HAR_DIR if kind == CaptureKind.NETWORK else ENV_LIGHTHOUSE_DIR
    override = os.environ.get(env_name)
    if override:
        return Path(override)
    return Path.cwd() / DEFAULT_INPUT_DIRS[kind]


def get_default_output_path(kind: CaptureKind) -> Path:
    """Get the workbook path written for a capture kind."""
    override = os.environ.get(ENV_OUTPUT)
    if override:
        return Path(override)
    return Path.cwd() / DEFAULT_OUTPUT_FILES[kind]


class FontStyle(BaseModel):
    """Font settings for a cell."""

    model_config = ConfigDict(frozen=True)

    name: str = "Arial"
    size: float = 10
    bold: bool = False
    color: Optional[str] = None


class RenderStyle(BaseModel):
    """
    Workbook styling passed into the renderer.

    Colours are '#RRGGBB' strings. Rating colours are keyed by Rating value
    ('Good', 'Needs Work', 'Poor').
    """

    model_config = ConfigDict(frozen=True)

    font_default: FontStyle = FontStyle()
    font_bold: FontStyle = FontStyle(bold=True)
    font_endpoint: FontStyle = FontStyle(name="Consolas", size=8.5)
    font_metric_name: FontStyle = FontStyle(name="Consolas", size=9)
    font_header: FontStyle = FontStyle(bold=True, color="#FFFFFF")
    font_section_title: FontStyle = FontStyle(size=11, bold=True, color="#FFFFFF")

    header_fill: str = "#394B67"
    section_title_fill: str = "#2C3E50"
    even_row_fill: str = "#F2F4F7"
    border_color: str = "#D0D5DD"

    rating_fills: Dict[str, str] = Field(
        default_factory=lambda: {
            "Good": "#E6F4EA",
            "Needs Work": "#FEF7E0",
            "Poor": "#FCE8E6",
        }
    )
    rating_font_colors: Dict[str, str] = Field(
        default_factory=lambda: {
            "Good": "#137333",
            "Needs Work": "#E37400",
            "Poor": "#C5221F",
        }
    )

    # Blank rows inserted between sheet sections
    section_gap: int = 2


DEFAULT_STYLE = RenderStyle()


@dataclass
class ConverterSettings:
    """Settings for converting a directory of captures into one workbook."""

    kind: CaptureKind
    input_dir: Path
    output_path: Path
    fail_fast: bool = False  # Abort the batch on the first unparseable file
    strict_entries: bool = False  # Treat an invalid entry as fatal for its file

    @classmethod
    def defaults(cls, kind: CaptureKind) -> "ConverterSettings":
        """Build settings from default locations for a capture kind."""
        return cls(
            kind=kind,
            input_dir=get_default_input_dir(kind),
            output_path=get_default_output_path(kind),
        )

    @property
    def extension(self) -> str:
        """File extension scanned in input_dir."""
        return CAPTURE_EXTENSIONS[self.kind]
