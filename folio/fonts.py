"""Embedded font stylesheet generation for Folio.

Font binaries are read from the assets directory, base64-encoded and inlined
as data URIs into the ``fonts.css`` template, so the site needs no separate
font requests. The template receives ``font_data``, a list of faces:

    {% for font in font_data %}
    @font-face {
      font-family: '{{ font.name }}';
      font-weight: {{ font.weight }};
      font-style: {{ font.style }};
      src: {{ font.src }};
    }
    {% endfor %}
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Template

from .logging import get_logger
from .minify import minify_css

logger = get_logger("fonts")

FONT_TEMPLATE = "fonts.css"


@dataclass(frozen=True)
class FontFace:
    """A single @font-face entry.

    Attributes:
        name: Font family name.
        weight: CSS font-weight.
        style: CSS font-style.
        src: CSS ``src`` value with the inlined data URI.
    """

    name: str
    weight: int
    style: str
    src: str


def font_src(data: bytes, file_format: str) -> str:
    """Return a CSS ``src`` value embedding font bytes as a data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return (
        f"url(data:font/{file_format};charset=utf8;base64,{encoded}) "
        f"format('{file_format}')"
    )


def font_faces(
    assets_dir: Path, fonts: Iterable[Mapping[str, Any]]
) -> list[FontFace]:
    """Read and encode the configured font files.

    Args:
        assets_dir: Directory holding the font binaries.
        fonts: Font entries with ``file`` and optional ``family``,
            ``weight`` and ``style`` keys.

    Returns:
        List of FontFace objects in configuration order.
    """
    faces = []
    for entry in fonts:
        path = assets_dir / str(entry["file"])
        stem = path.stem.lower()
        weight = entry.get("weight") or (700 if "bold" in stem else 400)
        style = entry.get("style") or ("italic" if "italic" in stem else "normal")
        faces.append(
            FontFace(
                name=str(entry.get("family") or path.stem),
                weight=int(weight),
                style=str(style),
                src=font_src(path.read_bytes(), path.suffix.lstrip(".").lower()),
            )
        )
    return faces


def compile_font_css(
    assets_dir: Path, output_dir: Path, fonts: Iterable[Mapping[str, Any]]
) -> Path:
    """Render, minify and write the embedded font stylesheet.

    Args:
        assets_dir: Source assets directory containing ``fonts.css``.
        output_dir: Build output root.
        fonts: Font entries from the configuration.

    Returns:
        Path of the written stylesheet.
    """
    template = Template((assets_dir / FONT_TEMPLATE).read_text(encoding="utf-8"))
    css = template.render(font_data=font_faces(assets_dir, fonts))
    target = output_dir / "assets" / FONT_TEMPLATE
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(minify_css(css), encoding="utf-8")
    logger.info("Writing to %s", target)
    return target
