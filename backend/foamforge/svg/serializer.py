"""Write SVG output for a cut path: ``d`` strings and downloadable documents."""

from __future__ import annotations

import re
from html import escape
from typing import Any

import numpy as np
from numpy.typing import NDArray

from foamforge.models.pattern import Pattern

CANVAS = 100.0


def _fmt(v: float) -> str:
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def points_to_path_d(points: NDArray[np.float64], flip_y: bool = False) -> str:
    """Polyline ``d`` attribute: ``M x0,y0 L x1,y1 L ...`` in point order.

    Patterns are Cartesian (Y up) while SVG is Y down; pass ``flip_y`` to get
    an upright drawing inside a ``0 0 100 100`` viewBox.
    """
    if len(points) == 0:
        return ""
    cmds = []
    for i, (x, y) in enumerate(points):
        if flip_y:
            y = CANVAS - y
        cmds.append(f"{'M' if i == 0 else 'L'} {_fmt(x)},{_fmt(y)}")
    return " ".join(cmds)


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = CANVAS,
    canvas_h: float = CANVAS,
    title: str = "",
    description: str = "",
) -> str:
    """Generate clean SVG markup from element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    for elem in elements:
        tag = elem.get("tag", "path")
        attrs = {k: v for k, v in elem.items() if k != "tag"}
        attr_str = " ".join(f'{k}="{escape(str(v))}"' for k, v in attrs.items())
        lines.append(f"  <{tag} {attr_str} />")

    lines.append("</svg>")
    return "\n".join(lines)


def pattern_to_svg(pattern: Pattern) -> str:
    """Standalone SVG document: unfilled black 0.5-wide stroke along the cut path."""
    d = points_to_path_d(pattern.as_array(), flip_y=True)
    return serialize_svg(
        [{"tag": "path", "d": d, "fill": "none", "stroke": "black", "stroke-width": "0.5"}],
        title=pattern.name,
        description=pattern.description,
    )


def download_filename(name: str) -> str:
    """Pattern name lower-cased with whitespace runs replaced by '_', plus '.svg'."""
    stem = re.sub(r"\s+", "_", name).lower()
    stem = stem.replace('"', "").replace("/", "_").replace("\\", "_")
    return f"{stem or 'pattern'}.svg"
