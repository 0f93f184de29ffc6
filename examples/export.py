# examples/export.py
from __future__ import annotations
from typing import Iterable, Tuple

from cg2d.geom import Bbox, Pt


def dump_svg(path: str, tris: Iterable[Tuple[Pt, Pt, Pt]], bbox: Bbox) -> None:
    """
    SVG з контурами трикутників.
    tris: трійки точок (наприклад, Delaunay2D.triangle_points()).
    """
    w = bbox.width or 1.0
    h = bbox.height or 1.0
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="{bbox.min_x} {bbox.min_y} {w} {h}">',
        f'<rect x="{bbox.min_x}" y="{bbox.min_y}" width="{w}" height="{h}" stroke="none" fill="white" />',
    ]
    stroke = max(w, h) / 1000.0
    for a, b, c in tris:
        lines.append(
            f'<polygon points="{a.x},{a.y} {b.x},{b.y} {c.x},{c.y}" '
            f'fill="none" stroke="black" stroke-width="{stroke}" />'
        )
    lines.append("</svg>")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
