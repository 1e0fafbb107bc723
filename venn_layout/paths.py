"""SVG path encodings of circles and of intersection regions."""

from __future__ import annotations

from typing import List, Sequence

from .geometry import intersection_area
from .types import Circle, Stats

EMPTY_PATH = "M 0 0"


def _fmt(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _join(parts: Sequence[object]) -> str:
    return " ".join(p if isinstance(p, str) else _fmt(p) for p in parts)


def circle_path(circle: Circle) -> str:
    """Closed path of two semicircular arcs; :func:`circle_from_path` inverts it."""

    x, y, r = circle.x, circle.y, circle.radius
    return _join(
        [
            "\nM", x, y,
            "\nm", -r, 0,
            "\na", r, r, 0, 1, 0, r * 2, 0,
            "\na", r, r, 0, 1, 0, -r * 2, 0,
        ]
    )


def circle_from_path(path: str) -> Circle:
    tokens = path.split(" ")
    if len(tokens) < 5 or tokens[0].strip() != "M" or tokens[3].strip() != "m":
        raise ValueError(f"not a circle path: {path!r}")
    return Circle(float(tokens[1]), float(tokens[2]), -float(tokens[4]))


def intersection_area_path(circles: Sequence[Circle]) -> str:
    """Outline of the region common to all ``circles`` as elliptical-arc commands."""

    stats = Stats()
    intersection_area(circles, stats)
    arcs = stats.arcs

    if not arcs:
        return EMPTY_PATH
    if len(arcs) == 1:
        return circle_path(arcs[0].circle)

    parts: List[object] = ["\nM", arcs[0].p2.x, arcs[0].p2.y]
    for arc in arcs:
        r = arc.circle.radius
        wide = arc.width > r
        parts.extend(["\nA", r, r, 0, 1 if wide else 0, 1, arc.p1.x, arc.p1.y])
    return _join(parts)


__all__ = ["EMPTY_PATH", "circle_from_path", "circle_path", "intersection_area_path"]
