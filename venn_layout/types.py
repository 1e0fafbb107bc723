"""Core value types shared by the geometry, optimizer and layout modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np

SetId = Hashable
RegionKey = Tuple[SetId, ...]


class VectorShapeError(ValueError):
    """Raised when vector operands have mismatched lengths."""


class BisectError(ValueError):
    """Raised when a bisection bracket does not straddle a root."""


class LayoutError(RuntimeError):
    """Raised when the region description cannot be laid out."""


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))


@dataclass(frozen=True)
class IntersectionPoint(Point2D):
    """Boundary vertex produced by two circles; ``parent_index`` holds their indices."""

    parent_index: Tuple[int, ...] = ()


@dataclass(frozen=True)
class TextCentre(Point2D):
    """Label anchor; ``disjoint`` marks a region with no visible area."""

    disjoint: bool = field(default=False, compare=False)


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "radius", float(self.radius))
        if not self.radius >= 0.0:
            raise ValueError(f"circle radius must be non-negative, got {self.radius!r}")

    def moved_to(self, x: float, y: float) -> "Circle":
        return Circle(x, y, self.radius)


Solution = Dict[SetId, Circle]


@dataclass(frozen=True)
class Region:
    """Desired size of the intersection of ``sets``."""

    sets: Tuple[SetId, ...]
    size: float
    label: Optional[str] = None
    weight: float = 1.0

    def __post_init__(self) -> None:
        sets = tuple(self.sets)
        if not sets:
            raise ValueError("region must reference at least one set")
        if len(set(sets)) != len(sets):
            raise ValueError(f"region sets must be distinct, got {sets!r}")
        if self.size < 0:
            raise ValueError(f"region size must be non-negative, got {self.size!r}")
        object.__setattr__(self, "sets", sets)
        object.__setattr__(self, "size", float(self.size))
        object.__setattr__(self, "weight", float(self.weight))

    @property
    def key(self) -> RegionKey:
        return self.sets


def as_region(value: object) -> Region:
    """Coerce a ``Region`` or a ``{"sets": ..., "size": ...}`` mapping into a ``Region``."""

    if isinstance(value, Region):
        return value
    if isinstance(value, dict):
        return Region(
            sets=tuple(value["sets"]),
            size=value["size"],
            label=value.get("label"),
            weight=value.get("weight", 1.0),
        )
    raise TypeError(f"cannot interpret {type(value).__name__} as a region")


@dataclass
class Arc:
    circle: Circle
    width: float
    p1: Point2D
    p2: Point2D


@dataclass
class Stats:
    """Decomposition of an intersection-area query."""

    area: float = 0.0
    arc_area: float = 0.0
    polygon_area: float = 0.0
    arcs: List[Arc] = field(default_factory=list)
    inner_points: List[IntersectionPoint] = field(default_factory=list)
    intersection_points: List[IntersectionPoint] = field(default_factory=list)


@dataclass
class SimplexPoint:
    coordinates: np.ndarray
    fx: float
    id: int


def circles_to_vector(solution: Solution, order: Sequence[SetId]) -> np.ndarray:
    """Flatten circle centres into ``[x0, y0, x1, y1, ...]`` following ``order``."""

    vec = np.zeros(2 * len(order), dtype=float)
    for idx, setid in enumerate(order):
        circle = solution[setid]
        vec[2 * idx] = circle.x
        vec[2 * idx + 1] = circle.y
    return vec


def vector_to_circles(
    vec: np.ndarray, order: Sequence[SetId], radii: Dict[SetId, float]
) -> Solution:
    return {
        setid: Circle(vec[2 * idx], vec[2 * idx + 1], radii[setid])
        for idx, setid in enumerate(order)
    }


__all__ = [
    "Arc",
    "BisectError",
    "Circle",
    "IntersectionPoint",
    "LayoutError",
    "Point2D",
    "Region",
    "RegionKey",
    "SetId",
    "SimplexPoint",
    "Solution",
    "Stats",
    "TextCentre",
    "VectorShapeError",
    "as_region",
    "circles_to_vector",
    "vector_to_circles",
]
