"""Exact area computations for circles and their common intersections."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Union

from .types import Arc, Circle, IntersectionPoint, Point2D, Stats

logger = logging.getLogger(__name__)

SMALL = 1e-10

PointLike = Union[Point2D, Circle]


def distance(p1: PointLike, p2: PointLike) -> float:
    """Euclidean distance between two objects exposing ``x`` and ``y``."""

    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def get_center(points: Iterable[PointLike]) -> Point2D:
    pts = list(points)
    if not pts:
        raise ValueError("cannot compute the center of an empty point set")
    sx = sum(pt.x for pt in pts)
    sy = sum(pt.y for pt in pts)
    return Point2D(sx / len(pts), sy / len(pts))


def circle_area(r: float, width: float) -> float:
    """Area of the circular segment of radius ``r`` whose sagitta is ``width``."""

    if width <= 0.0 or r <= 0.0:
        return 0.0
    width = min(width, 2.0 * r)
    cos_half = max(-1.0, min(1.0, 1.0 - width / r))
    return r * r * math.acos(cos_half) - (r - width) * math.sqrt(max(width * (2.0 * r - width), 0.0))


def circle_overlap(r1: float, r2: float, d: float) -> float:
    """Lens area of two circles of radii ``r1``, ``r2`` whose centers are ``d`` apart."""

    if d >= r1 + r2:
        return 0.0
    if d <= abs(r1 - r2):
        r = min(r1, r2)
        return math.pi * r * r

    w1 = r1 - (d * d - r2 * r2 + r1 * r1) / (2.0 * d)
    w2 = r2 - (d * d - r1 * r1 + r2 * r2) / (2.0 * d)
    return circle_area(r1, w1) + circle_area(r2, w2)


def circle_circle_intersection(p1: Circle, p2: Circle) -> List[Point2D]:
    """Return the two crossing points of ``p1`` and ``p2``.

    Disjoint, nested, tangent and coincident circles all yield an empty list;
    a single touching point is not reported.
    """

    d = distance(p1, p2)
    r1 = p1.radius
    r2 = p2.radius

    if d >= r1 + r2 or d <= abs(r1 - r2):
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))
    x0 = p1.x + a * (p2.x - p1.x) / d
    y0 = p1.y + a * (p2.y - p1.y) / d
    rx = -(p2.y - p1.y) * (h / d)
    ry = -(p2.x - p1.x) * (h / d)

    return [Point2D(x0 + rx, y0 - ry), Point2D(x0 - rx, y0 + ry)]


def contained_in_circles(point: PointLike, circles: Sequence[Circle]) -> bool:
    return all(distance(point, circle) <= circle.radius + SMALL for circle in circles)


def get_intersection_points(circles: Sequence[Circle]) -> List[IntersectionPoint]:
    points: List[IntersectionPoint] = []
    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            for p in circle_circle_intersection(circles[i], circles[j]):
                points.append(IntersectionPoint(p.x, p.y, parent_index=(i, j)))
    return points


def _sub_polygon_area(p2: Point2D, p1: Point2D) -> float:
    return (p2.x + p1.x) * (p1.y - p2.y)


def _tightest_arc(
    circles: Sequence[Circle], p1: IntersectionPoint, p2: IntersectionPoint
) -> Optional[Arc]:
    mid = Point2D((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)
    best: Optional[Arc] = None
    for index in p1.parent_index:
        if index not in p2.parent_index:
            continue
        circle = circles[index]
        a1 = math.atan2(p1.x - circle.x, p1.y - circle.y)
        a2 = math.atan2(p2.x - circle.x, p2.y - circle.y)

        angle_diff = a2 - a1
        if angle_diff < 0:
            angle_diff += 2.0 * math.pi

        # angle halfway between the endpoints along this circle
        a = a2 - angle_diff / 2.0
        rim = Point2D(circle.x + circle.radius * math.sin(a), circle.y + circle.radius * math.cos(a))
        width = min(distance(mid, rim), circle.radius * 2.0)

        if best is None or best.width > width:
            best = Arc(circle=circle, width=width, p1=p1, p2=p2)
    return best


def _unique_circles(circles: Iterable[Circle]) -> List[Circle]:
    # coincident circles cross nowhere and would leave duplicate boundary vertices
    unique: List[Circle] = []
    for circle in circles:
        if not any(
            distance(circle, other) <= SMALL and abs(circle.radius - other.radius) <= SMALL
            for other in unique
        ):
            unique.append(circle)
    return unique


def intersection_area(circles: Sequence[Circle], stats: Optional[Stats] = None) -> float:
    """Area contained in every circle of ``circles``.

    When ``stats`` is given it receives the arc/polygon decomposition of the
    region boundary.
    """

    circles = _unique_circles(circles)
    if not circles:
        raise ValueError("intersection_area requires at least one circle")

    intersection_points = get_intersection_points(circles)
    inner_points = [p for p in intersection_points if contained_in_circles(p, circles)]

    arc_area = 0.0
    polygon_area = 0.0
    arcs: List[Arc] = []

    if len(inner_points) > 1:
        center = get_center(inner_points)
        sorted_points = sorted(
            inner_points,
            key=lambda p: math.atan2(p.x - center.x, p.y - center.y),
            reverse=True,
        )

        p2 = sorted_points[-1]
        for p1 in sorted_points:
            polygon_area += _sub_polygon_area(p2, p1)
            arc = _tightest_arc(circles, p1, p2)
            if arc is not None:
                arcs.append(arc)
                arc_area += circle_area(arc.circle.radius, arc.width)
                p2 = p1
    else:
        # no boundary vertices: disjoint, or the smallest circle is nested in all others
        smallest = min(circles, key=lambda c: c.radius)
        disjoint = any(
            distance(c, smallest) > abs(smallest.radius - c.radius) for c in circles
        )
        if not disjoint:
            r = smallest.radius
            arc_area = r * r * math.pi
            arcs.append(
                Arc(
                    circle=smallest,
                    width=smallest.radius * 2.0,
                    p1=Point2D(smallest.x, smallest.y + r),
                    p2=Point2D(smallest.x - SMALL, smallest.y + r),
                )
            )

    polygon_area /= 2.0
    area = arc_area + polygon_area

    if stats is not None:
        stats.area = area
        stats.arc_area = arc_area
        stats.polygon_area = polygon_area
        stats.arcs = arcs
        stats.inner_points = inner_points
        stats.intersection_points = intersection_points

    return area


__all__ = [
    "SMALL",
    "circle_area",
    "circle_circle_intersection",
    "circle_overlap",
    "contained_in_circles",
    "distance",
    "get_center",
    "get_intersection_points",
    "intersection_area",
]
