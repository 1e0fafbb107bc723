"""Canonical orientation and pixel-space scaling of a circle layout."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .geometry import SMALL, distance
from .logging_utils import apply_debug_logging
from .types import Circle, SetId, Solution

logger = logging.getLogger(__name__)

OrientationOrder = Callable[[SetId, Circle], Any]


@dataclass
class _PlacedCircle:
    setid: SetId
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class BoundingBox:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


@dataclass
class _Cluster:
    circles: List[_PlacedCircle]
    bounds: Optional[BoundingBox] = None
    size: float = 0.0


def get_bounding_box(circles: Sequence[Any]) -> BoundingBox:
    """Axis-aligned box enclosing every circle (anything with ``x``, ``y``, ``radius``)."""

    if not circles:
        raise ValueError("cannot bound an empty set of circles")
    return BoundingBox(
        x_min=min(c.x - c.radius for c in circles),
        x_max=max(c.x + c.radius for c in circles),
        y_min=min(c.y - c.radius for c in circles),
        y_max=max(c.y + c.radius for c in circles),
    )


def _disjoint_clusters(circles: List[_PlacedCircle]) -> List[_Cluster]:
    parent = list(range(len(circles)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i in range(len(circles)):
        for j in range(i + 1, len(circles)):
            max_distance = circles[i].radius + circles[j].radius
            if distance(circles[i], circles[j]) + SMALL < max_distance:
                parent[find(j)] = find(i)

    groups: Dict[int, List[_PlacedCircle]] = {}
    for i, circle in enumerate(circles):
        groups.setdefault(find(i), []).append(circle)
    return [_Cluster(circles=members) for members in groups.values()]


def _orientate_circles(
    circles: List[_PlacedCircle],
    orientation: float,
    orientation_order: Optional[OrientationOrder],
) -> None:
    if orientation_order is None:
        circles.sort(key=lambda c: c.radius, reverse=True)
    else:
        circles.sort(key=lambda c: orientation_order(c.setid, Circle(c.x, c.y, c.radius)))

    # largest circle to the origin
    if circles:
        largest_x, largest_y = circles[0].x, circles[0].y
        for c in circles:
            c.x -= largest_x
            c.y -= largest_y

    if len(circles) == 2:
        # move a nested second circle to touch the edge so its rotation is defined
        dist = distance(circles[0], circles[1])
        if dist < abs(circles[1].radius - circles[0].radius):
            circles[1].x = circles[0].x + circles[0].radius - circles[1].radius - 1e-10
            circles[1].y = circles[0].y

    if len(circles) > 1:
        rotation = math.atan2(circles[1].x, circles[1].y) - orientation
        cos_t = math.cos(rotation)
        sin_t = math.sin(rotation)
        for c in circles:
            x, y = c.x, c.y
            c.x = cos_t * x - sin_t * y
            c.y = sin_t * x + cos_t * y

    if len(circles) > 2:
        angle = math.atan2(circles[2].x, circles[2].y) - orientation
        angle %= 2.0 * math.pi
        if angle > math.pi:
            # mirror across the line through the first two centers
            slope = circles[1].y / (1e-10 + circles[1].x)
            for c in circles:
                d = (c.x + slope * c.y) / (1.0 + slope * slope)
                c.x = 2.0 * d - c.x
                c.y = 2.0 * d * slope - c.y


def _add_cluster(
    packed: List[_PlacedCircle],
    bounds: BoundingBox,
    cluster: Optional[_Cluster],
    *,
    right: bool,
    bottom: bool,
    spacing: float,
) -> None:
    if cluster is None or cluster.bounds is None:
        return
    cb = cluster.bounds

    if right:
        x_offset = bounds.x_max - cb.x_min + spacing
    else:
        x_offset = bounds.x_max - cb.x_max
        centring = cb.width / 2.0 - bounds.width / 2.0
        if centring < 0:
            x_offset += centring

    if bottom:
        y_offset = bounds.y_max - cb.y_min + spacing
    else:
        y_offset = bounds.y_max - cb.y_max
        centring = cb.height / 2.0 - bounds.height / 2.0
        if centring < 0:
            y_offset += centring

    for c in cluster.circles:
        c.x += x_offset
        c.y += y_offset
        packed.append(c)


def normalize_solution(
    solution: Solution,
    orientation: Optional[float] = math.pi / 2,
    orientation_order: Optional[OrientationOrder] = None,
) -> Solution:
    """Rotate/mirror each disjoint cluster into canonical form and pack the clusters.

    ``orientation`` is the angle at which the second circle of each cluster is
    placed relative to the first; ``orientation_order`` is a sort key over
    ``(set id, circle)`` choosing which circles come first (largest radius by
    default).
    """

    if orientation is None:
        orientation = math.pi / 2
    if not solution:
        return {}

    circles = [_PlacedCircle(setid, c.x, c.y, c.radius) for setid, c in solution.items()]
    clusters = _disjoint_clusters(circles)
    for cluster in clusters:
        _orientate_circles(cluster.circles, orientation, orientation_order)
        cluster.bounds = get_bounding_box(cluster.circles)
        cluster.size = cluster.bounds.width * cluster.bounds.height

    clusters.sort(key=lambda cl: cl.size, reverse=True)
    logger.debug("normalize_solution: %d disjoint cluster(s)", len(clusters))

    packed = list(clusters[0].circles)
    bounds = clusters[0].bounds
    spacing = bounds.width / 50.0

    index = 1
    while index < len(clusters):
        batch = clusters[index : index + 3]
        placements = ((True, False), (False, True), (True, True))
        for cluster, (right, bottom) in zip(batch, placements):
            _add_cluster(packed, bounds, cluster, right=right, bottom=bottom, spacing=spacing)
        index += 3
        bounds = get_bounding_box(packed)

    placed = {c.setid: c for c in packed}
    return {setid: Circle(placed[setid].x, placed[setid].y, placed[setid].radius) for setid in solution}


def scale_solution(solution: Solution, width: float, height: float, padding: float) -> Solution:
    """Scale and center ``solution`` uniformly inside the padded ``width`` x ``height`` box."""

    if not solution:
        return {}

    width -= 2.0 * padding
    height -= 2.0 * padding
    if width <= 0 or height <= 0:
        raise ValueError(
            f"padding {padding!r} leaves no drawing area inside a "
            f"{width + 2.0 * padding!r} x {height + 2.0 * padding!r} box"
        )

    bounds = get_bounding_box(list(solution.values()))
    if bounds.width == 0 or bounds.height == 0:
        logger.warning("Not scaling solution: zero size bounding box detected")
        return dict(solution)

    x_scaling = width / bounds.width
    y_scaling = height / bounds.height
    scaling = min(x_scaling, y_scaling)
    x_offset = (width - bounds.width * scaling) / 2.0
    y_offset = (height - bounds.height * scaling) / 2.0

    return {
        setid: Circle(
            padding + x_offset + (circle.x - bounds.x_min) * scaling,
            padding + y_offset + (circle.y - bounds.y_min) * scaling,
            scaling * circle.radius,
        )
        for setid, circle in solution.items()
    }


def normalize_and_scale(
    solution: Solution,
    width: float,
    height: float,
    padding: float,
    orientation: Optional[float] = math.pi / 2,
    orientation_order: Optional[OrientationOrder] = None,
) -> Solution:
    normalized = normalize_solution(solution, orientation, orientation_order)
    return scale_solution(normalized, width, height, padding)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "BoundingBox",
    "OrientationOrder",
    "get_bounding_box",
    "normalize_and_scale",
    "normalize_solution",
    "scale_solution",
]
