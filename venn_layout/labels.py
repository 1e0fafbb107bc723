"""Label anchor placement: the point of each region farthest from its boundary."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Set

import numpy as np

from .geometry import distance, get_center, intersection_area
from .logging_utils import apply_debug_logging
from .optimize import NelderMeadParams, nelder_mead
from .types import Circle, Point2D, RegionKey, SetId, Solution, Stats, TextCentre, as_region

logger = logging.getLogger(__name__)

DISJOINT_SENTINEL = (0.0, -1000.0)
_CONTAINMENT_EPS = 1e-10


def circle_margin(current: Point2D, interior: Sequence[Circle], exterior: Sequence[Circle]) -> float:
    """Smallest clearance of ``current`` from the interior rims and exterior circles."""

    margin = min(c.radius - distance(c, current) for c in interior)
    for c in exterior:
        margin = min(margin, distance(c, current) - c.radius)
    return margin


def _is_valid_centre(point: Point2D, interior: Sequence[Circle], exterior: Sequence[Circle]) -> bool:
    if any(distance(point, c) > c.radius for c in interior):
        return False
    if any(distance(point, c) < c.radius for c in exterior):
        return False
    return True


def _seed_points(interior: Sequence[Circle]) -> List[Point2D]:
    points: List[Point2D] = []
    for c in interior:
        half = c.radius / 2.0
        points.extend(
            [
                Point2D(c.x, c.y),
                Point2D(c.x + half, c.y),
                Point2D(c.x - half, c.y),
                Point2D(c.x, c.y + half),
                Point2D(c.x, c.y - half),
            ]
        )
    return points


def compute_text_centre(interior: Sequence[Circle], exterior: Sequence[Circle]) -> TextCentre:
    """Best label position inside all ``interior`` circles and outside all ``exterior`` ones.

    Starts from the best of five samples per interior circle and refines by
    maximizing :func:`circle_margin` with Nelder–Mead. When the optimum is not
    actually inside the region (heavily overlapped layouts) it falls back to
    the single circle's center, the disjoint sentinel, a retry without
    exterior circles, or the mean of the boundary vertices.
    """

    interior = list(interior)
    exterior = list(exterior)
    if not interior:
        raise ValueError("compute_text_centre requires at least one interior circle")

    initial = None
    margin = None
    for point in _seed_points(interior):
        m = circle_margin(point, interior, exterior)
        if margin is None or m >= margin:
            initial = point
            margin = m

    result = nelder_mead(
        lambda p: -circle_margin(Point2D(p[0], p[1]), interior, exterior),
        np.array([initial.x, initial.y], dtype=float),
        NelderMeadParams(max_iterations=500, min_error_delta=1e-10),
    )
    ret = TextCentre(result.x[0], result.x[1])

    if _is_valid_centre(ret, interior, exterior):
        return ret

    if len(interior) == 1:
        return TextCentre(interior[0].x, interior[0].y)

    stats = Stats()
    intersection_area(interior, stats)

    if not stats.arcs:
        return TextCentre(*DISJOINT_SENTINEL, disjoint=True)
    if len(stats.arcs) == 1:
        circle = stats.arcs[0].circle
        return TextCentre(circle.x, circle.y)
    if exterior:
        return compute_text_centre(interior, [])

    # mean of the boundary vertices; a rough position for odd-shaped regions
    center = get_center(arc.p1 for arc in stats.arcs)
    return TextCentre(center.x, center.y)


def get_overlapping_circles(circles: Solution) -> Dict[SetId, List[SetId]]:
    """Map each set to the sets whose circles fully contain it."""

    ret: Dict[SetId, List[SetId]] = {setid: [] for setid in circles}
    ids = list(circles)
    for i in range(len(ids)):
        a = circles[ids[i]]
        for j in range(i + 1, len(ids)):
            b = circles[ids[j]]
            d = distance(a, b)
            if d + b.radius <= a.radius + _CONTAINMENT_EPS:
                ret[ids[j]].append(ids[i])
            elif d + a.radius <= b.radius + _CONTAINMENT_EPS:
                ret[ids[i]].append(ids[j])
    return ret


def compute_text_centres(circles: Solution, regions: Iterable[object]) -> Dict[RegionKey, TextCentre]:
    """Label anchor for every region, keyed by the region's set tuple."""

    ret: Dict[RegionKey, TextCentre] = {}
    overlapped = get_overlapping_circles(circles)

    for region in (as_region(value) for value in regions):
        missing = [s for s in region.sets if s not in circles]
        if missing:
            logger.info("Skipping label for region %s: set(s) %s not in layout", region.key, missing)
            continue

        area_ids: Set[SetId] = set(region.sets)
        exclude: Set[SetId] = set()
        for setid in region.sets:
            # circles that swallow one of ours would hide every candidate point
            exclude.update(overlapped[setid])

        interior = [circles[s] for s in circles if s in area_ids]
        exterior = [circles[s] for s in circles if s not in area_ids and s not in exclude]

        centre = compute_text_centre(interior, exterior)
        ret[region.key] = centre
        if centre.disjoint and region.size > 0:
            logger.warning("Region %s is not represented on screen", region.key)
    return ret


apply_debug_logging(globals(), logger=logger, skip={"circle_margin"})

compute_label_anchors = compute_text_centres


__all__ = [
    "DISJOINT_SENTINEL",
    "circle_margin",
    "compute_label_anchors",
    "compute_text_centre",
    "compute_text_centres",
    "get_overlapping_circles",
]
