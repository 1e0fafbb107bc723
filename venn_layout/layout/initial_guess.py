"""Initial circle placement from pairwise overlap targets."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..geometry import SMALL, circle_circle_intersection, circle_overlap
from ..optimize import ConjugateGradientParams, bisect, conjugate_gradient
from ..types import Circle, LayoutError, Point2D, Region, SetId, Solution
from .loss import loss_function
from .model import LayoutOptions
from .utils import radius_from_size, singleton_regions

logger = logging.getLogger(__name__)

_UNPLACED = 1e10


def distance_from_intersect_area(r1: float, r2: float, overlap: float) -> float:
    """Center distance at which two circles overlap by ``overlap``."""

    if min(r1, r2) * min(r1, r2) * math.pi <= overlap + SMALL:
        return abs(r1 - r2)
    return bisect(lambda d: circle_overlap(r1, r2, d) - overlap, 0.0, r1 + r2)


@dataclass
class _Overlap:
    set: SetId
    size: float
    weight: float


def greedy_layout(regions: Sequence[Region], options: Optional[LayoutOptions] = None) -> Solution:
    """Place sets one at a time, each at the candidate point with the lowest loss.

    The set with the largest total overlap goes to the origin. Every later set
    is tried at the target distance from each already placed neighbour (along
    both axes) and at the crossings of those distance rings.
    """

    loss = (options.loss_function if options else None) or loss_function
    sizes: Dict[SetId, float] = {}
    circles: Dict[SetId, Circle] = {}
    set_overlaps: Dict[SetId, List[_Overlap]] = {}
    for region in singleton_regions(regions):
        setid = region.sets[0]
        sizes[setid] = region.size
        circles[setid] = Circle(_UNPLACED, _UNPLACED, radius_from_size(region.size))
        set_overlaps[setid] = []

    pairs = [r for r in regions if len(r.sets) == 2]
    for current in pairs:
        left, right = current.sets
        weight = current.weight
        # full containment says nothing about where to put the circle
        if current.size + SMALL >= min(sizes[left], sizes[right]):
            weight = 0.0
        set_overlaps[left].append(_Overlap(right, current.size, weight))
        set_overlaps[right].append(_Overlap(left, current.size, weight))

    most_overlapped = sorted(
        ((setid, sum(o.size * o.weight for o in overlaps)) for setid, overlaps in set_overlaps.items()),
        key=lambda item: item[1],
        reverse=True,
    )
    if not most_overlapped:
        return {}

    positioned = set()

    def position_set(point: Point2D, setid: SetId) -> None:
        circles[setid] = circles[setid].moved_to(point.x, point.y)
        positioned.add(setid)

    position_set(Point2D(0.0, 0.0), most_overlapped[0][0])

    for setid, _ in most_overlapped[1:]:
        overlap = sorted(
            (o for o in set_overlaps[setid] if o.set in positioned),
            key=lambda o: o.size,
            reverse=True,
        )
        if not overlap:
            raise LayoutError(f"missing pairwise overlap information for set {setid!r}")

        radius = circles[setid].radius
        points: List[Point2D] = []
        for j, first in enumerate(overlap):
            p1 = circles[first.set]
            d1 = distance_from_intersect_area(radius, p1.radius, first.size)
            points.extend(
                [
                    Point2D(p1.x + d1, p1.y),
                    Point2D(p1.x - d1, p1.y),
                    Point2D(p1.x, p1.y + d1),
                    Point2D(p1.x, p1.y - d1),
                ]
            )
            for second in overlap[j + 1 :]:
                p2 = circles[second.set]
                d2 = distance_from_intersect_area(radius, p2.radius, second.size)
                points.extend(
                    circle_circle_intersection(Circle(p1.x, p1.y, d1), Circle(p2.x, p2.y, d2))
                )

        best_loss = math.inf
        best_point = points[0]
        for point in points:
            circles[setid] = circles[setid].moved_to(point.x, point.y)
            local_loss = loss(circles, pairs)
            if local_loss < best_loss:
                best_loss = local_loss
                best_point = point
        position_set(best_point, setid)

    logger.debug("greedy_layout: placed %d sets", len(positioned))
    return circles


def _distance_matrices(
    regions: Sequence[Region], setids: Dict[SetId, int], sizes: Sequence[float]
) -> Tuple[np.ndarray, np.ndarray]:
    n = len(sizes)
    distances = np.zeros((n, n), dtype=float)
    constraints = np.zeros((n, n), dtype=float)
    for region in regions:
        if len(region.sets) != 2:
            continue
        left = setids[region.sets[0]]
        right = setids[region.sets[1]]
        r1 = radius_from_size(sizes[left])
        r2 = radius_from_size(sizes[right])
        distances[left, right] = distances[right, left] = distance_from_intersect_area(r1, r2, region.size)

        # +1: one set contains the other, -1: disjoint; either only bounds the distance
        c = 0.0
        if region.size + 1e-10 >= min(sizes[left], sizes[right]):
            c = 1.0
        elif region.size <= 1e-10:
            c = -1.0
        constraints[left, right] = constraints[right, left] = c
    return distances, constraints


def constrained_mds_gradient(
    x: np.ndarray, distances: np.ndarray, constraints: np.ndarray
) -> Tuple[float, np.ndarray]:
    """Stress of squared distances, skipping pairs whose bound is already met."""

    loss = 0.0
    grad = np.zeros_like(x)
    n = distances.shape[0]
    for i in range(n):
        xi, yi = x[2 * i], x[2 * i + 1]
        for j in range(i + 1, n):
            xj, yj = x[2 * j], x[2 * j + 1]
            dij = distances[i, j]
            constraint = constraints[i, j]
            squared = (xj - xi) * (xj - xi) + (yj - yi) * (yj - yi)
            dist = math.sqrt(squared)
            delta = squared - dij * dij

            if (constraint > 0 and dist <= dij) or (constraint < 0 and dist >= dij):
                continue

            loss += 2.0 * delta * delta
            grad[2 * i] += 4.0 * delta * (xi - xj)
            grad[2 * i + 1] += 4.0 * delta * (yi - yj)
            grad[2 * j] += 4.0 * delta * (xj - xi)
            grad[2 * j + 1] += 4.0 * delta * (yj - yi)
    return loss, grad


def constrained_mds_layout(
    regions: Sequence[Region], options: Optional[LayoutOptions] = None
) -> Solution:
    """Embed the pairwise target distances with multidimensional scaling."""

    options = options or LayoutOptions()
    singles = singleton_regions(regions)
    setids = {r.sets[0]: idx for idx, r in enumerate(singles)}
    sizes = [r.size for r in singles]
    if not singles:
        return {}

    distances, constraints = _distance_matrices(regions, setids, sizes)
    norm = float(np.linalg.norm(distances)) / len(singles)
    if norm <= 0.0:
        norm = 1.0
    distances = distances / norm

    rng = np.random.default_rng(options.random_seed)
    params = ConjugateGradientParams(max_iterations=options.max_iterations)
    best = None
    for restart in range(max(1, options.restarts)):
        initial = rng.random(2 * len(singles))
        current = conjugate_gradient(
            lambda vec: constrained_mds_gradient(vec, distances, constraints), initial, params
        )
        logger.debug("constrained_mds_layout: restart=%d stress=%.6g", restart, current.fx)
        if best is None or current.fx < best.fx:
            best = current

    positions = best.x
    return {
        single.sets[0]: Circle(
            positions[2 * idx] * norm,
            positions[2 * idx + 1] * norm,
            radius_from_size(single.size),
        )
        for idx, single in enumerate(singles)
    }


def best_initial_layout(regions: Sequence[Region], options: Optional[LayoutOptions] = None) -> Solution:
    """Greedy placement, replaced by constrained MDS when that scores better on larger inputs."""

    options = options or LayoutOptions()
    initial = greedy_layout(regions, options)
    loss = options.loss_function or loss_function

    if len(regions) >= 8:
        constrained = constrained_mds_layout(regions, options)
        constrained_loss = loss(constrained, regions)
        greedy_loss = loss(initial, regions)
        logger.debug(
            "best_initial_layout: greedy loss=%.6g constrained loss=%.6g", greedy_loss, constrained_loss
        )
        if constrained_loss + 1e-8 < greedy_loss:
            initial = constrained
    return initial


__all__ = [
    "best_initial_layout",
    "constrained_mds_gradient",
    "constrained_mds_layout",
    "distance_from_intersect_area",
    "greedy_layout",
]
