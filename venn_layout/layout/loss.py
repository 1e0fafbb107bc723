"""Scalar losses comparing laid-out areas with the requested region sizes."""

from __future__ import annotations

import math
from typing import Sequence

from ..geometry import circle_overlap, distance, intersection_area
from ..types import Region, Solution


def region_area(circles: Solution, region: Region) -> float:
    """Area currently covered by ``region`` in ``circles``."""

    if len(region.sets) == 1:
        r = circles[region.sets[0]].radius
        return math.pi * r * r
    if len(region.sets) == 2:
        left = circles[region.sets[0]]
        right = circles[region.sets[1]]
        return circle_overlap(left.radius, right.radius, distance(left, right))
    return intersection_area([circles[s] for s in region.sets])


def loss_function(circles: Solution, regions: Sequence[Region]) -> float:
    """Weighted sum of squared differences between computed and desired overlaps."""

    output = 0.0
    for region in regions:
        if len(region.sets) == 1:
            continue
        overlap = region_area(circles, region)
        output += region.weight * (overlap - region.size) * (overlap - region.size)
    return output


def log_ratio_loss_function(circles: Solution, regions: Sequence[Region]) -> float:
    """Relative variant: squared log of ``(computed + 1) / (desired + 1)``."""

    output = 0.0
    for region in regions:
        if len(region.sets) == 1:
            continue
        overlap = region_area(circles, region)
        diff = math.log((overlap + 1.0) / (region.size + 1.0))
        output += region.weight * diff * diff
    return output


__all__ = ["log_ratio_loss_function", "loss_function", "region_area"]
