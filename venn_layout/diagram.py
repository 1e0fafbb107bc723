"""End-to-end pipeline: region sizes to drawable circles and label anchors."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from .labels import compute_text_centres
from .layout import LayoutOptions, compute_layout, prepare_regions
from .orientation import OrientationOrder, normalize_solution, scale_solution
from .paths import circle_path, intersection_area_path
from .types import Region, RegionKey, Solution, TextCentre

logger = logging.getLogger(__name__)

LayoutFunction = Callable[[List[Region], Optional[LayoutOptions]], Solution]


@dataclass
class DiagramOptions:
    width: float = 600.0
    height: float = 350.0
    padding: float = 15.0
    orientation: float = math.pi / 2
    orientation_order: Optional[OrientationOrder] = None
    normalize: bool = True
    layout: Optional[LayoutOptions] = None
    layout_function: Optional[LayoutFunction] = None


@dataclass
class Diagram:
    circles: Solution = field(default_factory=dict)
    text_centres: Dict[RegionKey, TextCentre] = field(default_factory=dict)
    regions: List[Region] = field(default_factory=list)
    labels: Dict[RegionKey, str] = field(default_factory=dict)

    def paths(self) -> Dict[RegionKey, str]:
        """SVG path of every region's visible outline."""

        ret: Dict[RegionKey, str] = {}
        for region in self.regions:
            if len(region.sets) == 1:
                ret[region.key] = circle_path(self.circles[region.sets[0]])
            else:
                ret[region.key] = intersection_area_path([self.circles[s] for s in region.sets])
        return ret


def region_labels(regions: Iterable[Region]) -> Dict[RegionKey, str]:
    """Explicit labels, falling back to the set id for single-set regions."""

    labels: Dict[RegionKey, str] = {}
    for region in regions:
        if region.label:
            labels[region.key] = region.label
        elif len(region.sets) == 1:
            labels[region.key] = str(region.sets[0])
    return labels


def compute_diagram(regions: Iterable[object], options: Optional[DiagramOptions] = None) -> Diagram:
    options = options or DiagramOptions()
    data = prepare_regions(regions)
    if not data:
        logger.info("Empty diagram: no regions left after removing zero-size sets")
        return Diagram()

    layout_function = options.layout_function or compute_layout
    solution = layout_function(data, options.layout)

    if options.normalize:
        solution = normalize_solution(solution, options.orientation, options.orientation_order)

    circles = scale_solution(solution, options.width, options.height, options.padding)
    text_centres = compute_text_centres(circles, data)
    logger.info("Computed diagram with %d circles and %d label anchors", len(circles), len(text_centres))
    return Diagram(circles=circles, text_centres=text_centres, regions=data, labels=region_labels(data))


__all__ = ["Diagram", "DiagramOptions", "compute_diagram", "region_labels"]
