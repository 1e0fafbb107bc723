"""Region bookkeeping shared by the layout stages."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Set

from ..types import LayoutError, Region, SetId, as_region

logger = logging.getLogger(__name__)


def prepare_regions(regions: Iterable[object]) -> List[Region]:
    """Drop zero-size sets together with every region that mentions them."""

    coerced = [as_region(value) for value in regions]
    removed: Set[SetId] = {r.sets[0] for r in coerced if len(r.sets) == 1 and r.size == 0}
    kept = [r for r in coerced if not any(s in removed for s in r.sets)]
    if removed:
        logger.info(
            "Removed %d zero-size set(s) %s and %d region(s) referencing them",
            len(removed),
            sorted(map(str, removed)),
            len(coerced) - len(kept),
        )
    return kept


def singleton_regions(regions: Iterable[Region]) -> List[Region]:
    return [r for r in regions if len(r.sets) == 1]


def set_ids(regions: Iterable[Region]) -> List[SetId]:
    return [r.sets[0] for r in singleton_regions(regions)]


def radius_from_size(size: float) -> float:
    return math.sqrt(size / math.pi)


def check_references(regions: Iterable[Region]) -> None:
    regions = list(regions)
    known = set(set_ids(regions))
    for region in regions:
        missing = [s for s in region.sets if s not in known]
        if missing:
            raise LayoutError(
                f"region {region.key!r} references set(s) {missing!r} without a singleton size"
            )


def add_missing_areas(regions: Iterable[Region]) -> List[Region]:
    """Add zero-size regions for every pair of sets with no declared overlap."""

    result = list(regions)
    ids = set_ids(result)
    pairs: Set[frozenset] = {frozenset(r.sets) for r in result if len(r.sets) == 2}

    added = 0
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            if frozenset((ids[i], ids[j])) not in pairs:
                result.append(Region(sets=(ids[i], ids[j]), size=0.0))
                added += 1
    if added:
        logger.debug("add_missing_areas: added %d zero-size pair region(s)", added)
    return result


__all__ = [
    "add_missing_areas",
    "check_references",
    "prepare_regions",
    "radius_from_size",
    "set_ids",
    "singleton_regions",
]
