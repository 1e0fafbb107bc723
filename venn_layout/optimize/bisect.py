from __future__ import annotations

import logging
from typing import Callable

from ..types import BisectError

logger = logging.getLogger(__name__)


def bisect(
    f: Callable[[float], float],
    a: float,
    b: float,
    *,
    max_iterations: int = 100,
    tolerance: float = 1e-10,
) -> float:
    """Find a root of ``f`` inside ``[a, b]``; ``f(a)`` and ``f(b)`` must differ in sign."""

    fa = f(a)
    fb = f(b)
    delta = b - a

    if fa * fb > 0:
        raise BisectError(
            f"initial bisect points must have opposite signs: f({a!r})={fa!r}, f({b!r})={fb!r}"
        )

    if fa == 0:
        return a
    if fb == 0:
        return b

    for _ in range(max_iterations):
        delta /= 2.0
        mid = a + delta
        fmid = f(mid)

        if fmid * fa >= 0:
            a = mid

        if abs(delta) < tolerance or fmid == 0:
            return mid

    logger.debug("bisect: iteration cap %d reached with bracket width %.3g", max_iterations, delta)
    return a + delta


__all__ = ["bisect"]
