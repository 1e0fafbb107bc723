"""Downhill simplex (Nelder–Mead) minimizer."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import numpy as np

from ..types import SimplexPoint
from .blas import weighted_sum
from .model import MinimizeResult, NelderMeadParams

logger = logging.getLogger(__name__)

Objective = Callable[[np.ndarray], float]


def _initial_simplex(f: Objective, x0: np.ndarray, params: NelderMeadParams) -> List[SimplexPoint]:
    n = x0.size
    simplex = [SimplexPoint(coordinates=x0.copy(), fx=float(f(x0)), id=0)]
    for i in range(n):
        point = x0.copy()
        point[i] = point[i] * params.non_zero_delta if point[i] else params.zero_delta
        simplex.append(SimplexPoint(coordinates=point, fx=float(f(point)), id=i + 1))
    return simplex


def _sort_key(point: SimplexPoint):
    return (point.fx, point.id)


def nelder_mead(
    f: Objective,
    x0: np.ndarray,
    params: Optional[NelderMeadParams] = None,
) -> MinimizeResult:
    """Minimize ``f`` starting from ``x0``.

    Terminates when both the objective spread across the simplex and the
    coordinate spread between the two best vertices fall below the configured
    tolerances, or when the iteration budget runs out.
    """

    params = params or NelderMeadParams()
    x0 = np.asarray(x0, dtype=float).copy()
    n = x0.size
    max_iterations = params.max_iterations if params.max_iterations is not None else n * 200
    rho, chi, psi, sigma = params.rho, params.chi, params.psi, params.sigma

    simplex = _initial_simplex(f, x0, params)
    history: List[dict] = []

    def replace_worst(coordinates: np.ndarray, fx: float) -> None:
        worst = simplex[n]
        simplex[n] = SimplexPoint(coordinates=coordinates, fx=fx, id=worst.id)

    iteration = 0
    for iteration in range(max_iterations):
        simplex.sort(key=_sort_key)

        if params.history:
            snapshot = sorted(simplex, key=lambda p: p.id)
            history.append(
                {
                    "x": simplex[0].coordinates.copy(),
                    "fx": simplex[0].fx,
                    "simplex": [
                        SimplexPoint(p.coordinates.copy(), p.fx, p.id) for p in snapshot
                    ],
                }
            )

        max_diff = 0.0
        if n:
            max_diff = float(np.max(np.abs(simplex[0].coordinates - simplex[1].coordinates)))

        if abs(simplex[0].fx - simplex[n].fx) < params.min_error_delta and max_diff < params.min_tolerance:
            break

        # centroid of all but the worst point
        centroid = np.mean([p.coordinates for p in simplex[:n]], axis=0)

        worst = simplex[n]
        reflected = weighted_sum(1.0 + rho, centroid, -rho, worst.coordinates)
        reflected_fx = float(f(reflected))

        if reflected_fx < simplex[0].fx:
            expanded = weighted_sum(1.0 + chi, centroid, -chi, worst.coordinates)
            expanded_fx = float(f(expanded))
            if expanded_fx < reflected_fx:
                replace_worst(expanded, expanded_fx)
            else:
                replace_worst(reflected, reflected_fx)

        elif reflected_fx >= simplex[n - 1].fx:
            should_reduce = False

            if reflected_fx > worst.fx:
                # inside contraction
                contracted = weighted_sum(1.0 + psi, centroid, -psi, worst.coordinates)
                contracted_fx = float(f(contracted))
                if contracted_fx < worst.fx:
                    replace_worst(contracted, contracted_fx)
                else:
                    should_reduce = True
            else:
                # outside contraction
                contracted = weighted_sum(1.0 - psi * rho, centroid, psi * rho, worst.coordinates)
                contracted_fx = float(f(contracted))
                if contracted_fx < reflected_fx:
                    replace_worst(contracted, contracted_fx)
                else:
                    should_reduce = True

            if should_reduce:
                if sigma >= 1:
                    break

                best = simplex[0]
                for i in range(1, len(simplex)):
                    point = weighted_sum(1.0 - sigma, best.coordinates, sigma, simplex[i].coordinates)
                    simplex[i] = SimplexPoint(coordinates=point, fx=float(f(point)), id=simplex[i].id)
        else:
            replace_worst(reflected, reflected_fx)
    else:
        logger.debug("nelder_mead: iteration cap %d reached", max_iterations)

    simplex.sort(key=_sort_key)
    best = simplex[0]
    logger.debug("nelder_mead: finished after %d iterations fx=%.6g", iteration + 1, best.fx)
    return MinimizeResult(x=best.coordinates.copy(), fx=best.fx, iterations=iteration + 1, history=history)


__all__ = ["nelder_mead"]
