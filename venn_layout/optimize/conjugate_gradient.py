"""Nonlinear conjugate gradient (Polak–Ribière) with a Wolfe line search.

The objective ``f(x)`` returns ``(fx, gradient)``.  See *Numerical
Optimization* (Nocedal & Wright), pp. 59-60 for the line search.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from .blas import dot, norm2, scale, weighted_sum
from .model import ConjugateGradientParams, GradientPoint, MinimizeResult

logger = logging.getLogger(__name__)

GradientObjective = Callable[[np.ndarray], Tuple[float, np.ndarray]]


def _evaluate(f: GradientObjective, x: np.ndarray) -> GradientPoint:
    fx, grad = f(x)
    return GradientPoint(x=x, fx=float(fx), fxprime=np.asarray(grad, dtype=float))


def wolfe_line_search(
    f: GradientObjective,
    pk: np.ndarray,
    current: GradientPoint,
    a: float = 1.0,
    c1: float = 1e-6,
    c2: float = 0.1,
) -> Tuple[float, Optional[GradientPoint]]:
    """Search along ``pk`` for a step satisfying the strong Wolfe conditions.

    Returns ``(step, point)``; a zero step means no acceptable point was found.
    """

    phi0 = current.fx
    phi_prime0 = dot(current.fxprime, pk)
    phi_old = phi0
    a0 = 0.0
    a = a or 1.0

    def probe(step: float) -> Tuple[GradientPoint, float]:
        point = _evaluate(f, weighted_sum(1.0, current.x, step, pk))
        return point, dot(point.fxprime, pk)

    def zoom(a_lo: float, a_high: float, phi_lo: float) -> Tuple[float, Optional[GradientPoint]]:
        last: Optional[GradientPoint] = None
        for _ in range(16):
            step = (a_lo + a_high) / 2.0
            last, phi_prime = probe(step)
            phi = last.fx

            if phi > phi0 + c1 * step * phi_prime0 or phi >= phi_lo:
                a_high = step
            else:
                if abs(phi_prime) <= -c2 * phi_prime0:
                    return step, last

                if phi_prime * (a_high - a_lo) >= 0:
                    a_high = a_lo

                a_lo = step
                phi_lo = phi

        return 0.0, last

    point: Optional[GradientPoint] = None
    for iteration in range(10):
        point, phi_prime = probe(a)
        phi = point.fx
        if phi > phi0 + c1 * a * phi_prime0 or (iteration and phi >= phi_old):
            return zoom(a0, a, phi_old)

        if abs(phi_prime) <= -c2 * phi_prime0:
            return a, point

        if phi_prime >= 0:
            return zoom(a, a0, phi)

        phi_old = phi
        a0 = a
        a *= 2.0

    return a0, point


def conjugate_gradient(
    f: GradientObjective,
    x0: np.ndarray,
    params: Optional[ConjugateGradientParams] = None,
) -> MinimizeResult:
    """Minimize ``f`` from ``x0``; stops once the gradient norm drops below tolerance."""

    params = params or ConjugateGradientParams()
    x0 = np.asarray(x0, dtype=float).copy()
    max_iterations = params.max_iterations if params.max_iterations is not None else x0.size * 20

    current = _evaluate(f, x0)
    pk = scale(current.fxprime, -1.0)
    a = 1.0
    history: List[dict] = []

    def record(alpha: float) -> None:
        history.append(
            {
                "x": current.x.copy(),
                "fx": current.fx,
                "fxprime": current.fxprime.copy(),
                "alpha": alpha,
            }
        )

    iterations = 0
    for iterations in range(1, max_iterations + 1):
        if norm2(current.fxprime) <= params.gradient_tolerance:
            iterations -= 1
            break

        a, candidate = wolfe_line_search(f, pk, current, a, c1=params.c1, c2=params.c2)

        if params.history:
            record(a)

        if not a or candidate is None:
            # no point satisfied the Wolfe conditions; restart from steepest descent
            pk = scale(current.fxprime, -1.0)
            a = 1.0
        else:
            yk = weighted_sum(1.0, candidate.fxprime, -1.0, current.fxprime)
            delta_k = dot(current.fxprime, current.fxprime)
            beta_k = max(0.0, dot(yk, candidate.fxprime) / delta_k) if delta_k > 0 else 0.0
            pk = weighted_sum(beta_k, pk, -1.0, candidate.fxprime)
            current = candidate

        if norm2(current.fxprime) <= params.gradient_tolerance:
            break

    if params.history:
        record(a)

    logger.debug(
        "conjugate_gradient: finished after %d iterations fx=%.6g |g|=%.3g",
        iterations,
        current.fx,
        norm2(current.fxprime) if current.fxprime.size else 0.0,
    )
    return MinimizeResult(
        x=current.x.copy(),
        fx=current.fx,
        iterations=iterations,
        fxprime=current.fxprime.copy(),
        history=history,
    )


__all__ = ["conjugate_gradient", "wolfe_line_search"]
