from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np
from scipy.optimize import approx_fprime, minimize

from ..logging_utils import apply_debug_logging
from ..optimize import (
    ConjugateGradientParams,
    MinimizeResult,
    NelderMeadParams,
    conjugate_gradient,
    nelder_mead,
)
from ..types import Solution, circles_to_vector, vector_to_circles
from .config import get_layout_options
from .initial_guess import best_initial_layout
from .loss import loss_function
from .model import LayoutOptions, LayoutResult, Objective
from .utils import add_missing_areas, check_references, prepare_regions

logger = logging.getLogger(__name__)


def _gradient_step(x0: np.ndarray, options: LayoutOptions) -> float:
    magnitude = float(np.max(np.abs(x0))) if x0.size else 0.0
    return options.gradient_step * max(1.0, magnitude)


def conjugate_gradient_optimizer(
    objective: Objective, x0: np.ndarray, options: LayoutOptions
) -> MinimizeResult:
    """Conjugate gradient on ``objective`` with forward-difference gradients."""

    step = _gradient_step(x0, options)

    def with_gradient(vec: np.ndarray):
        return objective(vec), approx_fprime(vec, objective, step)

    params = ConjugateGradientParams(max_iterations=options.max_iterations)
    return conjugate_gradient(with_gradient, x0, params)


def nelder_mead_optimizer(
    objective: Objective, x0: np.ndarray, options: LayoutOptions
) -> MinimizeResult:
    max_iterations = options.max_iterations if options.max_iterations is not None else 500
    return nelder_mead(objective, x0, NelderMeadParams(max_iterations=max_iterations))


def scipy_optimizer(objective: Objective, x0: np.ndarray, options: LayoutOptions) -> MinimizeResult:
    """L-BFGS-B from :func:`scipy.optimize.minimize`."""

    max_iterations = options.max_iterations if options.max_iterations is not None else 500
    result = minimize(
        objective,
        x0,
        method="L-BFGS-B",
        options={"maxiter": max_iterations, "eps": _gradient_step(x0, options)},
    )
    return MinimizeResult(x=np.asarray(result.x, dtype=float), fx=float(result.fun), iterations=int(result.nit))


def solve_layout(regions: Iterable[object], options: Optional[LayoutOptions] = None) -> LayoutResult:
    """Lay out circles whose overlaps approximate the requested region sizes."""

    options = options or get_layout_options()
    prepared = prepare_regions(regions)
    if not prepared:
        logger.info("No non-empty regions to lay out")
        return LayoutResult(solution={}, loss=0.0, initial_loss=0.0, iterations=0)

    check_references(prepared)
    areas = add_missing_areas(prepared)
    loss = options.loss_function or loss_function
    initial_layout = options.initial_layout or best_initial_layout
    optimizer = options.optimizer or conjugate_gradient_optimizer

    initial = initial_layout(areas, options)
    setids = list(initial)
    radii = {setid: initial[setid].radius for setid in setids}
    initial_loss = loss(initial, areas)
    logger.info(
        "Laying out %d sets over %d regions, initial loss=%.6g", len(setids), len(areas), initial_loss
    )

    def objective(vec: np.ndarray) -> float:
        return loss(vector_to_circles(vec, setids, radii), areas)

    result = optimizer(objective, circles_to_vector(initial, setids), options)
    solution = vector_to_circles(result.x, setids, radii)
    final_loss = loss(solution, areas)

    warnings = []
    if final_loss > initial_loss:
        warnings.append(
            f"optimizer increased loss from {initial_loss:.6g} to {final_loss:.6g}; kept initial layout"
        )
        logger.warning(
            "Optimizer increased loss from %.6g to %.6g; keeping initial layout", initial_loss, final_loss
        )
        solution = dict(initial)
        final_loss = initial_loss

    logger.info("Layout finished after %d iterations, loss=%.6g", result.iterations, final_loss)
    return LayoutResult(
        solution=solution,
        loss=final_loss,
        initial_loss=initial_loss,
        iterations=result.iterations,
        initial=initial,
        regions=areas,
        warnings=warnings,
    )


def compute_layout(regions: Iterable[object], options: Optional[LayoutOptions] = None) -> Solution:
    return solve_layout(regions, options).solution


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "compute_layout",
    "conjugate_gradient_optimizer",
    "nelder_mead_optimizer",
    "scipy_optimizer",
    "solve_layout",
]
