"""Layout solver: fits circle positions to requested region sizes."""

from .config import get_layout_options, reset_layout_options, set_layout_options
from .initial_guess import (
    best_initial_layout,
    constrained_mds_layout,
    distance_from_intersect_area,
    greedy_layout,
)
from .loss import log_ratio_loss_function, loss_function, region_area
from .model import LayoutOptions, LayoutResult
from .solver_core import (
    compute_layout,
    conjugate_gradient_optimizer,
    nelder_mead_optimizer,
    scipy_optimizer,
    solve_layout,
)
from .utils import add_missing_areas, prepare_regions

__all__ = [
    "LayoutOptions",
    "LayoutResult",
    "add_missing_areas",
    "best_initial_layout",
    "compute_layout",
    "conjugate_gradient_optimizer",
    "constrained_mds_layout",
    "distance_from_intersect_area",
    "get_layout_options",
    "greedy_layout",
    "log_ratio_loss_function",
    "loss_function",
    "nelder_mead_optimizer",
    "prepare_regions",
    "region_area",
    "reset_layout_options",
    "scipy_optimizer",
    "set_layout_options",
    "solve_layout",
]
