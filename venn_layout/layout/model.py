"""Options and result records for the layout solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..optimize.model import MinimizeResult
from ..types import Region, Solution

LossFunction = Callable[[Solution, Sequence[Region]], float]
Objective = Callable[[np.ndarray], float]
Optimizer = Callable[[Objective, np.ndarray, "LayoutOptions"], MinimizeResult]
InitialLayout = Callable[[Sequence[Region], "LayoutOptions"], Solution]


@dataclass
class LayoutOptions:
    """Layout solver options.

    ``loss_function``, ``optimizer`` and ``initial_layout`` are strategy hooks;
    ``None`` selects the built-in squared-error loss, finite-difference
    conjugate gradient and greedy/MDS initial placement respectively.
    """

    loss_function: Optional[LossFunction] = None
    optimizer: Optional[Optimizer] = None
    initial_layout: Optional[InitialLayout] = None
    max_iterations: Optional[int] = None
    restarts: int = 10
    random_seed: Optional[int] = None
    gradient_step: float = 1e-7


@dataclass
class LayoutResult:
    solution: Solution
    loss: float
    initial_loss: float
    iterations: int
    initial: Solution = field(default_factory=dict)
    regions: List[Region] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


__all__ = [
    "InitialLayout",
    "LayoutOptions",
    "LayoutResult",
    "LossFunction",
    "Objective",
    "Optimizer",
]
