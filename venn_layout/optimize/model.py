"""Parameter and result records for the optimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np


@dataclass
class NelderMeadParams:
    """Knobs for the downhill simplex method."""

    max_iterations: Optional[int] = None  # defaults to 200 * dimension
    non_zero_delta: float = 1.05
    zero_delta: float = 0.001
    min_error_delta: float = 1e-6
    min_tolerance: float = 1e-5
    rho: float = 1.0
    chi: float = 2.0
    psi: float = -0.5
    sigma: float = 0.5
    history: bool = False


@dataclass
class ConjugateGradientParams:
    max_iterations: Optional[int] = None  # defaults to 20 * dimension
    gradient_tolerance: float = 1e-5
    c1: float = 1e-6
    c2: float = 0.1
    history: bool = False


@dataclass(frozen=True)
class GradientPoint:
    """Point on the objective surface together with its gradient."""

    x: np.ndarray
    fx: float
    fxprime: np.ndarray


@dataclass
class MinimizeResult:
    x: np.ndarray
    fx: float
    iterations: int
    fxprime: Optional[np.ndarray] = None
    history: List[Dict[str, Any]] = field(default_factory=list)


__all__ = [
    "ConjugateGradientParams",
    "GradientPoint",
    "MinimizeResult",
    "NelderMeadParams",
]
