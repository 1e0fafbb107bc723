"""Root finding and minimization routines used by the layout and label stages."""

from .bisect import bisect
from .blas import dot, norm2, scale, weighted_sum, zeros, zeros_matrix
from .conjugate_gradient import conjugate_gradient, wolfe_line_search
from .model import ConjugateGradientParams, GradientPoint, MinimizeResult, NelderMeadParams
from .nelder_mead import nelder_mead

__all__ = [
    "ConjugateGradientParams",
    "GradientPoint",
    "MinimizeResult",
    "NelderMeadParams",
    "bisect",
    "conjugate_gradient",
    "dot",
    "nelder_mead",
    "norm2",
    "scale",
    "weighted_sum",
    "wolfe_line_search",
    "zeros",
    "zeros_matrix",
]
