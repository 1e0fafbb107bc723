from __future__ import annotations

import math
from typing import List, Sequence, Union

import numpy as np

from ..types import VectorShapeError

VectorLike = Union[np.ndarray, Sequence[float]]


def _as_vector(value: VectorLike) -> np.ndarray:
    return np.asarray(value, dtype=float)


def _check_same_size(a: np.ndarray, b: np.ndarray, op: str) -> None:
    if a.shape != b.shape:
        raise VectorShapeError(
            f"{op}: operands must be the same size, got {a.shape[0] if a.ndim else 0} and "
            f"{b.shape[0] if b.ndim else 0}"
        )


def zeros(n: int) -> np.ndarray:
    return np.zeros(n, dtype=float)


def zeros_matrix(rows: int, cols: int) -> List[np.ndarray]:
    return [zeros(cols) for _ in range(rows)]


def dot(a: VectorLike, b: VectorLike) -> float:
    va = _as_vector(a)
    vb = _as_vector(b)
    _check_same_size(va, vb, "dot")
    return float(np.dot(va, vb))


def norm2(a: VectorLike) -> float:
    return math.sqrt(max(dot(a, a), 0.0))


def weighted_sum(w1: float, v1: VectorLike, w2: float, v2: VectorLike) -> np.ndarray:
    """Return ``w1 * v1 + w2 * v2`` as a new vector."""

    va = _as_vector(v1)
    vb = _as_vector(v2)
    _check_same_size(va, vb, "weighted_sum")
    return w1 * va + w2 * vb


def scale(value: VectorLike, c: float) -> np.ndarray:
    return _as_vector(value) * c


__all__ = ["dot", "norm2", "scale", "weighted_sum", "zeros", "zeros_matrix"]
