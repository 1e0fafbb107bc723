import math

import numpy as np
import pytest

from venn_layout import BisectError, VectorShapeError
from venn_layout.optimize import (
    ConjugateGradientParams,
    GradientPoint,
    NelderMeadParams,
    bisect,
    conjugate_gradient,
    dot,
    nelder_mead,
    norm2,
    scale,
    wolfe_line_search,
    weighted_sum,
    zeros,
    zeros_matrix,
)


def _quadratic(x):
    return (x[0] - 3.0) ** 2 + (x[1] + 2.0) ** 2


def _quadratic_with_gradient(x):
    return _quadratic(x), np.array([2.0 * (x[0] - 3.0), 2.0 * (x[1] + 2.0)])


def test_vector_helpers():
    assert dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0
    assert norm2([3.0, 4.0]) == 5.0
    assert list(weighted_sum(2.0, [1.0, 1.0], -1.0, [0.5, 3.0])) == [1.5, -1.0]
    assert list(scale([1.0, -2.0], 3.0)) == [3.0, -6.0]
    assert list(zeros(3)) == [0.0, 0.0, 0.0]

    rows = zeros_matrix(2, 3)
    rows[0][0] = 1.0
    assert rows[1][0] == 0.0


def test_vector_helpers_reject_mismatched_lengths():
    with pytest.raises(VectorShapeError):
        dot([1.0, 2.0], [1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        weighted_sum(1.0, [1.0], 1.0, [1.0, 2.0])


def test_weighted_sum_does_not_alias_inputs():
    v1 = np.array([1.0, 2.0])
    out = weighted_sum(1.0, v1, 0.0, np.zeros(2))
    out[0] = 10.0
    assert v1[0] == 1.0


def test_bisect_finds_root():
    assert abs(bisect(lambda x: x, -1.0, 1.0)) < 1e-10
    assert math.isclose(bisect(lambda x: x * x - 2.0, 0.0, 2.0), math.sqrt(2.0), abs_tol=1e-9)


def test_bisect_returns_endpoint_roots():
    assert bisect(lambda x: x - 1.0, 1.0, 4.0) == 1.0
    assert bisect(lambda x: x - 4.0, 1.0, 4.0) == 4.0


def test_bisect_rejects_bracket_without_sign_change():
    with pytest.raises(BisectError):
        bisect(lambda x: x * x + 1.0, -1.0, 1.0)


def test_nelder_mead_quadratic():
    result = nelder_mead(_quadratic, np.array([0.0, 0.0]))

    assert math.isclose(result.x[0], 3.0, abs_tol=1e-3)
    assert math.isclose(result.x[1], -2.0, abs_tol=1e-3)
    assert result.fx < 1e-5
    assert result.iterations > 0


def test_nelder_mead_respects_iteration_cap():
    result = nelder_mead(_quadratic, np.array([0.0, 0.0]), NelderMeadParams(max_iterations=3))
    assert result.iterations <= 3


def test_nelder_mead_history_tracks_simplex():
    result = nelder_mead(_quadratic, np.array([1.0, 1.0]), NelderMeadParams(history=True))

    assert len(result.history) == result.iterations
    first = result.history[0]
    assert [p.id for p in first["simplex"]] == [0, 1, 2]
    assert result.history[-1]["fx"] <= first["fx"]


def test_nelder_mead_does_not_mutate_start():
    x0 = np.array([0.5, 0.5])
    nelder_mead(_quadratic, x0)
    assert list(x0) == [0.5, 0.5]


def test_conjugate_gradient_quadratic():
    cg = conjugate_gradient(_quadratic_with_gradient, np.array([0.0, 0.0]))
    nm = nelder_mead(_quadratic, np.array([0.0, 0.0]))

    assert math.isclose(cg.x[0], 3.0, abs_tol=1e-4)
    assert math.isclose(cg.x[1], -2.0, abs_tol=1e-4)
    assert norm2(cg.fxprime) <= 1e-5
    assert cg.iterations < nm.iterations


def test_conjugate_gradient_coupled_quadratic():
    a = np.array([[3.0, 1.0, 0.0], [1.0, 2.0, 0.5], [0.0, 0.5, 1.0]])
    b = np.array([1.0, -2.0, 0.5])
    expected = np.linalg.solve(a, b)

    def f(x):
        return 0.5 * x @ a @ x - b @ x, a @ x - b

    result = conjugate_gradient(f, np.zeros(3))
    assert np.allclose(result.x, expected, atol=1e-4)


def test_conjugate_gradient_history():
    params = ConjugateGradientParams(history=True)
    result = conjugate_gradient(_quadratic_with_gradient, np.array([10.0, 10.0]), params)

    assert len(result.history) >= 2
    assert set(result.history[0]) == {"x", "fx", "fxprime", "alpha"}
    assert result.history[-1]["fx"] <= result.history[0]["fx"]


def test_conjugate_gradient_stops_immediately_at_minimum():
    result = conjugate_gradient(_quadratic_with_gradient, np.array([3.0, -2.0]))
    assert result.iterations == 0
    assert list(result.x) == [3.0, -2.0]


def test_wolfe_line_search_step_satisfies_wolfe_conditions():
    c1, c2 = 1e-6, 0.1
    x0 = np.array([0.0, 0.0])
    fx, grad = _quadratic_with_gradient(x0)
    current = GradientPoint(x=x0, fx=fx, fxprime=grad)
    pk = -grad

    step, point = wolfe_line_search(_quadratic_with_gradient, pk, current, 1.0, c1=c1, c2=c2)

    slope0 = dot(grad, pk)
    assert step > 0.0
    assert np.allclose(point.x, x0 + step * pk)
    assert point.fx <= fx + c1 * step * slope0
    assert abs(dot(point.fxprime, pk)) <= -c2 * slope0


def test_wolfe_line_search_reports_last_probed_step():
    # f(x) = -x keeps decreasing with a constant slope, so the curvature test never passes
    def downhill(x):
        return -float(x[0]), np.array([-1.0])

    x0 = np.array([0.0])
    fx, grad = downhill(x0)
    step, point = wolfe_line_search(downhill, np.array([1.0]), GradientPoint(x=x0, fx=fx, fxprime=grad))

    assert step == 512.0
    assert point.x[0] == step


def test_conjugate_gradient_survives_failed_line_searches():
    # the reported gradient points uphill, so every trial step raises f
    def misleading(x):
        return float(x @ x), -2.0 * x

    x0 = np.array([1.0, 1.0])
    result = conjugate_gradient(misleading, x0, ConjugateGradientParams(max_iterations=5, history=True))

    assert list(result.x) == [1.0, 1.0]
    assert result.fx == 2.0
    assert result.iterations == 5
    assert [entry["alpha"] for entry in result.history] == [0.0] * 5 + [1.0]
