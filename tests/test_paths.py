import math

import pytest

from venn_layout import Circle, circle_from_path, circle_path, intersection_area_path
from venn_layout.paths import EMPTY_PATH


def test_circle_path_format():
    path = circle_path(Circle(12.5, -3.25, 7.125))
    assert path == "\nM 12.5 -3.25 \nm -7.125 0 \na 7.125 7.125 0 1 0 14.25 0 \na 7.125 7.125 0 1 0 -14.25 0"


@pytest.mark.parametrize(
    "circle",
    [
        Circle(12.5, -3.25, 7.125),
        Circle(1.0 / 3.0, math.pi, math.sqrt(2.0)),
        Circle(0.0, 0.0, 0.0),
        Circle(-1e6, 2.5e-8, 42.0),
    ],
)
def test_circle_from_path_inverts_circle_path(circle):
    parsed = circle_from_path(circle_path(circle))

    assert math.isclose(parsed.x, circle.x, abs_tol=1e-12)
    assert math.isclose(parsed.y, circle.y, abs_tol=1e-12)
    assert math.isclose(parsed.radius, circle.radius, abs_tol=1e-12)


def test_circle_from_path_rejects_other_paths():
    with pytest.raises(ValueError):
        circle_from_path("M 0 0")
    with pytest.raises(ValueError):
        circle_from_path("\nM 1 2 \nL 3 4")


def test_intersection_area_path_disjoint_is_empty():
    assert intersection_area_path([Circle(0.0, 0.0, 1.0), Circle(5.0, 0.0, 1.0)]) == EMPTY_PATH


def test_intersection_area_path_single_and_nested_circles():
    inner = Circle(0.5, 0.0, 1.0)
    assert intersection_area_path([inner]) == circle_path(inner)
    assert intersection_area_path([Circle(0.0, 0.0, 3.0), inner]) == circle_path(inner)


def test_intersection_area_path_lens_uses_two_arcs():
    path = intersection_area_path([Circle(0.0, 0.0, 1.0), Circle(1.0, 0.0, 1.0)])

    assert path.startswith("\nM ")
    assert path.count("\nA ") == 2
    # both arcs of a shallow lens are minor arcs swept clockwise
    for command in path.split("\nA ")[1:]:
        tokens = command.split()
        assert tokens[3:5] == ["0", "1"]
