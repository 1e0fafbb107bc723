import math

import pytest

from venn_layout import (
    Circle,
    Point2D,
    Stats,
    circle_area,
    circle_circle_intersection,
    circle_overlap,
    distance,
    get_center,
    intersection_area,
)


def _on_circle(point, circle, tol=1e-9):
    return math.isclose(distance(point, circle), circle.radius, abs_tol=tol)


def test_circle_overlap_disjoint_and_nested_bounds():
    assert circle_overlap(2.0, 1.0, 3.0) == 0.0
    assert circle_overlap(2.0, 1.0, 4.5) == 0.0
    assert math.isclose(circle_overlap(2.0, 1.0, 1.0), math.pi)
    assert math.isclose(circle_overlap(2.0, 1.0, 0.25), math.pi)


def test_circle_overlap_is_continuous_and_non_increasing():
    r1, r2 = 2.0, 1.0
    steps = 200
    previous = circle_overlap(r1, r2, 1.0)
    for i in range(1, steps + 1):
        d = 1.0 + 2.0 * i / steps
        value = circle_overlap(r1, r2, d)
        assert value <= previous + 1e-12
        previous = value

    assert math.isclose(circle_overlap(r1, r2, 1.0 + 1e-9), math.pi, rel_tol=1e-6)
    assert math.isclose(circle_overlap(r1, r2, 3.0 - 1e-9), 0.0, abs_tol=1e-6)


def test_circle_area_half_disc():
    assert math.isclose(circle_area(2.0, 2.0), 2.0 * math.pi)
    assert math.isclose(circle_area(2.0, 4.0), 4.0 * math.pi)
    assert circle_area(2.0, 0.0) == 0.0


def test_circle_circle_intersection_points_lie_on_both_circles():
    a = Circle(0.0, 0.0, 1.0)
    b = Circle(1.0, 0.5, 1.2)
    points = circle_circle_intersection(a, b)

    assert len(points) == 2
    for p in points:
        assert _on_circle(p, a)
        assert _on_circle(p, b)


@pytest.mark.parametrize(
    "a, b",
    [
        (Circle(0.0, 0.0, 1.0), Circle(3.0, 0.0, 1.0)),  # disjoint
        (Circle(0.0, 0.0, 1.0), Circle(2.0, 0.0, 1.0)),  # externally tangent
        (Circle(0.0, 0.0, 2.0), Circle(1.0, 0.0, 1.0)),  # internally tangent
        (Circle(0.0, 0.0, 3.0), Circle(0.5, 0.0, 1.0)),  # nested
        (Circle(1.0, 1.0, 1.0), Circle(1.0, 1.0, 1.0)),  # identical
    ],
)
def test_circle_circle_intersection_degenerate_cases_return_no_points(a, b):
    assert circle_circle_intersection(a, b) == []


def test_intersection_area_single_circle():
    assert math.isclose(intersection_area([Circle(1.0, 2.0, 3.0)]), 9.0 * math.pi)


def test_intersection_area_disjoint_circles_is_zero():
    assert intersection_area([Circle(0.0, 0.0, 1.0), Circle(2.5, 0.0, 1.0)]) == 0.0


def test_intersection_area_identical_circles():
    circles = [Circle(0.0, 0.0, 2.0), Circle(0.0, 0.0, 2.0)]
    assert math.isclose(intersection_area(circles), 4.0 * math.pi)


def test_intersection_area_ignores_duplicate_circles():
    a = Circle(0.0, 0.0, 1.0)
    c = Circle(1.0, 0.0, 1.0)
    expected = intersection_area([a, c])

    assert math.isclose(intersection_area([a, a, c]), expected, rel_tol=1e-12)
    assert math.isclose(intersection_area([a, c, Circle(0.0, 0.0, 1.0)]), expected, rel_tol=1e-12)
    assert math.isclose(expected, circle_overlap(1.0, 1.0, 1.0), rel_tol=1e-9)


def test_equal_sets_get_consistent_triple_area():
    a = Circle(0.0, 0.0, 2.0)
    c = Circle(2.5, 0.0, 1.5)
    assert math.isclose(
        intersection_area([a, Circle(0.0, 0.0, 2.0), c]),
        circle_overlap(2.0, 1.5, 2.5),
        rel_tol=1e-9,
    )


def test_intersection_area_tangent_circles_is_zero():
    assert intersection_area([Circle(0.0, 0.0, 1.0), Circle(2.0, 0.0, 1.0)]) == 0.0


def test_intersection_area_nested_circle():
    circles = [Circle(0.0, 0.0, 3.0), Circle(0.5, 0.0, 1.0)]
    assert math.isclose(intersection_area(circles), math.pi)


def test_intersection_area_matches_two_circle_closed_form():
    a = Circle(0.0, 0.0, 1.0)
    b = Circle(1.0, 0.0, 1.0)
    expected = circle_overlap(1.0, 1.0, 1.0)

    assert math.isclose(intersection_area([a, b]), expected, rel_tol=1e-9)
    assert math.isclose(intersection_area([b, a]), expected, rel_tol=1e-9)


def test_intersection_area_stats_form_closed_boundary():
    circles = [Circle(0.0, 0.0, 1.0), Circle(1.0, 0.0, 1.0), Circle(0.5, 0.8, 1.0)]
    stats = Stats()
    area = intersection_area(circles, stats)

    assert area > 0.0
    assert math.isclose(stats.area, area)
    assert math.isclose(stats.arc_area + stats.polygon_area, area)
    assert len(stats.inner_points) >= 3
    assert len(stats.intersection_points) == 6

    arcs = stats.arcs
    assert len(arcs) == len(stats.inner_points)
    for i, arc in enumerate(arcs):
        assert arc.p1 == arcs[(i + 1) % len(arcs)].p2
        assert arc.width <= 2.0 * arc.circle.radius

    for i, j in [(0, 1), (0, 2), (1, 2)]:
        assert area < intersection_area([circles[i], circles[j]])


def test_intersection_area_stats_for_nested_circle_records_full_arc():
    stats = Stats()
    intersection_area([Circle(0.0, 0.0, 3.0), Circle(0.5, 0.0, 1.0)], stats)

    assert len(stats.arcs) == 1
    assert stats.arcs[0].circle == Circle(0.5, 0.0, 1.0)
    assert math.isclose(stats.arcs[0].width, 2.0)


def test_get_center_and_distance():
    center = get_center([Point2D(0.0, 0.0), Point2D(2.0, 0.0), Point2D(1.0, 3.0)])
    assert center == Point2D(1.0, 1.0)
    assert math.isclose(distance(Point2D(0.0, 0.0), Point2D(3.0, 4.0)), 5.0)

    with pytest.raises(ValueError):
        get_center([])


def test_circle_rejects_negative_radius():
    with pytest.raises(ValueError):
        Circle(0.0, 0.0, -1.0)
