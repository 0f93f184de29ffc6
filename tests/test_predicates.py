import math

import pytest

from cg2d.geom import Pt, Bbox, barycentric, circumcircle, polygon_area, triangle_area, unique_points
from cg2d.predicates import ExactPredicates, FloatPredicates, Side, incircle, orient2d


A, B, C = Pt(0.0, 0.0), Pt(1.0, 0.0), Pt(0.0, 1.0)


def test_orient2d_sign():
    assert orient2d(A, B, C) == 1.0
    assert orient2d(A, C, B) == -1.0
    assert orient2d(A, B, Pt(2.0, 0.0)) == 0.0


@pytest.mark.parametrize("pred", [FloatPredicates(), ExactPredicates()], ids=repr)
def test_orientation(pred):
    assert pred.orientation(A, B, C) == 1
    assert pred.orientation(A, C, B) == -1
    assert pred.orientation(Pt(0, 0), Pt(1, 1), Pt(2, 2)) == 0


@pytest.mark.parametrize("pred", [FloatPredicates(), ExactPredicates()], ids=repr)
def test_in_circumcircle(pred):
    assert pred.in_circumcircle((A, B, C), Pt(0.25, 0.25)) is Side.INSIDE
    assert pred.in_circumcircle((A, B, C), Pt(2.0, 2.0)) is Side.OUTSIDE
    # (1, 1) лежить на колі через три кути квадрата
    assert pred.in_circumcircle((A, B, C), Pt(1.0, 1.0)) is Side.ON_BOUNDARY
    # обхід за годинниковою стрілкою дає той самий результат
    assert pred.in_circumcircle((A, C, B), Pt(0.25, 0.25)) is Side.INSIDE


@pytest.mark.parametrize("pred", [FloatPredicates(), ExactPredicates()], ids=repr)
def test_direction_predicates(pred):
    up = Pt(0.0, 1.0)
    # точка в нескінченності вгорі лежить зліва від A->B
    assert pred.orientation_dir(A, B, up) == 1
    assert pred.orientation_dir(B, A, up) == -1
    assert pred.orientation_dir(A, C, up) == 0
    assert pred.dot_dir(A, C, up) == 1
    assert pred.dot_dir(C, A, up) == -1
    assert pred.dot_dir(A, B, up) == 0


def test_incircle_raw_sign():
    assert incircle(A, B, C, Pt(0.25, 0.25)) > 0
    assert incircle(A, C, B, Pt(0.25, 0.25)) > 0
    assert incircle(A, B, C, Pt(1.0, 1.0)) == 0.0
    assert incircle(A, B, Pt(2.0, 0.0), Pt(0.5, 0.5)) == 0.0


def test_exact_resolves_what_float_tolerance_treats_as_boundary():
    p = Pt(1.0, 1.0 - 2.0 ** -40)
    assert ExactPredicates().in_circumcircle((A, B, C), p) is Side.INSIDE
    assert FloatPredicates().in_circumcircle((A, B, C), p) is Side.ON_BOUNDARY


def test_tolerance_is_scale_invariant():
    pred = FloatPredicates()
    for s in (1e-6, 1.0, 1e6):
        tri = (Pt(0, 0), Pt(s, 0), Pt(0, s))
        assert pred.orientation(*tri) == 1
        assert pred.in_circumcircle(tri, Pt(0.25 * s, 0.25 * s)) is Side.INSIDE
        assert pred.in_circumcircle(tri, Pt(s, s)) is Side.ON_BOUNDARY


def test_negative_eps_rejected():
    with pytest.raises(ValueError):
        FloatPredicates(eps=-1.0)


def test_collinear():
    pred = FloatPredicates()
    assert pred.collinear([])
    assert pred.collinear([Pt(1, 1), Pt(1, 1)])
    assert pred.collinear([Pt(0, 0), Pt(1, 0), Pt(3, 0), Pt(-2, 0)])
    assert not pred.collinear([Pt(0, 0), Pt(1, 0), Pt(0, 1)])


def test_circumcircle():
    c = circumcircle(Pt(0, 0), Pt(3, 4), Pt(0, 4))
    assert c.center == Pt(1.5, 2.0)
    assert c.radius == 2.5

    c = circumcircle(Pt(1, 1), Pt(4, 5), Pt(1, 5))
    assert c.center == Pt(2.5, 3.0)
    assert c.radius == 2.5

    assert circumcircle(Pt(0, 0), Pt(1, 1), Pt(2, 2)) is None


def test_barycentric():
    w = barycentric(A, B, C, Pt(1 / 3, 1 / 3))
    assert w == pytest.approx((1 / 3, 1 / 3, 1 / 3))
    assert barycentric(A, B, C, A) == pytest.approx((1.0, 0.0, 0.0))
    assert barycentric(Pt(0, 0), Pt(1, 1), Pt(2, 2), A) is None


def test_areas_and_bbox():
    assert triangle_area(A, B, C) == 0.5
    assert triangle_area(A, C, B) == -0.5
    assert polygon_area([Pt(0, 0), Pt(2, 0), Pt(2, 1), Pt(0, 1)]) == 2.0

    box = Bbox.of([Pt(1, 2), Pt(-1, 5), Pt(0, 0)])
    assert box == Bbox(-1, 0, 1, 5)
    assert box.center == Pt(0.0, 2.5)
    assert box.contains(Pt(1, 5)) and not box.contains(Pt(1.1, 5))
    assert box.expand(Pt(3, -1)) == Bbox(-1, -1, 3, 5)
    assert box.intersects(Bbox(1, 5, 2, 6))
    assert not box.intersects(Bbox(1.5, 0, 2, 1))
    assert math.isclose(sum(q.area() for q in box.split(box.center)), box.area())


def test_unique_points_keeps_order():
    pts = unique_points([(0, 0), (1, 0), (0, 0), (1, 1e-12)])
    assert pts == [Pt(0, 0), Pt(1, 0)]
