import dataclasses
import math

import pytest
from motionref.spline.quintic import Spline
from motionref.utils.errors import DegenerateInputError
from motionref.utils.geometry import Point, Vector

LOOP_KNOTS = [0.0, 2.0, 30.0, 50.0]
LOOP_POINTS = [Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0), Point(0.0, -1.0)]
LOOP_DERIVATIVES = [Vector(0.0, 1.0), Vector(-1.0, 0.0), Vector(0.0, -1.0), Vector(1.0, 0.0)]
LOOP_SECOND_DERIVATIVES = [Vector(-1.0, 0.0), Vector(0.0, -1.0), Vector(1.0, 0.0), Vector(0.0, 1.0)]


def test_knots_reproduce_control_data(loop_spline):
    for knot, point, first, second in zip(LOOP_KNOTS, LOOP_POINTS, LOOP_DERIVATIVES, LOOP_SECOND_DERIVATIVES):
        assert loop_spline.position(knot) == point
        assert loop_spline.derivative(knot) == first
        assert loop_spline.second_derivative(knot) == second
    assert loop_spline.control_points() == LOOP_POINTS
    assert loop_spline.length() == 50.0


def test_wheel(loop_spline):
    assert loop_spline.wheel(0.0, 1.0, 1.0) == Point(2.0, 1.0)
    assert loop_spline.wheel(2.0, 1.0, 1.0) == Point(-1.0, 2.0)
    assert loop_spline.wheel(30.0, 1.0, 1.0) == Point(-2.0, -1.0)
    assert loop_spline.wheel(50.0, 1.0, 1.0) == Point(1.0, -2.0)


def test_straight_spline(straight_spline):
    for t in (0.0, 0.3, 1.0, 1.7, 2.0):
        assert straight_spline.curvature(t) == pytest.approx(0.0, abs=1e-12)
        assert straight_spline.heading(t) == pytest.approx(math.pi / 2)
        assert straight_spline.position(t) == Point(0.0, 5.0 * t)
    assert straight_spline.arc_length() == pytest.approx(10.0, abs=1e-6)
    assert straight_spline.segment_arc_length(1) == pytest.approx(5.0, abs=1e-6)


def test_chain_rule_scaling(parabola_spline):
    # x = t / 2, y = x^2
    assert parabola_spline.position(1.0) == Point(0.5, 0.25)
    assert parabola_spline.derivative(1.0) == Vector(0.5, 0.5)
    assert parabola_spline.second_derivative(1.0) == Vector(0.0, 0.5)
    assert parabola_spline.third_derivative(1.0) == Vector(0.0, 0.0)
    assert parabola_spline.curvature(1.0) == pytest.approx(2.0 / 2.0**1.5)
    assert parabola_spline.heading(0.0) == pytest.approx(0.0)
    assert parabola_spline.heading(2.0) == pytest.approx(math.atan2(2.0, 1.0))


def test_queries_outside_knots_clamp(loop_spline):
    assert loop_spline.position(-5.0) == loop_spline.position(0.0)
    assert loop_spline.position(75.0) == loop_spline.position(50.0)
    assert loop_spline.heading(75.0) == loop_spline.heading(50.0)


def test_reparameterize_returns_new_spline(parabola_spline):
    respaced = parabola_spline.reparameterize([0.0, 1.0])
    assert respaced.length() == 1.0
    assert respaced.position(0.0) == Point(0.0, 0.0)
    assert respaced.position(1.0) == Point(1.0, 1.0)
    # Derivatives with respect to the global parameter are kept at the knots
    assert respaced.derivative(0.0) == parabola_spline.derivative(0.0)
    assert respaced.derivative(1.0) == parabola_spline.derivative(2.0)
    assert respaced.second_derivative(1.0) == parabola_spline.second_derivative(2.0)
    # Source spline is untouched
    assert parabola_spline.length() == 2.0
    assert parabola_spline.position(1.0) == Point(0.5, 0.25)


def test_reparameterize_shift_keeps_geometry(parabola_spline):
    shifted = parabola_spline.reparameterize([10.0, 12.0])
    assert shifted.position(11.0) == parabola_spline.position(1.0)
    assert shifted.curvature(11.5) == pytest.approx(parabola_spline.curvature(1.5))


def test_reparameterize_by_arc_length(straight_spline):
    respaced = straight_spline.reparameterize_by_arc_length()
    assert respaced.knots == pytest.approx((0.0, 5.0, 10.0), abs=1e-6)
    assert respaced.length() == pytest.approx(10.0, abs=1e-6)
    assert respaced.position(7.5) == Point(0.0, 7.5)
    assert respaced.derivative(7.5) == Vector(0.0, 1.0)


def test_reparameterize_by_arc_length_keeps_path(loop_spline):
    respaced = loop_spline.reparameterize_by_arc_length()
    assert respaced.arc_length() == pytest.approx(loop_spline.arc_length())
    for i, knot in enumerate(respaced.knots):
        assert respaced.position(knot) == loop_spline.position(loop_spline.knots[i])
        assert respaced.heading(knot) == pytest.approx(loop_spline.heading(loop_spline.knots[i]))


def test_reparameterize_rejects_bad_knots(loop_spline):
    with pytest.raises(DegenerateInputError):
        loop_spline.reparameterize([0.0, 1.0])
    with pytest.raises(DegenerateInputError):
        loop_spline.reparameterize([0.0, 2.0, 2.0, 3.0])


def test_constructor_validation():
    with pytest.raises(DegenerateInputError):
        Spline([0.0], [Point(0.0, 0.0)], [Vector(1.0, 0.0)], [Vector.zero()])
    with pytest.raises(DegenerateInputError):
        Spline([0.0, 1.0], [Point(0.0, 0.0), Point(1.0, 0.0)], [Vector(1.0, 0.0)], [Vector.zero()] * 2)
    with pytest.raises(DegenerateInputError):
        Spline([1.0, 0.0], [Point(0.0, 0.0), Point(1.0, 0.0)], [Vector(1.0, 0.0)] * 2, [Vector.zero()] * 2)


def test_chunks_of_straight_spline(straight_spline):
    chunks = straight_spline.compute_chunks(0.1)
    # Start plus a boundary every 0.1 over 10 units
    assert len(chunks) == 101
    assert chunks.chunk_length == 0.1
    assert all(abs(c) < 1e-9 for c in chunks.curvatures)
    assert chunks.headings == pytest.approx((math.pi / 2,) * 101)
    assert chunks.interval_lengths() == [0.1] * 100


def test_chunks_include_partial_end(straight_spline):
    chunks = straight_spline.compute_chunks(0.3)
    # 0, 0.3 .. 9.9, then the left-over 0.1 ends at the path end
    assert len(chunks) == 35
    assert chunks.last_chunk_length == pytest.approx(0.1, abs=1e-6)
    assert sum(chunks.interval_lengths()) == pytest.approx(10.0, abs=1e-6)


def test_chunks_are_immutable(straight_spline):
    chunks = straight_spline.compute_chunks(0.3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        chunks.last_chunk_length = 0.3  # type: ignore[misc]
    assert isinstance(chunks.curvatures, tuple)
    assert isinstance(chunks.headings, tuple)


def test_chunk_curvature_signs(parabola_spline):
    left = parabola_spline.compute_chunks(0.05)
    assert all(c > 0 for c in left.curvatures)
    # Curvature of y = x^2 decreases as x grows
    assert left.curvatures[0] == pytest.approx(2.0)
    assert left.curvatures[-1] == pytest.approx(2.0 / 5.0**1.5)
    assert all(a >= b for a, b in zip(left.curvatures, left.curvatures[1:]))

    right = Spline(
        [0.0, 2.0],
        [Point(0.0, 0.0), Point(-1.0, 1.0)],
        [Vector(-0.5, 0.0), Vector(-0.5, 1.0)],
        [Vector(0.0, 0.5), Vector(0.0, 0.5)],
    ).compute_chunks(0.05)
    assert all(c < 0 for c in right.curvatures)
    assert len(right) == len(left)


def test_chunk_boundaries_carry_across_segments(loop_spline):
    chunks = loop_spline.compute_chunks(0.25)
    # One sample per 0.25 of total arc length, plus the start and partial end
    expected = loop_spline.arc_length() / 0.25 + 1
    assert abs(len(chunks) - expected) <= 0.02 * expected + 2
    assert len(chunks.headings) == len(chunks.curvatures)
    assert chunks.headings[0] == pytest.approx(math.pi / 2)


def test_chunk_length_must_be_positive(straight_spline):
    with pytest.raises(DegenerateInputError):
        straight_spline.compute_chunks(0.0)
