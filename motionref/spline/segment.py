"""
Quintic Hermite spline segment.
"""

from __future__ import annotations

import numpy as np

from motionref.config import ARC_LENGTH_MIN_SAMPLES, ARC_LENGTH_SAMPLES_PER_UNIT
from motionref.utils.geometry import Point, Vector


def _horner(coeffs: np.ndarray, s: float) -> float:
    result = 0.0
    for c in coeffs[::-1]:
        result = result * s + c
    return float(result)


def _hermite_coefficients(p0: float, p1: float, v0: float, v1: float, a0: float, a1: float) -> np.ndarray:
    """
    Power-basis coefficients [c0..c5] of the quintic matching position, first
    and second derivative at s=0 and s=1.
    """
    return np.array(
        [
            p0,
            v0,
            0.5 * a0,
            -10 * p0 + 10 * p1 - 6 * v0 - 4 * v1 - 1.5 * a0 + 0.5 * a1,
            15 * p0 - 15 * p1 + 8 * v0 + 7 * v1 + 1.5 * a0 - a1,
            -6 * p0 + 6 * p1 - 3 * v0 - 3 * v1 - 0.5 * a0 + 0.5 * a1,
        ]
    )


class SplineSegment:
    """
    One quintic Hermite piece over the local parameter s in [0, 1].

    Derivative boundary conditions are with respect to s, so they already
    include the scaling by the segment's knot span. Coefficients and the arc
    length are computed once at construction.
    """

    def __init__(
        self,
        start: Point,
        end: Point,
        start_derivative: Vector,
        end_derivative: Vector,
        start_second_derivative: Vector,
        end_second_derivative: Vector,
    ):
        self.start = start
        self.end = end
        self.start_derivative = start_derivative
        self.end_derivative = end_derivative
        self.start_second_derivative = start_second_derivative
        self.end_second_derivative = end_second_derivative

        self.x_coeffs = _hermite_coefficients(
            start.x, end.x, start_derivative.x, end_derivative.x, start_second_derivative.x, end_second_derivative.x
        )
        self.y_coeffs = _hermite_coefficients(
            start.y, end.y, start_derivative.y, end_derivative.y, start_second_derivative.y, end_second_derivative.y
        )
        self._prepare_derivative_coeffs()

        self._arc_length = self._calculate_arc_length()

    def _prepare_derivative_coeffs(self):
        """Pre-compute coefficients of the first three derivatives."""
        self.x_d1 = np.polynomial.polynomial.polyder(self.x_coeffs, 1)
        self.y_d1 = np.polynomial.polynomial.polyder(self.y_coeffs, 1)
        self.x_d2 = np.polynomial.polynomial.polyder(self.x_coeffs, 2)
        self.y_d2 = np.polynomial.polynomial.polyder(self.y_coeffs, 2)
        self.x_d3 = np.polynomial.polynomial.polyder(self.x_coeffs, 3)
        self.y_d3 = np.polynomial.polynomial.polyder(self.y_coeffs, 3)

    def scaled(self, ratio: float) -> SplineSegment:
        """Same end points with derivatives rescaled for a knot span ``ratio`` times longer."""
        return SplineSegment(
            self.start,
            self.end,
            self.start_derivative.scale(ratio),
            self.end_derivative.scale(ratio),
            self.start_second_derivative.scale(ratio**2),
            self.end_second_derivative.scale(ratio**2),
        )

    def position(self, s: float) -> Point:
        return Point(_horner(self.x_coeffs, s), _horner(self.y_coeffs, s))

    def derivative(self, s: float) -> Vector:
        return Vector(_horner(self.x_d1, s), _horner(self.y_d1, s))

    def second_derivative(self, s: float) -> Vector:
        return Vector(_horner(self.x_d2, s), _horner(self.y_d2, s))

    def third_derivative(self, s: float) -> Vector:
        return Vector(_horner(self.x_d3, s), _horner(self.y_d3, s))

    def curvature(self, s: float) -> float:
        """Signed curvature, positive when turning counter-clockwise."""
        first = self.derivative(s)
        second = self.second_derivative(s)
        dividend = first.x * second.y - first.y * second.x
        divisor = (first.x * first.x + first.y * first.y) ** 1.5
        if divisor == 0.0:
            # Stationary point, no direction to turn from
            return 0.0
        return dividend / divisor

    def heading(self, s: float) -> float:
        """Direction of travel in radians."""
        return self.derivative(s).angle()

    def wheel(self, s: float, width_offset: float, length_offset: float) -> Point:
        """
        Where a wheel mounted at a body-frame offset sits when the robot center
        follows the segment. ``length_offset`` is along the direction of travel,
        ``width_offset`` to the right of it.
        """
        offset = Vector(length_offset, -width_offset).rotate(self.heading(s))
        return self.position(s).translate(offset)

    def sample_positions(self, s: np.ndarray) -> np.ndarray:
        """Positions at an array of local parameters, shape (N, 2)."""
        return np.column_stack(
            [
                np.polynomial.polynomial.polyval(s, self.x_coeffs),
                np.polynomial.polynomial.polyval(s, self.y_coeffs),
            ]
        )

    def arc_length(self) -> float:
        return self._arc_length

    def _calculate_arc_length(self) -> float:
        """Sum of chord lengths over samples proportional to the end-to-end chord."""
        chord_length = self.end.subtract(self.start).magnitude()
        iterations = max(ARC_LENGTH_MIN_SAMPLES, int(ARC_LENGTH_SAMPLES_PER_UNIT * chord_length))
        points = self.sample_positions(np.linspace(0.0, 1.0, iterations + 1))
        return float(np.sum(np.hypot(*np.diff(points, axis=0).T)))

    def __repr__(self) -> str:
        return f"SplineSegment(start={self.start}, end={self.end}, arc_length={self._arc_length:.6g})"
