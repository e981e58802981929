"""
Planar geometry value types used by the spline code.

Point and Vector are immutable and compare approximately (component-wise
within EPSILON), so values produced by floating point evaluation can be
compared against hand-written expectations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from motionref.utils.numeric import almost_equals


@dataclass(frozen=True, eq=False)
class Vector:
    """2D displacement or direction."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> Vector:
        return cls(0.0, 0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return almost_equals(self.x, other.x) and almost_equals(self.y, other.y)

    # Approximate equality cannot be hashed consistently
    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __mul__(self, scale: float) -> Vector:
        return self.scale(scale)

    __rmul__ = __mul__

    def scale(self, scale: float) -> Vector:
        return Vector(self.x * scale, self.y * scale)

    def add(self, v: Vector) -> Vector:
        return Vector(self.x + v.x, self.y + v.y)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def angle(self) -> float:
        """Angle of the vector in radians, measured from +x."""
        return math.atan2(self.y, self.x)

    def rotate(self, angle: float) -> Vector:
        """Rotate counter-clockwise by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)


@dataclass(frozen=True, eq=False)
class Point:
    """2D position."""

    x: float
    y: float

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return almost_equals(self.x, other.x) and almost_equals(self.y, other.y)

    __hash__ = None  # type: ignore[assignment]

    def __sub__(self, other: Point) -> Vector:
        return self.subtract(other)

    def translate(self, translation: Vector) -> Point:
        return Point(self.x + translation.x, self.y + translation.y)

    def subtract(self, p: Point) -> Vector:
        """Offset from ``p`` to this point."""
        return Vector(self.x - p.x, self.y - p.y)

    def rotate(self, angle: float, center: Point) -> Point:
        """Rotate about ``center`` by ``angle`` radians."""
        return center.translate(self.subtract(center).rotate(angle))


@dataclass(frozen=True)
class Bounds:
    """Closed interval [minimum, maximum]."""

    minimum: float
    maximum: float

    @classmethod
    def unbounded(cls) -> Bounds:
        return cls(-math.inf, math.inf)

    def size(self) -> float:
        return self.maximum - self.minimum

    def clamp(self, value: float) -> float:
        if value < self.minimum:
            return self.minimum
        if value > self.maximum:
            return self.maximum
        return value
