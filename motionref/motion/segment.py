"""
Constant-acceleration motion segment and the setpoint value it produces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from motionref.utils.errors import DegenerateInputError


@dataclass(frozen=True)
class Setpoint:
    """Instantaneous commanded reference."""

    position: float
    velocity: float
    acceleration: float
    curvature: float = 0.0
    heading: float = 0.0


class KinematicSegment:
    """
    One constant-acceleration phase of motion.

    Described by its start/end velocity, signed distance and duration. Build
    through one of the factory methods; instances are never modified.
    Local time queries are not clamped, callers keep ``0 <= t <= duration``.
    """

    __slots__ = ("distance", "start_velocity", "end_velocity", "duration", "acceleration")

    def __init__(self, distance: float, start_velocity: float, end_velocity: float, duration: float):
        if not math.isfinite(duration) or duration <= 0:
            raise DegenerateInputError(
                f"segment duration must be positive and finite, got {duration} "
                f"(v {start_velocity} -> {end_velocity}, distance {distance})"
            )
        self.distance = float(distance)
        self.start_velocity = float(start_velocity)
        self.end_velocity = float(end_velocity)
        self.duration = float(duration)
        self.acceleration = (self.end_velocity - self.start_velocity) / self.duration

    @classmethod
    def constant_velocity(cls, velocity: float, distance: float) -> KinematicSegment:
        """Cruise at ``velocity`` for ``distance``."""
        if velocity == 0:
            raise DegenerateInputError("constant velocity segment needs a non-zero velocity")
        return cls(distance, velocity, velocity, distance / velocity)

    @classmethod
    def velocity_transition(
        cls, start_velocity: float, end_velocity: float, max_accel: float, max_decel: float
    ) -> KinematicSegment:
        """
        Ramp from ``start_velocity`` to ``end_velocity`` at the applicable limit.

        Speeding up (|end| > |start|) uses ``max_accel``, anything else uses
        ``max_decel``. Both limits are magnitudes.
        """
        average_velocity = (start_velocity + end_velocity) / 2.0
        delta_velocity = end_velocity - start_velocity
        rate = max_accel if abs(end_velocity) > abs(start_velocity) else max_decel
        if rate <= 0:
            raise DegenerateInputError(f"acceleration limit must be positive, got {rate}")
        duration = abs(delta_velocity) / rate
        return cls(average_velocity * duration, start_velocity, end_velocity, duration)

    @classmethod
    def velocity_distance(
        cls, distance: float, start_velocity: float, end_velocity: float
    ) -> KinematicSegment:
        """Cover a fixed ``distance`` while ramping linearly between two velocities."""
        average_velocity = (start_velocity + end_velocity) / 2.0
        if average_velocity == 0:
            raise DegenerateInputError("velocity/distance segment needs a non-zero average velocity")
        return cls(distance, start_velocity, end_velocity, distance / average_velocity)

    def velocity(self, t: float) -> float:
        return self.start_velocity + self.acceleration * t

    def position(self, t: float) -> float:
        """Distance covered after ``t`` seconds (area under the velocity ramp)."""
        return (self.start_velocity + self.velocity(t)) / 2.0 * t

    def setpoint(self, t: float, offset: float = 0.0, curvature: float = 0.0, heading: float = 0.0) -> Setpoint:
        return Setpoint(
            position=self.position(t) + offset,
            velocity=self.velocity(t),
            acceleration=self.acceleration,
            curvature=curvature,
            heading=heading,
        )

    def __repr__(self) -> str:
        return (
            f"KinematicSegment(distance={self.distance:.6g}, v={self.start_velocity:.6g}->"
            f"{self.end_velocity:.6g}, duration={self.duration:.6g})"
        )
