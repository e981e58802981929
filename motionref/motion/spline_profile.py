"""
Curvature-limited velocity planning along a spline.
"""

from __future__ import annotations

import logging
import math
from typing import List

from motionref.config import CONTROL_RATE_HZ, STRAIGHT_CURVATURE
from motionref.spline.quintic import Spline
from motionref.utils.errors import DegenerateInputError
from motionref.utils.geometry import Bounds
from motionref.utils.numeric import binary_search

from .base import ProfileBase
from .segment import KinematicSegment, Setpoint

logger = logging.getLogger(__name__)


class SplineProfile(ProfileBase):
    """
    Time-parameterized reference for a differential drive following a spline.

    The path is cut into chunks of equal arc length (the last one may be
    shorter). Every chunk boundary gets a speed limit from the outer wheel's
    speed in the local curvature, then a forward pass (acceleration) and a
    backward pass (deceleration) keep the speeds reachable from one boundary
    to the next. The profile starts and ends at rest.
    """

    def __init__(
        self,
        spline: Spline,
        chunk_length: float,
        max_wheel_velocity: float,
        max_acceleration: float,
        track_width: float,
        control_rate: float = CONTROL_RATE_HZ,
    ):
        """
        Args:
            spline: Path to follow
            chunk_length: Arc length of each chunk, smaller means higher resolution
            max_wheel_velocity: Maximum wheel speed (straight-line drivetrain speed)
            max_acceleration: Acceleration and deceleration magnitude
            track_width: Distance between the left and right wheels
            control_rate: Sample rate used by get_trajectory_points
        """
        super().__init__(control_rate)
        if not chunk_length > 0:
            raise DegenerateInputError(f"chunk_length must be positive, got {chunk_length}")
        if not max_wheel_velocity > 0:
            raise DegenerateInputError(f"max_wheel_velocity must be positive, got {max_wheel_velocity}")
        if not max_acceleration > 0:
            raise DegenerateInputError(f"max_acceleration must be positive, got {max_acceleration}")
        if track_width < 0:
            raise DegenerateInputError(f"track_width must not be negative, got {track_width}")

        self.chunk_length = float(chunk_length)
        self.max_wheel_velocity = float(max_wheel_velocity)
        self.max_acceleration = float(max_acceleration)
        self.track_width = float(track_width)

        chunks = spline.compute_chunks(self.chunk_length)
        if len(chunks) < 3:
            raise DegenerateInputError(
                f"path of {spline.arc_length():.4g} is too short for chunks of {self.chunk_length}"
            )
        self.curvatures: List[float] = list(chunks.curvatures)
        self.headings: List[float] = list(chunks.headings)
        # Arc length of each interval, the last one may be a partial chunk
        self.interval_lengths: List[float] = chunks.interval_lengths()

        self.velocities = self._plan_velocities()

        # Time starts at 0.0
        self.times: List[float] = [0.0]
        for v0, v1, distance in zip(self.velocities, self.velocities[1:], self.interval_lengths):
            self.times.append(self.times[-1] + distance / ((v0 + v1) / 2.0))
        self._time_bounds = Bounds(0.0, self.times[-1])

        logger.debug(
            "SplineProfile: %d chunks of %.4g, peak %.4g, %.4f s",
            len(self.velocities) - 1,
            self.chunk_length,
            max(self.velocities),
            self.times[-1],
        )

    def max_velocity_from_curvature(self, curvature: float) -> float:
        """Center speed that keeps the outer wheel at ``max_wheel_velocity``."""
        if abs(curvature) < STRAIGHT_CURVATURE:
            return self.max_wheel_velocity
        radius = 1.0 / abs(curvature)
        return self.max_wheel_velocity * radius / (radius + 0.5 * self.track_width)

    def _reachable(self, velocity: float, distance: float) -> float:
        """Fastest speed ``distance`` of full acceleration away from ``velocity``."""
        return math.sqrt(velocity * velocity + 2.0 * self.max_acceleration * distance)

    def _plan_velocities(self) -> List[float]:
        # Forward pass: curvature limit or what accelerating over the previous chunk allows
        velocities = [0.0]
        for curvature, distance in zip(self.curvatures[1:], self.interval_lengths):
            velocities.append(
                min(self.max_velocity_from_curvature(curvature), self._reachable(velocities[-1], distance))
            )
        velocities[-1] = 0.0

        # Backward pass: leave room to slow down for the next boundary
        for i in range(len(velocities) - 2, -1, -1):
            velocities[i] = min(velocities[i], self._reachable(velocities[i + 1], self.interval_lengths[i]))
        return velocities

    def length(self) -> float:
        """Total time of the profile."""
        return self.times[-1]

    def duration(self) -> float:
        return self.length()

    def setpoint_at_time(self, time: float) -> Setpoint:
        """
        Setpoint at ``time``, clamped to [0, length()].

        Position, velocity and acceleration follow the chunk's velocity ramp;
        curvature and heading are those of the chunk's starting boundary.
        """
        time = self._time_bounds.clamp(time)
        index = binary_search(self.times, time)
        chunk = KinematicSegment.velocity_distance(
            self.interval_lengths[index], self.velocities[index], self.velocities[index + 1]
        )
        return chunk.setpoint(
            time - self.times[index],
            offset=index * self.chunk_length,
            curvature=self.curvatures[index],
            heading=self.headings[index],
        )

    setpoint = setpoint_at_time
