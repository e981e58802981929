"""
One-dimensional motion profile.

Moves a single degree of freedom from its current state to a target position
under velocity/acceleration/deceleration limits. The profile is an ordered
list of constant-acceleration segments built once at construction:

1. moving away from the target: stop first
2. too close to stop in time: stop (overshoot), then come back
3. below cruise speed: accelerate to cruise if there is room to stop afterwards,
   otherwise finish with a triangular accel/decel pair
4. above cruise speed: slow down to cruise
5. at cruise speed: cruise over the slack, then stop
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from motionref.config import EPSILON, MAX_PROFILE_SEGMENTS, CONTROL_RATE_HZ
from motionref.utils.errors import DegenerateInputError, TrajectoryPlanningError
from motionref.utils.geometry import Bounds

from .base import ProfileBase
from .segment import KinematicSegment, Setpoint

logger = logging.getLogger(__name__)


def stopping_distance(velocity: float, max_decel: float) -> float:
    """Signed distance covered while braking from ``velocity`` to rest."""
    return 0.5 * abs(velocity) * velocity / max_decel


def _peak_segments(
    velocity: float, remaining: float, max_velocity: float, max_accel: float, max_decel: float
) -> List[KinematicSegment]:
    """
    Accelerate-then-stop pair that lands exactly on ``remaining``.

    Solves for the peak speed whose accel distance plus decel distance equals
    the remaining distance. From rest, ``max_decel / (max_accel + max_decel)``
    of it is spent accelerating. A peak above ``max_velocity`` is capped and
    the left-over distance is cruised (trapezoid).
    """
    direction = math.copysign(1.0, remaining)
    distance = abs(remaining)
    speed = abs(velocity)

    # (peak^2 - speed^2) / (2 a) + peak^2 / (2 d) == distance
    accel_distance = (distance * max_decel - 0.5 * speed**2) / (max_accel + max_decel)
    peak = math.sqrt(max(speed**2 + 2.0 * accel_distance * max_accel, 0.0))
    peak = min(peak, max_velocity)

    if accel_distance <= 0 or peak - speed <= EPSILON:
        # Already at (or past) the peak: only the stop remains
        return [KinematicSegment.velocity_transition(velocity, 0.0, max_accel, max_decel)]

    peak_velocity = direction * peak
    accel = KinematicSegment.velocity_transition(velocity, peak_velocity, max_accel, max_decel)
    stop = KinematicSegment.velocity_transition(peak_velocity, 0.0, max_accel, max_decel)
    segments = [accel]
    slack = remaining - accel.distance - stop.distance
    if abs(slack) > EPSILON and math.copysign(1.0, slack) == direction:
        segments.append(KinematicSegment.constant_velocity(peak_velocity, slack))
    segments.append(stop)
    return segments


def plan_segments(
    start_velocity: float,
    displacement: float,
    max_velocity: float,
    max_accel: float,
    max_decel: float,
) -> List[KinematicSegment]:
    """
    Build the ordered segment list covering ``displacement``.

    Segments are appended until the remaining distance is within EPSILON of
    zero. An overshooting cruise is handled by rewinding the last segment and
    replacing it with a triangular/trapezoidal pair, which ends the plan.
    """
    segments: List[KinematicSegment] = []
    velocity = float(start_velocity)
    remaining = float(displacement)

    def transition(v0: float, v1: float) -> KinematicSegment:
        return KinematicSegment.velocity_transition(v0, v1, max_accel, max_decel)

    if abs(remaining) <= EPSILON and velocity == 0:
        return segments

    first = True
    while True:
        if len(segments) >= MAX_PROFILE_SEGMENTS:
            raise TrajectoryPlanningError(
                f"segmentation did not converge after {len(segments)} segments "
                f"(v0={start_velocity}, displacement={displacement})"
            )

        direction = math.copysign(1.0, remaining)
        cruise = direction * max_velocity
        speed = abs(velocity)

        if first and velocity != 0 and math.copysign(1.0, velocity) != direction:
            logger.trace("moving away from target at %.6g, stopping first", velocity)  # type: ignore[attr-defined]
            segment = transition(velocity, 0.0)
        elif first and abs(stopping_distance(velocity, max_decel)) > abs(remaining) + EPSILON:
            logger.trace("cannot stop within %.6g, overshooting", remaining)  # type: ignore[attr-defined]
            segment = transition(velocity, 0.0)
        elif speed < max_velocity - EPSILON:
            accel = transition(velocity, cruise)
            if abs(accel.distance + stopping_distance(cruise, max_decel)) <= abs(remaining) + EPSILON:
                segment = accel
            else:
                logger.trace("no room for cruise, triangular finish over %.6g", remaining)  # type: ignore[attr-defined]
                segments.extend(_peak_segments(velocity, remaining, max_velocity, max_accel, max_decel))
                break
        elif speed > max_velocity + EPSILON:
            segment = transition(velocity, cruise)
        else:
            stop = transition(velocity, 0.0)
            slack = abs(remaining) - abs(stop.distance)
            if slack > EPSILON:
                segment = KinematicSegment.constant_velocity(velocity, remaining - stop.distance)
            elif slack >= -EPSILON or not segments:
                segment = stop
            else:
                # Overshoot: replace the segment that brought us to cruise
                previous = segments.pop()
                velocity = previous.start_velocity
                remaining += previous.distance
                logger.trace("cruise overshoots, recomputing peak over %.6g", remaining)  # type: ignore[attr-defined]
                segments.extend(_peak_segments(velocity, remaining, max_velocity, max_accel, max_decel))
                break

        segments.append(segment)
        remaining -= segment.distance
        velocity = segment.end_velocity
        first = False
        if abs(remaining) <= EPSILON:
            break

    return segments


class MotionProfile(ProfileBase):
    """
    Single-axis motion profile from a current state to a target position.

    Queries take the elapsed time since the profile was built and are clamped
    to [0, duration]: past the end the final state is held.
    """

    def __init__(
        self,
        current_velocity: float,
        current_position: float,
        target_distance: float,
        max_velocity: float,
        max_accel: float,
        max_decel: float,
        control_rate: float = CONTROL_RATE_HZ,
    ):
        """
        Args:
            current_velocity: Signed velocity at the start of the profile
            current_position: Position at the start of the profile
            target_distance: Absolute target position
            max_velocity: Cruise speed magnitude
            max_accel: Acceleration magnitude used when speeding up
            max_decel: Deceleration magnitude used when slowing down
            control_rate: Sample rate used by get_trajectory_points
        """
        super().__init__(control_rate)
        for name, value in (("max_velocity", max_velocity), ("max_accel", max_accel), ("max_decel", max_decel)):
            if not value > 0:
                raise DegenerateInputError(f"{name} must be positive, got {value}")

        self.start_position = float(current_position)
        self.target_distance = float(target_distance)
        self.max_velocity = float(max_velocity)
        self.max_accel = float(max_accel)
        self.max_decel = float(max_decel)

        self.segments: Tuple[KinematicSegment, ...] = tuple(
            plan_segments(
                current_velocity,
                self.target_distance - self.start_position,
                self.max_velocity,
                self.max_accel,
                self.max_decel,
            )
        )

        # Cumulative start time/position of every segment
        self._start_times: List[float] = []
        self._start_positions: List[float] = []
        elapsed = 0.0
        position = self.start_position
        for segment in self.segments:
            self._start_times.append(elapsed)
            self._start_positions.append(position)
            elapsed += segment.duration
            position += segment.distance

        self.profile_duration = elapsed
        self._time_bounds = Bounds(0.0, self.profile_duration)
        logger.debug(
            "MotionProfile %.4g -> %.4g: %d segments, %.4f s",
            self.start_position,
            self.target_distance,
            len(self.segments),
            self.profile_duration,
        )

    def duration(self) -> float:
        return self.profile_duration

    def setpoint(self, time: float) -> Setpoint:
        if not self.segments:
            return Setpoint(self.start_position, 0.0, 0.0)
        t = self._time_bounds.clamp(time)
        for segment, start_time, start_position in zip(self.segments, self._start_times, self._start_positions):
            if t <= start_time + segment.duration:
                return segment.setpoint(t - start_time, start_position)
        # Accumulated durations can leave t a hair past the last window
        last = len(self.segments) - 1
        return self.segments[last].setpoint(self.segments[last].duration, self._start_positions[last])

    def position(self, time: float) -> float:
        return self.setpoint(time).position

    def velocity(self, time: float) -> float:
        return self.setpoint(time).velocity

    def acceleration(self, time: float) -> float:
        return self.setpoint(time).acceleration
