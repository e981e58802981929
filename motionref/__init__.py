"""
motionref Python Package

Motion reference generation for a mobile robot's closed-loop motor controllers.

Key components:
- MotionProfile: single-axis profile from a current state to a target position
- Spline: quintic Hermite path over a knot-indexed global parameter
- SplineProfile: curvature-limited, time-indexed reference along a Spline
- Setpoint: position/velocity/acceleration (and curvature/heading) at one instant
"""

from ._version import __version__
from .motion import KinematicSegment, MotionProfile, Setpoint, SplineProfile
from .spline import Spline, SplineSegment
from .utils.errors import DegenerateInputError, TrajectoryPlanningError
from .utils.geometry import Bounds, Point, Vector

__all__ = [
    "__version__",
    "KinematicSegment",
    "MotionProfile",
    "Setpoint",
    "SplineProfile",
    "Spline",
    "SplineSegment",
    "Point",
    "Vector",
    "Bounds",
    "DegenerateInputError",
    "TrajectoryPlanningError",
]
