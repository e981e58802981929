from .segment import KinematicSegment, Setpoint
from .spline_profile import SplineProfile
from .static_profile import MotionProfile

__all__ = [
    "KinematicSegment",
    "Setpoint",
    "MotionProfile",
    "SplineProfile",
]
