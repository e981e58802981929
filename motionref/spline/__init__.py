from .quintic import Spline, SplineChunks
from .segment import SplineSegment

__all__ = [
    "Spline",
    "SplineChunks",
    "SplineSegment",
]
