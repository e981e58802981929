"""
Base profile.

Provides common timing and sampling utilities for derived profiles.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

import numpy as np

from motionref.config import CONTROL_RATE_HZ

from .segment import Setpoint


class ProfileBase(ABC):
    """Base class for time-indexed motion references"""

    def __init__(self, control_rate: float = CONTROL_RATE_HZ):
        """
        Initialize profile timing

        Args:
            control_rate: Control loop frequency in Hz (default 50Hz, a 20 ms loop)
        """
        self.control_rate = control_rate
        self.dt = 1.0 / control_rate

    @abstractmethod
    def duration(self) -> float:
        """Total time of the profile in seconds."""

    @abstractmethod
    def setpoint(self, time: float) -> Setpoint:
        """Reference at ``time`` seconds after the start, clamped to [0, duration]."""

    def generate_timestamps(self, duration: Union[float, np.floating]) -> np.ndarray:
        """Generate evenly spaced timestamps covering [0, duration]"""
        num_points = max(2, int(round(duration * self.control_rate)) + 1)
        return np.linspace(0, duration, num_points)

    def get_trajectory_points(self, dt: Optional[float] = None) -> Dict[str, np.ndarray]:
        """
        Sample the whole profile.

        Args:
            dt: Time step (default is one control period)
        """
        step = self.dt if dt is None else float(dt)
        time_points = np.arange(0.0, self.duration() + step, step)
        setpoints = [self.setpoint(float(t)) for t in time_points]
        return {
            "time": time_points,
            "position": np.array([sp.position for sp in setpoints]),
            "velocity": np.array([sp.velocity for sp in setpoints]),
            "acceleration": np.array([sp.acceleration for sp in setpoints]),
            "curvature": np.array([sp.curvature for sp in setpoints]),
            "heading": np.array([sp.heading for sp in setpoints]),
        }
