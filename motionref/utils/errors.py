"""
Exception types raised while building motion references.
Queries never raise; only construction of segments, splines and profiles does.
"""


class TrajectoryPlanningError(RuntimeError):
    """A profile or path could not be generated (e.g. segmentation did not converge)."""

    prefix = "Trajectory Planning Error"

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"{self.prefix}: {message}")

    def __str__(self):
        return f"{self.prefix}: {self.original_message}"


class DegenerateInputError(TrajectoryPlanningError, ValueError):
    """Inputs that would force a division by zero or an empty/ill-formed path."""

    prefix = "Degenerate Input"
