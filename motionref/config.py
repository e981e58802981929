"""
Central configuration for motionref tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("MOTIONREF_TRACE", "0")).lower() in ("1", "true", "yes", "on")
if TRACE_ENABLED:
    logging.getLogger("motionref").setLevel(TRACE)

# Tolerance for segmentation termination, cruise-speed tests and chunk boundaries
EPSILON: float = float(os.getenv("MOTIONREF_EPSILON", "1e-6"))

# Below this |curvature| a chunk is treated as straight
STRAIGHT_CURVATURE: float = 1e-4

# Arc-length integration resolution (samples per unit of chord length)
ARC_LENGTH_SAMPLES_PER_UNIT: float = 200.0
ARC_LENGTH_MIN_SAMPLES: int = 50

# Parameter steps taken per chunk while chunking a spline
CHUNK_STEPS: int = 100

# Upper bound on emitted segments before segmentation is declared divergent
MAX_PROFILE_SEGMENTS: int = 64

# Default control/sample rate (Hz), 20 ms loop
CONTROL_RATE_HZ: float = float(os.getenv("MOTIONREF_CONTROL_RATE_HZ", "50"))
