"""
Quintic Hermite spline: a knot-indexed chain of SplineSegments.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from motionref.config import CHUNK_STEPS, EPSILON
from motionref.utils.errors import DegenerateInputError
from motionref.utils.geometry import Bounds, Point, Vector
from motionref.utils.numeric import binary_search, lerp

from .segment import SplineSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplineChunks:
    """
    Curvature and heading (radians) sampled at uniform arc-length steps.

    Entry 0 is the start of the path and entry i is ``i * chunk_length``
    along it. When the path length is not a whole number of chunks the last
    entry is the end of the path, ``last_chunk_length`` after the entry
    before it.
    """

    chunk_length: float
    curvatures: Tuple[float, ...]
    headings: Tuple[float, ...]
    last_chunk_length: float

    def __len__(self) -> int:
        return len(self.curvatures)

    def interval_lengths(self) -> List[float]:
        """Arc length between consecutive entries."""
        if len(self) < 2:
            return []
        lengths = [self.chunk_length] * (len(self) - 1)
        lengths[-1] = self.last_chunk_length
        return lengths


def _check_knots(knots: Sequence[float]) -> Tuple[float, ...]:
    values = tuple(float(k) for k in knots)
    if any(b <= a for a, b in zip(values, values[1:])):
        raise DegenerateInputError(f"knots must be strictly increasing, got {list(values)}")
    return values


class Spline:
    """
    Chain of quintic Hermite segments over a global parameter t.

    Segment i spans ``knots[i] <= t <= knots[i + 1]``. Derivatives passed in
    and reported are with respect to t; each segment stores them scaled to
    its own local parameter. Queries outside the knot range are clamped.
    """

    def __init__(
        self,
        knots: Sequence[float],
        points: Sequence[Point],
        derivatives: Sequence[Vector],
        second_derivatives: Sequence[Vector],
    ):
        """
        Args:
            knots: Global parameter value at each control point
            points: Control points to interpolate
            derivatives: First derivative (d/dt) at each control point
            second_derivatives: Second derivative (d2/dt2) at each control point
        """
        sizes = {len(knots), len(points), len(derivatives), len(second_derivatives)}
        if len(sizes) != 1:
            raise DegenerateInputError(
                f"knots, points and derivatives must have equal lengths, got "
                f"{len(knots)}, {len(points)}, {len(derivatives)}, {len(second_derivatives)}"
            )
        if len(points) < 2:
            raise DegenerateInputError(f"a spline needs at least 2 control points, got {len(points)}")

        knot_values = _check_knots(knots)
        segments = []
        for i in range(len(points) - 1):
            span = knot_values[i + 1] - knot_values[i]
            segments.append(
                SplineSegment(
                    points[i],
                    points[i + 1],
                    derivatives[i].scale(span),
                    derivatives[i + 1].scale(span),
                    second_derivatives[i].scale(span**2),
                    second_derivatives[i + 1].scale(span**2),
                )
            )
        self._set(knot_values, tuple(segments))

    @classmethod
    def _from_segments(cls, knots: Tuple[float, ...], segments: Tuple[SplineSegment, ...]) -> Spline:
        spline = cls.__new__(cls)
        spline._set(knots, segments)
        return spline

    def _set(self, knots: Tuple[float, ...], segments: Tuple[SplineSegment, ...]):
        self.knots = knots
        self.segments = segments
        self._bounds = Bounds(knots[0], knots[-1])

    def _locate(self, t: float) -> Tuple[int, float]:
        """Segment index and local parameter s for global parameter t."""
        t = self._bounds.clamp(t)
        i = binary_search(self.knots, t)
        return i, lerp(t, self.knots[i], self.knots[i + 1], 0.0, 1.0)

    def _span(self, i: int) -> float:
        return self.knots[i + 1] - self.knots[i]

    def position(self, t: float) -> Point:
        i, s = self._locate(t)
        return self.segments[i].position(s)

    def derivative(self, t: float) -> Vector:
        i, s = self._locate(t)
        return self.segments[i].derivative(s).scale(1.0 / self._span(i))

    def second_derivative(self, t: float) -> Vector:
        i, s = self._locate(t)
        return self.segments[i].second_derivative(s).scale(1.0 / self._span(i) ** 2)

    def third_derivative(self, t: float) -> Vector:
        i, s = self._locate(t)
        return self.segments[i].third_derivative(s).scale(1.0 / self._span(i) ** 3)

    def curvature(self, t: float) -> float:
        # Curvature does not depend on the parameterization
        i, s = self._locate(t)
        return self.segments[i].curvature(s)

    def heading(self, t: float) -> float:
        i, s = self._locate(t)
        return self.segments[i].heading(s)

    def wheel(self, t: float, width_offset: float, length_offset: float) -> Point:
        i, s = self._locate(t)
        return self.segments[i].wheel(s, width_offset, length_offset)

    def length(self) -> float:
        """Maximum parameter value (the last knot)."""
        return self.knots[-1]

    def control_points(self) -> List[Point]:
        return [segment.start for segment in self.segments] + [self.segments[-1].end]

    def segment_arc_length(self, index: int) -> float:
        return self.segments[index].arc_length()

    def arc_length(self) -> float:
        return sum(segment.arc_length() for segment in self.segments)

    def reparameterize(self, new_knots: Sequence[float]) -> Spline:
        """
        Same control points and t-derivatives on a new knot spacing.

        Returns a new Spline; this one is left untouched.
        """
        knot_values = _check_knots(new_knots)
        if len(knot_values) != len(self.knots):
            raise DegenerateInputError(f"expected {len(self.knots)} knots, got {len(knot_values)}")
        segments = tuple(
            segment.scaled((knot_values[i + 1] - knot_values[i]) / self._span(i))
            for i, segment in enumerate(self.segments)
        )
        return Spline._from_segments(knot_values, segments)

    def reparameterize_by_arc_length(self) -> Spline:
        """
        Re-knot so each knot span equals its segment's arc length.

        Unlike ``reparameterize`` the segment shapes are kept, so the path is
        unchanged and t-derivatives become close to unit length.
        """
        lengths = [segment.arc_length() for segment in self.segments]
        knot_values = _check_knots([0.0] + np.cumsum(lengths).tolist())
        return Spline._from_segments(knot_values, self.segments)

    def compute_chunks(self, chunk_length: float) -> SplineChunks:
        """
        Sample curvature and heading every ``chunk_length`` of arc length.

        Each segment is walked in parameter steps of roughly
        ``chunk_length / CHUNK_STEPS`` arc length. Arc length left over at the
        end of a segment carries into the next, so boundaries are uniform over
        the whole path.
        """
        if not chunk_length > 0:
            raise DegenerateInputError(f"chunk_length must be positive, got {chunk_length}")

        first = self.segments[0]
        curvatures = [first.curvature(0.0)]
        headings = [first.heading(0.0)]
        last_chunk_length = chunk_length

        accumulated = 0.0
        for segment in self.segments:
            steps = max(1, math.ceil(CHUNK_STEPS * segment.arc_length() / chunk_length - EPSILON))
            s_values = np.linspace(0.0, 1.0, steps + 1)
            step_lengths = np.hypot(*np.diff(segment.sample_positions(s_values), axis=0).T)
            for s, step_length in zip(s_values[1:], step_lengths):
                accumulated += float(step_length)
                while accumulated >= chunk_length - EPSILON:
                    curvatures.append(segment.curvature(float(s)))
                    headings.append(segment.heading(float(s)))
                    accumulated -= chunk_length

        if accumulated > EPSILON:
            # Partial chunk up to the path end
            last = self.segments[-1]
            curvatures.append(last.curvature(1.0))
            headings.append(last.heading(1.0))
            last_chunk_length = accumulated

        chunks = SplineChunks(chunk_length, tuple(curvatures), tuple(headings), last_chunk_length)
        logger.debug(
            "Spline chunked into %d samples of %.4g (last interval %.4g)",
            len(chunks),
            chunk_length,
            last_chunk_length,
        )
        return chunks
