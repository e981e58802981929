"""
Pytest configuration and shared fixtures for motionref tests.

Provides reference splines (straight line, quarter-turn loop, parabola) and
the profiles built on them, used across the unit test suite.
"""

import logging
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from motionref import Point, Spline, SplineProfile, Vector  # noqa: E402

logger = logging.getLogger(__name__)


# ============================================================================
# SPLINE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def straight_spline() -> Spline:
    """Straight 10 unit path along +y, two segments, knots 0..2."""
    return Spline(
        [0.0, 1.0, 2.0],
        [Point(0.0, 0.0), Point(0.0, 5.0), Point(0.0, 10.0)],
        [Vector(0.0, 5.0)] * 3,
        [Vector(0.0, 0.0)] * 3,
    )


@pytest.fixture(scope="session")
def loop_spline() -> Spline:
    """Counter-clockwise loop through the four unit-circle axis points, uneven knots."""
    return Spline(
        [0.0, 2.0, 30.0, 50.0],
        [Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0), Point(0.0, -1.0)],
        [Vector(0.0, 1.0), Vector(-1.0, 0.0), Vector(0.0, -1.0), Vector(1.0, 0.0)],
        [Vector(-1.0, 0.0), Vector(0.0, -1.0), Vector(1.0, 0.0), Vector(0.0, 1.0)],
    )


@pytest.fixture(scope="session")
def parabola_spline() -> Spline:
    """
    y = x^2 for x in [0, 1], parameterized as x = t / 2 over t in [0, 2].

    A quintic reproduces the quadratic exactly, so closed-form values apply.
    """
    return Spline(
        [0.0, 2.0],
        [Point(0.0, 0.0), Point(1.0, 1.0)],
        [Vector(0.5, 0.0), Vector(0.5, 1.0)],
        [Vector(0.0, 0.5), Vector(0.0, 0.5)],
    )


# ============================================================================
# PROFILE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def straight_profile(straight_spline: Spline) -> SplineProfile:
    profile = SplineProfile(straight_spline, 0.1, 3.0, 2.0, 0.7)
    logger.debug("straight profile length %.4f s", profile.length())
    return profile
