"""
Small scalar helpers shared by the profile and spline code.
"""

from collections.abc import Sequence

from motionref.config import EPSILON


def almost_equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    return abs(a - b) < epsilon


def lerp(value: float, min_in: float, max_in: float, min_out: float, max_out: float) -> float:
    """Linearly map ``value`` from [min_in, max_in] onto [min_out, max_out]."""
    percent_complete = (value - min_in) / (max_in - min_in)
    return percent_complete * (max_out - min_out) + min_out


def binary_search(data: Sequence[float], target: float) -> int:
    """
    Find the interval of a strictly increasing sequence that contains ``target``.

    Keeps ``data[low] <= target`` while halving [low, high] until the two
    indices are adjacent.

    Returns:
        ``i`` with ``data[i] <= target < data[i + 1]``; ``len(data) - 2`` when
        ``target`` equals the final value. Targets outside the data range
        resolve to the first or last interval.
    """
    if len(data) < 2:
        raise ValueError("binary_search needs at least two values")

    low = 0
    high = len(data) - 1
    while high - low > 1:
        mid = (low + high) // 2
        if data[mid] <= target:
            low = mid
        else:
            high = mid
    return low
