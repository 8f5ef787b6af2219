"""
Series Statistics Module
========================

Numeric primitives shared by every forecasting method: population
standard deviation, trend strength, seasonality strength and the
per-phase seasonal index.

All functions guard degenerate inputs (empty series, zero means) and
return 0 (or a neutral index of 1.0) instead of propagating NaN or
infinity into a forecast.
"""

from typing import List, Sequence

import numpy as np
from scipy import stats

from ..config import MIN_SEASONAL_POINTS, PATTERN_LENGTH


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N); 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population std / mean, or 0.0 when the mean is not positive."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0 or arr.mean() <= 0:
        return 0.0
    return float(stats.variation(arr, ddof=0))


def trend_strength(values: Sequence[float]) -> float:
    """
    Relative shift of the mean between the first and second half.

    Returns ``min(1, |mean(second) - mean(first)| / mean(first))``. The
    first half has ``len // 2`` points. A zero (or negative) first-half
    mean yields 0.0.

    Example:
        >>> trend_strength([10, 10, 20, 20])
        1.0
    """
    if len(values) < 2:
        return 0.0

    arr = np.asarray(values, dtype=float)
    half = len(arr) // 2
    first_mean = arr[:half].mean()
    second_mean = arr[half:].mean()

    if first_mean <= 0:
        return 0.0
    return float(min(1.0, abs(second_mean - first_mean) / first_mean))


def seasonality_strength(
    values: Sequence[float],
    segments: int = PATTERN_LENGTH,
    min_points: int = MIN_SEASONAL_POINTS
) -> float:
    """
    How differently the same position behaves across equal-width segments.

    The series is cut into ``segments`` segments of ``len // segments``
    points. For each position inside a segment the values found at that
    position in every segment are collected and their coefficient of
    variation computed. The mean coefficient, clamped to [0, 1], is
    returned. Series shorter than ``min_points`` score 0.0.
    """
    if len(values) < min_points:
        return 0.0

    arr = np.asarray(values, dtype=float)
    segment_size = len(arr) // segments
    if segment_size == 0:
        return 0.0

    score = 0.0
    for position in range(segment_size):
        column = arr[position::segment_size][:segments]
        if column.size > 1:
            score += coefficient_of_variation(column)

    return float(min(1.0, max(0.0, score / segment_size)))


def detect_seasonal_pattern(values: Sequence[float], pattern_length: int = PATTERN_LENGTH) -> List[float]:
    """
    Seasonal index per phase of a fixed-length cycle.

    For each phase, every ``pattern_length``-th value starting at that
    phase is averaged and divided by the overall mean. Phases with no
    values, or a series with a non-positive mean, get an index of 1.0.

    Example:
        >>> detect_seasonal_pattern([10, 30, 10, 30])
        [0.5, 1.5, 0.5, 1.5]
    """
    arr = np.asarray(values, dtype=float)
    overall = arr.mean() if arr.size else 0.0

    pattern = []
    for phase in range(pattern_length):
        phase_values = arr[phase::pattern_length]
        if phase_values.size == 0 or overall <= 0:
            pattern.append(1.0)
        else:
            pattern.append(float(phase_values.mean() / overall))
    return pattern
