"""
Exponential Smoothing Forecasting Module
========================================

Level + trend smoothing with a fixed smoothing constant. Beyond the first
step the recurrence feeds on its own previous forecast rather than on
observed data, so estimates compound forward.
"""

import math
from typing import List, Sequence, Tuple

from loguru import logger

from .base import BaseForecaster, round_half_up


def smoothing_recurrence(
    values: Sequence[float],
    horizon: int,
    alpha: float,
    floor: float
) -> List[Tuple[float, float]]:
    """
    Run the self-referential level/trend recurrence.

    Level starts at the last observation and trend at the last first
    difference. Step 1 updates against the last two observations (the
    last one alone when the second-to-last is zero); every later step
    updates against the previous step's rounded, floored prediction.

    Args:
        values: Historical series (at least one value)
        horizon: Number of steps to project
        alpha: Smoothing constant
        floor: Minimum prediction used when feeding a step forward

    Returns:
        List of (raw_prediction, level) per step
    """
    last = values[-1]
    before_last = values[-2] if len(values) > 1 else last

    level = last
    trend = last - before_last if len(values) > 1 else 0.0

    steps: List[Tuple[float, float]] = []
    previous_prediction = None

    for step in range(1, horizon + 1):
        if step == 1:
            # A zero second-to-last value falls back to the last value.
            observed, anchor = last, before_last or last
        else:
            observed = anchor = previous_prediction

        level = alpha * observed + (1 - alpha) * level
        trend = alpha * (level - anchor) + (1 - alpha) * trend

        raw = level + trend * step
        steps.append((raw, level))
        previous_prediction = round_half_up(max(floor, raw))

    return steps


class ExponentialSmoothingForecaster(BaseForecaster):
    """
    Level/trend exponential smoothing with ``alpha`` from the config.

    The interval half-width is ``sqrt(level) * smoothing_width``.

    Example:
        >>> forecaster = ExponentialSmoothingForecaster()
        >>> points = forecaster.forecast(series, horizon=4)
    """

    name = 'exponential'

    def project(self, values: Sequence[float], horizon: int) -> List[Tuple[float, float]]:
        alpha = self.config.smoothing_alpha
        steps = smoothing_recurrence(values, horizon, alpha, self.config.prediction_floor)

        logger.debug(f"Exponential smoothing: alpha={alpha}, final level={steps[-1][1]:.2f}")

        return [
            (raw, math.sqrt(max(level, 0.0)) * self.config.smoothing_width)
            for raw, level in steps
        ]

    def fitted(self, values: Sequence[float]) -> List[float]:
        """One-step-ahead in-sample values from the same level/trend recurrence."""
        if len(values) < 2:
            return [float(v) for v in values]

        alpha = self.config.smoothing_alpha
        level = float(values[0])
        trend = float(values[1] - values[0])
        fitted = [float(values[0])]

        for actual in values[1:]:
            fitted.append(level + trend)
            previous_level = level
            level = alpha * actual + (1 - alpha) * (level + trend)
            trend = alpha * (level - previous_level) + (1 - alpha) * trend

        return fitted
