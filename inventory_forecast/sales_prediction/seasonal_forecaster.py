"""
Seasonal Forecasting Module
===========================

Multiplicative seasonal adjustment over a fixed 4-phase cycle, with a
flat-average fallback for short histories.
"""

import math
from typing import List, Sequence, Tuple

from loguru import logger

from .base import BaseForecaster
from .statistics import detect_seasonal_pattern, mean, standard_deviation


class SimpleAverageForecaster(BaseForecaster):
    """
    Project the historical mean with a 1% per step drift.

    The interval half-width is ``average_margin * std(values)``.
    """

    name = 'average'

    def project(self, values: Sequence[float], horizon: int) -> List[Tuple[float, float]]:
        average = mean(values)
        margin = self.config.average_margin * standard_deviation(values)
        drift = self.config.average_drift
        return [(average * (1 + step * drift), margin) for step in range(1, horizon + 1)]

    def fitted(self, values: Sequence[float]) -> List[float]:
        return [mean(values)] * len(values)


class SeasonalForecaster(BaseForecaster):
    """
    Scale the recent base level by a per-phase seasonal index.

    The base level is the mean of the last ``pattern_length``
    observations. Step ``i`` uses the index of phase
    ``(N + i - 1) mod pattern_length`` and a compounding drift of
    ``1 + seasonal_drift * i``. Histories shorter than
    ``min_seasonal_points`` fall back to SimpleAverageForecaster.
    """

    name = 'seasonal'

    def __init__(self, config=None):
        super().__init__(config)
        self.fallback = SimpleAverageForecaster(self.config)

    def _use_fallback(self, values: Sequence[float]) -> bool:
        return len(values) < self.config.min_seasonal_points

    def project(self, values: Sequence[float], horizon: int) -> List[Tuple[float, float]]:
        if self._use_fallback(values):
            logger.debug(f"Only {len(values)} points, using simple average instead of seasonal")
            return self.fallback.project(values, horizon)

        length = self.config.pattern_length
        pattern = detect_seasonal_pattern(values, length)
        base_level = mean(values[-length:])
        margin = math.sqrt(max(base_level, 0.0)) * self.config.seasonal_width
        n = len(values)

        logger.debug(f"Seasonal pattern: {[round(p, 3) for p in pattern]}, base level={base_level:.2f}")

        return [
            (base_level * pattern[(n + step - 1) % length] * (1 + step * self.config.seasonal_drift), margin)
            for step in range(1, horizon + 1)
        ]

    def fitted(self, values: Sequence[float]) -> List[float]:
        if self._use_fallback(values):
            return self.fallback.fitted(values)

        length = self.config.pattern_length
        pattern = detect_seasonal_pattern(values, length)
        average = mean(values)
        return [average * pattern[i % length] for i in range(len(values))]
