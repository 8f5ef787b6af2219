"""
Linear Trend Forecasting Module
===============================

Ordinary least squares trend over the observation index, with an
interval derived from the residual spread.

Usage:
    from inventory_forecast.sales_prediction import LinearTrendForecaster

    forecaster = LinearTrendForecaster()
    points = forecaster.forecast(series, horizon=8)
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from loguru import logger
from scipy import stats

from .base import BaseForecaster
from .statistics import standard_deviation


class LinearTrendForecaster(BaseForecaster):
    """
    Project the least-squares line ``y = slope * x + intercept`` forward.

    The standard error of a new observation is approximated as
    ``std(residuals) * sqrt(1 + 1/N)`` and the interval half-width is
    twice that.

    Example:
        >>> forecaster = LinearTrendForecaster()
        >>> slope, intercept = forecaster.fit_line([10, 20, 30])
        >>> round(slope, 6), round(intercept, 6)
        (10.0, 10.0)
    """

    name = 'linear'

    def fit_line(self, values: Sequence[float]) -> Tuple[float, float]:
        """
        Fit the trend line over indices ``0..N-1``.

        Returns:
            Tuple of (slope, intercept)
        """
        y = np.asarray(values, dtype=float)
        if y.size < 2:
            return 0.0, float(y[0]) if y.size else 0.0

        x = np.arange(y.size, dtype=float)
        result = stats.linregress(x, y)
        return float(result.slope), float(result.intercept)

    def fitted(self, values: Sequence[float]) -> List[float]:
        slope, intercept = self.fit_line(values)
        return [slope * i + intercept for i in range(len(values))]

    def forecast_std_error(self, values: Sequence[float]) -> float:
        """Residual standard deviation scaled by ``sqrt(1 + 1/N)``."""
        n = len(values)
        residuals = [actual - fit for actual, fit in zip(values, self.fitted(values))]
        return standard_deviation(residuals) * math.sqrt(1 + 1 / n)

    def project(self, values: Sequence[float], horizon: int) -> List[Tuple[float, float]]:
        n = len(values)
        slope, intercept = self.fit_line(values)
        margin = self.config.linear_margin_multiplier * self.forecast_std_error(values)

        logger.debug(f"Linear trend: slope={slope:.4f}, intercept={intercept:.4f}, margin={margin:.2f}")

        return [(slope * (n + step - 1) + intercept, margin) for step in range(1, horizon + 1)]
