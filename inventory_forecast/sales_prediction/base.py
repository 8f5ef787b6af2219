"""
Base Forecaster
===============

Shared interface and helpers for the method forecasters. Every method
projects ``horizon`` weekly periods past the last observed date and
produces integer points whose interval always contains the prediction.
"""

import math
import numbers
from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import ForecastConfig
from ..exceptions import InvalidHorizonError
from ..types import ForecastPoint, SalesSeries


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def validate_horizon(horizon: Any) -> int:
    """Return ``horizon`` as an int, or raise InvalidHorizonError."""
    if isinstance(horizon, bool) or not isinstance(horizon, numbers.Integral):
        raise InvalidHorizonError(f"Horizon must be a positive integer, got {horizon!r}")
    if horizon < 1:
        raise InvalidHorizonError(f"Horizon must be a positive integer, got {horizon}")
    return int(horizon)


def future_dates(last_date: date, horizon: int, period_days: int = 7) -> List[date]:
    """Dates ``period_days`` apart, starting one period after ``last_date``."""
    return [last_date + timedelta(days=period_days * step) for step in range(1, horizon + 1)]


def make_point(day: date, raw: float, margin: float, floor: float) -> ForecastPoint:
    """
    Build a forecast point from a raw prediction and an interval half-width.

    The prediction is floored and rounded; the interval is centred on the
    rounded prediction, with the lower bound clamped at zero.
    """
    predicted = round_half_up(max(floor, raw))
    margin = max(0, round_half_up(margin))
    return ForecastPoint(
        date=day,
        predicted=predicted,
        lower=max(0, predicted - margin),
        upper=predicted + margin
    )


class BaseForecaster(ABC):
    """
    Abstract method forecaster.

    Subclasses implement ``project`` (raw predictions and half-widths for
    each future step) and ``fitted`` (in-sample values over the history,
    used for accuracy scoring).
    """

    name = 'base'

    def __init__(self, config: Optional[ForecastConfig] = None):
        self.config = config or ForecastConfig()

    @abstractmethod
    def project(self, values: Sequence[float], horizon: int) -> List[Tuple[float, float]]:
        """Return ``(raw_prediction, margin)`` for steps 1..horizon."""

    @abstractmethod
    def fitted(self, values: Sequence[float]) -> List[float]:
        """Return one in-sample fitted value per historical point."""

    def forecast(self, series: SalesSeries, horizon: int) -> List[ForecastPoint]:
        """
        Forecast ``horizon`` weekly periods after the last observed date.

        Args:
            series: Normalized sales history
            horizon: Number of future periods

        Returns:
            List of exactly ``horizon`` ForecastPoint objects
        """
        horizon = validate_horizon(horizon)
        days = future_dates(series.last_date, horizon, self.config.period_days)
        projections = self.project(list(series.values), horizon)
        return [
            make_point(day, raw, margin, self.config.prediction_floor)
            for day, (raw, margin) in zip(days, projections)
        ]

    def get_model_info(self) -> Dict[str, Any]:
        return {'type': self.name}
