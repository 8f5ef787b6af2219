"""
Ensemble Forecasting Module
===========================

Blends the linear trend, exponential smoothing and seasonal forecasters
with weights chosen from the series' trend and seasonality strength. The
interval comes from how much the three methods disagree, not from any
single method's own interval.

Usage:
    from inventory_forecast import forecast

    result = forecast(
        [{"date": "2024-01-01", "quantity": 12}, ...],
        horizon=8
    )
    for point in result.points:
        print(point.date, point.predicted, point.lower, point.upper)
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from ..common.preprocessing import SeriesNormalizer
from ..config import ForecastConfig
from ..types import BlendWeights, ForecastPoint, ForecastResult, SalesSeries
from .base import future_dates, round_half_up, validate_horizon
from .model_evaluation import accuracy_score
from .seasonal_forecaster import SeasonalForecaster
from .smoothing_forecaster import ExponentialSmoothingForecaster
from .statistics import seasonality_strength, standard_deviation, trend_strength
from .trend_forecaster import LinearTrendForecaster


METHOD_LABEL = 'Enhanced Multi-Method'


def select_blend_weights(
    trend: float,
    seasonality: float,
    config: Optional[ForecastConfig] = None
) -> BlendWeights:
    """
    Pick the blend preset for the given strengths.

    Trend dominance is checked first; seasonality only applies when the
    trend threshold is not exceeded.

    Example:
        >>> select_blend_weights(0.9, 0.9).label
        'trend'
        >>> select_blend_weights(0.1, 0.8).label
        'seasonal'
    """
    config = config or ForecastConfig()

    if trend > config.trend_threshold:
        return BlendWeights(*config.trend_weights, label='trend')
    if seasonality > config.seasonality_threshold:
        return BlendWeights(*config.seasonal_weights, label='seasonal')
    return BlendWeights(*config.default_weights, label='default')


class EnsembleForecaster:
    """
    Weighted combination of the three method forecasters.

    Example:
        >>> ensemble = EnsembleForecaster()
        >>> result = ensemble.forecast(series, horizon=8)
        >>> print(f"{result.accuracy:.1f}% over {result.periods} weeks")
    """

    def __init__(self, config: Optional[ForecastConfig] = None):
        """
        Initialize EnsembleForecaster.

        Args:
            config: Engine configuration (defaults when None)
        """
        self.config = config or ForecastConfig()
        self.linear = LinearTrendForecaster(self.config)
        self.exponential = ExponentialSmoothingForecaster(self.config)
        self.seasonal = SeasonalForecaster(self.config)

    def analyze(self, series: SalesSeries) -> Dict[str, Any]:
        """
        Compute the strength metrics and the blend preset they select.

        Returns:
            Dictionary with ``trend_strength``, ``seasonality_strength``
            and ``weights`` (a BlendWeights)
        """
        values = list(series.values)
        trend = trend_strength(values)
        seasonality = seasonality_strength(
            values,
            segments=self.config.pattern_length,
            min_points=self.config.min_seasonal_points
        )
        weights = select_blend_weights(trend, seasonality, self.config)
        return {
            'trend_strength': trend,
            'seasonality_strength': seasonality,
            'weights': weights,
        }

    def fitted(self, series: SalesSeries, weights: BlendWeights) -> List[float]:
        """In-sample values of the blended method over the history."""
        values = list(series.values)
        components = zip(
            self.linear.fitted(values),
            self.exponential.fitted(values),
            self.seasonal.fitted(values)
        )
        return [
            weights.linear * lin + weights.exponential * exp + weights.seasonal * sea
            for lin, exp, sea in components
        ]

    def combine(
        self,
        series: SalesSeries,
        horizon: int,
        weights: BlendWeights
    ) -> List[ForecastPoint]:
        """
        Run all three methods and merge their predictions step by step.

        The combined prediction is the weighted sum, rounded and floored.
        The margin is ``ensemble_margin`` times the standard deviation of
        the three unweighted predictions.
        """
        linear_points = self.linear.forecast(series, horizon)
        exponential_points = self.exponential.forecast(series, horizon)
        seasonal_points = self.seasonal.forecast(series, horizon)
        days = future_dates(series.last_date, horizon, self.config.period_days)

        points = []
        for day, lin, exp, sea in zip(days, linear_points, exponential_points, seasonal_points):
            predictions = [lin.predicted, exp.predicted, sea.predicted]
            combined = round_half_up(
                lin.predicted * weights.linear
                + exp.predicted * weights.exponential
                + sea.predicted * weights.seasonal
            )
            predicted = max(self.config.prediction_floor, combined)
            margin = round_half_up(standard_deviation(predictions) * self.config.ensemble_margin)

            points.append(ForecastPoint(
                date=day,
                predicted=predicted,
                lower=max(0, predicted - margin),
                upper=predicted + margin
            ))

        return points

    def forecast(
        self,
        series: SalesSeries,
        horizon: int,
        generated_at: Optional[datetime] = None
    ) -> ForecastResult:
        """
        Produce the authoritative forecast for a normalized series.

        Args:
            series: Normalized sales history
            horizon: Number of weekly periods to forecast
            generated_at: Timestamp to stamp on the result (now, UTC, if None)

        Returns:
            ForecastResult with ``horizon`` points and the clamped accuracy
        """
        horizon = validate_horizon(horizon)
        analysis = self.analyze(series)
        weights = analysis['weights']

        logger.info(
            f"Blending with '{weights.label}' weights {weights.as_tuple()} "
            f"(trend={analysis['trend_strength']:.3f}, "
            f"seasonality={analysis['seasonality_strength']:.3f})"
        )

        points = self.combine(series, horizon, weights)
        accuracy = accuracy_score(list(series.values), self.fitted(series, weights), self.config)

        logger.info(f"Generated {horizon}-period forecast, accuracy {accuracy:.1f}%")

        return ForecastResult(
            points=tuple(points),
            accuracy=accuracy,
            method=METHOD_LABEL,
            periods=horizon,
            generated_at=generated_at or datetime.now(timezone.utc)
        )


def forecast(
    raw_observations: Iterable[Any],
    horizon: int,
    config: Optional[ForecastConfig] = None,
    generated_at: Optional[datetime] = None,
    frequency: str = 'D'
) -> ForecastResult:
    """
    Forecast future weekly sales from raw observations.

    Args:
        raw_observations: Rows with ``date`` and ``quantity``; unsorted,
            possibly duplicated or malformed
        horizon: Positive number of weekly periods (typically 4, 8, 12 or 16)
        config: Engine configuration (defaults when None)
        generated_at: Timestamp to stamp on the result (now, UTC, if None)
        frequency: 'D' (daily, default) or 'W' aggregation of the history

    Returns:
        ForecastResult

    Raises:
        InvalidHorizonError: If horizon is not a positive integer
        InsufficientDataError: If fewer than 3 valid distinct dates remain
    """
    horizon = validate_horizon(horizon)
    config = config or ForecastConfig()
    series = SeriesNormalizer(config).normalize(raw_observations, frequency=frequency)
    return EnsembleForecaster(config).forecast(series, horizon, generated_at=generated_at)
