"""
Sales Prediction Module
=======================

Linear trend, exponential smoothing and seasonal forecasters, and the
ensemble that blends them.
"""

from .trend_forecaster import LinearTrendForecaster
from .smoothing_forecaster import ExponentialSmoothingForecaster
from .seasonal_forecaster import SeasonalForecaster, SimpleAverageForecaster
from .model_evaluation import ForecastEvaluator, accuracy_score
from .ensemble import EnsembleForecaster, forecast, select_blend_weights
from .insights import ForecastInsights, summarize_forecast

__all__ = [
    "LinearTrendForecaster",
    "ExponentialSmoothingForecaster",
    "SeasonalForecaster",
    "SimpleAverageForecaster",
    "ForecastEvaluator",
    "accuracy_score",
    "EnsembleForecaster",
    "forecast",
    "select_blend_weights",
    "ForecastInsights",
    "summarize_forecast",
]
