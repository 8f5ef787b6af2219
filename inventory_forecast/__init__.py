"""
Inventory Forecast
==================

Weekly sales forecasting for the inventory dashboard: normalizes raw
sales observations and blends linear trend, exponential smoothing and
seasonal methods into one forecast with intervals and an accuracy score.
"""

__version__ = "1.0.0"

from .config import ForecastConfig, load_config
from .exceptions import (
    ConfigurationError,
    ForecastError,
    InsufficientDataError,
    InvalidHorizonError,
    MalformedInputError,
)
from .types import BlendWeights, ForecastPoint, ForecastResult, Observation, SalesSeries
from .sales_prediction import forecast

__all__ = [
    "forecast",
    "ForecastConfig",
    "load_config",
    "ForecastError",
    "InsufficientDataError",
    "MalformedInputError",
    "InvalidHorizonError",
    "ConfigurationError",
    "Observation",
    "SalesSeries",
    "ForecastPoint",
    "BlendWeights",
    "ForecastResult",
]
