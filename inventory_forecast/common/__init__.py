"""
Common utilities for the forecasting engine.
"""

from .preprocessing import SeriesNormalizer, normalize_observations, parse_sales_date
from .data_loader import SalesDataLoader
from .reporting import ForecastReporter
from .visualization import ForecastVisualizer

__all__ = [
    "SeriesNormalizer",
    "normalize_observations",
    "parse_sales_date",
    "SalesDataLoader",
    "ForecastReporter",
    "ForecastVisualizer",
]
