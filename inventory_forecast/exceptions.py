"""
Forecast error taxonomy.
"""

from typing import Optional


class ForecastError(Exception):
    """Base class for all forecasting errors."""


class InsufficientDataError(ForecastError):
    """Raised when too few distinct valid dates remain after cleaning."""

    def __init__(
        self,
        message: Optional[str] = None,
        valid_points: int = 0,
        dropped_rows: int = 0,
        required_points: int = 3
    ):
        self.valid_points = valid_points
        self.dropped_rows = dropped_rows
        self.required_points = required_points
        if message is None:
            message = (
                f"Need at least {required_points} valid data points for accurate forecasting, "
                f"got {valid_points} ({dropped_rows} rows dropped)"
            )
        super().__init__(message)


class MalformedInputError(ForecastError, ValueError):
    """Raised at the loading boundary when an input file holds no usable sales rows."""


class InvalidHorizonError(ForecastError, ValueError):
    """Raised when the forecast horizon is not a positive integer."""


class ConfigurationError(ForecastError, ValueError):
    """Raised when configuration values are inconsistent."""
