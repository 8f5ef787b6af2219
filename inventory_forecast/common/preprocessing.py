"""
Sales Series Preprocessing Module
=================================

Turns raw, unsorted sales observations into the clean daily (or weekly)
series every forecasting method consumes.

Dates may arrive as native date objects, ISO-like strings, strings with
ordinal suffixes ("March 1st 2024") or spreadsheet serial numbers. Rows
with unusable dates or quantities are dropped and counted rather than
treated as errors.

Usage:
    from inventory_forecast.common import SeriesNormalizer

    normalizer = SeriesNormalizer()
    series = normalizer.normalize(observations)
    print(series.dates[-1], series.values[-1])
"""

import math
import numbers
import re
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from loguru import logger

from ..config import ForecastConfig
from ..exceptions import InsufficientDataError
from ..types import SalesSeries


# Day 1 is 1899-12-31, so serial 2 lands on 1900-01-01. Spreadsheets count
# 1900 as a leap year; exported templates depend on this offset.
SPREADSHEET_EPOCH = date(1899, 12, 31)

_ORDINAL_SUFFIX = re.compile(r'(\d+)(st|nd|rd|th)\b', re.IGNORECASE)
_NUMERIC_STRING = re.compile(r'^\s*[+-]?\d+(\.\d+)?\s*$')
_YEAR_STRING = re.compile(r'^\d{4}$')
_DIGIT = re.compile(r'\d')

SUPPORTED_FREQUENCIES = ('D', 'W')


def parse_spreadsheet_serial(serial: float) -> Optional[date]:
    """
    Convert a spreadsheet serial day number to a calendar date.

    Fractional parts (time of day) are truncated.

    Example:
        >>> parse_spreadsheet_serial(2)
        datetime.date(1900, 1, 1)
    """
    if not math.isfinite(serial):
        return None
    try:
        return SPREADSHEET_EPOCH + timedelta(days=int(serial) - 1)
    except OverflowError:
        return None


def _parse_date_string(text: str) -> Optional[date]:
    # Keywords such as "now" and "today" resolve against the clock.
    if not _DIGIT.search(text):
        return None
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_sales_date(value: Any) -> Optional[date]:
    """
    Parse a date-like value from a sales row.

    Attempts, in order: native date objects, ISO-like strings, strings
    with ordinal suffixes removed, and spreadsheet serial numbers
    (numbers or purely numeric strings). A bare four-digit string is a
    year. Text without any digit is rejected.

    Args:
        value: Raw date field

    Returns:
        Parsed date, or None when the value cannot be interpreted

    Example:
        >>> parse_sales_date("2024-03-01")
        datetime.date(2024, 3, 1)
        >>> parse_sales_date("March 1st, 2024")
        datetime.date(2024, 3, 1)
    """
    if value is None or value is pd.NaT or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _YEAR_STRING.match(text):
            return _parse_date_string(text)
        if _NUMERIC_STRING.match(text):
            return parse_spreadsheet_serial(float(text))

        parsed = _parse_date_string(text)
        if parsed is not None:
            return parsed

        stripped = _ORDINAL_SUFFIX.sub(r'\1', text)
        if stripped != text:
            return _parse_date_string(stripped)
        return None

    if isinstance(value, numbers.Real):
        return parse_spreadsheet_serial(float(value))

    return None


def parse_quantity(value: Any) -> Optional[float]:
    """Parse a non-negative, finite quantity; None when unusable."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, str):
        try:
            quantity = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, numbers.Real):
        quantity = float(value)
    else:
        return None

    if not math.isfinite(quantity) or quantity < 0:
        return None
    return quantity


def _field(row: Any, name: str) -> Any:
    if isinstance(row, dict) or hasattr(row, 'get'):
        return row.get(name)
    return getattr(row, name, None)


class SeriesNormalizer:
    """
    Clean and aggregate raw sales observations into a SalesSeries.

    Rows with unparseable dates, dates in or before ``min_valid_year``,
    or non-numeric quantities are dropped silently and counted. Rows
    sharing a date are summed. The output is sorted ascending by date.

    Example:
        >>> normalizer = SeriesNormalizer()
        >>> series = normalizer.normalize([
        ...     {"date": "2024-01-01", "quantity": 5},
        ...     {"date": "2024-01-01", "quantity": 3},
        ...     {"date": "2024-01-02", "quantity": 4},
        ...     {"date": "2024-01-03", "quantity": 6},
        ... ])
        >>> series.values
        (8.0, 4.0, 6.0)
    """

    def __init__(self, config: Optional[ForecastConfig] = None):
        """
        Initialize SeriesNormalizer.

        Args:
            config: Engine configuration (defaults when None)
        """
        self.config = config or ForecastConfig()

    def clean_rows(self, observations: Iterable[Any]) -> Tuple[List[Tuple[date, float]], int]:
        """
        Parse every row, keeping only those with a usable date and quantity.

        Args:
            observations: Mappings or objects with ``date`` and ``quantity``

        Returns:
            Tuple of (valid (date, quantity) pairs, number of dropped rows)
        """
        valid: List[Tuple[date, float]] = []
        dropped = 0

        for row in observations:
            parsed_date = parse_sales_date(_field(row, 'date'))
            quantity = parse_quantity(_field(row, 'quantity'))

            if parsed_date is None or quantity is None or parsed_date.year <= self.config.min_valid_year:
                dropped += 1
                continue
            valid.append((parsed_date, quantity))

        return valid, dropped

    def normalize(self, observations: Iterable[Any], frequency: str = 'D') -> SalesSeries:
        """
        Build the sales series used for forecasting.

        Args:
            observations: Raw rows, unsorted, possibly with duplicate dates
            frequency: 'D' for one point per day, 'W' for weekly buckets
                starting on Monday

        Returns:
            SalesSeries sorted ascending by date

        Raises:
            InsufficientDataError: If fewer than ``min_series_points``
                distinct dates remain after cleaning
            ValueError: If the frequency is not supported
        """
        if frequency not in SUPPORTED_FREQUENCIES:
            raise ValueError(f"Unsupported frequency: {frequency}. Use one of {SUPPORTED_FREQUENCIES}")

        valid, dropped = self.clean_rows(observations)

        if dropped:
            logger.warning(f"Dropped {dropped} sales rows with invalid dates or quantities")

        if not valid:
            raise InsufficientDataError(
                valid_points=0,
                dropped_rows=dropped,
                required_points=self.config.min_series_points
            )

        df = pd.DataFrame(valid, columns=['date', 'quantity'])

        if frequency == 'W':
            df['date'] = [d - timedelta(days=d.weekday()) for d in df['date']]

        grouped = df.groupby('date')['quantity']
        daily = grouped.sum().sort_index()

        # Squared values feed the variances and must stay finite.
        with np.errstate(over='ignore'):
            overflowed = ~np.isfinite(np.square(daily.values))
        if overflowed.any():
            dropped += int(grouped.size().sort_index()[overflowed].sum())
            daily = daily[~overflowed]
            logger.warning(f"Dropped {int(overflowed.sum())} dates whose summed quantity is too large")

        if len(daily) < self.config.min_series_points:
            raise InsufficientDataError(
                valid_points=len(daily),
                dropped_rows=dropped,
                required_points=self.config.min_series_points
            )

        logger.debug(
            f"Normalized {len(valid)} rows into {len(daily)} points "
            f"({daily.index[0]} to {daily.index[-1]})"
        )

        return SalesSeries(
            dates=tuple(daily.index),
            values=tuple(float(v) for v in daily.values),
            dropped_rows=dropped
        )


def normalize_observations(
    observations: Iterable[Any],
    frequency: str = 'D',
    config: Optional[ForecastConfig] = None
) -> SalesSeries:
    """Shorthand for ``SeriesNormalizer(config).normalize(observations, frequency)``."""
    return SeriesNormalizer(config).normalize(observations, frequency=frequency)
