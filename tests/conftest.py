"""
Shared fixtures for the forecasting tests.
"""

from datetime import date, timedelta

import matplotlib
matplotlib.use("Agg")

import pytest

from inventory_forecast.types import SalesSeries


START = date(2024, 1, 1)


def weekly_series(values, start=START):
    """SalesSeries with one value per week starting on ``start``."""
    dates = tuple(start + timedelta(days=7 * i) for i in range(len(values)))
    return SalesSeries(dates=dates, values=tuple(float(v) for v in values))


def weekly_rows(values, start=START):
    """Raw observation rows with one ISO-dated row per week."""
    return [
        {"date": (start + timedelta(days=7 * i)).isoformat(), "quantity": v}
        for i, v in enumerate(values)
    ]


@pytest.fixture
def sample_values():
    return [10, 12, 11, 13, 12, 14, 13, 15, 14, 16]


@pytest.fixture
def sample_rows(sample_values):
    return weekly_rows(sample_values)


@pytest.fixture
def flat_rows():
    return weekly_rows([50] * 10)
