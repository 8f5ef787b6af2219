"""
Tests for the individual method forecasters and shared helpers.

Run with: python3 -m pytest tests/test_forecasters.py -v
"""

from datetime import date

import pytest

from conftest import weekly_series
from inventory_forecast.exceptions import InvalidHorizonError
from inventory_forecast.sales_prediction import (
    ExponentialSmoothingForecaster,
    LinearTrendForecaster,
    SeasonalForecaster,
    SimpleAverageForecaster,
)
from inventory_forecast.sales_prediction.base import (
    future_dates,
    make_point,
    round_half_up,
    validate_horizon,
)
from inventory_forecast.sales_prediction.smoothing_forecaster import smoothing_recurrence


def predictions(points):
    return [p.predicted for p in points]


class TestHelpers:
    """Rounding, horizon validation, dates and point building."""

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2
        assert round_half_up(-2.5) == -2

    @pytest.mark.parametrize("horizon", [0, -1, 2.5, "4", None, True])
    def test_invalid_horizons(self, horizon):
        with pytest.raises(InvalidHorizonError):
            validate_horizon(horizon)

    def test_valid_horizon(self):
        assert validate_horizon(16) == 16

    def test_future_dates_are_weekly(self):
        assert future_dates(date(2024, 1, 29), 2) == [date(2024, 2, 5), date(2024, 2, 12)]

    def test_make_point_floors_and_clamps(self):
        point = make_point(date(2024, 1, 1), 3.2, 20.4, 10)
        assert (point.predicted, point.lower, point.upper) == (10, 0, 30)

    def test_make_point_centres_interval_on_prediction(self):
        point = make_point(date(2024, 1, 1), 41.6, 6.5, 10)
        assert (point.predicted, point.lower, point.upper) == (42, 35, 49)


class TestLinearTrendForecaster:
    """Least-squares trend projection."""

    def test_perfect_line(self):
        points = LinearTrendForecaster().forecast(weekly_series([10, 20, 30]), 2)

        assert predictions(points) == [40, 50]
        assert [(p.lower, p.upper) for p in points] == [(40, 40), (50, 50)]
        assert [p.date for p in points] == [date(2024, 1, 22), date(2024, 1, 29)]

    def test_declining_line_is_floored(self):
        points = LinearTrendForecaster().forecast(weekly_series([30, 20, 10]), 2)
        assert predictions(points) == [10, 10]

    def test_fit_line(self):
        slope, intercept = LinearTrendForecaster().fit_line([10, 20, 30])
        assert slope == pytest.approx(10.0)
        assert intercept == pytest.approx(10.0)

    def test_noisy_series_has_positive_margin(self):
        points = LinearTrendForecaster().forecast(weekly_series([10, 14, 11, 16, 13, 18]), 3)
        assert all(p.upper > p.predicted > p.lower for p in points)

    def test_fitted_values(self):
        assert LinearTrendForecaster().fitted([10, 20, 30]) == pytest.approx([10, 20, 30])


class TestExponentialSmoothingForecaster:
    """Self-referential level/trend recurrence."""

    def test_recurrence_feeds_on_rounded_predictions(self):
        steps = smoothing_recurrence([10, 20, 30], 2, alpha=0.3, floor=10)

        assert steps[0][0] == pytest.approx(40.0)
        assert steps[0][1] == pytest.approx(30.0)
        assert steps[1][0] == pytest.approx(42.8)
        assert steps[1][1] == pytest.approx(33.0)

    def test_zero_before_last_anchors_on_last(self):
        steps = smoothing_recurrence([10, 0, 30], 1, alpha=0.3, floor=10)

        # trend = 0.3 * (30 - 30) + 0.7 * 30
        assert steps[0][0] == pytest.approx(51.0)
        assert steps[0][1] == pytest.approx(30.0)

    def test_forecast_points(self):
        points = ExponentialSmoothingForecaster().forecast(weekly_series([10, 20, 30]), 2)

        assert predictions(points) == [40, 43]
        assert [(p.lower, p.upper) for p in points] == [(33, 47), (36, 50)]

    def test_flat_series(self):
        points = ExponentialSmoothingForecaster().forecast(weekly_series([50] * 5), 4)

        assert predictions(points) == [50, 50, 50, 50]
        assert all(p.upper - p.predicted == 8 for p in points)

    def test_single_observation(self):
        steps = smoothing_recurrence([25], 3, alpha=0.3, floor=10)
        assert [raw for raw, _ in steps] == pytest.approx([25.0, 25.0, 25.0])

    def test_fitted_one_step_ahead(self):
        fitted = ExponentialSmoothingForecaster().fitted([10, 20, 30])
        assert fitted == pytest.approx([10, 20, 30])


class TestSeasonalForecaster:
    """Seasonal indices and the simple-average fallback."""

    def test_short_history_uses_simple_average(self):
        series = weekly_series([10, 20, 30])
        seasonal = SeasonalForecaster().forecast(series, 3)
        average = SimpleAverageForecaster().forecast(series, 3)

        assert seasonal == average
        assert predictions(seasonal) == [20, 20, 21]
        assert [(p.lower, p.upper) for p in seasonal] == [(8, 32), (8, 32), (9, 33)]

    def test_seasonal_cycle(self):
        series = weekly_series([10, 30, 10, 30, 10, 30, 10, 30])
        points = SeasonalForecaster().forecast(series, 4)

        assert predictions(points) == [10, 31, 11, 32]
        assert [p.lower for p in points] == [4, 25, 5, 26]

    def test_fitted_uses_pattern(self):
        fitted = SeasonalForecaster().fitted([10, 30, 10, 30, 10, 30, 10, 30])
        assert fitted == pytest.approx([10, 30, 10, 30, 10, 30, 10, 30])

    def test_fitted_fallback_is_mean(self):
        assert SeasonalForecaster().fitted([10, 20, 30]) == pytest.approx([20, 20, 20])

    def test_model_info(self):
        assert SeasonalForecaster().get_model_info() == {"type": "seasonal"}
