"""
Tests for accuracy scoring and error metrics.

Run with: python3 -m pytest tests/test_model_evaluation.py -v
"""

import pytest

from inventory_forecast.config import ForecastConfig
from inventory_forecast.sales_prediction import ForecastEvaluator, accuracy_score
from inventory_forecast.sales_prediction.model_evaluation import mean_absolute_percentage_error


class TestAccuracyScore:
    """Clamped 100 - MAPE."""

    def test_ten_percent_error(self):
        assert accuracy_score([100, 100], [90, 110]) == pytest.approx(90.0)

    def test_perfect_fit_hits_ceiling(self):
        assert accuracy_score([10, 20, 30], [10, 20, 30]) == 95.0

    def test_poor_fit_hits_floor(self):
        assert accuracy_score([100, 100], [0, 0]) == 70.0

    def test_empty_falls_back(self):
        assert accuracy_score([], []) == 75.0

    def test_unequal_lengths_fall_back(self):
        assert accuracy_score([1, 2, 3], [1, 2]) == 75.0

    def test_zero_actuals_count_in_denominator(self):
        actual = [0, 100, 100, 100]
        fitted = [5, 80, 80, 80]
        assert mean_absolute_percentage_error(actual, fitted) == pytest.approx(15.0)
        assert accuracy_score(actual, fitted) == pytest.approx(85.0)

    def test_custom_clamps(self):
        config = ForecastConfig(accuracy_floor=50.0, accuracy_ceiling=99.0, accuracy_fallback=60.0)
        assert accuracy_score([100, 100], [40, 40], config) == pytest.approx(50.0)
        assert accuracy_score([100, 100], [99, 101], config) == pytest.approx(99.0)
        assert accuracy_score([], [], config) == 60.0


class TestForecastEvaluator:
    """Supporting error metrics."""

    def test_calculate_metrics(self):
        metrics = ForecastEvaluator().calculate_metrics([100, 100], [90, 110])

        assert metrics["mae"] == pytest.approx(10.0)
        assert metrics["rmse"] == pytest.approx(10.0)
        assert metrics["mape"] == pytest.approx(10.0)
        assert metrics["accuracy"] == pytest.approx(90.0)

    def test_metrics_for_mismatched_inputs(self):
        metrics = ForecastEvaluator().calculate_metrics([1, 2], [1])
        assert metrics == {"mae": None, "rmse": None, "mape": None, "accuracy": 75.0}

    def test_accuracy_score_method(self):
        assert ForecastEvaluator().accuracy_score([100, 100], [90, 110]) == pytest.approx(90.0)
