"""
Forecast Model Evaluation Module
================================

Accuracy scoring for the blended forecast plus supporting error
metrics.

The reported accuracy is ``100 - MAPE`` clamped to [70, 95]. The clamp
is a user-facing smoothing: a true fit quality below 70% or above 95%
can never be reported.

Usage:
    from inventory_forecast.sales_prediction import ForecastEvaluator

    evaluator = ForecastEvaluator()
    accuracy = evaluator.accuracy_score(actual, fitted)
    metrics = evaluator.calculate_metrics(actual, fitted)
"""

from typing import Dict, Optional, Sequence

import numpy as np
from loguru import logger
from sklearn.metrics import mean_absolute_error, mean_squared_error

from ..config import ForecastConfig


def mean_absolute_percentage_error(actual: Sequence[float], fitted: Sequence[float]) -> float:
    """
    MAPE in percent over all points.

    Points whose actual value is zero contribute no error but still count
    in the denominator.
    """
    actual = np.asarray(actual, dtype=float)
    fitted = np.asarray(fitted, dtype=float)
    mask = actual > 0
    errors = np.abs(actual[mask] - fitted[mask]) / actual[mask]
    return float(errors.sum() / actual.size * 100)


def accuracy_score(
    actual: Sequence[float],
    fitted: Sequence[float],
    config: Optional[ForecastConfig] = None
) -> float:
    """
    Clamped accuracy percentage of fitted values against actuals.

    Args:
        actual: Historical values
        fitted: In-sample fitted values, same length as ``actual``

    Returns:
        ``clamp(100 - MAPE, accuracy_floor, accuracy_ceiling)``, or
        ``accuracy_fallback`` when the inputs are empty or of unequal length

    Example:
        >>> accuracy_score([100, 100], [90, 110])
        90.0
        >>> accuracy_score([], [])
        75.0
    """
    config = config or ForecastConfig()

    if len(actual) == 0 or len(actual) != len(fitted):
        return float(config.accuracy_fallback)

    mape = mean_absolute_percentage_error(actual, fitted)
    accuracy = max(config.accuracy_floor, 100 - mape)
    return float(min(config.accuracy_ceiling, accuracy))


class ForecastEvaluator:
    """
    Evaluation toolkit for the blended forecast.

    Example:
        >>> evaluator = ForecastEvaluator()
        >>> metrics = evaluator.calculate_metrics(actual, fitted)
        >>> print(f"Accuracy: {metrics['accuracy']:.1f}%")
    """

    def __init__(self, config: Optional[ForecastConfig] = None):
        """
        Initialize ForecastEvaluator.

        Args:
            config: Engine configuration carrying the accuracy clamps
        """
        self.config = config or ForecastConfig()
        logger.debug("ForecastEvaluator initialized")

    def accuracy_score(self, actual: Sequence[float], fitted: Sequence[float]) -> float:
        """Clamped accuracy; see the module-level ``accuracy_score``."""
        return accuracy_score(actual, fitted, self.config)

    def calculate_metrics(
        self,
        actual: Sequence[float],
        fitted: Sequence[float]
    ) -> Dict[str, Optional[float]]:
        """
        Calculate error metrics for an in-sample fit.

        Args:
            actual: Actual values
            fitted: Fitted values

        Returns:
            Dictionary with ``mae``, ``rmse``, ``mape`` and ``accuracy``.
            Error metrics are None when the inputs are empty or of
            unequal length.
        """
        accuracy = self.accuracy_score(actual, fitted)

        if len(actual) == 0 or len(actual) != len(fitted):
            return {'mae': None, 'rmse': None, 'mape': None, 'accuracy': accuracy}

        actual = np.asarray(actual, dtype=float)
        fitted = np.asarray(fitted, dtype=float)

        return {
            'mae': float(mean_absolute_error(actual, fitted)),
            'rmse': float(np.sqrt(mean_squared_error(actual, fitted))),
            'mape': mean_absolute_percentage_error(actual, fitted),
            'accuracy': accuracy,
        }
