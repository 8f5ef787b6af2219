"""
Forecast Configuration Module
=============================

Named policy constants for the forecasting engine and a YAML-loadable
configuration object that carries them.

Usage:
    from inventory_forecast.config import load_config

    config = load_config("config/settings.yaml")
    result = forecast(observations, horizon=8, config=config)
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml
from loguru import logger

from .exceptions import ConfigurationError


# Smoothing / seasonality
SMOOTHING_ALPHA = 0.3
PATTERN_LENGTH = 4
MIN_SEASONAL_POINTS = 8

# Output floors and period spacing
PREDICTION_FLOOR = 10
PERIOD_DAYS = 7

# Accuracy clamps
ACCURACY_FLOOR = 70.0
ACCURACY_CEILING = 95.0
ACCURACY_FALLBACK = 75.0

# Input cleaning
MIN_SERIES_POINTS = 3
MIN_VALID_YEAR = 2000

# Blend policy: (linear, exponential, seasonal)
TREND_THRESHOLD = 0.7
SEASONALITY_THRESHOLD = 0.6
TREND_WEIGHTS = (0.5, 0.3, 0.2)
SEASONAL_WEIGHTS = (0.3, 0.2, 0.5)
DEFAULT_WEIGHTS = (0.4, 0.3, 0.3)

# Interval widths
LINEAR_MARGIN_MULTIPLIER = 2.0
SMOOTHING_WIDTH = 1.2
SEASONAL_WIDTH = 1.3
SEASONAL_DRIFT = 0.02
AVERAGE_DRIFT = 0.01
AVERAGE_MARGIN = 1.5
ENSEMBLE_MARGIN = 1.5

# YAML section -> ForecastConfig fields it may set
_SECTIONS = {
    'forecast': {
        'smoothing_alpha', 'pattern_length', 'min_seasonal_points',
        'prediction_floor', 'period_days', 'linear_margin_multiplier',
        'smoothing_width', 'seasonal_width', 'seasonal_drift',
        'average_drift', 'average_margin', 'ensemble_margin',
    },
    'weights': {'trend_weights', 'seasonal_weights', 'default_weights'},
    'thresholds': {'trend_threshold', 'seasonality_threshold'},
    'accuracy': {'accuracy_floor', 'accuracy_ceiling', 'accuracy_fallback'},
    'data': {'min_series_points', 'min_valid_year'},
}

# Short YAML keys accepted inside the 'weights', 'thresholds' and 'accuracy' sections
_ALIASES = {
    'weights': {'trend': 'trend_weights', 'seasonal': 'seasonal_weights', 'default': 'default_weights'},
    'thresholds': {'trend': 'trend_threshold', 'seasonality': 'seasonality_threshold'},
    'accuracy': {'floor': 'accuracy_floor', 'ceiling': 'accuracy_ceiling', 'fallback': 'accuracy_fallback'},
}


@dataclass(frozen=True)
class ForecastConfig:
    """
    Tunable policy of the forecasting engine.

    Defaults reproduce the dashboard's behavior; every field maps to one
    of the module-level constants.

    Example:
        >>> config = ForecastConfig(smoothing_alpha=0.5)
        >>> config.default_weights
        (0.4, 0.3, 0.3)
    """

    smoothing_alpha: float = SMOOTHING_ALPHA
    pattern_length: int = PATTERN_LENGTH
    min_seasonal_points: int = MIN_SEASONAL_POINTS
    prediction_floor: int = PREDICTION_FLOOR
    period_days: int = PERIOD_DAYS
    accuracy_floor: float = ACCURACY_FLOOR
    accuracy_ceiling: float = ACCURACY_CEILING
    accuracy_fallback: float = ACCURACY_FALLBACK
    min_series_points: int = MIN_SERIES_POINTS
    min_valid_year: int = MIN_VALID_YEAR
    trend_threshold: float = TREND_THRESHOLD
    seasonality_threshold: float = SEASONALITY_THRESHOLD
    trend_weights: Tuple[float, float, float] = TREND_WEIGHTS
    seasonal_weights: Tuple[float, float, float] = SEASONAL_WEIGHTS
    default_weights: Tuple[float, float, float] = DEFAULT_WEIGHTS
    linear_margin_multiplier: float = LINEAR_MARGIN_MULTIPLIER
    smoothing_width: float = SMOOTHING_WIDTH
    seasonal_width: float = SEASONAL_WIDTH
    seasonal_drift: float = SEASONAL_DRIFT
    average_drift: float = AVERAGE_DRIFT
    average_margin: float = AVERAGE_MARGIN
    ensemble_margin: float = ENSEMBLE_MARGIN

    def __post_init__(self):
        for name in ('trend_weights', 'seasonal_weights', 'default_weights'):
            weights = tuple(float(w) for w in getattr(self, name))
            if len(weights) != 3 or any(w < 0 for w in weights):
                raise ConfigurationError(f"{name} must be three non-negative numbers, got {weights}")
            if abs(sum(weights) - 1.0) > 1e-6:
                raise ConfigurationError(f"{name} must sum to 1, got {sum(weights):.4f}")
            object.__setattr__(self, name, weights)

        if not 0 < self.smoothing_alpha <= 1:
            raise ConfigurationError(f"smoothing_alpha must be in (0, 1], got {self.smoothing_alpha}")
        if self.pattern_length < 1:
            raise ConfigurationError("pattern_length must be at least 1")
        if self.min_series_points < 1:
            raise ConfigurationError("min_series_points must be at least 1")
        if self.period_days < 1:
            raise ConfigurationError("period_days must be at least 1")
        if self.accuracy_floor > self.accuracy_ceiling:
            raise ConfigurationError(
                f"accuracy_floor ({self.accuracy_floor}) exceeds accuracy_ceiling ({self.accuracy_ceiling})"
            )

    @classmethod
    def from_dict(cls, settings: Optional[Mapping[str, Any]]) -> 'ForecastConfig':
        """
        Build a configuration from a parsed settings mapping.

        Recognized sections are ``forecast``, ``weights``, ``thresholds``,
        ``accuracy`` and ``data``. Other top-level sections (``logging``,
        ``api``) belong to the hosts and are skipped.

        Args:
            settings: Mapping as produced by ``yaml.safe_load``

        Returns:
            ForecastConfig with overrides applied on top of the defaults
        """
        overrides: Dict[str, Any] = {}
        valid_fields = {f.name for f in fields(cls)}

        for section, allowed in _SECTIONS.items():
            values = (settings or {}).get(section) or {}
            if not isinstance(values, Mapping):
                raise ConfigurationError(f"Section '{section}' must be a mapping")
            aliases = _ALIASES.get(section, {})
            for key, value in values.items():
                name = aliases.get(key, key)
                if name in allowed and name in valid_fields:
                    overrides[name] = tuple(value) if isinstance(value, list) else value
                else:
                    logger.warning(f"Ignoring unknown setting '{section}.{key}'")

        return replace(cls(), **overrides)


def load_config(config_path: Optional[Union[str, Path]] = None) -> ForecastConfig:
    """
    Load engine configuration from a YAML file.

    Falls back to the defaults when no path is given or the file does
    not exist.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        ForecastConfig instance
    """
    settings = load_settings(config_path)
    return ForecastConfig.from_dict(settings)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> dict:
    """Read the raw settings mapping, or an empty one when unavailable."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            settings = yaml.safe_load(f) or {}
        logger.info(f"Loaded configuration from {config_path}")
        return settings

    if config_path:
        logger.warning(f"Config file not found: {config_path}, using defaults")
    return {}
