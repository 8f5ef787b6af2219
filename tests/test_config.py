"""
Tests for engine configuration.

Run with: python3 -m pytest tests/test_config.py -v
"""

from pathlib import Path

import pytest

from inventory_forecast.config import (
    DEFAULT_WEIGHTS,
    SMOOTHING_ALPHA,
    ForecastConfig,
    load_config,
    load_settings,
)
from inventory_forecast.exceptions import ConfigurationError


SETTINGS_FILE = Path(__file__).parent.parent / "config" / "settings.yaml"


class TestForecastConfig:
    """Defaults and validation."""

    def test_defaults_match_constants(self):
        config = ForecastConfig()
        assert config.smoothing_alpha == SMOOTHING_ALPHA
        assert config.default_weights == DEFAULT_WEIGHTS
        assert config.prediction_floor == 10
        assert (config.accuracy_floor, config.accuracy_ceiling, config.accuracy_fallback) == (70.0, 95.0, 75.0)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ConfigurationError):
            ForecastConfig(default_weights=(0.5, 0.5, 0.5))

    def test_weights_must_be_three_non_negative_numbers(self):
        with pytest.raises(ConfigurationError):
            ForecastConfig(trend_weights=(0.5, 0.5))
        with pytest.raises(ConfigurationError):
            ForecastConfig(seasonal_weights=(1.2, -0.1, -0.1))

    @pytest.mark.parametrize("alpha", [0, -0.1, 1.5])
    def test_alpha_range(self, alpha):
        with pytest.raises(ConfigurationError):
            ForecastConfig(smoothing_alpha=alpha)

    def test_accuracy_bounds_order(self):
        with pytest.raises(ConfigurationError):
            ForecastConfig(accuracy_floor=96.0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ForecastConfig(pattern_length=0)


class TestFromDict:
    """Building a config from parsed YAML."""

    def test_empty_settings(self):
        assert ForecastConfig.from_dict({}) == ForecastConfig()
        assert ForecastConfig.from_dict(None) == ForecastConfig()

    def test_sections_and_aliases(self):
        config = ForecastConfig.from_dict({
            "forecast": {"smoothing_alpha": 0.5, "prediction_floor": 0},
            "weights": {"default": [0.2, 0.3, 0.5]},
            "thresholds": {"trend": 0.8},
            "accuracy": {"ceiling": 99.0},
            "data": {"min_series_points": 5},
        })

        assert config.smoothing_alpha == 0.5
        assert config.prediction_floor == 0
        assert config.default_weights == (0.2, 0.3, 0.5)
        assert config.trend_threshold == 0.8
        assert config.accuracy_ceiling == 99.0
        assert config.min_series_points == 5

    def test_unknown_keys_and_host_sections_are_ignored(self):
        config = ForecastConfig.from_dict({
            "forecast": {"not_a_setting": 1},
            "logging": {"level": "DEBUG"},
            "api": {"default_horizon": 8},
        })
        assert config == ForecastConfig()

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            ForecastConfig.from_dict({"weights": [0.4, 0.3, 0.3]})

    def test_invalid_override_is_rejected(self):
        with pytest.raises(ConfigurationError):
            ForecastConfig.from_dict({"weights": {"trend": [0.9, 0.9, 0.9]}})


class TestLoadConfig:
    """YAML loading."""

    def test_no_path_gives_defaults(self):
        assert load_config() == ForecastConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == ForecastConfig()
        assert load_settings(tmp_path / "missing.yaml") == {}

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("forecast:\n  smoothing_alpha: 0.4\nthresholds:\n  seasonality: 0.5\n")

        config = load_config(path)
        assert config.smoothing_alpha == 0.4
        assert config.seasonality_threshold == 0.5

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ForecastConfig()

    def test_shipped_settings_match_defaults(self):
        assert load_config(SETTINGS_FILE) == ForecastConfig()
