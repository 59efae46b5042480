"""Tests for the configuration system."""

from decimal import Decimal

import pytest

from spendlens_core import ConfigurationError, TimeRange, TrendBucket
from spendlens_core.config import AnalyticsConfig, load_config
from spendlens_core.trend import TrendSettings


class TestAnalyticsConfig:
    """Test suite for AnalyticsConfig."""

    def test_default_values(self):
        """AnalyticsConfig should default to the dashboard's behavior."""
        config = AnalyticsConfig()

        assert config.default_time_range == TimeRange.LAST_30_DAYS
        assert config.top_category_limit == 5
        assert config.daily_trend_limit == 14
        assert config.weekly_trend_limit == 10
        assert config.weekly_threshold_days == 30
        assert config.week_length_days == 7
        assert config.min_bar_width == 5
        assert config.emit_events is True
        assert config.log_level == "INFO"
        assert config.log_format == "console"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SPENDLENS_DEFAULT_TIME_RANGE", "1y")
        monkeypatch.setenv("SPENDLENS_TOP_CATEGORY_LIMIT", "3")
        monkeypatch.setenv("SPENDLENS_EMIT_EVENTS", "false")
        monkeypatch.setenv("SPENDLENS_LOG_LEVEL", "debug")

        config = AnalyticsConfig()

        assert config.default_time_range == TimeRange.LAST_YEAR
        assert config.top_category_limit == 3
        assert config.emit_events is False
        assert config.log_level == "DEBUG"
        assert config.is_debug

    def test_log_level_validation(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(log_level="LOUD")

    def test_log_format_validation(self):
        assert AnalyticsConfig(log_format=" JSON ").log_format == "json"

        with pytest.raises(ValueError):
            AnalyticsConfig(log_format="xml")

    def test_limits_validation(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(top_category_limit=0)

        with pytest.raises(ValueError):
            AnalyticsConfig(week_length_days=1)

    def test_invalid_default_time_range(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(default_time_range="2w")

    def test_trend_settings(self):
        config = AnalyticsConfig(weekly_threshold_days=60, weekly_trend_limit=8)

        assert config.trend_settings == TrendSettings(
            weekly_threshold_days=60,
            week_length_days=7,
            daily_limit=14,
            weekly_limit=8,
        )

    def test_min_bar_width_reaches_trend_settings(self, monkeypatch):
        monkeypatch.setenv("SPENDLENS_MIN_BAR_WIDTH", "8")
        config = AnalyticsConfig()
        trend = [TrendBucket(date="2024-01-01", amount=Decimal("0"))]

        assert config.trend_settings.min_bar_width == 8
        assert config.trend_settings.bar_width(Decimal("0"), trend) == Decimal("8")


class TestLoadConfig:
    def test_overrides(self):
        config = load_config(default_time_range="7d")

        assert config.default_time_range == TimeRange.LAST_7_DAYS

    def test_invalid_setting_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(top_category_limit=-1)

        assert exc_info.value.config_key == "top_category_limit"
        assert exc_info.value.actual == -1
        assert exc_info.value.recoverable is False

    def test_invalid_environment_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("SPENDLENS_LOG_FORMAT", "yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        assert exc_info.value.config_key == "log_format"
