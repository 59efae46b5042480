"""Configuration for the SpendLens analytics engine.

Pydantic Settings-based configuration with environment variable support
and defaults matching the dashboard's behavior.

Usage:
    from spendlens_core.config import AnalyticsConfig

    # Load from environment variables and .env file
    config = AnalyticsConfig()

    # Override specific settings
    config = AnalyticsConfig(default_time_range="90d", emit_events=False)
"""

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from spendlens_core.exceptions import ConfigurationError
from spendlens_core.models import TimeRange
from spendlens_core.trend import TrendSettings


class AnalyticsConfig(BaseSettings):
    """Root configuration for the analytics engine.

    Environment Variables:
        SPENDLENS_DEFAULT_TIME_RANGE: Selector used when none is given (7d, 30d, 90d, 1y)
        SPENDLENS_TOP_CATEGORY_LIMIT: Number of ranked categories in a summary
        SPENDLENS_DAILY_TREND_LIMIT: Maximum daily trend points
        SPENDLENS_WEEKLY_TREND_LIMIT: Maximum weekly trend points
        SPENDLENS_WEEKLY_THRESHOLD_DAYS: Day count above which the trend is weekly
        SPENDLENS_WEEK_LENGTH_DAYS: Days per weekly bucket
        SPENDLENS_MIN_BAR_WIDTH: Minimum trend bar width, in percent
        SPENDLENS_EMIT_EVENTS: Emit an observability event per summary
        SPENDLENS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        SPENDLENS_LOG_FORMAT: Log renderer (console, json)
    """

    model_config = SettingsConfigDict(
        env_prefix="SPENDLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_time_range: TimeRange = Field(
        default=TimeRange.LAST_30_DAYS,
        description="Range selector used when the caller passes none",
    )
    top_category_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum number of entries in top_categories",
    )
    daily_trend_limit: int = Field(
        default=14,
        ge=1,
        le=366,
        description="Maximum number of daily trend buckets",
    )
    weekly_trend_limit: int = Field(
        default=10,
        ge=1,
        le=60,
        description="Maximum number of weekly trend buckets",
    )
    weekly_threshold_days: int = Field(
        default=30,
        ge=1,
        description="Windows spanning more calendar days than this use weekly buckets",
    )
    week_length_days: int = Field(
        default=7,
        ge=2,
        le=31,
        description="Number of days in a weekly bucket",
    )
    min_bar_width: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Minimum trend bar width in percent",
    )
    emit_events: bool = Field(
        default=True,
        description="Emit an analytics event after each computation",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console or json)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = {"console", "json"}
        v_lower = v.lower().strip()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of: {valid_formats}")
        return v_lower

    @property
    def trend_settings(self) -> TrendSettings:
        return TrendSettings(
            weekly_threshold_days=self.weekly_threshold_days,
            week_length_days=self.week_length_days,
            daily_limit=self.daily_trend_limit,
            weekly_limit=self.weekly_trend_limit,
            min_bar_width=self.min_bar_width,
        )

    @property
    def is_debug(self) -> bool:
        return self.log_level == "DEBUG"


def load_config(**overrides) -> AnalyticsConfig:
    """Load configuration from the environment, applying keyword overrides.

    Raises:
        ConfigurationError: If a setting fails validation.
    """
    try:
        return AnalyticsConfig(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid analytics configuration: {first.get('msg', e)}",
            config_key=key or None,
            actual=first.get("input"),
            details={"errors": e.error_count()},
        ) from e
