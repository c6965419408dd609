"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="Stockcast", description="Service title")
    description: str = Field(
        default="Demand forecasting service for inventory planning",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SERVICE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SERVICE_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class ForecastSettings(BaseSettings):
    """Ensemble forecast configuration settings."""

    alpha: float = Field(default=0.3, description="Exponential smoothing factor")
    es_weight: float = Field(
        default=0.30, description="Ensemble weight of exponential smoothing"
    )
    lr_weight: float = Field(
        default=0.30, description="Ensemble weight of linear regression"
    )
    ma_weight: float = Field(
        default=0.40, description="Ensemble weight of the moving average"
    )
    horizon_days: int = Field(default=30, description="Forecast horizon in days")
    lookback_days: int = Field(
        default=90,
        ge=0,
        description="Days of sales history considered (0 disables the filter)",
    )
    default_reorder_level: int = Field(
        default=10, ge=0, description="Reorder level for products without one"
    )
    reorder_safety_factor: float = Field(
        default=1.2, gt=0, description="Multiplier applied to predicted demand"
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class AdvisorySettings(BaseSettings):
    """Optional LLM advisory service settings."""

    enabled: bool = Field(default=True, description="Use the advisory service")
    api_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="OpenAI-compatible chat completions URL",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key; the advisory step is skipped when missing",
        validation_alias=AliasChoices("ADVISORY_API_KEY", "LOVABLE_API_KEY"),
    )
    model: str = Field(
        default="google/gemini-2.5-flash", description="Model identifier"
    )
    timeout_seconds: float = Field(
        default=15.0, gt=0, description="Upper bound for one advisory call"
    )
    min_observations: int = Field(
        default=20,
        ge=0,
        description="Advisory is attempted above this many sale events",
    )
    recent_window: int = Field(
        default=21, gt=0, description="Daily quantities sent as context"
    )
    blend_weight: float = Field(
        default=0.3, ge=0, le=1, description="Weight of the advisory prediction"
    )
    confidence_boost: float = Field(
        default=1.1, gt=0, description="Confidence multiplier after blending"
    )

    model_config = SettingsConfigDict(
        env_prefix="ADVISORY_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    advisory: AdvisorySettings = Field(default_factory=AdvisorySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()


settings = get_settings()
