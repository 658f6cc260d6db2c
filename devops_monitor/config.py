"""
Configuration management with environment-scoped profiles.

Design principles:
- One immutable profile per process, selected once at startup
- Unknown or missing environment names fall back to the default profile
- Validation when profiles are defined (fail fast)
- The resolved config is passed explicitly into the sampling loop
"""

import os
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_ENVIRONMENT = "production"
EXPERIMENTAL_ENVIRONMENT = "experimental"
DEFAULT_MODEL_PATH = "./models/anomaly-detection.h5"


class EnvironmentProfile(BaseModel):
    """Operational parameters for one environment."""

    model_config = ConfigDict(frozen=True)

    interval_seconds: float = Field(gt=0.0, description="Period of the health-check timer")
    alert_threshold: float = Field(
        ge=0.0, le=100.0, description="Usage percentage above which status is WARNING"
    )
    debug: bool = Field(default=False, description="Show debug details in reports")
    ai_forecast_enabled: bool = Field(default=False, description="Attach forecasts to reports")
    verbose_logging: bool = Field(default=False, description="Force DEBUG log level")
    predictive_window_seconds: float | None = Field(
        default=None, gt=0.0, description="Horizon of the forecast"
    )
    model_path: str | None = Field(default=None, description="Forecast model reference")
    providers: tuple[str, ...] = Field(
        default=(), description="Cloud providers reported on every tick"
    )

    @model_validator(mode="after")
    def ai_requires_model(self) -> "EnvironmentProfile":
        """A profile with forecasting enabled must name the model it loads."""
        if self.ai_forecast_enabled and not self.model_path:
            raise ValueError("ai_forecast_enabled requires a model_path")
        return self


ENVIRONMENT_PROFILES: Mapping[str, EnvironmentProfile] = MappingProxyType(
    {
        "production": EnvironmentProfile(
            interval_seconds=60.0,
            alert_threshold=80.0,
            debug=False,
            ai_forecast_enabled=True,
            predictive_window_seconds=300.0,
            model_path=DEFAULT_MODEL_PATH,
            providers=("aws", "azure", "gcp"),
        ),
        "development": EnvironmentProfile(
            interval_seconds=5.0,
            alert_threshold=90.0,
            debug=True,
            ai_forecast_enabled=False,
            verbose_logging=True,
        ),
        "experimental": EnvironmentProfile(
            interval_seconds=30.0,
            alert_threshold=75.0,
            ai_forecast_enabled=True,
            predictive_window_seconds=300.0,
            model_path=DEFAULT_MODEL_PATH,
            providers=("aws", "azure", "gcp"),
        ),
    }
)


def resolve_profile(
    name: str | None,
    profiles: Mapping[str, EnvironmentProfile] = ENVIRONMENT_PROFILES,
    default_name: str = DEFAULT_ENVIRONMENT,
) -> EnvironmentProfile:
    """Return the profile registered under `name`, or the default one.

    Never raises for an unknown name: empty, missing and unrecognized names
    all degrade to the default profile. Names are matched exactly.

    Raises ValueError if `default_name` is not itself in `profiles`.
    """
    if default_name not in profiles:
        raise ValueError(f"default profile {default_name!r} is not in the profile mapping")
    if name and name in profiles:
        return profiles[name]
    return profiles[default_name]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Resolved process configuration."""

    model_config = ConfigDict(frozen=True)

    environment: str = Field(default=DEFAULT_ENVIRONMENT, description="Environment label")
    profile: EnvironmentProfile
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables."""

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(
            LogLevel,
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    environment = os.getenv("ENVIRONMENT") or DEFAULT_ENVIRONMENT
    profile = resolve_profile(environment)

    level = _level_to_literal(os.getenv("LOG_LEVEL", "INFO"))
    if profile.verbose_logging:
        level = "DEBUG"

    logging_config = LoggingConfig(
        level=level,
        format="console" if profile.debug else "json",
    )

    return AppConfig(environment=environment, profile=profile, logging=logging_config)


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()
