"""
Domain models for the sampling loop.

Every value here is produced fresh on each tick and dropped once the report
that consumes it has been emitted. Nothing is retained between ticks.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Overall verdict of a health check."""

    OPTIMAL = "optimal"
    WARNING = "warning"


class ProviderHealth(str, Enum):
    """Binary health verdict for a cloud provider."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"


class HealthSample(BaseModel):
    """Current resource usage, in percent."""

    model_config = ConfigDict(frozen=True)

    cpu: float = Field(ge=0.0, lt=100.0)
    memory: float = Field(ge=0.0, lt=100.0)
    disk: float = Field(ge=0.0, lt=100.0)


class ForecastSample(BaseModel):
    """Projected metrics with a confidence percentage.

    Not derived from the concurrent HealthSample: no history is kept, so the
    projection is a placeholder for a model fed by a retained time series.
    """

    model_config = ConfigDict(frozen=True)

    cpu: float = Field(ge=0.0, lt=100.0)
    memory: float = Field(ge=0.0, lt=100.0)
    traffic: float = Field(ge=0.0, description="Projected request rate in req/s")
    confidence: float = Field(ge=70.0, lt=100.0)


class ForecastReport(BaseModel):
    """Forecast attached to a health report."""

    model_config = ConfigDict(frozen=True)

    sample: ForecastSample
    window_seconds: float | None = Field(
        default=None, description="Horizon the projection covers"
    )
    predictive_alert: bool = Field(
        default=False, description="Forecast CPU exceeds the alert threshold"
    )


class ProviderStatus(BaseModel):
    """Synthetic per-provider status, recomputed every tick."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    instances: int = Field(ge=5, le=14)
    load: float = Field(ge=0.0, lt=100.0)
    health: ProviderHealth


class HealthReport(BaseModel):
    """Structured content of one health-check tick."""

    model_config = ConfigDict(frozen=True)

    environment: str
    sample: HealthSample
    status: HealthStatus
    providers: tuple[ProviderStatus, ...] = ()
    forecast: ForecastReport | None = None
    debug: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def max_usage(self) -> float:
        return max(self.sample.cpu, self.sample.memory, self.sample.disk)


class StartupBanner(BaseModel):
    """One-time notice emitted before the sampling loop starts."""

    model_config = ConfigDict(frozen=True)

    environment: str
    ai_enabled: bool
    interval_seconds: float
    alert_threshold: float
    model_path: str | None = None
    providers: tuple[str, ...] = ()


class RetrainingNotice(BaseModel):
    """Notice emitted by the retraining timer. No model state changes."""

    model_config = ConfigDict(frozen=True)

    training_accuracy: float = Field(default=94.7, ge=0.0, le=100.0)
    model_updated: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
