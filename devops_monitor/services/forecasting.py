"""
Forecasting attached to health reports when a profile enables it.

The simulated forecaster draws projections independently of the current
health sample. Nothing here is learned from history: there is no retained
time series to learn from, so the forecaster is a stand-in with the same
interface a real predictive model would expose.
"""

import math
import random
from typing import Protocol

import structlog

from devops_monitor.config import EnvironmentProfile
from devops_monitor.domain.models import ForecastReport, ForecastSample
from devops_monitor.services.classification import is_predictive_alert

logger = structlog.get_logger(__name__)

# Largest float below 100; 70 + 30 * random() can round up to 100.0
_CONFIDENCE_CEILING = math.nextafter(100.0, 0.0)


class Forecaster(Protocol):
    """Capability that projects metrics over the predictive window."""

    def predict(self) -> ForecastSample: ...


class SimulatedForecaster:
    """Projections drawn uniformly; confidence in [70, 100)."""

    def __init__(self, max_traffic: float = 1000.0, rng: random.Random | None = None) -> None:
        self.max_traffic = max_traffic
        self._rng = rng or random.Random()

    def predict(self) -> ForecastSample:
        return ForecastSample(
            cpu=self._rng.random() * 100,
            memory=self._rng.random() * 100,
            traffic=self._rng.random() * self.max_traffic,
            confidence=min(self._rng.random() * 30 + 70, _CONFIDENCE_CEILING),
        )


def forecast(forecaster: Forecaster, profile: EnvironmentProfile) -> ForecastReport:
    """
    Draw a forecast and evaluate the predictive alert.

    The alert uses the profile's alert threshold against the projected CPU,
    independently of how the current sample was classified.
    """
    sample = forecaster.predict()
    alert = is_predictive_alert(sample, profile.alert_threshold)

    if alert:
        logger.warning(
            "predictive_alert_raised",
            projected_cpu=round(sample.cpu, 2),
            threshold=profile.alert_threshold,
            action="pre-scaling initiated",
        )

    logger.debug(
        "forecast_generated",
        window_seconds=profile.predictive_window_seconds,
        confidence=round(sample.confidence, 2),
    )

    return ForecastReport(
        sample=sample,
        window_seconds=profile.predictive_window_seconds,
        predictive_alert=alert,
    )
