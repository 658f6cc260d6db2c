"""Threshold classification used by the health check and the forecast."""

from devops_monitor.domain.models import ForecastSample, HealthSample, HealthStatus


def classify(cpu: float, memory: float, disk: float, threshold: float) -> HealthStatus:
    """WARNING when the highest reading is strictly above the threshold."""
    if max(cpu, memory, disk) > threshold:
        return HealthStatus.WARNING
    return HealthStatus.OPTIMAL


def classify_sample(sample: HealthSample, threshold: float) -> HealthStatus:
    return classify(sample.cpu, sample.memory, sample.disk, threshold)


def is_predictive_alert(forecast: ForecastSample, threshold: float) -> bool:
    """Projected CPU alone is compared against the same alert threshold."""
    return forecast.cpu > threshold
