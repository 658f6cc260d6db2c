"""
Tests for domain model validation in `devops_monitor/domain/models.py`.

Covers:
- Percentage fields accept [0, 100) and reject 100 itself
- Forecast confidence stays within [70, 100)
- Provider instance counts stay within 5..14
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from devops_monitor.domain.models import (
    ForecastSample,
    HealthSample,
    ProviderHealth,
    ProviderStatus,
    RetrainingNotice,
)


class TestHealthSample:
    def test_accepts_values_just_below_one_hundred(self) -> None:
        sample = HealthSample(cpu=99.99, memory=0.0, disk=50.0)
        assert sample.cpu == 99.99

    @pytest.mark.parametrize("field", ["cpu", "memory", "disk"])
    def test_rejects_one_hundred(self, field: str) -> None:
        readings = {"cpu": 10.0, "memory": 10.0, "disk": 10.0, field: 100.0}
        with pytest.raises(ValidationError, match="less than 100"):
            HealthSample(**readings)

    def test_rejects_negative_usage(self) -> None:
        with pytest.raises(ValidationError):
            HealthSample(cpu=-0.1, memory=10.0, disk=10.0)


class TestForecastSample:
    @pytest.mark.parametrize("confidence", [70.0, 99.99])
    def test_confidence_bounds_accepted(self, confidence: float) -> None:
        sample = ForecastSample(cpu=10.0, memory=10.0, traffic=1.0, confidence=confidence)
        assert sample.confidence == confidence

    @pytest.mark.parametrize("confidence", [69.9, 100.0])
    def test_confidence_outside_range_rejected(self, confidence: float) -> None:
        with pytest.raises(ValidationError):
            ForecastSample(cpu=10.0, memory=10.0, traffic=1.0, confidence=confidence)

    @pytest.mark.parametrize("field", ["cpu", "memory"])
    def test_projected_usage_rejects_one_hundred(self, field: str) -> None:
        values = {"cpu": 10.0, "memory": 10.0, field: 100.0}
        with pytest.raises(ValidationError, match="less than 100"):
            ForecastSample(traffic=1.0, confidence=80.0, **values)


class TestProviderStatus:
    @pytest.mark.parametrize("instances", [5, 14])
    def test_instance_bounds_accepted(self, instances: int) -> None:
        status = ProviderStatus(
            name="aws", instances=instances, load=10.0, health=ProviderHealth.HEALTHY
        )
        assert status.instances == instances

    @pytest.mark.parametrize("instances", [0, 4, 15])
    def test_instance_count_outside_range_rejected(self, instances: int) -> None:
        with pytest.raises(ValidationError):
            ProviderStatus(
                name="aws", instances=instances, load=10.0, health=ProviderHealth.HEALTHY
            )

    def test_load_rejects_one_hundred(self) -> None:
        with pytest.raises(ValidationError):
            ProviderStatus(name="aws", instances=8, load=100.0, health=ProviderHealth.DEGRADED)


def test_retraining_notice_defaults() -> None:
    notice = RetrainingNotice()
    assert notice.training_accuracy == 94.7
    assert notice.model_updated is True
    assert notice.timestamp.tzinfo is not None
