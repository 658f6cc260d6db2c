"""
Tests for metrics sources and the Result type.

Randomness is driven through seeded or stubbed generators so that
assertions are deterministic.
"""

import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from devops_monitor.domain.models import HealthSample, ProviderHealth
from devops_monitor.services.metrics_source import (
    CollectionError,
    Result,
    SimulatedMetricsSource,
    SimulatedProviderSource,
)


class _StubRandom(random.Random):
    """Random generator replaying fixed values for random() and randint()."""

    def __init__(self, values: list[float], ints: list[int] | None = None) -> None:
        super().__init__(0)
        self._values = list(values)
        self._ints = list(ints or [])

    def random(self) -> float:
        return self._values.pop(0)

    def randint(self, a: int, b: int) -> int:
        return self._ints.pop(0)


class TestResult:
    """Test the Result type for explicit error handling."""

    def test_result_ok_creates_successful_result(self) -> None:
        result: Result[str, Exception] = Result.ok("success")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "success"

    def test_result_error_creates_failed_result(self) -> None:
        error = CollectionError("test error")
        result: Result[str, CollectionError] = Result.err(error)
        assert not result.is_ok()
        assert result.is_err()
        assert result.unwrap_or("default") == "default"
        assert result.unwrap_err() is error

    def test_unwrap_raises_on_error_result(self) -> None:
        result: Result[str, CollectionError] = Result.err(CollectionError("test error"))

        with pytest.raises(CollectionError, match="test error"):
            result.unwrap()

    def test_unwrap_err_on_ok_value_raises(self) -> None:
        with pytest.raises(ValueError, match="unwrap_err"):
            Result.ok(1).unwrap_err()

    def test_result_requires_exactly_one_side(self) -> None:
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(value=1, error=CollectionError("both"))


class TestSimulatedMetricsSource:
    def test_sample_scales_draws_to_percentages(self) -> None:
        source = SimulatedMetricsSource(rng=_StubRandom([0.1, 0.5, 0.999]))

        result = source.sample()

        assert result.is_ok()
        sample = result.unwrap()
        assert isinstance(sample, HealthSample)
        assert sample.cpu == pytest.approx(10.0)
        assert sample.memory == pytest.approx(50.0)
        assert sample.disk == pytest.approx(99.9)

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_readings_stay_within_percentage_range(self, seed: int) -> None:
        source = SimulatedMetricsSource(rng=random.Random(seed))

        sample = source.sample().unwrap()

        for value in (sample.cpu, sample.memory, sample.disk):
            assert 0.0 <= value < 100.0

    def test_collections_differ_between_calls(self) -> None:
        source = SimulatedMetricsSource(rng=random.Random(42))

        first = source.sample().unwrap()
        second = source.sample().unwrap()

        assert first != second

    def test_failure_rate_returns_collection_error(self) -> None:
        source = SimulatedMetricsSource(
            source_name="flaky-host", failure_rate=0.5, rng=_StubRandom([0.1])
        )

        result = source.sample()

        assert result.is_err()
        assert isinstance(result.unwrap_err(), CollectionError)
        assert "flaky-host" in str(result.unwrap_err())

    def test_failure_rate_draw_above_rate_succeeds(self) -> None:
        source = SimulatedMetricsSource(failure_rate=0.05, rng=_StubRandom([0.9, 0.2, 0.3, 0.4]))

        result = source.sample()

        assert result.is_ok()
        assert result.unwrap().cpu == pytest.approx(20.0)

    @pytest.mark.parametrize("failure_rate", [-0.1, 1.5])
    def test_invalid_failure_rate_rejected(self, failure_rate: float) -> None:
        with pytest.raises(ValueError, match="failure_rate"):
            SimulatedMetricsSource(failure_rate=failure_rate)


class TestSimulatedProviderSource:
    def test_healthy_provider(self) -> None:
        source = SimulatedProviderSource(rng=_StubRandom([0.4213, 0.5], ints=[7]))

        status = source.status("aws")

        assert status.name == "aws"
        assert status.instances == 7
        assert status.load == pytest.approx(42.13)
        assert status.health == ProviderHealth.HEALTHY

    def test_degraded_provider(self) -> None:
        source = SimulatedProviderSource(rng=_StubRandom([0.3, 0.95], ints=[14]))

        status = source.status("gcp")

        assert status.health == ProviderHealth.DEGRADED

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_instance_count_range(self, seed: int) -> None:
        source = SimulatedProviderSource(rng=random.Random(seed))

        status = source.status("azure")

        assert 5 <= status.instances <= 14
        assert 0.0 <= status.load < 100.0

    def test_healthy_ratio_is_roughly_ninety_percent(self) -> None:
        source = SimulatedProviderSource(rng=random.Random(1234))

        verdicts = [source.status("aws").health for _ in range(2000)]
        healthy_ratio = verdicts.count(ProviderHealth.HEALTHY) / len(verdicts)

        assert 0.85 < healthy_ratio < 0.95
