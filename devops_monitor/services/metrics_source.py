"""
Metrics sources feeding the sampling loop.

Key patterns:
- Protocol-based dependency injection (swap the simulator for a real collector)
- Generic Result type for expected collection failures
- Injectable random generator for reproducible simulations
"""

import random
from typing import Generic, Protocol, TypeVar

import structlog

from devops_monitor.domain.models import HealthSample, ProviderHealth, ProviderStatus

logger = structlog.get_logger(__name__)

# Generic Result type for explicit error handling
ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class CollectionError(Exception):
    """Transient failure while collecting a health sample."""


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Collection failures are ordinary business logic for a monitoring agent,
    so they travel as values and the caller decides what a failed tick means.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class MetricsSource(Protocol):
    """
    Capability that produces one health sample per call.

    Synchronous on purpose: a tick must finish before the next timer fires.
    """

    source_name: str

    def sample(self) -> Result[HealthSample, CollectionError]:
        """
        Take one health sample.

        Returns:
            Result[HealthSample, CollectionError]: the sample, or the transient failure.
        """
        ...


class SimulatedMetricsSource:
    """
    Simulated host metrics.

    Each reading is an independent uniform draw in [0, 100). A non-zero
    `failure_rate` simulates flaky collection the way a real agent would see it.
    """

    def __init__(
        self,
        source_name: str = "simulated-host",
        failure_rate: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.source_name = source_name
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self.logger = logger.bind(source=source_name)

    def sample(self) -> Result[HealthSample, CollectionError]:
        if self.failure_rate and self._rng.random() < self.failure_rate:
            error = CollectionError(f"Failed to collect metrics from {self.source_name}")
            self.logger.warning("metrics_collection_failed", error=str(error))
            return Result.err(error)

        sample = HealthSample(
            cpu=self._rng.random() * 100,
            memory=self._rng.random() * 100,
            disk=self._rng.random() * 100,
        )
        self.logger.debug(
            "metrics_collected", cpu=sample.cpu, memory=sample.memory, disk=sample.disk
        )
        return Result.ok(sample)


class ProviderSource(Protocol):
    """Capability that reports the status of one cloud provider."""

    def status(self, provider: str) -> ProviderStatus: ...


class SimulatedProviderSource:
    """
    Simulated cloud provider status.

    Instance count is drawn from 5..14, load from [0, 100), and the verdict is
    HEALTHY with probability 0.9. Draws are independent across providers and ticks.
    """

    def __init__(self, healthy_probability: float = 0.9, rng: random.Random | None = None) -> None:
        self.healthy_probability = healthy_probability
        self._rng = rng or random.Random()

    def status(self, provider: str) -> ProviderStatus:
        instances = self._rng.randint(5, 14)
        load = self._rng.random() * 100
        healthy = self._rng.random() < self.healthy_probability
        return ProviderStatus(
            name=provider,
            instances=instances,
            load=load,
            health=ProviderHealth.HEALTHY if healthy else ProviderHealth.DEGRADED,
        )
