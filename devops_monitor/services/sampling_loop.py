"""
Periodic health-check sampling loop.

One asyncio event loop drives up to two timers:
1. Health check: runs immediately, then every profile interval
2. Retraining notice: every 120 seconds, only for the experimental
   environment with forecasting enabled

Each tick is a plain synchronous call, so the two timers can only interleave
between ticks, never inside one.
"""

import asyncio
import contextlib
import signal
from collections.abc import Callable

import structlog

from devops_monitor.config import (
    EXPERIMENTAL_ENVIRONMENT,
    AppConfig,
    EnvironmentProfile,
    get_config,
)
from devops_monitor.domain.models import HealthReport, RetrainingNotice, StartupBanner
from devops_monitor.log_config import configure_logging
from devops_monitor.services.classification import classify_sample
from devops_monitor.services.forecasting import Forecaster, SimulatedForecaster, forecast
from devops_monitor.services.metrics_source import (
    MetricsSource,
    ProviderSource,
    SimulatedMetricsSource,
    SimulatedProviderSource,
)
from devops_monitor.services.reporting import ConsoleReportSink, ReportSink

logger = structlog.get_logger(__name__)

# Fixed period of the retraining notice, independent of the profile interval.
RETRAINING_INTERVAL_SECONDS = 120.0


def should_schedule_retraining(profile: EnvironmentProfile, environment: str) -> bool:
    """The retraining timer needs both forecasting and the experimental environment."""
    return profile.ai_forecast_enabled and environment == EXPERIMENTAL_ENVIRONMENT


class SamplingLoop:
    """
    Drives periodic health reporting for the lifetime of the process.

    Collaborators are injected so the simulated generators can be replaced by
    real collectors without touching scheduling or classification.
    """

    def __init__(
        self,
        profile: EnvironmentProfile,
        environment: str,
        sink: ReportSink,
        metrics_source: MetricsSource | None = None,
        forecaster: Forecaster | None = None,
        provider_source: ProviderSource | None = None,
        retraining_interval_seconds: float = RETRAINING_INTERVAL_SECONDS,
    ) -> None:
        if retraining_interval_seconds <= 0:
            raise ValueError("retraining_interval_seconds must be positive")

        self.profile = profile
        self.environment = environment
        self.sink = sink
        self.metrics_source: MetricsSource = metrics_source or SimulatedMetricsSource()
        self.forecaster: Forecaster = forecaster or SimulatedForecaster()
        self.provider_source: ProviderSource = provider_source or SimulatedProviderSource()
        self.retraining_interval_seconds = retraining_interval_seconds
        self.logger = logger.bind(component="sampling_loop", environment=environment)

        self._stop_event = asyncio.Event()
        self._is_running = False

    @classmethod
    def from_config(cls, config: AppConfig, sink: ReportSink) -> "SamplingLoop":
        return cls(profile=config.profile, environment=config.environment, sink=sink)

    @property
    def retraining_enabled(self) -> bool:
        return should_schedule_retraining(self.profile, self.environment)

    @property
    def is_running(self) -> bool:
        return self._is_running

    def announce(self) -> StartupBanner:
        """Emit the one-time startup banner."""
        banner = StartupBanner(
            environment=self.environment,
            ai_enabled=self.profile.ai_forecast_enabled,
            interval_seconds=self.profile.interval_seconds,
            alert_threshold=self.profile.alert_threshold,
            model_path=self.profile.model_path,
            providers=self.profile.providers,
        )
        self.sink.emit_banner(banner)

        if banner.ai_enabled:
            self.logger.info("forecast_model_ready", model_path=banner.model_path)

        return banner

    def run_health_check(self) -> HealthReport | None:
        """
        Execute one health-check tick:
        1. Sample current usage
        2. Collect provider status and, if enabled, a forecast
        3. Classify against the alert threshold
        4. Emit the report

        Returns None when the metrics source failed; the tick is skipped.
        """
        result = self.metrics_source.sample()
        if result.is_err():
            self.logger.warning(
                "health_check_skipped",
                source=self.metrics_source.source_name,
                error=str(result.unwrap_err()),
            )
            return None

        sample = result.unwrap()
        providers = tuple(self.provider_source.status(name) for name in self.profile.providers)
        forecast_report = (
            forecast(self.forecaster, self.profile) if self.profile.ai_forecast_enabled else None
        )
        status = classify_sample(sample, self.profile.alert_threshold)

        report = HealthReport(
            environment=self.environment,
            sample=sample,
            status=status,
            providers=providers,
            forecast=forecast_report,
            debug=self.profile.debug,
        )
        self.sink.emit_health_report(report)

        self.logger.info(
            "health_check_completed",
            status=status.value,
            max_usage=round(report.max_usage, 2),
            threshold=self.profile.alert_threshold,
            providers=len(providers),
            predictive_alert=bool(forecast_report and forecast_report.predictive_alert),
        )
        return report

    def run_retraining_notice(self) -> RetrainingNotice:
        """Emit a retraining notice. No model state is touched."""
        notice = RetrainingNotice()
        self.sink.emit_retraining_notice(notice)
        self.logger.info("retraining_notice_emitted", training_accuracy=notice.training_accuracy)
        return notice

    async def _run_every(
        self, interval_seconds: float, tick: Callable[[], object], *, immediate: bool
    ) -> None:
        if immediate and not self._stop_event.is_set():
            tick()

        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=interval_seconds)
            except TimeoutError:
                tick()

    async def run(self) -> None:
        """Announce, then run the timers until stop() is called."""
        self._stop_event.clear()
        self._is_running = True
        self.announce()

        self.logger.info(
            "sampling_loop_started",
            interval_seconds=self.profile.interval_seconds,
            alert_threshold=self.profile.alert_threshold,
            retraining_enabled=self.retraining_enabled,
        )

        try:
            async with asyncio.TaskGroup() as task_group:
                task_group.create_task(
                    self._run_every(
                        self.profile.interval_seconds, self.run_health_check, immediate=True
                    )
                )
                if self.retraining_enabled:
                    task_group.create_task(
                        self._run_every(
                            self.retraining_interval_seconds,
                            self.run_retraining_notice,
                            immediate=False,
                        )
                    )
        except asyncio.CancelledError:
            self.logger.info("sampling_loop_cancelled")
            raise
        finally:
            self._is_running = False
            self.logger.info("sampling_loop_stopped")

    def stop(self) -> None:
        """Gracefully stop both timers."""
        self.logger.info("stopping_sampling_loop")
        self._stop_event.set()


async def main(config: AppConfig | None = None) -> None:
    """Run the monitor with the configuration resolved from the environment."""
    config = config or get_config()
    configure_logging(config.logging)

    sampling_loop = SamplingLoop.from_config(config, ConsoleReportSink())

    event_loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Signal handlers are unavailable on some platforms (Windows)
        with contextlib.suppress(NotImplementedError):
            event_loop.add_signal_handler(sig, sampling_loop.stop)

    await sampling_loop.run()


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
