"""
Report sinks for the sampling loop.

The structured content of each report is the contract; the console layout
below is presentation only.
"""

from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from devops_monitor.domain.models import (
    HealthReport,
    HealthStatus,
    ProviderHealth,
    RetrainingNotice,
    StartupBanner,
)


class ReportSink(Protocol):
    """Destination for everything the sampling loop emits."""

    def emit_banner(self, banner: StartupBanner) -> None: ...

    def emit_health_report(self, report: HealthReport) -> None: ...

    def emit_retraining_notice(self, notice: RetrainingNotice) -> None: ...


class ConsoleReportSink:
    """Renders reports to standard output with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def emit_banner(self, banner: StartupBanner) -> None:
        ai_state = "ENABLED" if banner.ai_enabled else "DISABLED"
        self.console.print(
            Panel(
                f"Environment: {escape(banner.environment)}\nAI Monitoring: {ai_state}",
                title="DevOps Simulator - Unified Monitor",
                style="bold blue",
            )
        )

        if banner.ai_enabled:
            self.console.print("Loading AI modules...")
            self.console.print(f"✓ Model loaded: {escape(str(banner.model_path))}")
            self.console.print("✓ Predictive monitoring ready")

        self.console.print(f"\nMonitoring interval: {banner.interval_seconds:g}s")
        self.console.print(f"Alert threshold: {banner.alert_threshold:g}%")
        if banner.providers:
            self.console.print(escape(f"Cloud providers: {', '.join(banner.providers)}"))

    def emit_health_report(self, report: HealthReport) -> None:
        header = f"\n[{report.timestamp.isoformat()}] === SYSTEM HEALTH CHECK ==="
        self.console.print(escape(header))

        if report.debug:
            self.console.print("Detailed debug mode enabled...")

        self.console.print(f"   CPU: {report.sample.cpu:.2f}%")
        self.console.print(f"   Memory: {report.sample.memory:.2f}%")
        self.console.print(f"   Disk: {report.sample.disk:.2f}% used")

        if report.providers:
            table = Table(title="Cloud Status")
            table.add_column("Provider", style="cyan")
            table.add_column("Instances", justify="right")
            table.add_column("Load", justify="right")
            table.add_column("Health")
            for provider in report.providers:
                health_style = "green" if provider.health == ProviderHealth.HEALTHY else "red"
                table.add_row(
                    escape(provider.name.upper()),
                    str(provider.instances),
                    f"{provider.load:.2f}%",
                    f"[{health_style}]{provider.health.value.upper()}[/{health_style}]",
                )
            self.console.print(table)

        if report.forecast:
            prediction = report.forecast.sample
            window = report.forecast.window_seconds
            horizon = f" in {window:g}s" if window else ""
            self.console.print(f"\n🤖 Predicted metrics{horizon}:")
            self.console.print(f"   CPU: {prediction.cpu:.2f}%")
            self.console.print(f"   Memory: {prediction.memory:.2f}%")
            self.console.print(f"   Traffic: {prediction.traffic:.0f} req/s")
            self.console.print(f"   Confidence: {prediction.confidence:.2f}%")
            if report.forecast.predictive_alert:
                self.console.print(
                    "⚠️  PREDICTIVE ALERT: High CPU expected - Pre-scaling initiated",
                    style="yellow",
                )

        if report.status == HealthStatus.WARNING:
            self.console.print(
                "\n🔴 System Status: WARNING - High resource usage", style="bold red"
            )
        else:
            self.console.print("\n🟢 System Status: OPTIMAL", style="bold green")

    def emit_retraining_notice(self, notice: RetrainingNotice) -> None:
        self.console.print("\n🎓 AI Model: Retraining on new data...")
        self.console.print(f"   Training accuracy: {notice.training_accuracy:.1f}%")
        if notice.model_updated:
            self.console.print("   Model updated successfully")
