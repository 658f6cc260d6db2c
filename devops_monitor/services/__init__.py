"""
Core services for the monitor.

This package contains the sampling loop and the capabilities it is built
from: metrics sources, forecasting, classification and reporting.
"""

from .classification import classify, classify_sample, is_predictive_alert
from .forecasting import Forecaster, SimulatedForecaster, forecast
from .metrics_source import (
    CollectionError,
    MetricsSource,
    ProviderSource,
    Result,
    SimulatedMetricsSource,
    SimulatedProviderSource,
)
from .reporting import ConsoleReportSink, ReportSink
from .sampling_loop import SamplingLoop, should_schedule_retraining

__all__ = [
    "classify",
    "classify_sample",
    "is_predictive_alert",
    "Forecaster",
    "SimulatedForecaster",
    "forecast",
    "CollectionError",
    "MetricsSource",
    "ProviderSource",
    "Result",
    "SimulatedMetricsSource",
    "SimulatedProviderSource",
    "ConsoleReportSink",
    "ReportSink",
    "SamplingLoop",
    "should_schedule_retraining",
]
