"""Logging and metrics helpers for registry lifecycle events."""

from disposables.observability.logging import (
    JsonFormatter,
    TextFormatter,
    bootstrap_logging,
    bootstrap_logging_from_settings,
)
from disposables.observability.metrics import (
    MetricsRecorder,
    NoopMetricsRecorder,
    PrometheusMetricsRecorder,
    configure_prometheus_metrics,
    get_metrics_recorder,
    render_prometheus_metrics,
    set_metrics_recorder,
)

__all__ = [
    "JsonFormatter",
    "MetricsRecorder",
    "NoopMetricsRecorder",
    "PrometheusMetricsRecorder",
    "TextFormatter",
    "bootstrap_logging",
    "bootstrap_logging_from_settings",
    "configure_prometheus_metrics",
    "get_metrics_recorder",
    "render_prometheus_metrics",
    "set_metrics_recorder",
]
