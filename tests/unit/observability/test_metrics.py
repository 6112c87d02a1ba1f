"""Tests for Prometheus metrics recorder and exposition helpers."""

from __future__ import annotations

import pytest

from disposables import RootDisposableCollection
from disposables.observability.metrics import (
    NoopMetricsRecorder,
    PrometheusMetricsRecorder,
    configure_prometheus_metrics,
    get_metrics_recorder,
    render_prometheus_metrics,
    set_metrics_recorder,
)

prometheus_client = pytest.importorskip("prometheus_client")


def test_prometheus_metrics_registration_and_samples() -> None:
    registry = prometheus_client.CollectorRegistry()
    recorder = PrometheusMetricsRecorder(registry=registry)

    recorder.observe_operation(
        resource="MainScreen",
        operation="dispose",
        duration_seconds=0.015,
        success=True,
    )
    recorder.observe_operation(
        resource="MainScreen",
        operation="dispose",
        duration_seconds=0.022,
        success=False,
    )
    recorder.observe_error(
        resource="MainScreen",
        operation="dispose",
        error_type="RuntimeError",
    )
    recorder.observe_released(resource="MainScreen", count=4)
    recorder.observe_released(resource="MainScreen", count=0)

    assert registry.get_sample_value(
        "disposables_operation_throughput_total",
        {"resource": "mainscreen", "operation": "dispose", "status": "success"},
    ) == 1.0
    assert registry.get_sample_value(
        "disposables_operation_throughput_total",
        {"resource": "mainscreen", "operation": "dispose", "status": "error"},
    ) == 1.0
    assert registry.get_sample_value(
        "disposables_operation_errors_total",
        {"resource": "mainscreen", "operation": "dispose", "error_type": "runtimeerror"},
    ) == 1.0
    assert registry.get_sample_value(
        "disposables_operation_latency_seconds_count",
        {"resource": "mainscreen", "operation": "dispose", "status": "success"},
    ) == 1.0
    assert registry.get_sample_value(
        "disposables_released_entries_total",
        {"resource": "mainscreen"},
    ) == 4.0


def test_recorders_share_collectors_in_one_registry() -> None:
    registry = prometheus_client.CollectorRegistry()
    first = PrometheusMetricsRecorder(registry=registry)
    second = PrometheusMetricsRecorder(registry=registry)

    first.observe_released(resource="screen", count=1)
    second.observe_released(resource="screen", count=1)

    assert registry.get_sample_value(
        "disposables_released_entries_total", {"resource": "screen"}
    ) == 2.0


def test_configure_prometheus_metrics_sets_default() -> None:
    previous = get_metrics_recorder()
    registry = prometheus_client.CollectorRegistry()
    try:
        recorder = configure_prometheus_metrics(registry=registry)
        assert get_metrics_recorder() is recorder

        set_metrics_recorder(None)
        assert isinstance(get_metrics_recorder(), NoopMetricsRecorder)
    finally:
        set_metrics_recorder(previous)


def test_collections_report_to_the_default_recorder() -> None:
    previous = get_metrics_recorder()
    registry = prometheus_client.CollectorRegistry()
    try:
        configure_prometheus_metrics(registry=registry, prefix="player")
        root = RootDisposableCollection(object(), object(), name="screen")
        root.dispose()
    finally:
        set_metrics_recorder(previous)

    payload = render_prometheus_metrics(registry=registry)

    assert b"player_released_entries_total" in payload
    assert registry.get_sample_value(
        "player_operation_throughput_total",
        {"resource": "screen", "operation": "dispose", "status": "success"},
    ) == 1.0
