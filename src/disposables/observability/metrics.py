"""Prometheus metrics primitives for registry collections."""

from __future__ import annotations

import re
from typing import Any, Protocol

from disposables.errors import MissingDependencyError

_LABEL_NORMALIZER = re.compile(r"[^a-zA-Z0-9_]+")


def _import_prometheus_client() -> Any:
    try:
        import prometheus_client
    except ImportError as exc:  # pragma: no cover - depends on optional extras
        raise MissingDependencyError(
            "Prometheus metrics require optional dependency 'prometheus-client'. "
            "Install with: pip install 'disposables[metrics]'"
        ) from exc
    return prometheus_client


def _sanitize_label(value: str, *, default: str = "unknown") -> str:
    normalized = _LABEL_NORMALIZER.sub("_", value.strip().lower()).strip("_")
    return normalized or default


def _collector_or_create(registry: Any, name: str, factory: Any) -> Any:
    names_to_collectors = getattr(registry, "_names_to_collectors", None)
    if isinstance(names_to_collectors, dict):
        collector = names_to_collectors.get(name)
        if collector is not None:
            return collector
    return factory()


class MetricsRecorder(Protocol):
    """Observer contract for collection lifecycle metrics."""

    def observe_operation(
        self,
        *,
        resource: str,
        operation: str,
        duration_seconds: float,
        success: bool,
    ) -> None:
        """Record operation latency and throughput."""
        ...

    def observe_error(
        self,
        *,
        resource: str,
        operation: str,
        error_type: str,
    ) -> None:
        """Record operation error counters."""
        ...

    def observe_released(
        self,
        *,
        resource: str,
        count: int,
    ) -> None:
        """Record how many entries a dispose or flush let go of."""
        ...


class NoopMetricsRecorder:
    """No-op recorder used when metrics are not configured."""

    def observe_operation(
        self,
        *,
        resource: str,
        operation: str,
        duration_seconds: float,
        success: bool,
    ) -> None:
        del resource, operation, duration_seconds, success

    def observe_error(
        self,
        *,
        resource: str,
        operation: str,
        error_type: str,
    ) -> None:
        del resource, operation, error_type

    def observe_released(
        self,
        *,
        resource: str,
        count: int,
    ) -> None:
        del resource, count


class PrometheusMetricsRecorder:
    """Prometheus-backed recorder with standard disposables_* naming."""

    def __init__(
        self,
        *,
        registry: Any | None = None,
        prefix: str = "disposables",
    ) -> None:
        prometheus_client = _import_prometheus_client()
        self._registry = prometheus_client.REGISTRY if registry is None else registry
        self._prefix = _sanitize_label(prefix, default="disposables")
        self._latency = _collector_or_create(
            self._registry,
            f"{self._prefix}_operation_latency_seconds",
            lambda: prometheus_client.Histogram(
                f"{self._prefix}_operation_latency_seconds",
                "Collection operation latency in seconds.",
                labelnames=("resource", "operation", "status"),
                registry=self._registry,
                buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            ),
        )
        self._throughput = _collector_or_create(
            self._registry,
            f"{self._prefix}_operation_throughput_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_operation_throughput_total",
                "Collection operation throughput counter.",
                labelnames=("resource", "operation", "status"),
                registry=self._registry,
            ),
        )
        self._errors = _collector_or_create(
            self._registry,
            f"{self._prefix}_operation_errors_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_operation_errors_total",
                "Collection operation errors.",
                labelnames=("resource", "operation", "error_type"),
                registry=self._registry,
            ),
        )
        self._released = _collector_or_create(
            self._registry,
            f"{self._prefix}_released_entries_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_released_entries_total",
                "Entries released by dispose or pruned by flush.",
                labelnames=("resource",),
                registry=self._registry,
            ),
        )

    def observe_operation(
        self,
        *,
        resource: str,
        operation: str,
        duration_seconds: float,
        success: bool,
    ) -> None:
        resource_label = _sanitize_label(resource)
        operation_label = _sanitize_label(operation)
        status_label = "success" if success else "error"
        duration = max(0.0, duration_seconds)
        self._latency.labels(
            resource=resource_label,
            operation=operation_label,
            status=status_label,
        ).observe(duration)
        self._throughput.labels(
            resource=resource_label,
            operation=operation_label,
            status=status_label,
        ).inc()

    def observe_error(
        self,
        *,
        resource: str,
        operation: str,
        error_type: str,
    ) -> None:
        self._errors.labels(
            resource=_sanitize_label(resource),
            operation=_sanitize_label(operation),
            error_type=_sanitize_label(error_type),
        ).inc()

    def observe_released(
        self,
        *,
        resource: str,
        count: int,
    ) -> None:
        if count <= 0:
            return
        self._released.labels(resource=_sanitize_label(resource)).inc(count)


_NOOP_RECORDER = NoopMetricsRecorder()
_DEFAULT_RECORDER: MetricsRecorder = _NOOP_RECORDER


def get_metrics_recorder() -> MetricsRecorder:
    """Return the process-level metrics recorder."""
    return _DEFAULT_RECORDER


def set_metrics_recorder(recorder: MetricsRecorder | None) -> MetricsRecorder:
    """Set process-level recorder. `None` switches back to no-op."""
    global _DEFAULT_RECORDER
    _DEFAULT_RECORDER = _NOOP_RECORDER if recorder is None else recorder
    return _DEFAULT_RECORDER


def configure_prometheus_metrics(
    *,
    registry: Any | None = None,
    prefix: str = "disposables",
    set_default: bool = True,
) -> PrometheusMetricsRecorder:
    """Build a Prometheus recorder and optionally set it as default."""
    recorder = PrometheusMetricsRecorder(registry=registry, prefix=prefix)
    if set_default:
        set_metrics_recorder(recorder)
    return recorder


def render_prometheus_metrics(*, registry: Any | None = None) -> bytes:
    """Render current Prometheus metrics in exposition text format."""
    prometheus_client = _import_prometheus_client()
    resolved_registry = prometheus_client.REGISTRY if registry is None else registry
    return bytes(prometheus_client.generate_latest(resolved_registry))
