"""Reusable observability mixin for registry classes."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from disposables.observability.metrics import MetricsRecorder


class ObservableMixin:
    """Mixin providing ``_observe_operation``, ``_observe_error``, and ``_metrics_recorder``.

    Subclasses must set ``_resource_name`` (class-level or instance attribute)
    and may optionally provide ``_metrics`` (instance attribute) to override the
    global metrics recorder.
    """

    _resource_name: str
    _metrics: MetricsRecorder | None

    def _metrics_recorder(self) -> MetricsRecorder:
        from disposables.observability.metrics import get_metrics_recorder

        return get_metrics_recorder() if self._metrics is None else self._metrics

    def _observe_operation(self, operation: str, started: float, *, success: bool) -> None:
        self._metrics_recorder().observe_operation(
            resource=self._resource_name,
            operation=operation,
            duration_seconds=perf_counter() - started,
            success=success,
        )

    def _observe_error(self, operation: str, started: float, exc: BaseException) -> None:
        self._observe_operation(operation, started, success=False)
        self._metrics_recorder().observe_error(
            resource=self._resource_name,
            operation=operation,
            error_type=type(exc).__name__,
        )

    def _observe_released(self, count: int) -> None:
        self._metrics_recorder().observe_released(resource=self._resource_name, count=count)
