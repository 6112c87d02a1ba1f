"""Disposable wrappers for ``concurrent.futures.Future``."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import CancelledError, Executor, Future
from typing import Any, Generic, TypeVar

from disposables.collection import DisposableCollection
from disposables.delegate import SingleUseCallable, single_use
from disposables.observability.metrics import MetricsRecorder

T = TypeVar("T")
O = TypeVar("O")


class DisposableFuture(DisposableCollection, Generic[T]):
    """A future whose listeners are disposables held in its own collection.

    Every callback added through ``add_done_callback`` is wrapped in a
    single-use handle and registered here. Disposing the future drops the
    callbacks that have not fired yet; it does not cancel the computation.
    Flushing prunes fired callbacks, and once the wrapped future is done with
    nothing left to notify the whole object collapses to disposed, so register
    it with a parent only after its callbacks have been added.
    """

    def __init__(
        self,
        future: Future[T],
        *disposables: Any,
        name: str | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        super().__init__(*disposables, flushable=True, name=name, metrics=metrics)
        self._future = future

    @property
    def future(self) -> Future[T]:
        return self._future

    def add_done_callback(self, fn: Callable[[DisposableFuture[T]], Any]) -> SingleUseCallable:
        """Call ``fn(self)`` once the wrapped future completes, unless disposed first."""
        listener = self.add(single_use(fn))
        self._future.add_done_callback(lambda _: listener(self))
        return listener

    def result(self, timeout: float | None = None) -> T:
        return self._future.result(timeout)

    def exception(self, timeout: float | None = None) -> BaseException | None:
        return self._future.exception(timeout)

    def done(self) -> bool:
        return self._future.done()

    def running(self) -> bool:
        return self._future.running()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def cancel(self) -> bool:
        return self._future.cancel()

    def _can_collapse(self) -> bool:
        return self._flushable and self._future.done()


def wrap_future(future: Future[T], *disposables: Any) -> DisposableFuture[T]:
    """Wrap ``future``; an existing ``DisposableFuture`` just gains ``disposables``."""
    if isinstance(future, DisposableFuture):
        future.add_all(disposables)
        return future
    return DisposableFuture(future, *disposables)


def add_callback(
    future: Future[T],
    fn: Callable[[DisposableFuture[T]], Any],
) -> DisposableFuture[T]:
    """Attach a disposable callback and return the holder to register elsewhere."""
    wrapped = wrap_future(future)
    wrapped.add_done_callback(fn)
    return wrapped


def transform(
    future: Future[T],
    fn: Callable[[T], O],
    executor: Executor,
) -> DisposableFuture[O]:
    """Apply ``fn`` to the result of ``future`` on ``executor``.

    The returned future carries the (wrapped) input as a nested disposable, so
    disposing the output also stops the input from triggering the transform.
    """
    source = wrap_future(future)
    output: Future[O] = Future()

    def _apply(value: T) -> None:
        try:
            result = fn(value)
        except Exception as exc:
            output.set_exception(exc)
        else:
            output.set_result(result)

    def _on_done(done: DisposableFuture[T]) -> None:
        if not output.set_running_or_notify_cancel():
            return
        if done.cancelled():
            output.set_exception(CancelledError())
            return
        exc = done.exception()
        if exc is not None:
            output.set_exception(exc)
            return
        try:
            executor.submit(_apply, done.result())
        except RuntimeError as submit_error:
            output.set_exception(submit_error)

    source.add_done_callback(_on_done)
    return DisposableFuture(output, source)
