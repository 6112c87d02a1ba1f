"""Disposables for common standard library lifecycle objects."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor
from typing import Any

from disposables.contracts import disposer
from disposables.delegate import DelegateCheckedDisposable, DelegateDisposable
from disposables.weak import WeakDisposable


class _TimerDisposable(DelegateCheckedDisposable[threading.Timer]):
    __slots__ = ()

    def dispose(self) -> None:
        timer = self._mark_disposed()
        if timer is not None:
            timer.cancel()

    def is_disposed(self) -> bool:
        timer = self._delegate_or_none()
        return timer is None or timer.finished.is_set()


class _ThreadDisposable(DelegateCheckedDisposable[threading.Thread]):
    __slots__ = ("_stop", "_join_timeout")

    def __init__(
        self,
        thread: threading.Thread,
        stop: threading.Event,
        join_timeout: float | None,
    ) -> None:
        super().__init__(thread)
        self._stop = stop
        self._join_timeout = join_timeout

    def dispose(self) -> None:
        thread = self._mark_disposed()
        if thread is None:
            return
        self._stop.set()
        if self._join_timeout is not None and thread is not threading.current_thread():
            thread.join(self._join_timeout)

    def is_disposed(self) -> bool:
        thread = self._delegate_or_none()
        return thread is None or (thread.ident is not None and not thread.is_alive())


class _ExecutorDisposable(DelegateDisposable[Executor]):
    __slots__ = ("_wait",)

    def __init__(self, executor: Executor, wait: bool) -> None:
        super().__init__(executor)
        self._wait = wait

    def dispose(self) -> None:
        executor = self._mark_disposed()
        if executor is not None:
            executor.shutdown(wait=self._wait, cancel_futures=True)

    def is_disposed(self) -> bool:
        return self._is_marked_disposed()


class _CallbackDisposable(DelegateDisposable[Callable[[], Any]]):
    __slots__ = ()

    def dispose(self) -> None:
        unbind = self._mark_disposed()
        if unbind is not None:
            unbind()


def for_timer(timer: threading.Timer) -> DelegateCheckedDisposable[threading.Timer]:
    """Cancel ``timer`` on dispose; it reports disposed once it fired or was cancelled."""
    return _TimerDisposable(timer)


def for_thread(
    thread: threading.Thread,
    stop: threading.Event,
    *,
    join_timeout: float | None = None,
) -> DelegateCheckedDisposable[threading.Thread]:
    """Signal a worker thread to stop through ``stop`` and optionally join it."""
    return _ThreadDisposable(thread, stop, join_timeout)


def for_executor(executor: Executor, *, wait: bool = False) -> DelegateDisposable[Executor]:
    """Shut ``executor`` down, cancelling work that has not started."""
    return _ExecutorDisposable(executor, wait)


def for_closeable(obj: Any) -> WeakDisposable[Any]:
    """Weakly track an object with ``close()`` and a ``closed`` attribute (files, sockets)."""
    return WeakDisposable(
        obj,
        disposer(
            lambda instance: instance.close(),
            is_disposed=lambda instance: bool(instance.closed),
        ),
    )


def for_logging_handler(
    logger: logging.Logger,
    handler: logging.Handler,
) -> DelegateDisposable[Callable[[], Any]]:
    """Detach ``handler`` from ``logger`` and close it."""

    def _detach() -> None:
        logger.removeHandler(handler)
        handler.close()

    return _CallbackDisposable(_detach)


def for_callback(unbind: Callable[[], Any]) -> DelegateDisposable[Callable[[], Any]]:
    """Run ``unbind`` exactly once on dispose (unsubscribe, unregister, unbind)."""
    return _CallbackDisposable(unbind)
