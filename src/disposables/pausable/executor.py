"""An executor wrapper that holds back work while paused."""

from __future__ import annotations

import bisect
import itertools
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from operator import attrgetter
from typing import Any, TypeVar

from disposables.errors import DisposedError

R = TypeVar("R")

_by_sequence = attrgetter("sequence")


class _WorkItem:
    __slots__ = ("args", "fn", "future", "kwargs", "owner", "sequence")

    def __init__(
        self,
        owner: PausableExecutor,
        sequence: int,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        self.owner = owner
        self.sequence = sequence
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.future: Future[Any] = Future()

    def run(self) -> None:
        if self.owner._defer(self):
            return
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as exc:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)

    def follow(self, handle: Future[Any]) -> None:
        """Cancel our future if the delegate drops ``handle`` before running it."""
        if handle.cancelled():
            self.future.cancel()


class PausableExecutor(Executor):
    """Wraps an executor so submitted work is queued while paused.

    Work submitted while paused is buffered and handed to the delegate, in
    submission order, on ``resume()``. Work that reaches a delegate worker while
    paused goes back into the buffer at its original position. Disposal cancels
    buffered work and shuts the delegate down without waiting; work already
    running finishes. Futures of work the delegate cancels (for example through
    ``shutdown(cancel_futures=True)``) are cancelled too.
    """

    def __init__(self, delegate: Executor) -> None:
        self._delegate = delegate
        self._lock = threading.Lock()
        self._paused = False
        self._disposed = False
        self._sequence = itertools.count()
        self._queue: list[_WorkItem] = []

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            self._paused = False
            if not self._queue:
                return
            items, self._queue = self._queue, []
        for index, item in enumerate(items):
            if not self._hand_off(item):
                for dropped in items[index + 1 :]:
                    dropped.future.cancel()
                return

    def submit(self, fn: Callable[..., R], /, *args: Any, **kwargs: Any) -> Future[R]:
        with self._lock:
            if self._disposed:
                raise DisposedError("Cannot submit work to a disposed PausableExecutor")
            item = _WorkItem(self, next(self._sequence), fn, args, kwargs)
            if self._paused:
                self._queue.append(item)
                return item.future
        if not self._hand_off(item):
            raise DisposedError("PausableExecutor was shut down while submitting work")
        return item.future

    def pending(self) -> int:
        """Number of work items currently held back."""
        with self._lock:
            return len(self._queue)

    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self.shutdown(wait=False)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            items, self._queue = self._queue, []
        for item in items:
            item.future.cancel()
        self._delegate.shutdown(wait=wait, cancel_futures=cancel_futures)

    def _hand_off(self, item: _WorkItem) -> bool:
        """Submit ``item`` to the delegate; cancel it and return False if refused."""
        try:
            handle = self._delegate.submit(item.run)
        except RuntimeError:
            item.future.cancel()
            return False
        handle.add_done_callback(item.follow)
        return True

    def _defer(self, item: _WorkItem) -> bool:
        """Queue ``item`` again if paused; cancel it if disposed."""
        with self._lock:
            if self._paused and not self._disposed:
                bisect.insort(self._queue, item, key=_by_sequence)
                return True
            disposed = self._disposed
        if disposed:
            item.future.cancel()
        return disposed


def queuing_executor(executor: Executor) -> PausableExecutor:
    """Wrap ``executor`` unless it already is a ``PausableExecutor``."""
    if isinstance(executor, PausableExecutor):
        return executor
    return PausableExecutor(executor)
