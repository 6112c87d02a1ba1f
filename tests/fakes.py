"""Recording fakes shared by the test suite."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any


class FakeDisposable:
    """Plain disposable that records every release into a shared event log."""

    def __init__(self, name: str, events: list[str]) -> None:
        self.name = name
        self.events = events
        self.dispose_calls = 0
        self._lock = threading.Lock()

    def dispose(self) -> None:
        with self._lock:
            self.dispose_calls += 1
            self.events.append(f"dispose:{self.name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class FakeCheckedDisposable(FakeDisposable):
    """Checked disposable whose liveness is controlled by the test."""

    def __init__(self, name: str, events: list[str], *, disposed: bool = False) -> None:
        super().__init__(name, events)
        self.disposed = disposed
        self.check_calls = 0

    def is_disposed(self) -> bool:
        self.check_calls += 1
        return self.disposed


class FakePausable:
    """Pausable (not disposable) that records pause/resume calls."""

    def __init__(self, name: str, events: list[str]) -> None:
        self.name = name
        self.events = events

    def pause(self) -> None:
        self.events.append(f"pause:{self.name}")

    def resume(self) -> None:
        self.events.append(f"resume:{self.name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class FakePausableDisposable(FakePausable, FakeCheckedDisposable):
    """Satisfies both the pause and checked-disposal contracts."""

    def __init__(self, name: str, events: list[str]) -> None:
        FakeCheckedDisposable.__init__(self, name, events)


class Target:
    """A foreign object that implements none of the contracts."""

    def __init__(self, name: str = "target") -> None:
        self.name = name
        self.closed = False


class Tracker:
    """Factory for fakes that share one ordered event log."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def disposable(self, name: str) -> FakeDisposable:
        return FakeDisposable(name, self.events)

    def checked(self, name: str, *, disposed: bool = False) -> FakeCheckedDisposable:
        return FakeCheckedDisposable(name, self.events, disposed=disposed)

    def pausable(self, name: str) -> FakePausable:
        return FakePausable(name, self.events)

    def pausable_disposable(self, name: str) -> FakePausableDisposable:
        return FakePausableDisposable(name, self.events)


class InlineExecutor(Executor):
    """Runs submitted work on the caller's thread."""

    def __init__(self) -> None:
        self.submitted = 0
        self.shutdown_calls: list[tuple[bool, bool]] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        self.submitted += 1
        future: Future[Any] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.shutdown_calls.append((wait, cancel_futures))


class ManualExecutor(InlineExecutor):
    """Holds submitted work until ``run_all()`` is called."""

    def __init__(self) -> None:
        super().__init__()
        self.backlog: list[Callable[[], Any]] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        self.submitted += 1
        self.backlog.append(lambda: fn(*args, **kwargs))
        return Future()

    def run_all(self) -> None:
        backlog, self.backlog = self.backlog, []
        for task in backlog:
            task()
