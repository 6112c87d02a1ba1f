"""Strong-reference handles that release their delegate exactly once."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from disposables import maybe
from disposables.contracts import Disposable
from disposables.errors import AlreadySetError, DisposedError

V = TypeVar("V")
R = TypeVar("R")


class DelegateDisposable(Generic[V]):
    """Holds a delegate until disposed, then drops it and disposes it if it can.

    Subclasses use ``_delegate_or_none``, ``_delegate_or_raise`` and
    ``_mark_disposed`` to build their own release logic.
    """

    __slots__ = ("__weakref__", "_delegate", "_disposed", "_lock")

    def __init__(self, delegate: V) -> None:
        self._lock = threading.Lock()
        self._disposed = False
        self._delegate: V | None = delegate

    def dispose(self) -> None:
        maybe.dispose(self._mark_disposed())

    def _is_marked_disposed(self) -> bool:
        return self._disposed

    def _delegate_or_none(self) -> V | None:
        if self._disposed:
            return None
        with self._lock:
            return None if self._disposed else self._delegate

    def _delegate_or_raise(self) -> V:
        delegate = self._delegate_or_none()
        if delegate is None:
            raise DisposedError(f"Attempted to interact with {self!r} after it was disposed")
        return delegate

    def _mark_disposed(self) -> V | None:
        """Flip the disposed flag and hand back the delegate to the first caller only."""
        if self._disposed:
            return None
        with self._lock:
            if self._disposed:
                return None
            self._disposed = True
            delegate, self._delegate = self._delegate, None
            return delegate

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "live"
        return f"{type(self).__name__}({state})"


class DelegateCheckedDisposable(DelegateDisposable[V]):
    """A ``DelegateDisposable`` that also reports its delegate's liveness."""

    __slots__ = ()

    def is_disposed(self) -> bool:
        return maybe.is_disposed(self._delegate_or_none())


def forgetful(obj: V) -> DelegateCheckedDisposable[V]:
    """Wrap any object so it is forgotten (and disposed if possible) on dispose."""
    if type(obj) is DelegateCheckedDisposable:
        return obj
    return DelegateCheckedDisposable(obj)


class SettableDisposable:
    """A placeholder whose real disposable is supplied after registration."""

    __slots__ = ("__weakref__", "_disposable", "_disposed", "_is_set", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._disposed = False
        self._is_set = False
        self._disposable: Disposable | None = None

    def set(self, disposable: Disposable) -> None:
        """Attach the real disposable. Disposes it at once if we are already disposed."""
        with self._lock:
            if self._is_set:
                raise AlreadySetError("SettableDisposable is already set")
            self._is_set = True
            if not self._disposed:
                self._disposable = disposable
                return
        disposable.dispose()

    def dispose(self) -> None:
        if self._disposed:
            return
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            disposable, self._disposable = self._disposable, None
        maybe.dispose(disposable)

    def is_disposed(self) -> bool:
        if self._disposed:
            return True
        with self._lock:
            if self._disposed:
                return True
            is_set, disposable = self._is_set, self._disposable
        return is_set and maybe.is_flushable(disposable)


class SingleUseCallable(DelegateCheckedDisposable[Callable[..., Any]]):
    """A callable that forwards to its delegate at most once.

    Calling it consumes the delegate; disposing it first turns every later call
    into a silent no-op, which is how a listener stops observing an in-flight
    computation.
    """

    __slots__ = ()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        delegate = self._mark_disposed()
        if delegate is None:
            return
        delegate(*args, **kwargs)
        maybe.dispose(delegate)


def single_use(fn: Callable[..., Any]) -> SingleUseCallable:
    if isinstance(fn, SingleUseCallable):
        return fn
    return SingleUseCallable(fn)
