"""Weakly-held handles for objects whose lifetime a registry must not extend."""

from __future__ import annotations

import threading
import weakref
from typing import Generic, TypeVar

from disposables import maybe
from disposables.contracts import DisposeChecker, Disposer, checker_of

T = TypeVar("T")


class WeakDisposable(Generic[T]):
    """A ``CheckedDisposable`` that only weakly references its instance.

    ``is_disposed()`` is True once the referent is collected, once this handle
    has been disposed, or when the adapter check (AND-ed with the instance's
    own check, when it has one) says so. ``dispose()`` runs the disposer at
    most once and then forgets the instance.
    """

    __slots__ = ("__weakref__", "_checker", "_disposer", "_lock", "_ref")

    def __init__(
        self,
        instance: T,
        disposer: Disposer[T] | None = None,
        checker: DisposeChecker[T] | None = None,
    ) -> None:
        self._ref: weakref.ref[T] | None = weakref.ref(instance)
        self._disposer = disposer
        self._checker = checker if checker is not None else checker_of(disposer)
        self._lock = threading.Lock()

    def _get(self) -> T | None:
        ref = self._ref
        return None if ref is None else ref()

    def is_disposed(self) -> bool:
        return self._is_instance_disposed(self._get())

    def dispose(self) -> None:
        with self._lock:
            instance = self._get()
            self._ref = None
        if self._is_instance_disposed(instance):
            return
        maybe.dispose(instance, self._disposer)

    def _is_instance_disposed(self, instance: T | None) -> bool:
        if instance is None:
            return True
        return maybe.is_disposed(instance, self._checker)

    def __repr__(self) -> str:
        instance = self._get()
        target = "<gone>" if instance is None else type(instance).__name__
        return f"{type(self).__name__}({target})"


def weak(
    instance: T,
    disposer: Disposer[T] | None = None,
    checker: DisposeChecker[T] | None = None,
) -> WeakDisposable[T]:
    """Track ``instance`` weakly; see :class:`WeakDisposable`."""
    return WeakDisposable(instance, disposer, checker)
