"""Weakly-held pausable handles."""

from __future__ import annotations

from typing import TypeVar

from disposables import maybe
from disposables.contracts import DisposeChecker, Disposer, Pauser
from disposables.weak import WeakDisposable

T = TypeVar("T")


class WeakPausable(WeakDisposable[T]):
    """A weak handle that forwards pause/resume while its instance is alive.

    Pause and resume are skipped once the instance is gone or considered
    disposed; disposal follows ``WeakDisposable``.
    """

    __slots__ = ("_pauser",)

    def __init__(
        self,
        instance: T,
        pauser: Pauser[T],
        disposer: Disposer[T] | None = None,
        checker: DisposeChecker[T] | None = None,
    ) -> None:
        super().__init__(instance, disposer, checker)
        self._pauser = pauser

    def pause(self) -> None:
        instance = self._get()
        if not self._is_instance_disposed(instance):
            maybe.pause(instance, self._pauser)

    def resume(self) -> None:
        instance = self._get()
        if not self._is_instance_disposed(instance):
            maybe.resume(instance, self._pauser)


def weak_pausable(
    instance: T,
    pauser: Pauser[T],
    disposer: Disposer[T] | None = None,
    checker: DisposeChecker[T] | None = None,
) -> WeakPausable[T]:
    """Track ``instance`` weakly for pause/resume (and optionally disposal)."""
    return WeakPausable(instance, pauser, disposer, checker)
