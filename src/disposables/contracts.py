"""Capability contracts and adapter ports shared by every registry type."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)
D = TypeVar("D", bound="Disposable")


@runtime_checkable
class Disposable(Protocol):
    """Something that must be cleaned up once its owner is finished with it."""

    def dispose(self) -> None:
        """Release the resource. Only the first call performs work."""
        ...


@runtime_checkable
class CheckedDisposable(Disposable, Protocol):
    """A disposable that can also report whether it has been released."""

    def is_disposed(self) -> bool:
        """Pure liveness query; never triggers disposal."""
        ...


@runtime_checkable
class Flushable(Disposable, Protocol):
    """A disposable that holds other disposables and can prune finished ones."""

    def flush_disposed(self) -> bool:
        """Drop already-finished entries; return True if now terminally disposed."""
        ...


@runtime_checkable
class DisposableManager(Flushable, Protocol):
    """A flushable holder that accepts new registrations until disposed."""

    def add(self, disposable: D) -> D:
        """Register a disposable at the tail of the manager."""
        ...

    def add_all(self, disposables: Iterable[Disposable]) -> None:
        """Register several disposables, preserving their order."""
        ...


@runtime_checkable
class Pausable(Protocol):
    """Something whose delivery can be suspended and restored repeatedly."""

    def pause(self) -> None: ...

    def resume(self) -> None: ...


@runtime_checkable
class PausableManager(DisposableManager, Pausable, Protocol):
    """A manager that also propagates pause/resume to its entries."""


@runtime_checkable
class Disposer(Protocol[T_contra]):
    """Adapter that disposes instances of a type it does not own."""

    def dispose_instance(self, instance: T_contra) -> None: ...


@runtime_checkable
class DisposeChecker(Protocol[T_contra]):
    """Adapter that reports whether an instance should be considered disposed."""

    def is_instance_disposed(self, instance: T_contra) -> bool: ...


@runtime_checkable
class CheckedDisposer(Disposer[T_contra], DisposeChecker[T_contra], Protocol[T_contra]):
    """Adapter that can both dispose and check an instance."""


@runtime_checkable
class Pauser(Protocol[T_contra]):
    """Adapter that pauses and resumes instances of a type it does not own."""

    def pause_instance(self, instance: T_contra) -> None: ...

    def resume_instance(self, instance: T_contra) -> None: ...


@dataclass(frozen=True, slots=True)
class FunctionDisposer(Generic[T]):
    """Disposer (and optional checker) built from plain callables."""

    dispose_fn: Callable[[T], None]
    is_disposed_fn: Callable[[T], bool] | None = None

    def dispose_instance(self, instance: T) -> None:
        self.dispose_fn(instance)

    def is_instance_disposed(self, instance: T) -> bool:
        if self.is_disposed_fn is None:
            return False
        return self.is_disposed_fn(instance)


@dataclass(frozen=True, slots=True)
class FunctionPauser(Generic[T]):
    """Pauser built from a pair of plain callables."""

    pause_fn: Callable[[T], None]
    resume_fn: Callable[[T], None]

    def pause_instance(self, instance: T) -> None:
        self.pause_fn(instance)

    def resume_instance(self, instance: T) -> None:
        self.resume_fn(instance)


def disposer(
    dispose: Callable[[T], None],
    *,
    is_disposed: Callable[[T], bool] | None = None,
) -> FunctionDisposer[T]:
    """Build a disposer adapter from callables."""
    return FunctionDisposer(dispose, is_disposed)


def pauser(pause: Callable[[T], None], resume: Callable[[T], None]) -> FunctionPauser[T]:
    """Build a pauser adapter from callables."""
    return FunctionPauser(pause, resume)


def checker_of(adapter: object | None) -> DisposeChecker[T] | None:
    """Return ``adapter`` when it can check liveness, otherwise ``None``.

    A ``FunctionDisposer`` without an ``is_disposed`` callable is not a checker.
    """
    if adapter is None:
        return None
    if isinstance(adapter, FunctionDisposer):
        return adapter if adapter.is_disposed_fn is not None else None
    if isinstance(adapter, DisposeChecker):
        return adapter
    return None
