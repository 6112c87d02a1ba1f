"""Helpers for objects that may or may not implement the registry contracts."""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from typing import Any, TypeVar

from disposables.capabilities import Capability, Entry
from disposables.contracts import (
    CheckedDisposable,
    Disposable,
    DisposeChecker,
    Disposer,
    Flushable,
    Pausable,
    Pauser,
    checker_of,
)

T = TypeVar("T")


def dispose(obj: T | None, disposer: Disposer[T] | None = None) -> None:
    """Dispose ``obj`` through ``disposer`` (if any), then through its own contract."""
    if obj is None:
        return
    if disposer is not None:
        disposer.dispose_instance(obj)
    if isinstance(obj, Disposable):
        obj.dispose()


def is_disposed(obj: T | None, checker: DisposeChecker[T] | Disposer[T] | None = None) -> bool:
    """Report whether ``obj`` should be treated as released.

    ``None`` is always disposed. With a checker, the adapter's answer is AND-ed
    with the object's own ``is_disposed()`` when the object has one.
    """
    if obj is None:
        return True

    resolved = checker_of(checker)
    if resolved is not None:
        return resolved.is_instance_disposed(obj) and (
            not isinstance(obj, CheckedDisposable) or obj.is_disposed()
        )
    return isinstance(obj, CheckedDisposable) and obj.is_disposed()


def is_flushable(obj: Any) -> bool:
    """True when ``obj`` is disposed or is a holder that collapses on flush."""
    return is_disposed(obj) or (isinstance(obj, Flushable) and obj.flush_disposed())


def dispose_list(items: MutableSequence[Any] | None) -> None:
    """Dispose every item last-to-first, then empty the list."""
    if not items:
        return
    for item in reversed(items):
        dispose(item)
    items.clear()


def flush_list(items: MutableSequence[Any] | None) -> None:
    """Prune finished items in place without disposing them."""
    if not items:
        return
    items[:] = [item for item in items if not _should_prune(item)]


def pause(obj: T | None, pauser: Pauser[T] | None = None) -> None:
    if obj is None:
        return
    if pauser is not None:
        pauser.pause_instance(obj)
    elif isinstance(obj, Pausable):
        obj.pause()


def resume(obj: T | None, pauser: Pauser[T] | None = None) -> None:
    if obj is None:
        return
    if pauser is not None:
        pauser.resume_instance(obj)
    elif isinstance(obj, Pausable):
        obj.resume()


def pause_list(items: Iterable[Any] | None) -> None:
    """Pause items last-to-first so consumers stop before their producers."""
    if items is None:
        return
    for item in reversed(list(items)):
        pause(item)


def resume_list(items: Iterable[Any] | None) -> None:
    """Resume items first-to-last so producers restart before their consumers."""
    if items is None:
        return
    for item in items:
        resume(item)


# Entry-level variants. These trust the capabilities captured at registration.


def dispose_entry(entry: Entry) -> None:
    if entry.has(Capability.DISPOSABLE):
        entry.value.dispose()


def should_prune_entry(entry: Entry) -> bool:
    if entry.has(Capability.MANAGER) and entry.value.flush_disposed():
        return True
    return entry.has(Capability.CHECKED) and bool(entry.value.is_disposed())


def pause_entry(entry: Entry) -> None:
    if entry.has(Capability.PAUSABLE):
        entry.value.pause()


def resume_entry(entry: Entry) -> None:
    if entry.has(Capability.PAUSABLE):
        entry.value.resume()


def _should_prune(item: Any) -> bool:
    if isinstance(item, Flushable) and item.flush_disposed():
        return True
    return isinstance(item, CheckedDisposable) and item.is_disposed()
