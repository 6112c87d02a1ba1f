"""Ordered, thread-safe collections that dispose their entries exactly once."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from time import perf_counter
from types import TracebackType
from typing import Any, TypeVar

from disposables import maybe
from disposables.capabilities import Entry
from disposables.errors import DisposedError
from disposables.observability._observable import ObservableMixin
from disposables.observability.metrics import MetricsRecorder

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DisposableCollection(ObservableMixin):
    """Registry of disposables torn down in reverse registration order.

    Example usage::

        resources = DisposableCollection()

        resources.add(forgetful(connection))
        resources.add(weak(dialog, dismiss_dialog))

        # Drop entries that already finished on their own
        resources.flush_disposed()

        # Release everything still held, last registered first
        resources.dispose()

    A flushable collection disposes itself once a flush leaves it empty, which
    lets nested collections vanish from their parent when their work is done.
    Entries may be any object; only the contracts they implement are invoked.
    """

    def __init__(
        self,
        *disposables: Any,
        flushable: bool = True,
        name: str | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._disposed = False
        self._flushable = flushable
        self._resource_name = name or type(self).__name__
        self._metrics = metrics
        self._entries: list[Entry] = [self._entry_for(item) for item in disposables]

    @property
    def name(self) -> str:
        return self._resource_name

    @property
    def flushable(self) -> bool:
        return self._flushable

    def add(self, disposable: T) -> T:
        """Register ``disposable`` at the tail and return it.

        Raises:
            DisposedError: If this collection has already been disposed.
        """
        entry = self._entry_for(disposable)
        with self._lock:
            self._raise_if_disposed(disposable)
            self._entries.append(entry)
        self._after_add([entry])
        return disposable

    def add_all(self, disposables: Iterable[Any]) -> None:
        """Register several disposables in iteration order."""
        entries = [self._entry_for(item) for item in disposables]
        if not entries:
            return
        with self._lock:
            self._raise_if_disposed(entries[0].value)
            self._entries.extend(entries)
        self._after_add(entries)

    def is_disposed(self) -> bool:
        return self._disposed

    def flush_disposed(self) -> bool:
        """Prune entries that already finished; return True once terminal.

        Nested holders are flushed recursively and dropped when they report
        terminal; checked entries are dropped when they report disposed. Pruned
        entries are never disposed again. Entries are evaluated outside the lock
        so sibling trees can reference each other without deadlocking.
        """
        if self._disposed:
            return True

        started = perf_counter()
        snapshot = self._snapshot()
        if snapshot is None:
            return True

        try:
            pruned = {entry for entry in snapshot if maybe.should_prune_entry(entry)}
        except Exception as exc:
            self._observe_error("flush", started, exc)
            raise

        collapse_allowed = self._can_collapse()
        with self._lock:
            if self._disposed:
                return True
            if pruned:
                self._entries = [entry for entry in self._entries if entry not in pruned]
            collapsed = collapse_allowed and not self._entries
            if collapsed:
                self._disposed = True

        if pruned:
            self._observe_released(len(pruned))
        if collapsed:
            _LOGGER.debug(
                "Collection collapsed after flush",
                extra={"collection": self._resource_name, "pruned": len(pruned)},
            )
        self._observe_operation("flush", started, success=True)
        return collapsed

    def dispose(self) -> None:
        """Dispose every entry, last registered first. Later calls do nothing.

        Only the caller that flips the disposed flag receives the entries, so
        each entry is released once even when several threads race here. An
        entry that raises aborts the remaining teardown and the error propagates.
        """
        if self._disposed:
            return
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            entries, self._entries = self._entries, []
        self._release(entries)

    def snapshot(self) -> tuple[Any, ...]:
        """Return the currently registered values in registration order."""
        with self._lock:
            return tuple(entry.value for entry in self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        return True

    def __enter__(self) -> DisposableCollection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self)} entries"
        return f"{type(self).__name__}(name={self._resource_name!r}, {state})"

    def _entry_for(self, item: Any) -> Entry:
        if item is self:
            raise ValueError(f"{self!r} cannot contain itself")
        return Entry.of(item)

    def _raise_if_disposed(self, item: Any) -> None:
        if self._disposed:
            raise DisposedError(
                f"Tried to add {item!r} to {self._resource_name} after it was disposed"
            )

    def _snapshot(self) -> list[Entry] | None:
        """Copy the entries under the lock, or ``None`` once disposed."""
        with self._lock:
            if self._disposed:
                return None
            return list(self._entries)

    def _can_collapse(self) -> bool:
        """Whether an empty flush may turn this collection terminal."""
        return self._flushable

    def _after_add(self, entries: list[Entry]) -> None:
        """Hook run outside the lock after ``entries`` were registered."""

    def _release(self, entries: list[Entry]) -> None:
        started = perf_counter()
        _LOGGER.debug(
            "Disposing collection",
            extra={"collection": self._resource_name, "entries": len(entries)},
        )
        try:
            for entry in reversed(entries):
                maybe.dispose_entry(entry)
        except Exception as exc:
            _LOGGER.debug(
                "Collection teardown aborted",
                extra={"collection": self._resource_name, "error_type": type(exc).__name__},
            )
            self._observe_error("dispose", started, exc)
            raise
        self._observe_released(len(entries))
        self._observe_operation("dispose", started, success=True)


class RootDisposableCollection(DisposableCollection):
    """A collection that never collapses on flush; only ``dispose()`` ends it.

    Use one per component and call ``dispose()`` from its single teardown hook.
    """

    def __init__(
        self,
        *disposables: Any,
        name: str | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        super().__init__(*disposables, flushable=False, name=name, metrics=metrics)
