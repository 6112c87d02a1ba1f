"""Collections that propagate pause/resume alongside disposal."""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterable
from time import perf_counter
from typing import Any, TypeVar

from disposables import maybe
from disposables.capabilities import Capability, Entry
from disposables.collection import DisposableCollection
from disposables.contracts import DisposableManager
from disposables.errors import DisposedError
from disposables.observability.metrics import MetricsRecorder

T = TypeVar("T")


class PausableCollection(DisposableCollection):
    """A ``DisposableCollection`` that also pauses and resumes its entries.

    ``resume()`` walks entries first-to-last so producers restart before their
    consumers; ``pause()`` walks last-to-first so consumers stop first. Entries
    that are not pausable are skipped. Both are no-ops once disposed.
    """

    def pause(self) -> None:
        entries = self._snapshot()
        if entries is None:
            return
        self._propagate("pause", reversed(entries), maybe.pause_entry)

    def resume(self) -> None:
        entries = self._snapshot()
        if entries is None:
            return
        self._propagate("resume", entries, maybe.resume_entry)

    def _propagate(self, operation: str, entries: Iterable[Entry], action: Any) -> None:
        started = perf_counter()
        try:
            for entry in entries:
                action(entry)
        except Exception as exc:
            self._observe_error(operation, started, exc)
            raise
        self._observe_operation(operation, started, success=True)


class RootPausableCollection(PausableCollection):
    """A standalone pause tree that is only ended by an explicit ``dispose()``.

    Keeping pausables here separately from the component's disposal root means
    the two trees are torn down one after the other rather than interleaved in
    registration order; ``ConnectedPausableCollection`` avoids that.
    """

    def __init__(
        self,
        *pausables: Any,
        name: str | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        super().__init__(*pausables, flushable=False, name=name, metrics=metrics)


class ConnectedPausableCollection(RootPausableCollection):
    """A pause tree whose disposable entries are also registered in ``root``.

    The collection adds itself to ``root`` on construction, so disposing or
    flushing ``root`` reaches it; call those on ``root`` rather than here.
    Entries are never disposed by this collection: ``root`` owns their disposal
    and applies its own LIFO order. Adds are serialized so both trees see
    entries in the same order, and an entry ``root`` refuses is dropped here
    too. The back-reference to ``root`` is weak and is cleared first when this
    collection is disposed.
    """

    def __init__(
        self,
        root: DisposableManager,
        *pausables: Any,
        name: str | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        super().__init__(name=name, metrics=metrics)
        self._forward_lock = threading.Lock()
        self._root_ref: weakref.ref[DisposableManager] | None = weakref.ref(root)
        root.add(self)
        if pausables:
            self.add_all(pausables)

    def add(self, disposable: T) -> T:
        with self._forward_lock:
            self._root_or_raise()
            return super().add(disposable)

    def add_all(self, disposables: Iterable[Any]) -> None:
        with self._forward_lock:
            self._root_or_raise()
            super().add_all(disposables)

    def dispose(self) -> None:
        self._root_ref = None
        super().dispose()

    def root(self) -> DisposableManager | None:
        """The connected disposal root, or ``None`` once disconnected."""
        ref = self._root_ref
        return None if ref is None else ref()

    def _after_add(self, entries: list[Entry]) -> None:
        forwarded = [entry.value for entry in entries if entry.has(Capability.DISPOSABLE)]
        if not forwarded:
            return
        try:
            root = self._root_or_raise()
            if len(forwarded) == 1:
                root.add(forwarded[0])
            else:
                root.add_all(forwarded)
        except Exception:
            self._discard(entries)
            raise

    def _discard(self, entries: list[Entry]) -> None:
        dropped = {id(entry) for entry in entries}
        with self._lock:
            self._entries[:] = [entry for entry in self._entries if id(entry) not in dropped]

    def _release(self, entries: list[Entry]) -> None:
        entries.clear()

    def _root_or_raise(self) -> DisposableManager:
        root = self.root()
        if root is None:
            raise DisposedError(f"{self.name} is no longer connected to a disposal root")
        return root

