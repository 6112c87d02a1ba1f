"""Ordered, exactly-once disposal and pause/resume registries."""

from disposables.capabilities import Capability, Entry, capabilities_of
from disposables.collection import DisposableCollection, RootDisposableCollection
from disposables.contracts import (
    CheckedDisposable,
    CheckedDisposer,
    Disposable,
    DisposableManager,
    DisposeChecker,
    Disposer,
    Flushable,
    FunctionDisposer,
    FunctionPauser,
    Pausable,
    PausableManager,
    Pauser,
    disposer,
    pauser,
)
from disposables.delegate import (
    DelegateCheckedDisposable,
    DelegateDisposable,
    SettableDisposable,
    SingleUseCallable,
    forgetful,
    single_use,
)
from disposables.errors import (
    AlreadySetError,
    DisposablesError,
    DisposedError,
    MissingDependencyError,
)
from disposables.futures import DisposableFuture, add_callback, transform, wrap_future
from disposables.pausable import (
    ConnectedPausableCollection,
    PausableCollection,
    PausableExecutor,
    RootPausableCollection,
    WeakPausable,
    queuing_executor,
    weak_pausable,
)
from disposables.weak import WeakDisposable, weak

__all__ = [
    "AlreadySetError",
    "Capability",
    "CheckedDisposable",
    "CheckedDisposer",
    "ConnectedPausableCollection",
    "DelegateCheckedDisposable",
    "DelegateDisposable",
    "DisposableCollection",
    "DisposableFuture",
    "DisposableManager",
    "Disposable",
    "DisposablesError",
    "DisposeChecker",
    "DisposedError",
    "Disposer",
    "Entry",
    "Flushable",
    "FunctionDisposer",
    "FunctionPauser",
    "MissingDependencyError",
    "Pausable",
    "PausableCollection",
    "PausableExecutor",
    "PausableManager",
    "Pauser",
    "RootDisposableCollection",
    "RootPausableCollection",
    "SettableDisposable",
    "SingleUseCallable",
    "WeakDisposable",
    "WeakPausable",
    "add_callback",
    "capabilities_of",
    "disposer",
    "forgetful",
    "pauser",
    "queuing_executor",
    "single_use",
    "transform",
    "weak",
    "weak_pausable",
    "wrap_future",
]
