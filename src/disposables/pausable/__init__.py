"""Pause/resume propagation layered on the disposal tree."""

from disposables.pausable.collection import (
    ConnectedPausableCollection,
    PausableCollection,
    RootPausableCollection,
)
from disposables.pausable.executor import PausableExecutor, queuing_executor
from disposables.pausable.weak import WeakPausable, weak_pausable

__all__ = [
    "ConnectedPausableCollection",
    "PausableCollection",
    "PausableExecutor",
    "RootPausableCollection",
    "WeakPausable",
    "queuing_executor",
    "weak_pausable",
]
