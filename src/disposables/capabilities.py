"""Capability tags resolved once when an object is registered."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from disposables.contracts import CheckedDisposable, Disposable, Flushable, Pausable


class Capability(enum.Flag):
    """Contracts an object satisfies, as seen by a registry."""

    NONE = 0
    DISPOSABLE = enum.auto()
    CHECKED = enum.auto()
    MANAGER = enum.auto()
    PAUSABLE = enum.auto()


def capabilities_of(obj: Any) -> Capability:
    """Check ``obj`` against every contract and return the matching flags."""
    if obj is None:
        return Capability.NONE

    caps = Capability.NONE
    if isinstance(obj, Disposable):
        caps |= Capability.DISPOSABLE
    if isinstance(obj, CheckedDisposable):
        caps |= Capability.CHECKED
    if isinstance(obj, Flushable):
        caps |= Capability.MANAGER
    if isinstance(obj, Pausable):
        caps |= Capability.PAUSABLE
    return caps


@dataclass(eq=False, slots=True)
class Entry:
    """One registration inside a collection.

    Entries compare by identity so the same object registered twice is tracked
    as two independent entries.
    """

    value: Any
    caps: Capability

    @classmethod
    def of(cls, value: Any) -> Entry:
        return cls(value, capabilities_of(value))

    def has(self, capability: Capability) -> bool:
        return capability in self.caps
