"""Tests for weakly-held disposables."""

from __future__ import annotations

import gc

import pytest

from disposables import RootDisposableCollection, WeakDisposable, disposer, weak
from tests.fakes import Target, Tracker


class TestWeakDisposable:
    def test_collected_referent_counts_as_disposed(self) -> None:
        target = Target()
        handle = weak(target)
        assert not handle.is_disposed()

        del target
        gc.collect()

        assert handle.is_disposed()
        handle.dispose()

    def test_registry_does_not_keep_referent_alive(self) -> None:
        target = Target()
        root = RootDisposableCollection(weak(target))

        del target
        gc.collect()
        root.flush_disposed()

        assert len(root) == 0

    def test_dispose_runs_disposer_exactly_once(self) -> None:
        calls: list[str] = []
        target = Target("socket")
        handle = weak(target, disposer(lambda instance: calls.append(instance.name)))

        handle.dispose()
        handle.dispose()

        assert calls == ["socket"]
        assert handle.is_disposed()

    def test_dispose_forwards_to_native_contract(self, tracker: Tracker) -> None:
        resource = tracker.disposable("a")
        handle = WeakDisposable(resource)

        handle.dispose()

        assert resource.dispose_calls == 1

    def test_already_disposed_instance_is_not_disposed_again(self, tracker: Tracker) -> None:
        resource = tracker.checked("a", disposed=True)
        handle = weak(resource)

        handle.dispose()

        assert resource.dispose_calls == 0

    def test_adapter_check_decides_liveness(self) -> None:
        target = Target()
        handle = weak(
            target,
            disposer(
                lambda instance: setattr(instance, "closed", True),
                is_disposed=lambda instance: instance.closed,
            ),
        )

        assert not handle.is_disposed()
        target.closed = True
        assert handle.is_disposed()

    def test_adapter_check_and_native_check_are_combined(self, tracker: Tracker) -> None:
        resource = tracker.checked("a")
        handle = weak(resource, checker=disposer(lambda _: None, is_disposed=lambda _: True))

        assert not handle.is_disposed()
        resource.disposed = True
        assert handle.is_disposed()

    def test_repr_reports_gone_referent(self) -> None:
        target = Target()
        handle = weak(target)
        assert "Target" in repr(handle)

        del target
        gc.collect()

        assert "<gone>" in repr(handle)

    def test_objects_without_weakref_support_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            weak(42)
