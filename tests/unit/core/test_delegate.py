"""Tests for delegate handles: forgetful wrappers, settable slots and single-use callables."""

from __future__ import annotations

import pytest

from disposables import (
    AlreadySetError,
    DelegateCheckedDisposable,
    DelegateDisposable,
    DisposableCollection,
    DisposedError,
    RootDisposableCollection,
    SettableDisposable,
    SingleUseCallable,
    forgetful,
    single_use,
)
from tests.fakes import Target, Tracker


class TestDelegateDisposable:
    def test_dispose_releases_delegate_once(self, tracker: Tracker) -> None:
        resource = tracker.disposable("a")
        handle = DelegateDisposable(resource)

        handle.dispose()
        handle.dispose()

        assert resource.dispose_calls == 1

    def test_delegate_access_after_dispose_raises(self) -> None:
        handle = DelegateDisposable(Target())
        assert isinstance(handle._delegate_or_raise(), Target)

        handle.dispose()

        assert handle._delegate_or_none() is None
        with pytest.raises(DisposedError):
            handle._delegate_or_raise()


class TestForgetful:
    def test_forgetful_reports_delegate_liveness(self, tracker: Tracker) -> None:
        inner = tracker.checked("inner")
        handle = forgetful(inner)

        assert not handle.is_disposed()
        inner.disposed = True
        assert handle.is_disposed()

    def test_forgetful_of_plain_object_is_live_until_disposed(self) -> None:
        handle = forgetful(Target())

        assert not handle.is_disposed()
        handle.dispose()
        assert handle.is_disposed()

    def test_forgetful_is_not_double_wrapped(self) -> None:
        handle = forgetful(Target())

        assert forgetful(handle) is handle
        assert isinstance(handle, DelegateCheckedDisposable)

    def test_forgetful_entry_is_pruned_after_dispose(self, tracker: Tracker) -> None:
        handle = forgetful(tracker.disposable("a"))
        root = RootDisposableCollection(handle)
        handle.dispose()

        root.flush_disposed()

        assert len(root) == 0
        assert tracker.events == ["dispose:a"]


class TestSettableDisposable:
    def test_set_then_dispose_releases_value(self, tracker: Tracker) -> None:
        slot = SettableDisposable()
        resource = tracker.disposable("a")

        slot.set(resource)
        slot.dispose()

        assert resource.dispose_calls == 1
        assert slot.is_disposed()

    def test_set_after_dispose_disposes_value_immediately(self, tracker: Tracker) -> None:
        slot = SettableDisposable()
        slot.dispose()
        resource = tracker.disposable("late")

        slot.set(resource)

        assert resource.dispose_calls == 1

    def test_second_set_raises(self, tracker: Tracker) -> None:
        slot = SettableDisposable()
        slot.set(tracker.disposable("a"))

        with pytest.raises(AlreadySetError):
            slot.set(tracker.disposable("b"))

    def test_liveness_follows_value_once_set(self, tracker: Tracker) -> None:
        slot = SettableDisposable()
        assert not slot.is_disposed()

        inner = tracker.checked("inner")
        slot.set(inner)
        assert not slot.is_disposed()

        inner.disposed = True
        assert slot.is_disposed()

    def test_empty_collection_value_counts_as_finished(self) -> None:
        slot = SettableDisposable()
        slot.set(DisposableCollection())

        assert slot.is_disposed()


class TestSingleUse:
    def test_call_forwards_once(self) -> None:
        calls: list[tuple[tuple[object, ...], dict[str, object]]] = []
        callback = single_use(lambda *args, **kwargs: calls.append((args, kwargs)))

        callback(1, key="value")
        callback(2)

        assert calls == [((1,), {"key": "value"})]
        assert callback.is_disposed()

    def test_dispose_before_call_suppresses_delegate(self) -> None:
        calls: list[int] = []
        callback = single_use(lambda: calls.append(1))

        callback.dispose()
        callback()

        assert calls == []

    def test_single_use_is_not_double_wrapped(self) -> None:
        callback = single_use(print)

        assert single_use(callback) is callback
        assert isinstance(callback, SingleUseCallable)

    def test_call_disposes_disposable_delegate(self) -> None:
        class Listener:
            def __init__(self) -> None:
                self.calls = 0
                self.disposed = False

            def __call__(self) -> None:
                self.calls += 1

            def dispose(self) -> None:
                self.disposed = True

        listener = Listener()
        callback = single_use(listener)

        callback()

        assert listener.calls == 1
        assert listener.disposed
