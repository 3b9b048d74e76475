from __future__ import annotations

import logging
import threading
from typing import List, Optional

import pytest

from keyflow.adapters.action_recorder import RecordingActionExecutor
from keyflow.app import service_provider as provider_module
from keyflow.app.local_service import LocalService
from keyflow.app.service_provider import LocalServiceProvider


class _Recorder:
    def __init__(self) -> None:
        self.calls: List[Optional[object]] = []

    def __call__(self, service: Optional[object]) -> None:
        self.calls.append(service)


def _service(executor: Optional[RecordingActionExecutor] = None) -> LocalService:
    return LocalService(executor or RecordingActionExecutor())


def test_register_observer_fires_once_with_absent_state() -> None:
    provider = LocalServiceProvider()
    observer = _Recorder()

    provider.register_observer(observer)

    assert observer.calls == [None]


def test_register_observer_fires_with_current_handle_every_time() -> None:
    provider = LocalServiceProvider()
    handle = _service()
    provider.set_service(handle)
    observer = _Recorder()

    provider.register_observer(observer)
    provider.register_observer(observer)

    assert observer.calls == [handle, handle]


def test_set_service_toggles_availability() -> None:
    provider = LocalServiceProvider()
    assert provider.is_available() is False

    provider.set_service(_service())
    assert provider.is_available() is True

    provider.set_service(None)
    assert provider.is_available() is False


def test_consecutive_set_service_notifies_latest_handle_once() -> None:
    provider = LocalServiceProvider()
    observer = _Recorder()
    provider.register_observer(observer)
    h1, h2 = _service(), _service()

    provider.set_service(h1)
    provider.set_service(h2)

    assert observer.calls[-1] is h2
    assert observer.calls.count(h2) == 1
    assert provider.current_service is h2


def test_set_service_then_register_on_same_thread_fires_once() -> None:
    provider = LocalServiceProvider()
    handle = _service()
    provider.set_service(handle)
    observer = _Recorder()

    provider.register_observer(observer)

    assert observer.calls == [handle]


def test_observer_replacement_scenario() -> None:
    provider = LocalServiceProvider()
    a, b = _Recorder(), _Recorder()
    h1, h2 = _service(), _service()

    provider.register_observer(a)
    provider.set_service(h1)
    provider.register_observer(b)
    provider.set_service(h2)

    assert a.calls == [None, h1]
    assert b.calls == [h1, h2]


def test_register_none_detaches_observer() -> None:
    provider = LocalServiceProvider()
    observer = _Recorder()
    provider.register_observer(observer)

    provider.register_observer(None)
    provider.set_service(_service())

    assert observer.calls == [None]


def test_unregister_observer_ignores_superseded_callback() -> None:
    provider = LocalServiceProvider()
    stale, fresh = _Recorder(), _Recorder()
    provider.register_observer(stale)
    provider.register_observer(fresh)

    assert provider.unregister_observer(stale) is False
    provider.set_service(_service())
    assert len(fresh.calls) == 2

    assert provider.unregister_observer(fresh) is True
    provider.set_service(None)
    assert len(fresh.calls) == 2


def test_clear_service_only_clears_matching_handle() -> None:
    provider = LocalServiceProvider()
    old, new = _service(), _service()
    provider.set_service(old)
    provider.set_service(new)

    assert provider.clear_service(old) is False
    assert provider.current_service is new

    assert provider.clear_service(new) is True
    assert provider.is_available() is False


def test_dispatch_without_service_is_logged_noop(caplog: pytest.LogCaptureFixture) -> None:
    provider = LocalServiceProvider()

    with caplog.at_level(logging.WARNING, logger="keyflow.app.service_provider"):
        result = provider.dispatch("/buy1")

    assert result is None
    assert "cannot trigger key: /buy1" in caplog.text


def test_dispatch_after_start_runs_label_once() -> None:
    provider = LocalServiceProvider()
    executor = RecordingActionExecutor()
    service = LocalService(
        executor,
        on_start=lambda *_: provider.set_service(service),
        on_stop=lambda: provider.clear_service(service),
    )

    service.start(7, True)
    outcome = provider.dispatch("/sell1")

    assert executor.labels == ["SELL"]
    assert outcome is not None and outcome.action_label == "SELL"


def test_dispatch_unknown_key_does_not_raise() -> None:
    provider = LocalServiceProvider()
    executor = RecordingActionExecutor()
    provider.set_service(LocalService(executor))

    outcome = provider.dispatch("/doesnotexist")

    assert executor.labels == []
    assert outcome is not None and outcome.executed is False


def test_dispatch_to_handle_without_logic_keys_is_ignored() -> None:
    provider = LocalServiceProvider()
    provider.set_service(object())  # type: ignore[arg-type]

    assert provider.dispatch("/buy1") is None


def test_dispatch_does_not_hold_lock_while_executor_runs() -> None:
    provider = LocalServiceProvider()
    entered = threading.Event()
    release = threading.Event()

    class _SlowExecutor(RecordingActionExecutor):
        def run(self, action_label: str) -> bool:
            entered.set()
            release.wait(timeout=5)
            return super().run(action_label)

    provider.set_service(LocalService(_SlowExecutor()))
    worker = threading.Thread(target=provider.dispatch, args=("/buy1",))
    worker.start()
    try:
        assert entered.wait(timeout=5)
        # Lifecycle transitions complete while the action is still in flight.
        provider.set_service(None)
        assert provider.is_available() is False
    finally:
        release.set()
        worker.join(timeout=5)
    assert not worker.is_alive()


def test_observer_never_sees_superseded_handle_under_contention() -> None:
    provider = LocalServiceProvider()
    handles = [_service() for _ in range(50)]
    mismatches: List[object] = []

    def observer(service: Optional[object]) -> None:
        if service is not provider.current_service:
            mismatches.append(service)

    def publish() -> None:
        for handle in handles:
            provider.set_service(handle)

    def register() -> None:
        for _ in range(50):
            provider.register_observer(observer)

    threads = [threading.Thread(target=publish), threading.Thread(target=register)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert mismatches == []


def test_process_wide_accessor_lifecycle() -> None:
    provider_module.teardown_provider()
    first = provider_module.init_provider()
    assert provider_module.get_provider() is first

    observer = _Recorder()
    first.register_observer(observer)
    first.set_service(_service())

    provider_module.teardown_provider()

    assert first.is_available() is False
    assert provider_module.get_provider() is not first
    provider_module.teardown_provider()
