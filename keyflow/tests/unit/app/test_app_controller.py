from __future__ import annotations

from typing import List

import pytest

from keyflow.adapters.action_recorder import RecordingActionExecutor
from keyflow.adapters.action_rest import ActionRestAdapter
from keyflow.app.controller import AppController
from keyflow.app.service_provider import LocalServiceProvider
from keyflow.domain.ports import UseCaseError
from keyflow.viewmodels.settings_vm import SettingsVM


def test_ensure_ready_requires_executor_url() -> None:
    controller = AppController(SettingsVM(), provider=LocalServiceProvider())

    assert controller.ensure_ready() is False
    with pytest.raises(UseCaseError) as excinfo:
        controller.start_dumb()
    assert excinfo.value.code == "EXECUTOR_NOT_CONFIGURED"


def test_ensure_ready_builds_rest_executor_from_settings() -> None:
    settings = SettingsVM()
    settings.executor_base_url = "http://agent.local:8080/"
    settings.executor_api_key = "token"
    controller = AppController(settings, provider=LocalServiceProvider())

    assert controller.ensure_ready() is True
    assert isinstance(controller.executor, ActionRestAdapter)
    assert controller.executor.base_url == "http://agent.local:8080"
    assert controller.service is not None


def test_start_publishes_handle_and_dispatch_reaches_executor() -> None:
    provider = LocalServiceProvider()
    executor = RecordingActionExecutor()
    controller = AppController(SettingsVM(), provider=provider, executor=executor)

    service = controller.start_smart(7)

    assert provider.current_service is service
    provider.dispatch("/sell1")
    assert executor.labels == ["SELL"]


def test_repeated_start_does_not_renotify() -> None:
    provider = LocalServiceProvider()
    seen: List[object] = []
    provider.register_observer(seen.append)
    controller = AppController(SettingsVM(), provider=provider, executor=RecordingActionExecutor())

    controller.start_smart(7)
    controller.start_smart(7)

    assert len(seen) == 2


def test_release_withdraws_and_next_start_builds_fresh_handle() -> None:
    provider = LocalServiceProvider()
    controller = AppController(SettingsVM(), provider=provider, executor=RecordingActionExecutor())
    first = controller.start_dumb()

    controller.stop()
    controller.release()

    assert provider.is_available() is False
    assert controller.service is None
    second = controller.start_dumb()
    assert second is not first
    assert provider.current_service is second


def test_reset_keeps_injected_executor() -> None:
    executor = RecordingActionExecutor()
    controller = AppController(SettingsVM(), provider=LocalServiceProvider(), executor=executor)
    controller.start_dumb()

    controller.reset()

    assert controller.service is None
    assert controller.executor is executor
