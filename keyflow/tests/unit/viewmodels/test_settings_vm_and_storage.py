from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from keyflow.adapters.storage_local import StorageLocal
from keyflow.viewmodels.settings_vm import SettingsVM


def test_apply_dict_updates_flat_keys() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "executor_base_url": " http://agent.local ",
            "executor_api_key": "secret",
            "request_timeout_s": "15",
            "retries": 0,
            "debug_logging": "yes",
        }
    )

    assert vm.executor_base_url == "http://agent.local"
    assert vm.executor_api_key == "secret"
    assert vm.request_timeout_s == 15
    assert vm.retries == 0
    assert vm.debug_logging is True
    assert vm.is_valid() is True


def test_apply_dict_rejects_unknown_keys() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError, match="box_urls"):
        vm.apply_dict({"box_urls": {}})


def test_invalid_values_rejected() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.request_timeout_s = 0
    with pytest.raises(ValueError):
        vm.retries = "many"

    vm.executor_base_url = "agent.local"
    assert vm.is_valid() is False


def test_cmd_save_emits_payload() -> None:
    saved: List[dict] = []
    vm = SettingsVM(on_save=saved.append)
    vm.executor_base_url = "https://agent"

    vm.cmd_save()

    assert saved[0]["executor_base_url"] == "https://agent"
    assert set(saved[0]) == {
        "executor_base_url",
        "executor_api_key",
        "request_timeout_s",
        "retries",
        "debug_logging",
    }


def test_storage_roundtrip(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    assert storage.load_user_settings() is None

    vm = SettingsVM()
    vm.executor_base_url = "http://agent"
    storage.save_user_settings(vm.to_dict())

    raw = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert raw["executor_base_url"] == "http://agent"

    restored = SettingsVM()
    restored.apply_dict(storage.load_user_settings())
    assert restored.to_dict() == vm.to_dict()


def test_storage_rejects_non_object(tmp_path: Path) -> None:
    (tmp_path / "user_settings.json").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        StorageLocal(root_dir=str(tmp_path)).load_user_settings()
