# keyflow/app/main.py
from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

# ---- Views (UI-only) ----
from .views.main_window import MainWindowView
from .views.settings_dialog import SettingsDialog

# ---- ViewModels ----
from ..viewmodels.logic_key_vm import LOGIC_KEY_REQUIRED, LogicKeyVM
from ..viewmodels.service_status_vm import ServiceStatusVM
from ..viewmodels.settings_vm import SettingsVM

# ---- Host, Provider & Adapters ----
from .controller import AppController
from .service_provider import init_provider, teardown_provider
from .ui_queue import UiCallQueue
from ..adapters.action_recorder import RecordingActionExecutor
from ..adapters.action_rest import ActionRestAdapter
from ..adapters.api_errors import ApiError
from ..adapters.storage_local import StorageLocal
from ..domain.ports import UseCaseError
from ..domain.workflows import WorkflowTable
from ..utils import logging as logging_utils

logging_utils.configure_root()


class App:
    """Bootstrap: wire Views <-> ViewModels, the lifecycle host and the provider."""

    def __init__(self, *, offline: bool = False) -> None:
        self._log = logging.getLogger(__name__)
        self.table = WorkflowTable.default()

        # ---- Settings & storage ----
        self._storage = StorageLocal(root_dir=os.environ.get("KEYFLOW_STORAGE_ROOT") or ".")
        self.settings_vm = SettingsVM(on_save=self._on_settings_saved)

        # ---- Main window ----
        self.win = MainWindowView(
            on_start_smart=self._on_start_smart,
            on_start_dumb=self._on_start_dumb,
            on_stop=self._on_stop,
            on_open_settings=self._on_open_settings,
            on_logic_key_changed=self._on_logic_key_changed,
            on_save_logic_key=self._on_save_logic_key,
            on_trigger_logic_key=self._on_trigger,
            on_close=self._on_close,
        )
        self.ui_calls = UiCallQueue(self.win.after, self.win.after_cancel)
        self.ui_calls.start()
        self._load_user_settings()

        # ---- Provider & lifecycle host ----
        self.provider = init_provider()
        executor = RecordingActionExecutor() if offline else None
        self.controller = AppController(
            self.settings_vm, provider=self.provider, executor=executor, table=self.table
        )

        # ---- ViewModels bound to the provider ----
        self.logic_key_vm = LogicKeyVM(on_save=self._on_logic_key_saved)
        self.status_vm = ServiceStatusVM(on_changed=self._apply_service_status)
        self.status_vm.attach(self.provider)

        self.win.set_known_keys(
            f"{route.logic_key}  {route.category.value}: {route.action_label}"
            for route in self.table
        )
        self._apply_logic_key_state()

    def _load_user_settings(self) -> None:
        try:
            payload = self._storage.load_user_settings()
        except (OSError, ValueError) as exc:
            self.win.show_toast(f"Could not load settings: {exc}")
            payload = None
        if payload is not None:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self.win.show_toast(str(exc))
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective GUI log level: %s", logging_utils.level_name(level))

    # ==================================================================
    # Toolbar / Actions
    # ==================================================================
    def _on_start_smart(self, scenario_id: int) -> None:
        try:
            self.controller.start_smart(scenario_id)
        except UseCaseError as err:
            self._toast_error(err)

    def _on_start_dumb(self) -> None:
        try:
            self.controller.start_dumb()
        except UseCaseError as err:
            self._toast_error(err)

    def _on_stop(self) -> None:
        self.controller.stop()

    def _on_trigger(self, logic_key: str) -> None:
        try:
            outcome = self.status_vm.trigger(logic_key)
        except (ApiError, UseCaseError) as err:
            self._toast_error(err)
            return
        if outcome is None:
            self.win.set_status_message("Service not running; key ignored.")
        elif not outcome.executed:
            self.win.set_status_message(f"Unknown logic key: {logic_key}")
        else:
            self.win.set_status_message(
                f"{outcome.category.value}: {outcome.action_label}"
                + ("" if outcome.succeeded else " (failed)")
            )

    # ==================================================================
    # Logic key dialog state
    # ==================================================================
    def _on_logic_key_changed(self, text: str) -> None:
        self.logic_key_vm.set_logic_key(text)
        self._apply_logic_key_state()

    def _on_save_logic_key(self) -> None:
        if self.logic_key_vm.is_valid:
            self.logic_key_vm.save()
        else:
            self.logic_key_vm.logic_key_error = LOGIC_KEY_REQUIRED
        self._apply_logic_key_state()

    def _on_logic_key_saved(self, logic_key: str) -> None:
        known = logic_key in self.table
        self._log.info("Logic key saved: %s (known=%s)", logic_key, known)
        self.win.set_status_message(
            f"Saved {logic_key}." if known else f"Saved {logic_key} (not in routing table)."
        )

    def _apply_logic_key_state(self) -> None:
        self.win.set_logic_key_error(self.logic_key_vm.logic_key_error)
        self.win.set_save_enabled(self.logic_key_vm.is_valid)

    # ==================================================================
    # Settings
    # ==================================================================
    def _on_open_settings(self) -> None:
        dlg = SettingsDialog(
            self.win,
            on_test_connection=self._on_test_connection,
            on_save=self._apply_settings_payload,
        )
        dlg.set_settings(self.settings_vm.to_dict())

    def _apply_settings_payload(self, payload: dict) -> None:
        try:
            self.settings_vm.apply_dict(payload)
            self.settings_vm.cmd_save()
        except ValueError as exc:
            self.win.show_toast(str(exc))

    def _on_settings_saved(self, cfg: dict) -> None:
        try:
            self._storage.save_user_settings(cfg)
        except OSError as exc:
            self.win.show_toast(f"Could not save settings: {exc}")
            return
        # Executor settings changed: the next start builds a fresh handle.
        self.controller.reset()
        self._apply_logging_preferences()
        self.win.set_status_message("Settings saved.")

    def _on_test_connection(self) -> None:
        url = self.settings_vm.executor_base_url
        if not url:
            self.win.show_toast("Configure the agent URL first.")
            return
        adapter = ActionRestAdapter(
            url,
            api_key=self.settings_vm.executor_api_key or None,
            request_timeout_s=self.settings_vm.request_timeout_s,
            retries=0,
        )
        try:
            info = adapter.health()
        except ApiError as err:
            self._toast_error(err)
            return
        self.win.show_toast(f"Agent reachable: {info}")

    # ==================================================================
    # Status / errors
    # ==================================================================
    def _apply_service_status(self, vm: ServiceStatusVM) -> None:
        # Observer may fire on any thread; only the UI queue is thread-safe.
        text = vm.status_text
        self.ui_calls.post(lambda: self.win.set_status_message(text))

    def _toast_error(self, err: Exception) -> None:
        if isinstance(err, UseCaseError):
            self._log.warning("UseCase error (%s): %s", err.code, err.message)
            self.win.show_toast(err.message)
            return
        self._log.warning("Agent error (%s): %s", getattr(err, "context", ""), err)
        self.win.show_toast(str(err))

    def _on_close(self) -> None:
        self.status_vm.detach()
        self.controller.release()
        teardown_provider()
        self.ui_calls.stop()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Logic-key automation desktop app")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="use an in-memory executor instead of the automation agent",
    )
    args = parser.parse_args(argv)
    app = App(offline=args.offline)
    app.win.mainloop()


if __name__ == "__main__":
    main()
