"""Lifecycle host wiring the automation service handle to the provider.

The controller lazily builds the action executor from settings, one
:class:`LocalService` and the logic-key use case. The handle's start/stop/release
callbacks publish it on, or withdraw it from, the service provider; the UI
learns about availability only through the provider.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.action_rest import ActionRestAdapter
from ..domain.entities import ScenarioId
from ..domain.ports import ActionExecutorPort, UseCaseError
from ..domain.workflows import WorkflowTable
from ..usecases.execute_logic_key import ExecuteLogicKey
from ..viewmodels.settings_vm import SettingsVM
from .local_service import LocalService
from .service_provider import LocalServiceProvider, get_provider


class AppController:
    """Create and cache the executor and service handle from settings state.

    Call chain:
        ``keyflow.app.main.App`` creates one instance; toolbar callbacks call
        ``start_smart``/``start_dumb``/``stop``; window teardown calls
        ``release``.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        provider: Optional[LocalServiceProvider] = None,
        executor: Optional[ActionExecutorPort] = None,
        table: Optional[WorkflowTable] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            settings_vm: Settings holding the executor URL, key and timeouts.
            provider: Broker to publish the handle on; defaults to the
                process-wide provider.
            executor: Pre-built executor. When omitted, an
                :class:`ActionRestAdapter` is built from settings.
            table: Routing table; defaults to :meth:`WorkflowTable.default`.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self.provider = provider if provider is not None else get_provider()
        self._fixed_executor = executor
        self._executor: Optional[ActionExecutorPort] = executor
        self.uc_execute = ExecuteLogicKey(table if table is not None else WorkflowTable.default())
        self._service: Optional[LocalService] = None

    @property
    def service(self) -> Optional[LocalService]:
        return self._service

    @property
    def executor(self) -> Optional[ActionExecutorPort]:
        return self._executor

    def ensure_ready(self) -> bool:
        """Ensure executor and handle exist.

        Returns:
            ``True`` when a handle is available, ``False`` when no executor is
            configured.
        """
        if self._service is not None:
            return True
        if self._executor is None:
            base_url = self.settings_vm.executor_base_url
            if not base_url:
                return False
            self._executor = ActionRestAdapter(
                base_url,
                api_key=self.settings_vm.executor_api_key or None,
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            )
        self._service = LocalService(
            self._executor,
            execute_logic_key=self.uc_execute,
            on_start=self._on_service_started,
            on_stop=self._withdraw_service,
            on_release=self._withdraw_service,
        )
        return True

    # ------------------------------------------------------------------
    # Lifecycle triggers
    # ------------------------------------------------------------------
    def start_smart(self, scenario_id: ScenarioId) -> LocalService:
        service = self._require_service()
        service.start_smart_scenario(scenario_id)
        return service

    def start_dumb(self) -> LocalService:
        service = self._require_service()
        service.start_dumb_scenario()
        return service

    def stop(self) -> None:
        if self._service is not None:
            self._service.stop()

    def release(self) -> None:
        """Tear the handle down; the next start builds a fresh one."""
        service = self._service
        if service is None:
            return
        service.release()
        self._service = None

    def reset(self) -> None:
        """Release the handle and drop the settings-built executor."""
        self.release()
        self._executor = self._fixed_executor

    # ------------------------------------------------------------------
    # Handle callbacks
    # ------------------------------------------------------------------
    def _on_service_started(self, scenario_id: ScenarioId, is_smart: bool) -> None:
        self._log.debug("Publishing service handle for scenario %s", scenario_id)
        self.provider.set_service(self._service)

    def _withdraw_service(self) -> None:
        if self._service is not None:
            self.provider.clear_service(self._service)

    def _require_service(self) -> LocalService:
        if not self.ensure_ready() or self._service is None:
            raise UseCaseError(
                "EXECUTOR_NOT_CONFIGURED",
                "Configure the automation agent URL in Settings first.",
            )
        return self._service
