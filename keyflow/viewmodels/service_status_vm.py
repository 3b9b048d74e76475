"""UI-side observer of the automation service provider.

The view model registers itself as the provider's single observer. Attaching
a new instance supersedes any previous one, which is how a recreated window
replaces the callbacks of the window it replaces.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..domain.entities import NO_SCENARIO
from ..domain.ports import AutomationServicePort, LogicKey, ServiceProviderPort

_log = logging.getLogger(__name__)


class ServiceStatusVM:
    """Expose service availability and trigger logic keys from the UI."""

    def __init__(self, *, on_changed: Optional[Callable[["ServiceStatusVM"], None]] = None) -> None:
        self.on_changed = on_changed
        self.service: Optional[AutomationServicePort] = None
        self._provider: Optional[ServiceProviderPort] = None

    @property
    def is_attached(self) -> bool:
        return self._provider is not None

    @property
    def is_running(self) -> bool:
        return self.service is not None

    @property
    def status_text(self) -> str:
        service = self.service
        if service is None:
            return "Service stopped."
        if not service.is_smart or service.scenario_id == NO_SCENARIO:
            return "Running dumb scenario."
        return f"Running smart scenario #{service.scenario_id}."

    def attach(self, provider: ServiceProviderPort) -> None:
        """Register as the provider observer; the current state arrives at once."""
        self._provider = provider
        provider.register_observer(self._on_service_changed)

    def detach(self) -> None:
        provider, self._provider = self._provider, None
        if provider is not None:
            provider.unregister_observer(self._on_service_changed)

    def trigger(self, logic_key: LogicKey) -> Optional[Any]:
        """Send a logic key to the service; returns ``None`` when nothing ran."""
        if self._provider is None:
            _log.warning("Status view model is detached, cannot trigger key: %s", logic_key)
            return None
        return self._provider.dispatch(logic_key)

    def _on_service_changed(self, service: Optional[AutomationServicePort]) -> None:
        self.service = service
        if self.on_changed:
            self.on_changed(self)
