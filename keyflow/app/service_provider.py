"""Process-wide broker for the automation service handle.

At most one handle and one observer are held. Registering a new observer
replaces the previous one (single-slot contract, no fan-out): a recreated UI
re-registers and the stale callback stops receiving notifications.

Both mutators run under one re-entrant lock and notify the observer while
holding it, so an observer never sees a handle that was already superseded.
``dispatch`` only reads the handle under the lock and runs the workflow after
releasing it, so a slow executor does not block lifecycle transitions.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ..domain.ports import AutomationServicePort, LogicKey, ServiceObserver

_log = logging.getLogger(__name__)


class LocalServiceProvider:
    """Single source of truth for the currently reachable automation service."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._service: Optional[AutomationServicePort] = None
        self._observer: Optional[ServiceObserver] = None

    @property
    def current_service(self) -> Optional[AutomationServicePort]:
        with self._lock:
            return self._service

    def set_service(self, service: Optional[AutomationServicePort]) -> None:
        """Replace the registered handle and notify the observer with it."""
        with self._lock:
            self._service = service
            _log.debug("Service handle %s", "attached" if service is not None else "cleared")
            self._notify()

    def clear_service(self, service: AutomationServicePort) -> bool:
        """Clear the handle only if ``service`` is still the registered one.

        Returns:
            ``True`` when the handle was cleared, ``False`` when a newer
            handle has superseded ``service`` in the meantime.
        """
        with self._lock:
            if self._service is not service:
                _log.debug("Ignoring clear for superseded handle %r", service)
                return False
            self.set_service(None)
            return True

    def register_observer(self, observer: Optional[ServiceObserver]) -> None:
        """Replace the observer and call it at once with the current handle.

        Passing ``None`` detaches the current observer.
        """
        with self._lock:
            self._observer = observer
            self._notify()

    def unregister_observer(self, observer: ServiceObserver) -> bool:
        """Detach ``observer`` only if it still owns the slot."""
        with self._lock:
            if self._observer is None or self._observer != observer:
                return False
            self._observer = None
            return True

    def is_available(self) -> bool:
        with self._lock:
            return self._service is not None

    def dispatch(self, logic_key: LogicKey) -> Optional[Any]:
        """Forward ``logic_key`` to the current handle.

        Returns:
            The handle's dispatch outcome, or ``None`` when no usable handle
            is attached. Executor errors propagate unchanged.
        """
        with self._lock:
            service = self._service
        if service is None:
            _log.warning("No automation service attached, cannot trigger key: %s", logic_key)
            return None
        execute = getattr(service, "execute_logic_key", None)
        if not callable(execute):
            _log.warning(
                "Attached service cannot execute logic keys, ignoring key: %s", logic_key
            )
            return None
        return execute(logic_key)

    def _notify(self) -> None:
        # Caller holds the lock.
        if self._observer is not None:
            self._observer(self._service)


# ---- Process-wide accessor ----
_PROVIDER: Optional[LocalServiceProvider] = None
_PROVIDER_LOCK = threading.Lock()


def init_provider() -> LocalServiceProvider:
    """Create the process-wide provider, or return the existing one."""
    global _PROVIDER
    with _PROVIDER_LOCK:
        if _PROVIDER is None:
            _PROVIDER = LocalServiceProvider()
        return _PROVIDER


def get_provider() -> LocalServiceProvider:
    """Return the process-wide provider, creating it on first use."""
    return init_provider()


def teardown_provider() -> None:
    """Detach observer and handle, then drop the process-wide provider."""
    global _PROVIDER
    with _PROVIDER_LOCK:
        provider, _PROVIDER = _PROVIDER, None
    if provider is not None:
        provider.register_observer(None)
        provider.set_service(None)


__all__ = [
    "LocalServiceProvider",
    "get_provider",
    "init_provider",
    "teardown_provider",
]
