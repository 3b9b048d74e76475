from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Protocol

from .entities import InputEvent, ScenarioId

LogicKey = str
ActionLabel = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class ActionExecutorPort(Protocol):
    """Performs the physical automation primitive (tap, swipe, key injection).

    Implementations own timeout and retry policy. They must be safe to call
    repeatedly with the same label and must not block indefinitely.
    """

    def run(self, action_label: ActionLabel) -> bool: ...  # True on success
    def handle_input_event(self, event: InputEvent) -> bool: ...  # True if consumed


class AutomationServicePort(Protocol):
    """Handle of the running automation service as seen by the broker and UI."""

    @property
    def is_started(self) -> bool: ...
    @property
    def scenario_id(self) -> ScenarioId: ...
    @property
    def is_smart(self) -> bool: ...
    def start(self, scenario_id: ScenarioId, is_smart: bool) -> None: ...
    def stop(self) -> None: ...
    def release(self) -> None: ...
    def execute_logic_key(self, logic_key: LogicKey) -> Any: ...


ServiceObserver = Callable[[Optional[AutomationServicePort]], None]


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Optional[Dict]: ...


class ServiceProviderPort(Protocol):
    """Broker surface the UI layer binds to."""

    def register_observer(self, observer: Optional[ServiceObserver]) -> None: ...
    def unregister_observer(self, observer: ServiceObserver) -> bool: ...
    def is_available(self) -> bool: ...
    def dispatch(self, logic_key: LogicKey) -> Optional[Any]: ...
