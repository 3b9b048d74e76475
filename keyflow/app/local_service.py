"""Automation service handle with start/stop/release lifecycle.

The lifecycle host constructs one :class:`LocalService` and passes callbacks
that publish or withdraw it on the service provider. The handle forwards logic
keys to :class:`keyflow.usecases.execute_logic_key.ExecuteLogicKey` and key
events to the action executor.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..domain.entities import NO_SCENARIO, InputEvent, ScenarioId, ServiceState
from ..domain.ports import ActionExecutorPort, LogicKey
from ..usecases.execute_logic_key import DispatchOutcome, ExecuteLogicKey

StartCallback = Callable[[ScenarioId, bool], None]
StopCallback = Callable[[], None]


class LocalService:
    """Handle of the running automation service.

    State machine: ``Idle -> Running -> Idle``. ``start`` is a no-op while
    running, ``stop`` is a no-op while idle, ``release`` forces ``Idle`` from
    any state and signals that the handle is being torn down.
    """

    def __init__(
        self,
        executor: ActionExecutorPort,
        *,
        execute_logic_key: Optional[ExecuteLogicKey] = None,
        on_start: Optional[StartCallback] = None,
        on_stop: Optional[StopCallback] = None,
        on_release: Optional[StopCallback] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._executor = executor
        self._execute = execute_logic_key or ExecuteLogicKey()
        self._on_start = on_start
        self._on_stop = on_stop
        self._on_release = on_release
        # Held across each transition and its host callback so start, stop and
        # release publish to the provider in the same order they change state.
        self._lock = threading.RLock()
        self._started = False
        self._scenario_id: ScenarioId = NO_SCENARIO
        self._is_smart = False
        self._released = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def scenario_id(self) -> ScenarioId:
        return self._scenario_id

    @property
    def is_smart(self) -> bool:
        return self._is_smart

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def state(self) -> ServiceState:
        return ServiceState.RUNNING if self._started else ServiceState.IDLE

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, scenario_id: ScenarioId, is_smart: bool) -> None:
        """Move to ``Running`` and notify the host; ignored while running."""
        with self._lock:
            if self._started:
                self._log.debug(
                    "Start ignored, scenario %s already running", self._scenario_id
                )
                return
            self._started = True
            self._released = False
            self._scenario_id = scenario_id
            self._is_smart = bool(is_smart)
            self._log.info(
                "Starting %s scenario: %s", "smart" if is_smart else "dumb", scenario_id
            )
            if self._on_start:
                self._on_start(scenario_id, bool(is_smart))

    def start_dumb_scenario(self) -> None:
        self.start(NO_SCENARIO, False)

    def start_smart_scenario(self, scenario_id: ScenarioId) -> None:
        self.start(scenario_id, True)

    def stop(self) -> None:
        """Move to ``Idle`` and notify the host; ignored while idle."""
        with self._lock:
            if not self._started:
                return
            self._clear_scenario()
            self._log.info("Stopping automation scenario")
            if self._on_stop:
                self._on_stop()

    def release(self) -> None:
        """Force ``Idle`` and signal teardown of this handle."""
        with self._lock:
            self._clear_scenario()
            self._released = True
            self._log.info("Releasing automation service resources")
            if self._on_release:
                self._on_release()

    def _clear_scenario(self) -> None:
        self._started = False
        self._scenario_id = NO_SCENARIO
        self._is_smart = False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def execute_logic_key(self, logic_key: LogicKey) -> DispatchOutcome:
        """Run the workflow bound to ``logic_key``; executor errors propagate."""
        return self._execute(logic_key, self._executor)

    def on_input_event(self, event: Optional[InputEvent]) -> bool:
        """Forward a key event to the executor; returns whether it was consumed."""
        if event is None:
            return False
        return bool(self._executor.handle_input_event(event))

    def __repr__(self) -> str:
        return (
            f"LocalService(state={self.state.value}, scenario_id={self._scenario_id}, "
            f"is_smart={self._is_smart})"
        )


__all__ = ["LocalService"]
