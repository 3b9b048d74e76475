from __future__ import annotations

import threading
from typing import List, Optional

from ..domain.entities import InputEvent
from ..domain.ports import ActionExecutorPort, ActionLabel


class RecordingActionExecutor(ActionExecutorPort):
    """In-memory executor used for tests and offline development.

    Records every action label and input event. ``fail_with`` makes ``run``
    raise the given exception after recording the label.
    """

    def __init__(
        self,
        *,
        result: bool = True,
        consume_events: bool = False,
        fail_with: Optional[BaseException] = None,
    ) -> None:
        self.result = result
        self.consume_events = consume_events
        self.fail_with = fail_with
        self.labels: List[ActionLabel] = []
        self.events: List[InputEvent] = []
        self._lock = threading.Lock()

    def run(self, action_label: ActionLabel) -> bool:
        with self._lock:
            self.labels.append(action_label)
        if self.fail_with is not None:
            raise self.fail_with
        return self.result

    def handle_input_event(self, event: InputEvent) -> bool:
        with self._lock:
            self.events.append(event)
        return self.consume_events

    @property
    def call_count(self) -> int:
        return len(self.labels)
