"""Value objects shared by the automation service and its UI.

The service handle itself lives in the app layer (it owns lifecycle
callbacks); this module only holds the plain data that crosses layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ScenarioId = int

# A fixed-sequence ("dumb") scenario has no stored id.
NO_SCENARIO: ScenarioId = -1


class ServiceState(str, Enum):
    """Lifecycle state of the automation service handle."""

    IDLE = "Idle"
    RUNNING = "Running"


@dataclass(frozen=True)
class InputEvent:
    """Key or input event forwarded from the service to the action executor.

    Attributes:
        key_code: Platform key code of the event.
        action: Event phase, for example ``"down"`` or ``"up"``.
        meta: Optional free-form modifier text.
    """

    key_code: int
    action: str = "down"
    meta: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {"key_code": int(self.key_code), "action": self.action}
        if self.meta:
            payload["meta"] = self.meta
        return payload


__all__ = ["InputEvent", "NO_SCENARIO", "ScenarioId", "ServiceState"]
