
"""Domain package exports for value objects, ports and the routing table."""

from .entities import InputEvent, NO_SCENARIO, ScenarioId, ServiceState
from .errors import RoutingTableError
from .ports import (
    ActionExecutorPort,
    ActionLabel,
    AutomationServicePort,
    LogicKey,
    ServiceObserver,
    ServiceProviderPort,
    UseCaseError,
)
from .workflows import WorkflowCategory, WorkflowRoute, WorkflowTable

__all__ = [
    "ActionExecutorPort",
    "ActionLabel",
    "AutomationServicePort",
    "InputEvent",
    "LogicKey",
    "NO_SCENARIO",
    "RoutingTableError",
    "ScenarioId",
    "ServiceObserver",
    "ServiceProviderPort",
    "ServiceState",
    "UseCaseError",
    "WorkflowCategory",
    "WorkflowRoute",
    "WorkflowTable",
]
