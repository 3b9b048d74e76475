"""Resolve a logic key to a workflow and run its action through an executor.

The use case holds no state besides its routing table. Executor failures are
not caught here: retry and error presentation belong to the executor's owner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.ports import ActionExecutorPort, ActionLabel, LogicKey
from ..domain.workflows import WorkflowCategory, WorkflowTable

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of a single logic-key dispatch.

    Attributes:
        logic_key: Key as received from the caller.
        category: Resolved workflow category (``UNKNOWN`` on a table miss).
        action_label: Label passed to the executor, empty for unknown keys.
        executed: Whether the executor was invoked.
        succeeded: Executor result, ``None`` when it was not invoked.
    """

    logic_key: LogicKey
    category: WorkflowCategory
    action_label: ActionLabel
    executed: bool
    succeeded: Optional[bool] = None


@dataclass
class ExecuteLogicKey:
    """Use-case routing logic keys through the workflow table."""

    table: WorkflowTable = field(default_factory=WorkflowTable.default)

    def __call__(self, logic_key: LogicKey, executor: ActionExecutorPort) -> DispatchOutcome:
        _log.info("Executing logic key: %s", logic_key)
        route = self.table.resolve(logic_key)
        if not route.is_known:
            _log.warning("Unknown logic key: %s", logic_key)
            return DispatchOutcome(
                logic_key=logic_key,
                category=WorkflowCategory.UNKNOWN,
                action_label="",
                executed=False,
            )

        _log.debug("Running %s workflow: %s", route.category.value, route.action_label)
        # TradeExecution is a single opaque action; no outcome detection yet.
        ok = executor.run(route.action_label)
        return DispatchOutcome(
            logic_key=logic_key,
            category=route.category,
            action_label=route.action_label,
            executed=True,
            succeeded=bool(ok),
        )


__all__ = ["DispatchOutcome", "ExecuteLogicKey"]
