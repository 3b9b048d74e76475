"""Static routing table from logic keys to automation workflows.

Keys are matched exactly (case-sensitive, no trimming). The table is built from
rows and rejects blank or duplicate keys at construction time, so lookups never
have to break ties. Keys missing from the table resolve to the ``UNKNOWN``
category and must never reach the action executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Tuple

from .errors import RoutingTableError
from .ports import ActionLabel, LogicKey


class WorkflowCategory(str, Enum):
    """Closed set of workflow categories a logic key can select."""

    PRE_TRADE_SETUP = "PreTradeSetup"
    CURRENCY_SEARCH = "CurrencySearch"
    RANDOM_EXPLORATION = "RandomExploration"
    TRADE_EXECUTION = "TradeExecution"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class WorkflowRoute:
    """One row of the routing table."""

    logic_key: LogicKey
    category: WorkflowCategory
    action_label: ActionLabel

    @property
    def is_known(self) -> bool:
        return self.category is not WorkflowCategory.UNKNOWN


_DEFAULT_ROWS: Tuple[Tuple[LogicKey, WorkflowCategory, ActionLabel], ...] = (
    # Pre-trade setup
    ("/trigamt", WorkflowCategory.PRE_TRADE_SETUP, "Trigger Amount"),
    ("/incamt", WorkflowCategory.PRE_TRADE_SETUP, "Increase Amount"),
    ("/decamt", WorkflowCategory.PRE_TRADE_SETUP, "Decrease Amount"),
    ("/tftrig", WorkflowCategory.PRE_TRADE_SETUP, "Timeframe Trigger"),
    # Currency search
    ("/cplist", WorkflowCategory.CURRENCY_SEARCH, "Open Currency List"),
    ("/search", WorkflowCategory.CURRENCY_SEARCH, "Search Currency"),
    ("/confcur", WorkflowCategory.CURRENCY_SEARCH, "Confirm Currency"),
    # Human-like exploration
    ("/free", WorkflowCategory.RANDOM_EXPLORATION, "Free Exploration"),
    # Trade execution
    ("/buy1", WorkflowCategory.TRADE_EXECUTION, "BUY"),
    ("/sell1", WorkflowCategory.TRADE_EXECUTION, "SELL"),
)


class WorkflowTable:
    """Immutable lookup of logic keys to workflow routes."""

    def __init__(self, routes: Iterable[WorkflowRoute]) -> None:
        """Index routes by key, rejecting blank keys, duplicates and ``UNKNOWN`` rows.

        Raises:
            RoutingTableError: If any row would make lookups ambiguous.
        """
        index: Dict[LogicKey, WorkflowRoute] = {}
        for route in routes:
            key = route.logic_key
            if not isinstance(key, str) or not key.strip():
                raise RoutingTableError("Logic key must be a non-blank string.", logic_key=str(key))
            if not route.is_known:
                raise RoutingTableError(
                    f"Route for {key!r} cannot use the Unknown category.", logic_key=key
                )
            if key in index:
                raise RoutingTableError(f"Duplicate logic key: {key!r}", logic_key=key)
            index[key] = route
        self._routes = index

    @classmethod
    def from_rows(
        cls, rows: Iterable[Tuple[LogicKey, WorkflowCategory, ActionLabel]]
    ) -> "WorkflowTable":
        return cls(WorkflowRoute(key, category, label) for key, category, label in rows)

    @classmethod
    def default(cls) -> "WorkflowTable":
        """Build the table shipped with the application."""
        return cls.from_rows(_DEFAULT_ROWS)

    def extended(
        self, rows: Iterable[Tuple[LogicKey, WorkflowCategory, ActionLabel]]
    ) -> "WorkflowTable":
        """Return a new table with extra rows appended (duplicates still rejected)."""
        extra = [WorkflowRoute(key, category, label) for key, category, label in rows]
        return WorkflowTable([*self._routes.values(), *extra])

    def resolve(self, logic_key: LogicKey) -> WorkflowRoute:
        """Return the route for ``logic_key`` or an ``UNKNOWN`` route on a miss."""
        route = self._routes.get(logic_key)
        if route is None:
            return WorkflowRoute(logic_key, WorkflowCategory.UNKNOWN, "")
        return route

    def keys(self) -> Tuple[LogicKey, ...]:
        return tuple(self._routes)

    def routes(self) -> Tuple[WorkflowRoute, ...]:
        return tuple(self._routes.values())

    def __contains__(self, logic_key: object) -> bool:
        return logic_key in self._routes

    def __iter__(self) -> Iterator[WorkflowRoute]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)


__all__ = ["WorkflowCategory", "WorkflowRoute", "WorkflowTable"]
