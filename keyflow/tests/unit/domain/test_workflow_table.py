from __future__ import annotations

import pytest

from keyflow.domain.errors import RoutingTableError
from keyflow.domain.workflows import WorkflowCategory, WorkflowRoute, WorkflowTable

EXPECTED_ROUTES = {
    "/trigamt": (WorkflowCategory.PRE_TRADE_SETUP, "Trigger Amount"),
    "/incamt": (WorkflowCategory.PRE_TRADE_SETUP, "Increase Amount"),
    "/decamt": (WorkflowCategory.PRE_TRADE_SETUP, "Decrease Amount"),
    "/tftrig": (WorkflowCategory.PRE_TRADE_SETUP, "Timeframe Trigger"),
    "/cplist": (WorkflowCategory.CURRENCY_SEARCH, "Open Currency List"),
    "/search": (WorkflowCategory.CURRENCY_SEARCH, "Search Currency"),
    "/confcur": (WorkflowCategory.CURRENCY_SEARCH, "Confirm Currency"),
    "/free": (WorkflowCategory.RANDOM_EXPLORATION, "Free Exploration"),
    "/buy1": (WorkflowCategory.TRADE_EXECUTION, "BUY"),
    "/sell1": (WorkflowCategory.TRADE_EXECUTION, "SELL"),
}


def test_default_table_matches_shipped_routes() -> None:
    table = WorkflowTable.default()

    assert len(table) == len(EXPECTED_ROUTES)
    for key, (category, label) in EXPECTED_ROUTES.items():
        route = table.resolve(key)
        assert route.category is category
        assert route.action_label == label
        assert route.is_known


def test_resolve_is_exact_and_case_sensitive() -> None:
    table = WorkflowTable.default()

    for key in ("/BUY1", " /buy1", "/buy1 ", "buy1", "", "/doesnotexist"):
        route = table.resolve(key)
        assert route.category is WorkflowCategory.UNKNOWN
        assert route.action_label == ""
        assert route.logic_key == key
        assert key not in table


def test_duplicate_key_rejected_at_construction() -> None:
    with pytest.raises(RoutingTableError) as excinfo:
        WorkflowTable.from_rows(
            [
                ("/buy1", WorkflowCategory.TRADE_EXECUTION, "BUY"),
                ("/buy1", WorkflowCategory.PRE_TRADE_SETUP, "Trigger Amount"),
            ]
        )
    assert excinfo.value.logic_key == "/buy1"


def test_extending_default_table_with_existing_key_fails() -> None:
    with pytest.raises(RoutingTableError):
        WorkflowTable.default().extended(
            [("/free", WorkflowCategory.RANDOM_EXPLORATION, "Free Exploration 2")]
        )


@pytest.mark.parametrize("key", ["", "   "])
def test_blank_key_rejected(key: str) -> None:
    with pytest.raises(RoutingTableError):
        WorkflowTable([WorkflowRoute(key, WorkflowCategory.TRADE_EXECUTION, "BUY")])


def test_unknown_category_row_rejected() -> None:
    with pytest.raises(RoutingTableError):
        WorkflowTable([WorkflowRoute("/x", WorkflowCategory.UNKNOWN, "X")])


def test_extended_adds_rows_without_mutating_original() -> None:
    base = WorkflowTable.default()
    extended = base.extended([("/buy2", WorkflowCategory.TRADE_EXECUTION, "BUY x2")])

    assert "/buy2" in extended
    assert "/buy2" not in base
    assert extended.resolve("/buy2").action_label == "BUY x2"
    assert extended.keys()[: len(base)] == base.keys()
