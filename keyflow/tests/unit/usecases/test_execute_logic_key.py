from __future__ import annotations

import logging

import pytest

from keyflow.adapters.action_recorder import RecordingActionExecutor
from keyflow.adapters.api_errors import ApiServerError
from keyflow.domain.workflows import WorkflowCategory, WorkflowTable
from keyflow.usecases.execute_logic_key import ExecuteLogicKey


def test_every_known_key_runs_its_label_exactly_once() -> None:
    uc = ExecuteLogicKey()
    for route in WorkflowTable.default():
        executor = RecordingActionExecutor()

        outcome = uc(route.logic_key, executor)

        assert executor.labels == [route.action_label]
        assert outcome.executed is True
        assert outcome.succeeded is True
        assert outcome.category is route.category
        assert outcome.action_label == route.action_label


def test_unknown_key_never_runs_executor(caplog: pytest.LogCaptureFixture) -> None:
    executor = RecordingActionExecutor()
    uc = ExecuteLogicKey()

    with caplog.at_level(logging.WARNING, logger="keyflow.usecases.execute_logic_key"):
        outcome = uc("/doesnotexist", executor)

    assert executor.labels == []
    assert outcome.executed is False
    assert outcome.succeeded is None
    assert outcome.category is WorkflowCategory.UNKNOWN
    assert "Unknown logic key: /doesnotexist" in caplog.text


def test_executor_failure_propagates_unchanged() -> None:
    error = ApiServerError("agent crashed", status=503)
    executor = RecordingActionExecutor(fail_with=error)

    with pytest.raises(ApiServerError) as excinfo:
        ExecuteLogicKey()("/buy1", executor)

    assert excinfo.value is error
    assert executor.labels == ["BUY"]


def test_executor_reporting_failure_is_returned_not_raised() -> None:
    executor = RecordingActionExecutor(result=False)

    outcome = ExecuteLogicKey()("/search", executor)

    assert outcome.executed is True
    assert outcome.succeeded is False


def test_custom_table_row_is_routed() -> None:
    table = WorkflowTable.default().extended(
        [("/martingale", WorkflowCategory.TRADE_EXECUTION, "BUY x2")]
    )
    executor = RecordingActionExecutor()

    ExecuteLogicKey(table)("/martingale", executor)

    assert executor.labels == ["BUY x2"]
