# tests/base/query/test_translator.py

import logging

import pytest

from rocketlane_sdk.base.exceptions import UnsupportedFormatException
from rocketlane_sdk.base.query import (
    OrderBy,
    ParsedQuery,
    QueryCondition,
    QueryOperator,
    QueryOptions,
    WhereClause,
)
from rocketlane_sdk.base.translator import (
    condition_to_params,
    conditions_to_params,
    merge_params,
    options_to_params,
    translate,
    where_clause_to_params,
)


@pytest.mark.parametrize(
    "operator, expected",
    [
        (QueryOperator.EQ, {"priority": 3}),
        (QueryOperator.NE, {"priority_ne": 3}),
        (QueryOperator.GT, {"priority_gt": 3}),
        (QueryOperator.LT, {"priority_lt": 3}),
        (QueryOperator.GTE, {"priority_gte": 3}),
        (QueryOperator.LTE, {"priority_lte": 3}),
        (QueryOperator.LIKE, {"priority_like": 3}),
        (QueryOperator.CONTAINS, {"priority_contains": 3}),
    ],
)
def test_single_valued_operators(operator, expected):
    assert condition_to_params(QueryCondition("priority", operator, 3)) == expected


def test_membership_operators_keep_the_list():
    assert condition_to_params(QueryCondition("status", "IN", ["a", "b"])) == {
        "status_in": ["a", "b"]
    }
    assert condition_to_params(QueryCondition("status", "NOT IN", ["c"])) == {
        "status_nin": ["c"]
    }


def test_between_expands_to_inclusive_bounds():
    condition = QueryCondition("dueDate", "BETWEEN", "2024-01-01", "2024-12-31")
    assert condition_to_params(condition) == {
        "dueDate_gte": "2024-01-01",
        "dueDate_lte": "2024-12-31",
    }


def test_not_between_expands_to_exclusive_outside_bounds():
    condition = QueryCondition("priority", "NOT BETWEEN", 2, 4)
    assert condition_to_params(condition) == {"priority_lt": 2, "priority_gt": 4}


def test_not_contains_is_omitted_with_warning(caplog):
    condition = QueryCondition("taskName", QueryOperator.NOT_CONTAINS, "old")
    # The package logger does not propagate, so listen on it directly.
    package_logger = logging.getLogger("rocketlane_sdk")
    package_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="rocketlane_sdk"):
            assert condition_to_params(condition) == {}
    finally:
        package_logger.removeHandler(caplog.handler)
    assert "no API parameter" in caplog.text


def test_conditions_last_write_wins():
    params = conditions_to_params(
        [
            QueryCondition("status", "=", "active"),
            QueryCondition("priority", ">", 1),
            QueryCondition("status", "=", "done"),
        ]
    )
    assert params == {"status": "done", "priority_gt": 1}


def test_options_translate_primary_sort_and_paging():
    options = QueryOptions(
        limit=25,
        offset=50,
        order_by=[OrderBy("dueDate", "desc"), OrderBy("priority")],
    )
    assert options_to_params(options) == {
        "sortBy": "dueDate",
        "sortOrder": "desc",
        "pageSize": 25,
        "offset": 50,
    }


def test_options_zero_limit_is_sent():
    assert options_to_params(QueryOptions(limit=0, offset=0)) == {
        "pageSize": 0,
        "offset": 0,
    }


def test_empty_options_emit_nothing():
    assert options_to_params(QueryOptions()) == {}


# --- Raw WHERE text ---


def test_where_clause_recognised_fields():
    clause = WhereClause(
        raw="projectId = $1 AND status = $2 AND assigneeId = $3",
        params=[123, "active", 7],
    )
    assert where_clause_to_params(clause) == {
        "projectId": 123,
        "status": "active",
        "assigneeId": 7,
    }


def test_where_clause_field_names_are_case_insensitive():
    clause = WhereClause(raw="PROJECTID = $1 and Assignees = $2", params=[1, 2])
    assert where_clause_to_params(clause) == {"projectId": 1, "assigneeId": 2}


def test_where_clause_binds_by_placeholder_not_position():
    clause = WhereClause(
        raw="priority = $1 AND projectId = $2 AND taskName LIKE $3",
        params=[5, 42, "%api%"],
    )
    assert where_clause_to_params(clause) == {"projectId": 42}


def test_where_clause_in_list():
    clause = WhereClause(raw="status IN ($1, $2)", params=["active", "blocked"])
    assert where_clause_to_params(clause) == {"status_in": ["active", "blocked"]}


def test_where_clause_due_date_between():
    clause = WhereClause(
        raw="projectId = $1 AND dueDate BETWEEN $2 AND $3",
        params=[9, "2024-01-01", "2024-01-31"],
    )
    assert where_clause_to_params(clause) == {
        "projectId": 9,
        "dueDateFrom": "2024-01-01",
        "dueDateTo": "2024-01-31",
    }


def test_where_clause_missing_parameter_is_skipped():
    clause = WhereClause(raw="projectId = $1 AND status = $2", params=[1])
    assert where_clause_to_params(clause) == {"projectId": 1}


def test_where_clause_literals_are_not_translated():
    clause = WhereClause(raw="status = 'active'", params=[])
    assert where_clause_to_params(clause) == {}


# --- translate() ---


def test_translate_condition_list():
    parsed = ParsedQuery(
        table_name="tasks",
        conditions=[QueryCondition("projectId", "=", 1)],
        options=QueryOptions(limit=10, order_by=[OrderBy("dueDate")]),
    )
    assert translate(parsed) == {
        "projectId": 1,
        "sortBy": "dueDate",
        "sortOrder": "asc",
        "pageSize": 10,
    }


def test_translate_where_clause():
    parsed = ParsedQuery(
        table_name="tasks",
        conditions=WhereClause(raw="status = $1", params=["done"]),
        options=QueryOptions(offset=20),
    )
    assert translate(parsed) == {"status": "done", "offset": 20}


def test_translate_rejects_unknown_condition_carrier():
    parsed = ParsedQuery(table_name="tasks", conditions="status = 'x'", options=QueryOptions())
    with pytest.raises(UnsupportedFormatException):
        translate(parsed)


def test_merge_params_does_not_modify_inputs():
    base = {"projectId": 1, "pageSize": 10}
    merged = merge_params(base, {"pageSize": 50, "search": "api"})
    assert merged == {"projectId": 1, "pageSize": 50, "search": "api"}
    assert base == {"projectId": 1, "pageSize": 10}
    assert merge_params(None, None) == {}
