# tests/base/query/test_query_builder.py

import pytest

from rocketlane_sdk.base.builder import QueryBuilder
from rocketlane_sdk.base.exceptions import (
    UnboundQueryException,
    UnsupportedFormatException,
)
from rocketlane_sdk.base.query import (
    OrderBy,
    QueryCondition,
    QueryOperator,
    SortDirection,
)


@pytest.fixture
def qb() -> QueryBuilder:
    return QueryBuilder("tasks")


# --- Conditions ---


@pytest.mark.parametrize(
    "method, args, expected_operator",
    [
        ("where_equals", ("status", "active"), QueryOperator.EQ),
        ("where_not_equals", ("status", "done"), QueryOperator.NE),
        ("where_greater_than", ("priority", 3), QueryOperator.GT),
        ("where_less_than", ("priority", 3), QueryOperator.LT),
        ("where_greater_or_equal", ("priority", 3), QueryOperator.GTE),
        ("where_less_or_equal", ("priority", 3), QueryOperator.LTE),
        ("where_like", ("taskName", "%api%"), QueryOperator.LIKE),
        ("where_in", ("projectId", [1, 2]), QueryOperator.IN),
        ("where_not_in", ("status", ["x"]), QueryOperator.NIN),
        ("where_contains", ("taskName", "api"), QueryOperator.CONTAINS),
        ("where_not_contains", ("taskName", "old"), QueryOperator.NOT_CONTAINS),
        ("where_between", ("priority", 1, 3), QueryOperator.BETWEEN),
        ("where_not_between", ("priority", 1, 3), QueryOperator.NOT_BETWEEN),
    ],
)
def test_where_helpers_append_condition(qb, method, args, expected_operator):
    returned = getattr(qb, method)(*args)
    assert returned is qb
    assert len(qb.conditions) == 1
    condition = qb.conditions[0]
    assert condition.field == args[0]
    assert condition.operator is expected_operator


def test_where_accepts_sql_tokens(qb):
    qb.where("priority", ">=", 4).where("status", "<>", "done").where(
        "status", "not in", ("a", "b")
    )
    operators = [c.operator for c in qb.conditions]
    assert operators == [QueryOperator.GTE, QueryOperator.NE, QueryOperator.NIN]
    # tuples are normalised to lists for membership operators
    assert qb.conditions[2].value == ["a", "b"]


def test_where_rejects_unknown_operator(qb):
    with pytest.raises(UnsupportedFormatException, match="Unsupported query operator"):
        qb.where("priority", "~=", 3)


def test_condition_second_value_only_for_ranges():
    with pytest.raises(ValueError, match="requires a second value"):
        QueryCondition("dueDate", QueryOperator.BETWEEN, "2024-01-01")
    with pytest.raises(ValueError, match="does not take a second value"):
        QueryCondition("dueDate", QueryOperator.EQ, "2024-01-01", "2024-02-01")
    condition = QueryCondition("dueDate", "between", "2024-01-01", "2024-02-01")
    assert condition.value2 == "2024-02-01"


def test_in_requires_collection(qb):
    with pytest.raises(TypeError, match="requires a list/set/tuple"):
        qb.where_in("projectId", 5)


def test_like_requires_string(qb):
    with pytest.raises(TypeError, match="requires a string value"):
        qb.where_like("taskName", 5)


# --- Ordering, grouping, paging ---


def test_order_by_composes_in_insertion_order(qb):
    qb.order_by("priority", "DESC").order_by("dueDate")
    assert qb.options.order_by == [
        OrderBy("priority", SortDirection.DESC),
        OrderBy("dueDate", SortDirection.ASC),
    ]


def test_order_by_rejects_bad_direction(qb):
    with pytest.raises(ValueError, match="Sort direction"):
        qb.order_by("priority", "sideways")


def test_group_by_keeps_unique_fields(qb):
    qb.group_by("status", "projectId").group_by("status")
    assert qb.options.group_by == ["status", "projectId"]


@pytest.mark.parametrize("bad", [-1, 1.5, "10", True])
def test_limit_and_offset_validation(qb, bad):
    with pytest.raises(ValueError):
        qb.limit(bad)
    with pytest.raises(ValueError):
        qb.offset(bad)


def test_offset_without_limit_is_allowed(qb):
    assert qb.offset(20).build().params == {"offset": 20}


def test_select_is_stored_as_given(qb):
    tree = {"taskName": True, "project": {"projectName": True}}
    qb.select(tree)
    assert qb.options.select == tree
    qb.select(["taskId", "taskName"])
    assert qb.options.select == ["taskId", "taskName"]


# --- build() ---


def test_build_translates_conditions_and_options(qb):
    built = (
        qb.where_equals("projectId", 123)
        .where_greater_than("priority", 3)
        .order_by("dueDate", "asc")
        .limit(50)
        .build()
    )
    assert built.params == {
        "projectId": 123,
        "priority_gt": 3,
        "sortBy": "dueDate",
        "sortOrder": "asc",
        "pageSize": 50,
    }
    assert built.select is None


def test_build_is_idempotent(qb):
    qb.where_between("dueDate", "2024-01-01", "2024-12-31").order_by("priority", "desc")
    first = qb.build()
    second = qb.build()
    assert first.params == second.params
    assert first.sql == second.sql
    assert len(qb.conditions) == 1


def test_build_result_is_detached_from_builder(qb):
    qb.where_in("projectId", [1, 2]).select(["taskId"])
    built = qb.build()
    built.params["projectId_in"].append(3)
    built.select.append("taskName")
    assert qb.conditions[0].value == [1, 2]
    assert qb.options.select == ["taskId"]


def test_same_field_last_write_wins(qb):
    params = qb.where_equals("status", "active").where_equals("status", "done").build().params
    assert params == {"status": "done"}


def test_only_primary_sort_key_is_sent(qb):
    params = (
        qb.order_by("priority", "desc").order_by("dueDate", "asc").build().params
    )
    assert params["sortBy"] == "priority"
    assert params["sortOrder"] == "desc"
    assert "dueDate" not in params.values()


# --- SQL rendering ---


def test_to_sql_renders_all_clauses(qb):
    qb.select(["taskId", "taskName"]).where_equals("status", "active").where_in(
        "projectId", [1, 2]
    ).where_between("priority", 1, 3).group_by("status").order_by(
        "priority", "desc"
    ).order_by("dueDate").limit(10).offset(5)
    assert qb.to_sql() == (
        "SELECT taskId, taskName FROM tasks "
        "WHERE status = 'active' AND projectId IN (1, 2) AND priority BETWEEN 1 AND 3 "
        "GROUP BY status ORDER BY priority DESC, dueDate ASC LIMIT 10 OFFSET 5"
    )


def test_to_sql_uses_tree_keys_for_select(qb):
    qb.select({"taskName": True, "project": {"projectName": True}})
    assert qb.to_sql() == "SELECT taskName, project FROM tasks"


def test_to_sql_keeps_not_contains_even_though_params_omit_it(qb):
    built = qb.where_not_contains("taskName", "deprecated").build()
    assert "taskName NOT CONTAINS 'deprecated'" in built.sql
    assert built.params == {}


# --- copy / parsed form ---


def test_copy_is_independent(qb):
    qb.where_equals("status", "active").order_by("dueDate")
    clone = qb.copy().where_equals("projectId", 1).order_by("priority")
    assert len(qb.conditions) == 1
    assert len(qb.options.order_by) == 1
    assert len(clone.conditions) == 2


def test_to_parsed_query(qb):
    parsed = qb.where_equals("status", "active").limit(5).to_parsed_query()
    assert parsed.table_name == "tasks"
    assert parsed.conditions == [QueryCondition("status", QueryOperator.EQ, "active")]
    assert parsed.options.limit == 5


# --- execute() ---


async def test_execute_unbound_raises(qb, logger):
    qb.where_equals("status", "active")
    assert not qb.is_bound
    with pytest.raises(UnboundQueryException):
        await qb.execute(logger)
    # still usable for inspection
    assert qb.build().params == {"status": "active"}


async def test_execute_bound_calls_executor(qb, logger):
    seen = []

    async def executor(builder, log):
        seen.append(builder)
        return "result"

    qb.bind(executor)
    assert qb.is_bound
    assert await qb.execute(logger) == "result"
    assert seen == [qb]
