# tests/base/test_utils.py

from datetime import date

from rocketlane_sdk.base.utils import format_sql_value, to_plain_data
from rocketlane_sdk.models import Task


def test_models_dump_every_field_by_default():
    task = Task.model_validate({"taskId": 1, "taskName": "Kickoff call"})
    plain = to_plain_data(task)
    assert plain["taskId"] == 1
    assert plain["dueDate"] is None
    assert plain["assignees"] == []
    assert plain["archived"] is False


def test_exclude_unset_keeps_only_sent_fields():
    task = Task.model_validate(
        {"taskId": 1, "taskName": "Kickoff call", "project": {"projectId": 10}, "custom": 7}
    )
    assert to_plain_data({"items": [task]}, exclude_unset=True) == {
        "items": [
            {"taskId": 1, "taskName": "Kickoff call", "project": {"projectId": 10}, "custom": 7}
        ]
    }


def test_format_sql_value():
    assert format_sql_value("a") == "'a'"
    assert format_sql_value(date(2024, 1, 2)) == "'2024-01-02'"
    assert format_sql_value(True) == "true"
    assert format_sql_value(None) == "NULL"
    assert format_sql_value(4) == "4"
