# src/rocketlane_sdk/resources/tasks.py
from datetime import date
from logging import LoggerAdapter
from typing import Any, List, Mapping, Optional, Union

from rocketlane_sdk.base.builder import QueryBuilder
from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource, QueryResult
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import Task

HIGH_PRIORITY_THRESHOLD = 4


class TasksResource(BaseResource[Task]):
    """Tasks, with shortcuts that start pre-filtered bound query builders."""

    resource_path = "tasks"
    model = Task
    table_name = "tasks"

    async def get_by_project(
        self, project_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Task]:
        return await self.list(logger, merge_params(params, {"projectId": project_id}))

    async def get_by_phase(
        self, phase_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Task]:
        return await self.list(logger, merge_params(params, {"phaseId": phase_id}))

    async def get_by_assignee(
        self, assignee_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Task]:
        return await self.list(logger, merge_params(params, {"assigneeId": assignee_id}))

    # --- Fluent shortcuts ---

    def for_project(self, project_id: int) -> QueryBuilder[Task]:
        return self.query_builder().where_equals("projectId", project_id)

    def assigned_to(self, user_id: Union[int, List[int]]) -> QueryBuilder[Task]:
        if isinstance(user_id, (list, tuple, set)):
            return self.query_builder().where_in("assigneeId", user_id)
        return self.query_builder().where_equals("assigneeId", user_id)

    def due_between(self, start_date: str, end_date: str) -> QueryBuilder[Task]:
        return self.query_builder().where_between("dueDate", start_date, end_date)

    def with_status(self, status: Union[int, str]) -> QueryBuilder[Task]:
        return self.query_builder().where_equals("status", status)

    def name_contains(self, text: str) -> QueryBuilder[Task]:
        return self.query_builder().where_contains("taskName", text)

    def overdue(self, today: Optional[date] = None) -> QueryBuilder[Task]:
        cutoff = (today or date.today()).isoformat()
        return self.query_builder().where_less_than("dueDate", cutoff)

    def high_priority(self) -> QueryBuilder[Task]:
        return self.query_builder().where_greater_or_equal(
            "priority", HIGH_PRIORITY_THRESHOLD
        )

    def with_effort_more_than(self, minutes: int) -> QueryBuilder[Task]:
        return self.query_builder().where_greater_than("effortInMinutes", minutes)

    async def find_critical_tasks(
        self, logger: LoggerAdapter, project_id: Optional[int] = None
    ) -> QueryResult[Task]:
        builder = self.high_priority().order_by("dueDate", "asc")
        if project_id is not None:
            builder.where_equals("projectId", project_id)
        return await builder.execute(logger)

    async def find_team_workload(
        self,
        assignee_ids: List[int],
        date_from: str,
        date_to: str,
        logger: LoggerAdapter,
    ) -> QueryResult[Task]:
        builder = (
            self.assigned_to(assignee_ids)
            .where_between("dueDate", date_from, date_to)
            .order_by("dueDate", "asc")
        )
        return await builder.execute(logger)
