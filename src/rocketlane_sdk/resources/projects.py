# src/rocketlane_sdk/resources/projects.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import Project


class ProjectsResource(BaseResource[Project]):
    resource_path = "projects"
    model = Project
    table_name = "projects"

    async def get_by_company(
        self, company_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Project]:
        return await self.list(logger, merge_params(params, {"companyId": company_id}))

    async def get_by_owner(
        self, owner_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Project]:
        return await self.list(logger, merge_params(params, {"ownerId": owner_id}))

    async def archive(self, project_id: int, logger: LoggerAdapter) -> Project:
        raw = await self._transport.post(f"{self._item_path(project_id)}/archive", logger)
        return self.model.model_validate(raw)
