# src/rocketlane_sdk/resources/phases.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import Phase


class PhasesResource(BaseResource[Phase]):
    resource_path = "phases"
    model = Phase
    table_name = "phases"

    async def get_by_project(
        self, project_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[Phase]:
        return await self.list(logger, merge_params(params, {"projectId": project_id}))
