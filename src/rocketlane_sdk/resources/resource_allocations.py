# src/rocketlane_sdk/resources/resource_allocations.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import ResourceAllocation


class ResourceAllocationsResource(BaseResource[ResourceAllocation]):
    resource_path = "resource-allocations"
    model = ResourceAllocation
    table_name = "resource_allocations"

    async def get_by_project(
        self, project_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[ResourceAllocation]:
        return await self.list(logger, merge_params(params, {"projectId": project_id}))

    async def get_by_user(
        self, user_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[ResourceAllocation]:
        return await self.list(logger, merge_params(params, {"userId": user_id}))

    async def get_by_date_range(
        self,
        start_date_from: str,
        start_date_to: str,
        logger: LoggerAdapter,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Page[ResourceAllocation]:
        """Allocations whose start date falls in the range, both ends inclusive."""
        return await self.list(
            logger,
            merge_params(
                params,
                {"startDateFrom": start_date_from, "startDateTo": start_date_to},
            ),
        )
