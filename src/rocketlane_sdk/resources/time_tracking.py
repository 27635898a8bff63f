# src/rocketlane_sdk/resources/time_tracking.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import TimeEntry


class TimeTrackingResource(BaseResource[TimeEntry]):
    resource_path = "time-entries"
    model = TimeEntry
    table_name = "time_entries"

    async def get_for_user(
        self,
        user_id: int,
        logger: LoggerAdapter,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Page[TimeEntry]:
        filters = {"userId": user_id}
        if date_from is not None:
            filters["dateFrom"] = date_from
        if date_to is not None:
            filters["dateTo"] = date_to
        return await self.list(logger, merge_params(params, filters))
