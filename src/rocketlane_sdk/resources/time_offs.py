# src/rocketlane_sdk/resources/time_offs.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import TimeOff

TIME_OFF_STATUSES = ("pending", "approved", "rejected")


class TimeOffsResource(BaseResource[TimeOff]):
    """Time-off requests, with the approval workflow calls."""

    resource_path = "time-offs"
    model = TimeOff
    table_name = "time_offs"

    async def approve(self, time_off_id: int, logger: LoggerAdapter) -> TimeOff:
        raw = await self._transport.post(f"{self._item_path(time_off_id)}/approve", logger)
        logger.info(f"Approved time off '{time_off_id}'")
        return self.model.model_validate(raw)

    async def reject(
        self, time_off_id: int, logger: LoggerAdapter, reason: Optional[str] = None
    ) -> TimeOff:
        raw = await self._transport.post(
            f"{self._item_path(time_off_id)}/reject", logger, json={"reason": reason}
        )
        logger.info(f"Rejected time off '{time_off_id}'")
        return self.model.model_validate(raw)

    async def get_by_user(
        self, user_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[TimeOff]:
        return await self.list(logger, merge_params(params, {"userId": user_id}))

    async def get_by_status(
        self, status: str, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[TimeOff]:
        if status not in TIME_OFF_STATUSES:
            raise ValueError(
                f"Time off status must be one of {TIME_OFF_STATUSES}, got {status!r}"
            )
        return await self.list(logger, merge_params(params, {"status": status}))

    async def get_by_type(
        self, type_: str, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[TimeOff]:
        return await self.list(logger, merge_params(params, {"type": type_}))

    async def get_pending(
        self, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[TimeOff]:
        return await self.get_by_status("pending", logger, params)
