# src/rocketlane_sdk/resources/space_documents.py
from logging import LoggerAdapter
from typing import Any, Mapping, Optional

from rocketlane_sdk.base.pagination import Page
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.base.translator import merge_params
from rocketlane_sdk.models import SpaceDocument


class SpaceDocumentsResource(BaseResource[SpaceDocument]):
    resource_path = "space-documents"
    model = SpaceDocument
    table_name = "space_documents"

    async def get_by_space(
        self, space_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[SpaceDocument]:
        return await self.list(logger, merge_params(params, {"spaceId": space_id}))

    async def get_by_type(
        self, type_: str, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[SpaceDocument]:
        return await self.list(logger, merge_params(params, {"type": type_}))

    async def get_by_creator(
        self, user_id: int, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[SpaceDocument]:
        return await self.list(logger, merge_params(params, {"createdBy": user_id}))

    async def move(
        self, document_id: int, space_id: int, logger: LoggerAdapter
    ) -> SpaceDocument:
        """Moves a document to another space."""
        raw = await self._transport.post(
            f"{self._item_path(document_id)}/move", logger, json={"spaceId": space_id}
        )
        return self.model.model_validate(raw)
