# src/rocketlane_sdk/base/resource.py

from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import LoggerAdapter
from typing import (
    Any,
    AsyncGenerator,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
)

from rocketlane_sdk.base.builder import QueryBuilder
from rocketlane_sdk.base.exceptions import (
    ObjectNotFoundException,
    UnsupportedFormatException,
)
from rocketlane_sdk.base.pagination import (
    PAGE_SIZE_PARAM,
    ListMethod,
    Page,
    PaginatedResponse,
    get_all_pages,
    get_next_page,
    iterate_items,
    iterate_pages,
)
from rocketlane_sdk.base.selection import apply_selection
from rocketlane_sdk.base.sql_template import UNKNOWN_TABLE, SqlTemplate
from rocketlane_sdk.base.transport import Transport
from rocketlane_sdk.base.translator import merge_params, translate
from rocketlane_sdk.base.utils import to_plain_data
from rocketlane_sdk.config import ClientConfig

T = TypeVar("T")


@dataclass
class QueryResult(Generic[T]):
    """Outcome of running a builder or SQL template against a list endpoint."""

    data: List[Any]
    query: str
    params: Dict[str, Any]
    executed_at: datetime
    count: int


class BaseResource(Generic[T], ABC):
    """
    Base class for API resources with a paginated list endpoint.

    Subclasses set ``resource_path`` (relative to the configured base path),
    ``model`` (the record type) and ``table_name`` (the name used in query
    builders and SQL templates). Besides plain CRUD calls it offers:

    - the pagination helpers (next page, capped fetch-all, lazy page and
      item iteration), all built on ``list``;
    - query builders bound to this resource and execution of SQL templates;
    - field selection on fetched records.

    Every network call goes through the injected ``Transport``; its errors
    propagate unchanged.
    """

    resource_path: str
    model: Type[T]
    table_name: str

    def __init__(self, transport: Transport, config: Optional[ClientConfig] = None):
        self._transport = transport
        self._config = config or ClientConfig()
        self._page_type = Page[self.model]

    @property
    def path(self) -> str:
        return f"{self._config.base_path}/{self.resource_path}"

    def _item_path(self, item_id: Any) -> str:
        return f"{self.path}/{item_id}"

    def _prepare_params(self, params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        prepared = dict(params or {})
        if self._config.page_size is not None:
            prepared.setdefault(PAGE_SIZE_PARAM, self._config.page_size)
        return prepared

    def _list_method(self, logger: LoggerAdapter) -> ListMethod:
        async def fetch(params: Dict[str, Any]) -> Page[T]:
            return await self.list(logger, params)

        return fetch

    # --- Core CRUD Methods ---

    async def list(
        self, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> Page[T]:
        """
        Fetch one page of records.

        Args:
            logger: Logger adapter for recording operations.
            params: Flat query parameters, optionally with ``pageToken``.

        Returns:
            The page, with records parsed into ``model``.
        """
        request_params = self._prepare_params(params)
        logger.debug(f"Listing {self.table_name} with params: {request_params}")
        raw = await self._transport.get(self.path, logger, params=request_params)
        return self._page_type.model_validate(to_plain_data(raw))

    async def get(self, item_id: Any, logger: LoggerAdapter) -> T:
        """
        Retrieve one record by ID.

        Raises:
            ObjectNotFoundException: If the API returns no body for the ID.
        """
        raw = await self._transport.get(self._item_path(item_id), logger)
        if raw is None:
            raise ObjectNotFoundException(
                f"{self.model.__name__} with ID '{item_id}' not found."
            )
        return self.model.model_validate(raw)

    async def create(self, data: Any, logger: LoggerAdapter) -> T:
        raw = await self._transport.post(self.path, logger, json=to_plain_data(data))
        logger.info(f"Created {self.model.__name__} in {self.table_name}")
        return self.model.model_validate(raw)

    async def update(self, item_id: Any, data: Any, logger: LoggerAdapter) -> T:
        raw = await self._transport.put(
            self._item_path(item_id), logger, json=to_plain_data(data)
        )
        logger.info(f"Updated {self.model.__name__} '{item_id}'")
        return self.model.model_validate(raw)

    async def delete(self, item_id: Any, logger: LoggerAdapter) -> None:
        await self._transport.delete(self._item_path(item_id), logger)
        logger.info(f"Deleted {self.model.__name__} '{item_id}'")

    async def search(
        self,
        text: str,
        logger: LoggerAdapter,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Page[T]:
        return await self.list(logger, merge_params(params, {"search": text}))

    # --- Pagination ---

    async def list_with_pagination(
        self, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> PaginatedResponse[T]:
        """Fetch the first page wrapped so it can continue the chain itself."""
        page = await self.list(logger, params)
        return PaginatedResponse(page, params, self._list_method(logger), logger)

    async def get_next_page(
        self,
        page: Page[T],
        logger: LoggerAdapter,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Page[T]]:
        """The page after ``page`` (requested with ``params``), or None at the end."""
        return await get_next_page(page, params, self._list_method(logger), logger)

    async def get_all(
        self,
        logger: LoggerAdapter,
        params: Optional[Mapping[str, Any]] = None,
        max_pages: Optional[int] = None,
    ) -> List[T]:
        """
        All records across pages, stopping after ``max_pages`` pages (defaults
        to the client's ``max_pages``) without error.
        """
        return await get_all_pages(
            params,
            self._list_method(logger),
            logger,
            max_pages=max_pages if max_pages is not None else self._config.max_pages,
        )

    async def iterate_pages(
        self, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> AsyncGenerator[Page[T], None]:
        async for page in iterate_pages(params, self._list_method(logger), logger):
            yield page

    async def iterate(
        self, logger: LoggerAdapter, params: Optional[Mapping[str, Any]] = None
    ) -> AsyncGenerator[T, None]:
        async for item in iterate_items(params, self._list_method(logger), logger):
            yield item

    # --- Queries ---

    def query_builder(self) -> QueryBuilder[T]:
        """A builder bound to this resource; ``await builder.execute(logger)`` runs it."""
        return QueryBuilder(self.table_name, executor=self.query)

    def _check_table(self, table_name: str, logger: LoggerAdapter) -> None:
        if table_name not in (self.table_name, UNKNOWN_TABLE):
            logger.warning(
                f"Query targets '{table_name}' but runs against {self.table_name}."
            )

    async def query(
        self, builder: QueryBuilder[Any], logger: LoggerAdapter
    ) -> QueryResult[T]:
        """
        Run a builder: one list call with the built params, then the builder's
        selection (if any) applied to the returned records.
        """
        built = builder.build()
        self._check_table(builder.table_name, logger)
        executed_at = datetime.now(timezone.utc)
        page = await self.list(logger, built.params)
        data: List[Any] = list(page.data)
        if built.select:
            data = apply_selection(data, built.select)
        return QueryResult(
            data=data,
            query=built.sql,
            params=built.params,
            executed_at=executed_at,
            count=len(data),
        )

    async def query_sql(
        self, template: SqlTemplate, logger: LoggerAdapter
    ) -> QueryResult[T]:
        """
        Run a SQL template. Only the fields the translator recognises reach
        the request; see ``translator.where_clause_to_params``.

        Raises:
            UnsupportedFormatException: If ``template`` is not a SqlTemplate.
        """
        if not isinstance(template, SqlTemplate):
            raise UnsupportedFormatException(
                f"query_sql() requires a SqlTemplate built with sql(), "
                f"got {type(template).__name__}"
            )
        parsed = template.parse()
        self._check_table(parsed.table_name, logger)
        params = translate(parsed)
        executed_at = datetime.now(timezone.utc)
        page = await self.list(logger, params)
        return QueryResult(
            data=list(page.data),
            query=template.query,
            params=params,
            executed_at=executed_at,
            count=len(page.data),
        )

    # --- Field selection ---

    def apply_field_selection(
        self, page: Page[Any], selection: Mapping[str, Any]
    ) -> Page[Dict[str, Any]]:
        """A new page holding the projected records; ``page`` is left untouched."""
        return Page[Dict[str, Any]](
            data=apply_selection(page.data, selection),
            pagination=page.pagination,
        )

    async def list_with_fields(
        self,
        selection: Mapping[str, Any],
        logger: LoggerAdapter,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Page[Dict[str, Any]]:
        page = await self.list(logger, params)
        return self.apply_field_selection(page, selection)
