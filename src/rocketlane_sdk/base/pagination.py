# src/rocketlane_sdk/base/pagination.py
"""
Token-based pagination over an injected list method.

A list method takes a flat parameter dict and returns one page. While a page
reports ``hasMore`` with a ``nextPageToken``, the next page is requested by
repeating the original parameters with ``pageToken`` set to that token. Once
either is missing the chain is exhausted.

Fetches in one chain are strictly sequential. Errors raised by the list
method are not caught here; they surface at the await (or async-for pull)
that triggered the fetch.
"""

from logging import LoggerAdapter
from typing import (
    Any,
    AsyncGenerator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DEFAULT_MAX_PAGES = 50
PAGE_TOKEN_PARAM = "pageToken"
PAGE_SIZE_PARAM = "pageSize"


class PaginationInfo(BaseModel):
    """The ``pagination`` block of a list response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page_size: Optional[int] = Field(default=None, alias="pageSize")
    has_more: bool = Field(default=False, alias="hasMore")
    total_record_count: Optional[int] = Field(default=None, alias="totalRecordCount")
    next_page: Optional[str] = Field(default=None, alias="nextPage")
    next_page_token: Optional[str] = Field(default=None, alias="nextPageToken")

    @property
    def is_exhausted(self) -> bool:
        return not self.has_more or not self.next_page_token


class Page(BaseModel, Generic[T]):
    """One page of records. Pages are never modified after they are fetched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: List[T] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)

    @classmethod
    def coerce(cls, raw: Union["Page[Any]", Mapping[str, Any]]) -> "Page[Any]":
        """Accepts a Page or the raw ``{data, pagination}`` mapping."""
        if isinstance(raw, Page):
            return raw
        if isinstance(raw, Mapping):
            return cls.model_validate(raw)
        raise TypeError(
            f"List method must return a Page or a mapping, got {type(raw).__name__}"
        )


ListMethod = Callable[[Dict[str, Any]], Awaitable[Union[Page[Any], Mapping[str, Any]]]]


def with_page_token(params: Optional[Mapping[str, Any]], token: str) -> Dict[str, Any]:
    """Returns a copy of ``params`` carrying the continuation token."""
    next_params = dict(params or {})
    next_params[PAGE_TOKEN_PARAM] = token
    return next_params


async def _fetch(
    list_method: ListMethod, params: Dict[str, Any], logger: LoggerAdapter
) -> Page[Any]:
    logger.debug(f"Fetching page with params: {params}")
    page = Page.coerce(await list_method(params))
    logger.debug(
        f"Fetched {len(page.data)} items (hasMore={page.pagination.has_more})"
    )
    return page


async def get_next_page(
    page: Page[T],
    params: Optional[Mapping[str, Any]],
    list_method: ListMethod,
    logger: LoggerAdapter,
) -> Optional[Page[T]]:
    """
    Fetches the page following ``page``.

    Returns None without calling ``list_method`` when ``page`` is the last one.
    """
    if page.pagination.is_exhausted:
        logger.debug("No next page: pagination is exhausted.")
        return None
    next_params = with_page_token(params, page.pagination.next_page_token)
    return await _fetch(list_method, next_params, logger)


async def get_all_pages(
    params: Optional[Mapping[str, Any]],
    list_method: ListMethod,
    logger: LoggerAdapter,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> List[T]:
    """
    Fetches pages until exhausted and returns all items in order.

    At most ``max_pages`` pages are fetched. Hitting the cap is not an error:
    a warning is logged and the items collected so far are returned. Use
    ``iterate_pages``/``iterate_items`` for result sets that large.
    """
    if not isinstance(max_pages, int) or max_pages < 1:
        raise ValueError("max_pages must be a positive integer.")
    items: List[T] = []
    current_params = dict(params or {})
    page_count = 0

    while True:
        if page_count >= max_pages:
            logger.warning(
                f"Reached maximum page limit ({max_pages}); returning "
                f"{len(items)} items. Iterate pages for very large datasets."
            )
            break
        page = await _fetch(list_method, current_params, logger)
        items.extend(page.data)
        page_count += 1
        if page.pagination.is_exhausted:
            break
        current_params = with_page_token(current_params, page.pagination.next_page_token)

    logger.info(f"Fetched {len(items)} items across {page_count} pages.")
    return items


async def iterate_pages(
    params: Optional[Mapping[str, Any]],
    list_method: ListMethod,
    logger: LoggerAdapter,
) -> AsyncGenerator[Page[T], None]:
    """Lazily yields pages; each pull past the current page performs one fetch."""
    current_params = dict(params or {})
    while True:
        page = await _fetch(list_method, current_params, logger)
        yield page
        if page.pagination.is_exhausted:
            return
        current_params = with_page_token(current_params, page.pagination.next_page_token)


async def iterate_items(
    params: Optional[Mapping[str, Any]],
    list_method: ListMethod,
    logger: LoggerAdapter,
) -> AsyncGenerator[T, None]:
    """Lazily yields individual items, page order then in-page order."""
    async for page in iterate_pages(params, list_method, logger):
        for item in page.data:
            yield item


class PaginatedResponse(Generic[T]):
    """
    A fetched page that remembers how it was requested, so the caller can
    continue from the response itself.
    """

    def __init__(
        self,
        page: Page[T],
        params: Optional[Mapping[str, Any]],
        list_method: ListMethod,
        logger: LoggerAdapter,
    ):
        self.page = page
        self.params = dict(params or {})
        self._list_method = list_method
        self._logger = logger

    @property
    def data(self) -> List[T]:
        return self.page.data

    @property
    def pagination(self) -> PaginationInfo:
        return self.page.pagination

    @property
    def has_more(self) -> bool:
        return not self.page.pagination.is_exhausted

    async def get_next_page(self) -> Optional["PaginatedResponse[T]"]:
        next_page = await get_next_page(
            self.page, self.params, self._list_method, self._logger
        )
        if next_page is None:
            return None
        return PaginatedResponse(next_page, self.params, self._list_method, self._logger)

    async def get_all_remaining(self, max_pages: Optional[int] = None) -> List[T]:
        """
        Items of this page and every following page. Without ``max_pages`` the
        chain is followed to the end; with it, at most that many pages
        (including this one) contribute.
        """
        items: List[T] = []
        pages = 0
        async for response in self.iterate_remaining_pages():
            items.extend(response.data)
            pages += 1
            if max_pages is not None and pages >= max_pages and response.has_more:
                self._logger.warning(
                    f"Reached maximum page limit ({max_pages}); returning {len(items)} items."
                )
                break
        return items

    async def iterate_remaining_pages(
        self,
    ) -> AsyncGenerator["PaginatedResponse[T]", None]:
        current: Optional[PaginatedResponse[T]] = self
        while current is not None:
            yield current
            current = await current.get_next_page()

    async def iterate_remaining_items(self) -> AsyncGenerator[T, None]:
        async for response in self.iterate_remaining_pages():
            for item in response.data:
                yield item

    def __repr__(self) -> str:
        return (
            f"PaginatedResponse(items={len(self.page.data)}, "
            f"has_more={self.has_more}, params={self.params!r})"
        )
