# src/rocketlane_sdk/base/builder.py
import copy
import logging
from dataclasses import dataclass
from logging import LoggerAdapter
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    TypeVar,
    Union,
)

from .exceptions import UnboundQueryException
from .query import (
    OrderBy,
    ParsedQuery,
    QueryCondition,
    QueryOperator,
    QueryOptions,
    SortDirection,
)
from .translator import translate
from .utils import format_sql_value

# --- Setup Logging ---
log = logging.getLogger(__name__)

T = TypeVar("T")

Selection = Union[List[str], Dict[str, Any]]
QueryExecutor = Callable[["QueryBuilder[T]", LoggerAdapter], Awaitable[Any]]


@dataclass
class BuiltQuery:
    """Result of QueryBuilder.build(): request params plus advisory output."""

    params: Dict[str, Any]
    select: Optional[Selection]
    sql: str


# --- Query Builder ---
class QueryBuilder(Generic[T]):
    """
    Accumulates filter, sort and shape directives through a fluent API.

    Every chain method mutates the builder and returns the same instance, so
    a builder belongs to a single owner: it is not safe to chain calls on one
    instance from concurrent tasks or threads. Use ``copy()`` to branch a
    query.

    ``build()`` renders the flat request parameters and, independently, a
    SQL-like string for logging. The string is advisory only and never drives
    the request.

    A builder created by a resource is bound to it and can be executed; a
    standalone builder can be built and inspected but ``execute()`` raises
    ``UnboundQueryException``.
    """

    table_name: str
    _conditions: List[QueryCondition]
    _options: QueryOptions
    _executor: Optional[QueryExecutor]
    _logger: logging.Logger

    def __init__(self, table_name: str, executor: Optional[QueryExecutor] = None):
        self._logger = log
        self.table_name = table_name
        self._conditions = []
        self._options = QueryOptions()
        self._executor = executor
        self._logger.debug(
            f"Initialized QueryBuilder for '{table_name}' (bound={executor is not None})"
        )

    # --- WHERE ---

    def where(
        self,
        field: str,
        operator: Union[QueryOperator, str],
        value: Any,
        value2: Any = None,
    ) -> "QueryBuilder[T]":
        """Appends one condition; conditions are combined with AND."""
        condition = QueryCondition(field, operator, value, value2)
        self._conditions.append(condition)
        self._logger.debug(f"Added condition: {condition!r}")
        return self

    def where_equals(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.EQ, value)

    def where_not_equals(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.NE, value)

    def where_greater_than(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.GT, value)

    def where_less_than(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.LT, value)

    def where_greater_or_equal(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.GTE, value)

    def where_less_or_equal(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.LTE, value)

    def where_like(self, field: str, pattern: str) -> "QueryBuilder[T]":
        if not isinstance(pattern, str):
            raise TypeError("Operator 'LIKE' requires a string value")
        return self.where(field, QueryOperator.LIKE, pattern)

    def where_in(self, field: str, values: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.IN, values)

    def where_not_in(self, field: str, values: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.NIN, values)

    def where_contains(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.CONTAINS, value)

    def where_not_contains(self, field: str, value: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.NOT_CONTAINS, value)

    def where_between(self, field: str, low: Any, high: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.BETWEEN, low, high)

    def where_not_between(self, field: str, low: Any, high: Any) -> "QueryBuilder[T]":
        return self.where(field, QueryOperator.NOT_BETWEEN, low, high)

    # --- Shape ---

    def select(self, fields: Selection) -> "QueryBuilder[T]":
        """
        Sets the projection: a list of field names or a nested selection tree
        such as ``{"taskName": True, "project": {"projectName": True}}``.
        Applied to fetched records, not sent to the API.
        """
        if not isinstance(fields, (list, tuple, dict)):
            raise TypeError("select() requires a list of field names or a dict")
        self._options.select = list(fields) if isinstance(fields, tuple) else fields
        return self

    def order_by(
        self, field: str, direction: Union[SortDirection, str] = SortDirection.ASC
    ) -> "QueryBuilder[T]":
        """Appends a sort key; the first call sets the primary key."""
        entry = OrderBy(field, direction)
        self._options.order_by.append(entry)
        self._logger.debug(f"Added sort key: {entry.field} {entry.direction.value}")
        return self

    def group_by(self, *fields: str) -> "QueryBuilder[T]":
        for name in fields:
            if name not in self._options.group_by:
                self._options.group_by.append(name)
        return self

    def limit(self, num: int) -> "QueryBuilder[T]":
        """Sets the page size requested from the API."""
        if not isinstance(num, int) or isinstance(num, bool) or num < 0:
            raise ValueError("Limit must be a non-negative integer.")
        self._options.limit = num
        self._logger.debug(f"Query limit set to: {num}")
        return self

    def offset(self, num: int) -> "QueryBuilder[T]":
        """Sets the offset; passed through as-is, servers may ignore it."""
        if not isinstance(num, int) or isinstance(num, bool) or num < 0:
            raise ValueError("Offset must be a non-negative integer.")
        self._options.offset = num
        self._logger.debug(f"Query offset set to: {num}")
        return self

    # --- Inspection ---

    @property
    def conditions(self) -> List[QueryCondition]:
        return list(self._conditions)

    @property
    def options(self) -> QueryOptions:
        return self._options.copy()

    @property
    def is_bound(self) -> bool:
        return self._executor is not None

    def copy(self) -> "QueryBuilder[T]":
        """Returns an independent clone that shares only the executor."""
        clone = QueryBuilder(self.table_name, self._executor)
        clone._conditions = copy.deepcopy(self._conditions)
        clone._options = self._options.copy()
        return clone

    def to_parsed_query(self) -> ParsedQuery:
        return ParsedQuery(
            table_name=self.table_name,
            conditions=copy.deepcopy(self._conditions),
            options=self._options.copy(),
        )

    # --- Terminal operations ---

    def build(self) -> BuiltQuery:
        """Renders request parameters and the diagnostic SQL without side effects."""
        parsed = self.to_parsed_query()
        built = BuiltQuery(
            params=translate(parsed),
            select=copy.deepcopy(parsed.options.select),
            sql=self.to_sql(),
        )
        self._logger.debug(f"Built query for '{self.table_name}': {built.params}")
        return built

    def bind(self, executor: QueryExecutor) -> "QueryBuilder[T]":
        """Attaches the coroutine used by execute()."""
        self._executor = executor
        return self

    async def execute(self, logger: LoggerAdapter) -> Any:
        """
        Runs the query through the bound resource.

        Raises:
            UnboundQueryException: If the builder was never bound.
        """
        if self._executor is None:
            raise UnboundQueryException(
                f"Query on '{self.table_name}' is not bound to a resource."
            )
        logger.debug(f"Executing query: {self.to_sql()}")
        return await self._executor(self, logger)

    # --- SQL rendering ---

    def to_sql(self) -> str:
        """Human-readable SQL-like rendering, for logging and debugging."""
        sql = f"SELECT {self._select_clause()} FROM {self.table_name}"
        if self._conditions:
            where = " AND ".join(self._condition_to_sql(c) for c in self._conditions)
            sql += f" WHERE {where}"
        if self._options.group_by:
            sql += f" GROUP BY {', '.join(self._options.group_by)}"
        if self._options.order_by:
            order = ", ".join(
                f"{o.field} {o.direction.value.upper()}" for o in self._options.order_by
            )
            sql += f" ORDER BY {order}"
        if self._options.limit is not None:
            sql += f" LIMIT {self._options.limit}"
        if self._options.offset is not None:
            sql += f" OFFSET {self._options.offset}"
        return sql

    def _select_clause(self) -> str:
        select = self._options.select
        if not select:
            return "*"
        # For tree selections only the top-level keys are shown.
        return ", ".join(select.keys() if isinstance(select, dict) else select)

    @staticmethod
    def _condition_to_sql(condition: QueryCondition) -> str:
        op = condition.operator
        if op.is_range:
            return (
                f"{condition.field} {op.value} {format_sql_value(condition.value)} "
                f"AND {format_sql_value(condition.value2)}"
            )
        if op.is_membership:
            items = ", ".join(format_sql_value(v) for v in condition.value)
            return f"{condition.field} {op.value} ({items})"
        return f"{condition.field} {op.value} {format_sql_value(condition.value)}"

    def __repr__(self) -> str:
        return (
            f"QueryBuilder(table_name={self.table_name!r}, "
            f"conditions={self._conditions!r}, options={self._options!r})"
        )
