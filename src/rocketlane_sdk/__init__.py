# src/rocketlane_sdk/__init__.py

"""
Rocketlane SDK Initialization.

Typed async client for the Rocketlane project-management API: resource
wrappers, token-based pagination helpers, a fluent query builder, SQL-like
templates translated to API parameters, and field selection on results.

It initializes a logger with a NullHandler and makes the client, the query
layer and the pagination helpers available at the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for "rocketlane_sdk".
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Exceptions
# --------------------------------------------------------------------------
from .base.exceptions import (
    RocketlaneException,
    UnboundQueryException,
    UnsupportedFormatException,
    ObjectNotFoundException,
)

# --------------------------------------------------------------------------
# Query Building
# --------------------------------------------------------------------------
from .base.query import (
    QueryOperator,
    QueryCondition,
    QueryOptions,
    OrderBy,
    SortDirection,
    ParsedQuery,
    WhereClause,
)
from .base.builder import QueryBuilder, BuiltQuery
from .base.sql_template import sql, SqlTemplate
from .base.translator import translate
from .base.selection import apply_selection, process_field_selection, select_fields

# --------------------------------------------------------------------------
# Pagination
# --------------------------------------------------------------------------
from .base.pagination import (
    Page,
    PaginationInfo,
    PaginatedResponse,
    get_next_page,
    get_all_pages,
    iterate_pages,
    iterate_items,
)

# --------------------------------------------------------------------------
# Client
# --------------------------------------------------------------------------
from .base.transport import Transport
from .base.resource import BaseResource, QueryResult
from .config import ClientConfig
from .client import RocketlaneClient
from .memory.transport import InMemoryTransport

__all__ = [
    # Exceptions
    "RocketlaneException",
    "UnboundQueryException",
    "UnsupportedFormatException",
    "ObjectNotFoundException",
    # Query
    "QueryOperator",
    "QueryCondition",
    "QueryOptions",
    "OrderBy",
    "SortDirection",
    "ParsedQuery",
    "WhereClause",
    "QueryBuilder",
    "BuiltQuery",
    "sql",
    "SqlTemplate",
    "translate",
    "apply_selection",
    "process_field_selection",
    "select_fields",
    # Pagination
    "Page",
    "PaginationInfo",
    "PaginatedResponse",
    "get_next_page",
    "get_all_pages",
    "iterate_pages",
    "iterate_items",
    # Client
    "Transport",
    "BaseResource",
    "QueryResult",
    "ClientConfig",
    "RocketlaneClient",
    "InMemoryTransport",
    # Logging
    "logger",
]
