# src/rocketlane_sdk/base/query.py
import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .exceptions import UnsupportedFormatException

# --- Setup Logging ---
log = logging.getLogger(__name__)


# --- Query Operator Enum ---
class QueryOperator(Enum):
    """Enumeration of filter operators understood by the query layer."""

    # Comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    # Pattern
    LIKE = "LIKE"
    # Membership
    IN = "IN"
    NIN = "NOT IN"
    # String/Collection Specific
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT CONTAINS"
    # Ranges
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT BETWEEN"

    @property
    def is_range(self) -> bool:
        return self in (QueryOperator.BETWEEN, QueryOperator.NOT_BETWEEN)

    @property
    def is_membership(self) -> bool:
        return self in (QueryOperator.IN, QueryOperator.NIN)

    @classmethod
    def parse(cls, token: Union["QueryOperator", str]) -> "QueryOperator":
        """
        Resolves an operator from an enum member, a SQL token such as '>=' or
        'not in' (case-insensitive), or a member name such as 'GTE'.

        Raises:
            UnsupportedFormatException: If the token names no known operator.
        """
        if isinstance(token, QueryOperator):
            return token
        if not isinstance(token, str):
            raise UnsupportedFormatException(
                f"Operator must be a QueryOperator or string, got {type(token).__name__}"
            )
        normalized = " ".join(token.strip().upper().split())
        if normalized == "<>":
            return cls.NE
        for member in cls:
            if normalized == member.value or normalized == member.name:
                return member
        raise UnsupportedFormatException(f"Unsupported query operator: {token!r}")


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, direction: Union["SortDirection", str]) -> "SortDirection":
        if isinstance(direction, SortDirection):
            return direction
        if isinstance(direction, str):
            lowered = direction.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        raise ValueError(
            f"Sort direction must be 'asc' or 'desc' (any case), got {direction!r}"
        )


# --- Condition Model ---
@dataclass
class QueryCondition:
    """A single filter predicate: field <operator> value [AND value2]."""

    field: str
    operator: QueryOperator
    value: Any
    value2: Optional[Any] = None

    def __post_init__(self):
        self.operator = QueryOperator.parse(self.operator)
        if not isinstance(self.field, str) or not self.field:
            raise ValueError("Condition field must be a non-empty string.")
        # value2 is meaningful (and required) only for range operators.
        if self.operator.is_range and self.value2 is None:
            raise ValueError(
                f"Operator '{self.operator.value}' requires a second value."
            )
        if not self.operator.is_range and self.value2 is not None:
            raise ValueError(
                f"Operator '{self.operator.value}' does not take a second value."
            )
        if self.operator.is_membership:
            if isinstance(self.value, (set, frozenset, tuple)):
                self.value = list(self.value)
            elif not isinstance(self.value, list):
                raise TypeError(
                    f"Operator '{self.operator.value}' requires a list/set/tuple"
                )


@dataclass
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        self.direction = SortDirection.parse(self.direction)


# --- Query Options ---
@dataclass
class QueryOptions:
    """Shape directives accumulated alongside the conditions of a query."""

    limit: Optional[int] = None
    offset: Optional[int] = None
    order_by: List[OrderBy] = field(default_factory=list)
    group_by: List[str] = field(default_factory=list)
    select: Optional[Union[List[str], Dict[str, Any]]] = None

    def __repr__(self) -> str:
        parts = []
        if self.limit is not None:
            parts.append(f"limit={self.limit!r}")
        if self.offset is not None:
            parts.append(f"offset={self.offset!r}")
        if self.order_by:
            parts.append(f"order_by={self.order_by!r}")
        if self.group_by:
            parts.append(f"group_by={self.group_by!r}")
        if self.select is not None:
            parts.append(f"select={self.select!r}")
        return f"QueryOptions({', '.join(parts)})"

    def copy(self) -> "QueryOptions":
        """Creates a deep copy so the clone can be mutated independently."""
        return copy.deepcopy(self)


# --- Intermediate Parsed Query ---
@dataclass
class WhereClause:
    """
    Raw WHERE text of a SQL template together with its positional parameters.

    No expression tree is built from the text; the translator only looks for a
    fixed set of known fields inside it.
    """

    raw: str = ""
    params: List[Any] = field(default_factory=list)


@dataclass
class ParsedQuery:
    """Normal form shared by the query builder and the SQL template parser."""

    table_name: str
    conditions: Union[List[QueryCondition], WhereClause]
    options: QueryOptions = field(default_factory=QueryOptions)
