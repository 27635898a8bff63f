# src/rocketlane_sdk/base/sql_template.py
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .query import OrderBy, ParsedQuery, QueryOptions, WhereClause

log = logging.getLogger(__name__)

MARKER = "{}"
UNKNOWN_TABLE = "unknown"

_FROM_RE = re.compile(r"\bFROM\s+(\w+)", re.IGNORECASE)
_WHERE_RE = re.compile(
    r"\bWHERE\s+(.+?)(?=\s+ORDER\s+BY\b|\s+GROUP\s+BY\b|\s+LIMIT\b|\s+OFFSET\b|$)",
    re.IGNORECASE,
)
_GROUP_RE = re.compile(
    r"\bGROUP\s+BY\s+(.+?)(?=\s+ORDER\s+BY\b|\s+LIMIT\b|\s+OFFSET\b|$)",
    re.IGNORECASE,
)
_ORDER_RE = re.compile(
    r"\bORDER\s+BY\s+(.+?)(?=\s+LIMIT\b|\s+OFFSET\b|$)", re.IGNORECASE
)
_LIMIT_RE = re.compile(r"\bLIMIT\s+(\d+)", re.IGNORECASE)
_OFFSET_RE = re.compile(r"\bOFFSET\s+(\d+)", re.IGNORECASE)


@dataclass
class SqlTemplate:
    """
    A pseudo-SQL query whose interpolated values were replaced by ``$1``,
    ``$2``, ... placeholders, together with the values in order.
    """

    query: str
    params: List[Any] = field(default_factory=list)

    def parse(self) -> ParsedQuery:
        """
        Extracts table name, WHERE text, GROUP BY, ORDER BY, LIMIT and OFFSET
        by pattern matching. Never raises on malformed input: a template
        without FROM yields the table name 'unknown'.
        """
        return parse_sql_query(self.query, self.params)


def sql(template: str, *values: Any) -> SqlTemplate:
    """
    Builds a SqlTemplate, the equivalent of a tagged template literal.

    Every ``{}`` in ``template`` marks an interpolation point and consumes the
    next positional value::

        sql("SELECT * FROM tasks WHERE projectId = {} LIMIT 10", 5)
        # query  -> "SELECT * FROM tasks WHERE projectId = $1 LIMIT 10"
        # params -> [5]

    Raises:
        ValueError: If the number of markers and values differ.
    """
    fragments = template.split(MARKER)
    if len(fragments) - 1 != len(values):
        raise ValueError(
            f"SQL template has {len(fragments) - 1} interpolation markers "
            f"but {len(values)} values were given."
        )
    parts: List[str] = []
    params: List[Any] = []
    for index, fragment in enumerate(fragments):
        parts.append(fragment)
        if index < len(values):
            params.append(values[index])
            parts.append(f"${len(params)}")
    return SqlTemplate(query="".join(parts).strip(), params=params)


def _parse_order_by(text: str) -> List[OrderBy]:
    entries = []
    for part in text.split(","):
        tokens = part.split()
        if not tokens:
            continue
        direction = tokens[1] if len(tokens) > 1 else "asc"
        try:
            entries.append(OrderBy(tokens[0], direction))
        except ValueError:
            log.debug(f"Ignoring unrecognised sort direction in {part.strip()!r}")
            entries.append(OrderBy(tokens[0]))
    return entries


def _first_int(pattern: "re.Pattern", text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def parse_sql_query(query: str, params: List[Any]) -> ParsedQuery:
    # Collapse whitespace so multi-line templates match like single-line ones.
    text = " ".join(query.split())

    from_match = _FROM_RE.search(text)
    table_name = from_match.group(1).lower() if from_match else UNKNOWN_TABLE
    if not from_match:
        log.warning(f"No FROM clause in SQL template; table set to '{UNKNOWN_TABLE}'")

    where_match = _WHERE_RE.search(text)
    where_raw = where_match.group(1).strip() if where_match else ""

    group_match = _GROUP_RE.search(text)
    group_by: List[str] = []
    if group_match:
        for name in group_match.group(1).split(","):
            name = name.strip()
            if name and name not in group_by:
                group_by.append(name)

    order_match = _ORDER_RE.search(text)
    order_by = _parse_order_by(order_match.group(1)) if order_match else []

    options = QueryOptions(
        limit=_first_int(_LIMIT_RE, text),
        offset=_first_int(_OFFSET_RE, text),
        order_by=order_by,
        group_by=group_by,
    )
    parsed = ParsedQuery(
        table_name=table_name,
        conditions=WhereClause(raw=where_raw, params=list(params)),
        options=options,
    )
    log.debug(f"Parsed SQL template into {parsed!r}")
    return parsed
