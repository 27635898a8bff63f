# src/rocketlane_sdk/base/translator.py
"""
Translation of the intermediate query form into the flat query-parameter
contract of the list endpoints.

The remote API accepts one value per key: ``<field>`` for equality and
``<field>_<suffix>`` for the other comparisons. Because the result is a plain
dict, a later condition that emits the same key as an earlier one overwrites
it (last-write-wins). Only the primary sort key can be expressed.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .exceptions import UnsupportedFormatException
from .query import ParsedQuery, QueryCondition, QueryOperator, QueryOptions, WhereClause

log = logging.getLogger(__name__)

# Operator -> parameter-name suffix for single-valued operators.
_SUFFIXES: Dict[QueryOperator, str] = {
    QueryOperator.EQ: "",
    QueryOperator.NE: "_ne",
    QueryOperator.GT: "_gt",
    QueryOperator.LT: "_lt",
    QueryOperator.GTE: "_gte",
    QueryOperator.LTE: "_lte",
    QueryOperator.LIKE: "_like",
    QueryOperator.IN: "_in",
    QueryOperator.NIN: "_nin",
    QueryOperator.CONTAINS: "_contains",
}

# Range operators emit two keys: (suffix for value, suffix for value2).
_RANGE_SUFFIXES: Dict[QueryOperator, Tuple[str, str]] = {
    QueryOperator.BETWEEN: ("_gte", "_lte"),
    QueryOperator.NOT_BETWEEN: ("_lt", "_gt"),
}

SORT_BY_PARAM = "sortBy"
SORT_ORDER_PARAM = "sortOrder"
PAGE_SIZE_PARAM = "pageSize"
OFFSET_PARAM = "offset"


def condition_to_params(condition: QueryCondition) -> Dict[str, Any]:
    """Returns the flat parameters a single condition contributes (may be empty)."""
    op = condition.operator
    name = condition.field
    if op in _SUFFIXES:
        return {f"{name}{_SUFFIXES[op]}": condition.value}
    if op in _RANGE_SUFFIXES:
        low_suffix, high_suffix = _RANGE_SUFFIXES[op]
        return {
            f"{name}{low_suffix}": condition.value,
            f"{name}{high_suffix}": condition.value2,
        }
    # NOT CONTAINS has no flat-parameter form on the list endpoints.
    log.warning(
        f"Operator '{op.value}' on field '{name}' has no API parameter; "
        f"condition omitted from request."
    )
    return {}


def conditions_to_params(conditions: Iterable[QueryCondition]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for condition in conditions:
        emitted = condition_to_params(condition)
        for key in emitted:
            if key in params:
                log.debug(
                    f"Parameter '{key}' overwritten by later condition {condition!r}"
                )
        params.update(emitted)
    return params


def options_to_params(options: QueryOptions) -> Dict[str, Any]:
    """Translates ordering and paging options; secondary sort keys are dropped."""
    params: Dict[str, Any] = {}
    if options.order_by:
        primary = options.order_by[0]
        params[SORT_BY_PARAM] = primary.field
        params[SORT_ORDER_PARAM] = primary.direction.value
        if len(options.order_by) > 1:
            dropped = [o.field for o in options.order_by[1:]]
            log.debug(f"Only the primary sort key is sent; dropping {dropped}")
    if options.limit is not None:
        params[PAGE_SIZE_PARAM] = options.limit
    if options.offset is not None:
        params[OFFSET_PARAM] = options.offset
    return params


# --- Raw WHERE text (SQL template path) ---

# Recognised field -> API parameter name. Matching on field names is
# case-insensitive; anything not listed here is left untranslated.
KNOWN_WHERE_FIELDS: Dict[str, str] = {
    "projectid": "projectId",
    "status": "status",
    "assignees": "assigneeId",
    "assigneeid": "assigneeId",
}
DUE_DATE_FROM_PARAM = "dueDateFrom"
DUE_DATE_TO_PARAM = "dueDateTo"

_PLACEHOLDER = r"\$(\d+)"
_EQUALS_RE = re.compile(rf"\b(?P<field>\w+)\s*=\s*{_PLACEHOLDER}", re.IGNORECASE)
_IN_RE = re.compile(
    r"\b(?P<field>\w+)\s+IN\s*\((?P<items>[^)]*)\)", re.IGNORECASE
)
_DUE_BETWEEN_RE = re.compile(
    rf"\bdueDate\s+BETWEEN\s+{_PLACEHOLDER}\s+AND\s+{_PLACEHOLDER}", re.IGNORECASE
)


def _param_at(params: List[Any], placeholder: str) -> Tuple[bool, Any]:
    index = int(placeholder) - 1
    if 0 <= index < len(params):
        return True, params[index]
    log.warning(f"Placeholder ${placeholder} has no matching parameter; ignored.")
    return False, None


def where_clause_to_params(clause: WhereClause) -> Dict[str, Any]:
    """
    Best-effort translation of raw WHERE text.

    Only ``projectId``, ``status`` and the assignee fields (with ``=`` or
    ``IN (...)``) and ``dueDate BETWEEN`` are recognised. Other predicates
    produce nothing.

    Values are bound through the ``$n`` placeholder that follows each
    recognised field, not by consuming the parameter list sequentially in the
    order recognised fields appear. The two agree when every placeholder
    belongs to a recognised field. When an unrecognised predicate carries a
    placeholder, a sequential cursor would hand its value to the next
    recognised field; here that value is skipped instead::

        "priority = $1 AND projectId = $2", [5, 42]  ->  {"projectId": 42}
        (a sequential cursor would give {"projectId": 5})
    """
    raw = clause.raw or ""
    found: List[Tuple[int, Dict[str, Any]]] = []

    for match in _EQUALS_RE.finditer(raw):
        api_name = KNOWN_WHERE_FIELDS.get(match.group("field").lower())
        if api_name is None:
            log.debug(f"WHERE predicate on '{match.group('field')}' not translated.")
            continue
        ok, value = _param_at(clause.params, match.group(2))
        if ok:
            found.append((match.start(), {api_name: value}))

    for match in _IN_RE.finditer(raw):
        api_name = KNOWN_WHERE_FIELDS.get(match.group("field").lower())
        placeholders = re.findall(_PLACEHOLDER, match.group("items"))
        if api_name is None or not placeholders:
            log.debug(f"WHERE IN on '{match.group('field')}' not translated.")
            continue
        values = []
        for placeholder in placeholders:
            ok, value = _param_at(clause.params, placeholder)
            if ok:
                values.append(value)
        found.append((match.start(), {f"{api_name}_in": values}))

    for match in _DUE_BETWEEN_RE.finditer(raw):
        ok_from, date_from = _param_at(clause.params, match.group(1))
        ok_to, date_to = _param_at(clause.params, match.group(2))
        emitted = {}
        if ok_from:
            emitted[DUE_DATE_FROM_PARAM] = date_from
        if ok_to:
            emitted[DUE_DATE_TO_PARAM] = date_to
        found.append((match.start(), emitted))

    params: Dict[str, Any] = {}
    for _, emitted in sorted(found, key=lambda item: item[0]):
        params.update(emitted)
    return params


def translate(parsed: ParsedQuery) -> Dict[str, Any]:
    """Renders a ParsedQuery into the flat parameter map of a list call."""
    conditions = parsed.conditions
    if isinstance(conditions, WhereClause):
        params = where_clause_to_params(conditions)
    elif isinstance(conditions, (list, tuple)):
        params = conditions_to_params(conditions)
    else:
        raise UnsupportedFormatException(
            f"Cannot translate conditions of type {type(conditions).__name__}"
        )
    params.update(options_to_params(parsed.options))
    log.debug(f"Translated query on '{parsed.table_name}' to params {params}")
    return params


def merge_params(
    base: Optional[Dict[str, Any]], overrides: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """Returns a new dict with ``overrides`` applied over ``base``."""
    merged = dict(base or {})
    merged.update(overrides or {})
    return merged
