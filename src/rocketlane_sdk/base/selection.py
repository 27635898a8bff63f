# src/rocketlane_sdk/base/selection.py
"""
Field selection over records that were already fetched.

A selection tree maps field names to ``True`` (keep the value as-is) or to a
nested tree (project the value with that tree, element-wise for lists).
Only named fields survive; missing fields are left out rather than set to
None. Nothing here performs I/O.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from .utils import to_plain_data

log = logging.getLogger(__name__)

FieldSelection = Dict[str, Union[bool, "FieldSelection"]]


def select_fields(item: Any, selection: Mapping[str, Any]) -> Dict[str, Any]:
    """Projects a single record with a selection tree."""
    # Unset model fields are absent, not None.
    source = to_plain_data(item, exclude_unset=True)
    if not isinstance(source, Mapping):
        log.debug(f"Cannot select fields from {type(source).__name__}; yielding empty")
        return {}

    result: Dict[str, Any] = {}
    for key, sub_selection in selection.items():
        if key not in source:
            continue
        value = source[key]
        if sub_selection is True:
            result[key] = value
        elif isinstance(sub_selection, Mapping):
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                result[key] = [select_fields(element, sub_selection) for element in value]
            else:
                result[key] = select_fields(value, sub_selection)
        # Any other marker (False, None) excludes the field.
    return result


def process_field_selection(
    items: Iterable[Any], selection: Mapping[str, Any]
) -> List[Dict[str, Any]]:
    return [select_fields(item, selection) for item in items]


def select_columns(items: Iterable[Any], fields: Sequence[str]) -> List[Dict[str, Any]]:
    """Flat projection: keep the listed top-level fields of each record."""
    return process_field_selection(items, {name: True for name in fields})


def apply_selection(
    items: Iterable[Any], select: Union[Sequence[str], Mapping[str, Any]]
) -> List[Dict[str, Any]]:
    """Dispatches on the form of ``select``: a field list or a selection tree."""
    if isinstance(select, Mapping):
        return process_field_selection(items, select)
    if isinstance(select, (list, tuple)):
        return select_columns(items, select)
    raise TypeError(
        f"Selection must be a list of field names or a dict, got {type(select).__name__}"
    )
