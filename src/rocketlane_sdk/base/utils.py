import logging
from dataclasses import is_dataclass, asdict
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)


def to_plain_data(data: Any, exclude_unset: bool = False) -> Any:
    """
    Recursively convert Pydantic models, dataclasses and containers to plain
    Python data (dicts, lists and scalars).

    Records returned by the API are usually Pydantic models; the field
    selection and the in-memory transport both work on plain mappings.
    It handles:
    - Pydantic BaseModel instances (dumped by alias, so keys match the wire)
    - Python dataclasses
    - Dictionaries (processing values recursively)
    - Lists, tuples and sets (processing each item)

    Args:
        data: The data to convert
        exclude_unset: Dump Pydantic models without the fields that were never
            set, so defaults of absent fields are not reported as values

    Returns:
        The converted data
    """
    if data is None:
        return None

    # Handle dataclasses
    if is_dataclass(data) and not isinstance(data, type):
        return to_plain_data(asdict(data), exclude_unset)

    # Handle Pydantic models
    if hasattr(data, "model_dump") and callable(getattr(data, "model_dump")):
        try:
            return to_plain_data(
                data.model_dump(by_alias=True, exclude_unset=exclude_unset),
                exclude_unset,
            )
        except TypeError as e:
            logger.debug(f"model_dump(by_alias=True) failed: {e}")
            return to_plain_data(data.model_dump(exclude_unset=exclude_unset), exclude_unset)

    if isinstance(data, dict):
        return {k: to_plain_data(v, exclude_unset) for k, v in data.items()}

    if isinstance(data, list):
        return [to_plain_data(item, exclude_unset) for item in data]

    if isinstance(data, tuple):
        return tuple(to_plain_data(item, exclude_unset) for item in data)

    if isinstance(data, (set, frozenset)):
        return [to_plain_data(item, exclude_unset) for item in data]

    return data


def format_sql_value(value: Any) -> str:
    """Render a literal for the diagnostic SQL string."""
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, (datetime, date)):
        return f"'{value.isoformat()}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "NULL"
    return str(value)
