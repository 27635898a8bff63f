import asyncio
import copy
import uuid
from logging import LoggerAdapter
from typing import Any, Dict, List, Optional, Tuple

from rocketlane_sdk.base.exceptions import ObjectNotFoundException
from rocketlane_sdk.base.pagination import PAGE_SIZE_PARAM, PAGE_TOKEN_PARAM
from rocketlane_sdk.base.transport import Transport
from rocketlane_sdk.base.translator import OFFSET_PARAM, SORT_BY_PARAM, SORT_ORDER_PARAM
from rocketlane_sdk.base.utils import to_plain_data
from rocketlane_sdk.config import DEFAULT_BASE_PATH

# Parameter-name suffixes understood by the list endpoints, longest first so
# that "_nin" is not mistaken for "_in".
_SUFFIXES = ("_contains", "_like", "_gte", "_lte", "_nin", "_ne", "_gt", "_lt", "_in")
# Date-range parameters such as ``dueDateFrom``/``dueDateTo`` (inclusive).
_RANGE_SUFFIXES = (("From", "gte"), ("To", "lte"))
_CONTROL_PARAMS = {
    PAGE_SIZE_PARAM,
    PAGE_TOKEN_PARAM,
    SORT_BY_PARAM,
    SORT_ORDER_PARAM,
    OFFSET_PARAM,
    "search",
}

# POST /<collection>/<id>/<action>: body -> fields updated on the record.
_ACTIONS = {
    "archive": lambda body: {"archived": True},
    "unarchive": lambda body: {"archived": False},
    "approve": lambda body: {"status": "approved"},
    "reject": lambda body: {"status": "rejected", "reason": body.get("reason")},
    "move": lambda body: {"spaceId": body.get("spaceId")},
}


def _lookup(record: Dict[str, Any], field: str) -> Any:
    """
    Get a field from a record. Falls back to one level of nesting, so
    ``projectId`` also matches ``{"project": {"projectId": ...}}`` and
    ``assigneeId`` collects the ids of an ``assignees`` list.
    """
    if field in record:
        return record[field]
    for value in record.values():
        if isinstance(value, dict) and field in value:
            return value[field]
    if field.endswith("Id"):
        plural = field[:-2] + "s"
        items = record.get(plural)
        if isinstance(items, list):
            return [
                item.get("userId", item.get(field))
                for item in items
                if isinstance(item, dict)
            ]
    return None


def _like(value: Any, pattern: str) -> bool:
    if not isinstance(value, str):
        return False
    needle = pattern.strip("%").lower()
    text = value.lower()
    if pattern.startswith("%") and pattern.endswith("%"):
        return needle in text
    if pattern.endswith("%"):
        return text.startswith(needle)
    if pattern.startswith("%"):
        return text.endswith(needle)
    return text == needle


class InMemoryTransport(Transport):
    """
    A fake API holding collections in memory.

    List calls honour the flat filter convention (``field``, ``field_gt``,
    ``field_in``, ...), ``sortBy``/``sortOrder``, ``pageSize``, ``offset``
    and ``search``, and paginate with opaque single-use ``pageToken``
    values. Every request is recorded in ``calls``. Intended for tests and
    offline work.
    """

    def __init__(self, page_size: int = 100, base_path: str = DEFAULT_BASE_PATH):
        self.page_size = page_size
        self.base_path = "/" + base_path.strip("/") if base_path.strip("/") else ""
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []
        self._collections: Dict[str, Dict[str, Any]] = {}
        self._tokens: Dict[str, Tuple[str, Dict[str, Any], int]] = {}

    def add_collection(
        self, name: str, id_field: str, records: Optional[List[Any]] = None
    ) -> None:
        store: Dict[Any, Dict[str, Any]] = {}
        for record in records or []:
            plain = to_plain_data(record)
            store[plain[id_field]] = plain
        self._collections[name] = {"id_field": id_field, "records": store}

    def records(self, name: str) -> List[Dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._collections[name]["records"].values()]

    def _split_path(self, path: str) -> Tuple[str, Optional[str], Optional[str]]:
        if self.base_path and path.startswith(self.base_path):
            path = path[len(self.base_path):]
        parts = [p for p in path.split("/") if p]
        if not parts or parts[0] not in self._collections:
            raise ObjectNotFoundException(f"No collection for path '{path}'")
        item_id = parts[1] if len(parts) > 1 else None
        action = parts[2] if len(parts) > 2 else None
        return parts[0], item_id, action

    def _find(self, collection: str, item_id: str) -> Tuple[Any, Dict[str, Any]]:
        store = self._collections[collection]["records"]
        for key, record in store.items():
            if str(key) == item_id:
                return key, record
        raise ObjectNotFoundException(f"{collection} with ID '{item_id}' not found.")

    async def request(
        self,
        method: str,
        path: str,
        logger: LoggerAdapter,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        logger.debug(f"{method} {path} params={params}")
        self.calls.append((method, path, copy.deepcopy(params)))
        await asyncio.sleep(0)
        collection, item_id, action = self._split_path(path)
        method = method.upper()

        if item_id is None:
            if method == "GET":
                return self._list(collection, dict(params or {}))
            if method == "POST":
                return self._create(collection, json or {})
        else:
            key, record = self._find(collection, item_id)
            if method == "GET" and action is None:
                return copy.deepcopy(record)
            if method == "PUT" and action is None:
                record.update(to_plain_data(json or {}))
                return copy.deepcopy(record)
            if method == "DELETE" and action is None:
                del self._collections[collection]["records"][key]
                return None
            if method == "POST" and action in _ACTIONS:
                record.update(_ACTIONS[action](to_plain_data(json or {})))
                return copy.deepcopy(record)
        raise ValueError(f"Unsupported request: {method} {path}")

    def _create(self, collection: str, body: Any) -> Dict[str, Any]:
        info = self._collections[collection]
        record = to_plain_data(body)
        id_field = info["id_field"]
        if record.get(id_field) is None:
            numeric = [k for k in info["records"] if isinstance(k, int)]
            record[id_field] = max(numeric, default=0) + 1
        info["records"][record[id_field]] = record
        return copy.deepcopy(record)

    def _list(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]:
        token = params.pop(PAGE_TOKEN_PARAM, None)
        if token is not None:
            # Tokens are single-use; a consumed token is forgotten.
            if token not in self._tokens:
                raise ValueError(f"Invalid page token: {token!r}")
            token_collection, params, start = self._tokens.pop(token)
            if token_collection != collection:
                raise ValueError(f"Page token {token!r} belongs to '{token_collection}'")
        else:
            start = int(params.get(OFFSET_PARAM) or 0)

        page_size = int(params.get(PAGE_SIZE_PARAM) or self.page_size)
        matched = [
            r for r in self._collections[collection]["records"].values()
            if self._matches(r, params)
        ]
        matched = self._sort(matched, params)
        window = matched[start : start + page_size]
        has_more = start + page_size < len(matched)

        pagination: Dict[str, Any] = {
            "pageSize": page_size,
            "hasMore": has_more,
            "totalRecordCount": len(matched),
        }
        if has_more:
            next_token = uuid.uuid4().hex
            self._tokens[next_token] = (collection, params, start + page_size)
            pagination["nextPageToken"] = next_token
        return {"data": copy.deepcopy(window), "pagination": pagination}

    def _matches(self, record: Dict[str, Any], params: Dict[str, Any]) -> bool:
        search = params.get("search")
        if search:
            needle = str(search).lower()
            if not any(
                isinstance(v, str) and needle in v.lower() for v in record.values()
            ):
                return False
        for key, value in params.items():
            if key in _CONTROL_PARAMS:
                continue
            operator, field = "eq", key
            for suffix in _SUFFIXES:
                if key.endswith(suffix) and len(key) > len(suffix):
                    operator, field = suffix[1:], key[: -len(suffix)]
                    break
            else:
                if _lookup(record, key) is None:
                    for suffix, range_operator in _RANGE_SUFFIXES:
                        if key.endswith(suffix) and len(key) > len(suffix):
                            operator, field = range_operator, key[: -len(suffix)]
                            break
            if not self._check_operator(operator, _lookup(record, field), value):
                return False
        return True

    def _check_operator(self, operator: str, entity_value: Any, filter_value: Any) -> bool:
        if isinstance(entity_value, list) and operator in ("eq", "in"):
            wanted = filter_value if operator == "in" else [filter_value]
            return any(v in entity_value for v in wanted)
        if operator == "eq":
            return entity_value == filter_value
        if operator == "ne":
            return entity_value != filter_value
        if operator == "in":
            return entity_value in filter_value
        if operator == "nin":
            return entity_value not in filter_value
        if operator == "like":
            return _like(entity_value, filter_value)
        if operator == "contains":
            if isinstance(entity_value, str) and isinstance(filter_value, str):
                return filter_value.lower() in entity_value.lower()
            return isinstance(entity_value, list) and filter_value in entity_value
        if entity_value is None:
            return False
        try:
            if operator == "gt":
                return entity_value > filter_value
            if operator == "gte":
                return entity_value >= filter_value
            if operator == "lt":
                return entity_value < filter_value
            if operator == "lte":
                return entity_value <= filter_value
        except TypeError:
            return False
        raise ValueError(f"Unsupported operator: {operator}")

    def _sort(
        self, records: List[Dict[str, Any]], params: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        sort_by = params.get(SORT_BY_PARAM)
        if not sort_by:
            return records
        descending = str(params.get(SORT_ORDER_PARAM, "asc")).lower() == "desc"
        present = [r for r in records if _lookup(r, sort_by) is not None]
        missing = [r for r in records if _lookup(r, sort_by) is None]
        present.sort(key=lambda r: _lookup(r, sort_by), reverse=descending)
        return present + missing
