# tests/conftest.py
import logging
from typing import Any, Dict, List, Optional

import pytest

from rocketlane_sdk.client import RocketlaneClient
from rocketlane_sdk.memory.transport import InMemoryTransport


# --- Logger Fixture ---


@pytest.fixture(scope="session")
def logger():
    """Create a test logger."""
    _logger = logging.getLogger("test_rocketlane_logger")
    if not _logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        handler.setLevel(logging.DEBUG)
        _logger.addHandler(handler)
        _logger.setLevel(logging.DEBUG)
        _logger.propagate = False
    return logging.LoggerAdapter(_logger, {})


# --- Scripted list method ---


class ScriptedListMethod:
    """
    Fake list method serving pre-defined pages.

    Page ``n`` is answered with token ``"token-n"``; the request for page
    ``n + 1`` must carry that token. With ``endless=True`` every page claims
    there is more. ``fail_on_call`` makes the given (1-based) call raise.
    """

    def __init__(
        self,
        pages: List[List[Any]],
        endless: bool = False,
        fail_on_call: Optional[int] = None,
    ):
        self.pages = pages
        self.endless = endless
        self.fail_on_call = fail_on_call
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, params: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(dict(params))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError(f"upstream failure on call {len(self.calls)}")

        token = params.get("pageToken")
        index = 0 if token is None else int(token.split("-")[1])
        data = self.pages[index % len(self.pages)]
        has_more = self.endless or index + 1 < len(self.pages)
        pagination: Dict[str, Any] = {
            "pageSize": len(data),
            "hasMore": has_more,
            "totalRecordCount": sum(len(p) for p in self.pages),
        }
        if has_more:
            pagination["nextPageToken"] = f"token-{index + 1}"
        return {"data": list(data), "pagination": pagination}


@pytest.fixture
def scripted_list_method():
    """Factory for ScriptedListMethod instances."""
    return ScriptedListMethod


# --- Test Records ---


TASK_RECORDS = [
    {
        "taskId": 1,
        "taskName": "Kickoff call",
        "projectId": 10,
        "status": "active",
        "priority": 5,
        "dueDate": "2024-01-10",
        "effortInMinutes": 60,
        "assignees": [{"userId": 101, "firstName": "Ada"}],
        "project": {"projectId": 10, "projectName": "Onboarding"},
    },
    {
        "taskId": 2,
        "taskName": "Data migration",
        "projectId": 10,
        "status": "done",
        "priority": 3,
        "dueDate": "2024-02-15",
        "effortInMinutes": 600,
        "assignees": [{"userId": 102, "firstName": "Grace"}],
        "project": {"projectId": 10, "projectName": "Onboarding"},
    },
    {
        "taskId": 3,
        "taskName": "API integration",
        "projectId": 20,
        "status": "active",
        "priority": 4,
        "dueDate": "2024-03-01",
        "effortInMinutes": 480,
        "assignees": [
            {"userId": 101, "firstName": "Ada"},
            {"userId": 103, "firstName": "Linus"},
        ],
        "project": {"projectId": 20, "projectName": "Expansion"},
    },
    {
        "taskId": 4,
        "taskName": "Training session",
        "projectId": 20,
        "status": "active",
        "priority": 1,
        "dueDate": "2024-03-20",
        "effortInMinutes": 120,
        "assignees": [],
        "project": {"projectId": 20, "projectName": "Expansion"},
    },
    {
        "taskId": 5,
        "taskName": "Go-live review",
        "projectId": 10,
        "status": "blocked",
        "priority": 4,
        "dueDate": "2024-04-05",
        "effortInMinutes": 90,
        "assignees": [{"userId": 103, "firstName": "Linus"}],
        "project": {"projectId": 10, "projectName": "Onboarding"},
    },
]

PROJECT_RECORDS = [
    {"projectId": 10, "projectName": "Onboarding", "companyId": 1, "archived": False},
    {"projectId": 20, "projectName": "Expansion", "companyId": 2, "archived": False},
]


@pytest.fixture
def memory_transport() -> InMemoryTransport:
    """In-memory API with tasks and projects, two records per page."""
    transport = InMemoryTransport(page_size=2)
    transport.add_collection("tasks", "taskId", TASK_RECORDS)
    transport.add_collection("projects", "projectId", PROJECT_RECORDS)
    transport.add_collection("users", "userId", [])
    return transport


@pytest.fixture
def client(memory_transport: InMemoryTransport) -> RocketlaneClient:
    return RocketlaneClient(memory_transport)
