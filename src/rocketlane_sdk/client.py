# src/rocketlane_sdk/client.py
from typing import Optional

from rocketlane_sdk.base.transport import Transport
from rocketlane_sdk.config import ClientConfig
from rocketlane_sdk.resources.fields import FieldsResource
from rocketlane_sdk.resources.phases import PhasesResource
from rocketlane_sdk.resources.projects import ProjectsResource
from rocketlane_sdk.resources.resource_allocations import ResourceAllocationsResource
from rocketlane_sdk.resources.space_documents import SpaceDocumentsResource
from rocketlane_sdk.resources.spaces import SpacesResource
from rocketlane_sdk.resources.tasks import TasksResource
from rocketlane_sdk.resources.time_offs import TimeOffsResource
from rocketlane_sdk.resources.time_tracking import TimeTrackingResource
from rocketlane_sdk.resources.users import UsersResource


class RocketlaneClient:
    """
    Entry point grouping every resource over one transport.

    The transport performs the HTTP calls (authentication, retries and
    timeouts included); the client and its resources add query translation,
    pagination and field selection on top.
    """

    def __init__(self, transport: Transport, config: Optional[ClientConfig] = None):
        self.transport = transport
        self.config = config or ClientConfig()
        self.tasks = TasksResource(transport, self.config)
        self.projects = ProjectsResource(transport, self.config)
        self.users = UsersResource(transport, self.config)
        self.time_entries = TimeTrackingResource(transport, self.config)
        self.phases = PhasesResource(transport, self.config)
        self.fields = FieldsResource(transport, self.config)
        self.spaces = SpacesResource(transport, self.config)
        self.space_documents = SpaceDocumentsResource(transport, self.config)
        self.resource_allocations = ResourceAllocationsResource(transport, self.config)
        self.time_offs = TimeOffsResource(transport, self.config)
