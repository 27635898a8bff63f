# src/rocketlane_sdk/models.py
"""
Record models returned by the list and get endpoints.

Only the commonly used fields are declared; anything else the API sends is
kept as an extra attribute. Attribute names are snake_case and serialize to
the camelCase names used on the wire (``task_name`` <-> ``taskName``).
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class UserRef(ApiModel):
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_id: Optional[str] = None


class ProjectRef(ApiModel):
    project_id: int
    project_name: Optional[str] = None


class PhaseRef(ApiModel):
    phase_id: int
    phase_name: Optional[str] = None


class TaskStatus(ApiModel):
    value: int
    label: Optional[str] = None


class Task(ApiModel):
    task_id: int
    task_name: str
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    archived: bool = False
    effort_in_minutes: Optional[int] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    project: Optional[ProjectRef] = None
    phase: Optional[PhaseRef] = None
    status: Optional[Union[TaskStatus, str, int]] = None
    priority: Optional[Any] = None
    assignees: List[UserRef] = Field(default_factory=list)
    followers: List[UserRef] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    type: Optional[str] = None


class Project(ApiModel):
    project_id: int
    project_name: str
    company_id: Optional[int] = None
    owner: Optional[UserRef] = None
    team_members: List[UserRef] = Field(default_factory=list)
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    archived: bool = False
    status: Optional[Dict[str, Any]] = None
    budget: Optional[float] = None
    currency: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[int] = None


class CompanyRef(ApiModel):
    company_id: int
    company_name: Optional[str] = None


class User(ApiModel):
    user_id: int
    first_name: str
    last_name: Optional[str] = None
    email_id: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    role: Optional[str] = None
    company: Optional[CompanyRef] = None
    capacity_in_minutes: Optional[int] = None
    timezone: Optional[str] = None


class TimeEntry(ApiModel):
    time_entry_id: int
    date: str
    minutes: int
    billable: bool = False
    project: Optional[ProjectRef] = None
    project_phase: Optional[PhaseRef] = None
    user: Optional[UserRef] = None
    category: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    approved: Optional[bool] = None


class Phase(ApiModel):
    phase_id: int
    phase_name: str
    project_id: Optional[int] = None
    position: Optional[int] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = None
    archived: bool = False


class FieldOption(ApiModel):
    option_id: str
    label: str
    value: Optional[str] = None


class CustomField(ApiModel):
    field_id: str
    field_name: str
    type: Optional[str] = None
    required: bool = False
    active: bool = True
    options: List[FieldOption] = Field(default_factory=list)


class SpaceMember(ApiModel):
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None


class Space(ApiModel):
    space_id: int
    space_name: str
    description: Optional[str] = None
    type: Optional[str] = None
    visibility: Optional[str] = None
    owner_id: Optional[int] = None
    project_id: Optional[int] = None
    members: List[SpaceMember] = Field(default_factory=list)


class ResourceAllocation(ApiModel):
    allocation_id: int
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    user_id: Optional[int] = None
    user_first_name: Optional[str] = None
    user_last_name: Optional[str] = None
    allocated_minutes: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class TimeOff(ApiModel):
    time_off_id: int
    user_id: Optional[int] = None
    user_first_name: Optional[str] = None
    user_last_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None
    approved_by: Optional[UserRef] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class SpaceDocument(ApiModel):
    document_id: int
    document_name: str
    space_id: Optional[int] = None
    space_name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None
    version: Optional[int] = None
    is_latest: Optional[bool] = None
    created_by: Optional[UserRef] = None
    updated_by: Optional[UserRef] = None
    tags: List[str] = Field(default_factory=list)
