"""
ETTU Backend — Project Schemas
================================

What:  API shapes for projects, members and invitations.
Why:   status and visibility are stored as strings; clients get enums.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    DELETED = "deleted"

    @classmethod
    def from_storage(cls, value: Optional[str]) -> "ProjectStatus":
        """Decode a stored value; unknown strings decode to ACTIVE."""
        try:
            return cls(value)
        except ValueError:
            return cls.ACTIVE

    def __str__(self) -> str:
        return self.value


class ProjectVisibility(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    TEAM = "team"

    @classmethod
    def from_storage(cls, value: Optional[str]) -> "ProjectVisibility":
        """Decode a stored value; unknown strings decode to PRIVATE."""
        try:
            return cls(value)
        except ValueError:
            return cls.PRIVATE

    def __str__(self) -> str:
        return self.value


class CreateProjectRequest(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    visibility: ProjectVisibility
    technologies: Optional[List[str]] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None


class UpdateProjectRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    visibility: Optional[ProjectVisibility] = None
    technologies: Optional[List[str]] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    settings: Optional[Any] = None


class ProjectResponse(BaseModel):
    """
    What:  Public view of a project.
    task_count / note_count are filled by list queries that join counts;
    a plain conversion leaves them null.
    """
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    color: str
    icon: Optional[str] = None
    status: ProjectStatus
    visibility: ProjectVisibility
    owner_id: uuid.UUID
    settings: Optional[Any] = None
    technologies: Optional[List[str]] = None
    repository_url: Optional[str] = None
    live_url: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime
    task_count: Optional[int] = None
    note_count: Optional[int] = None


class ProjectMemberResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    user_id: uuid.UUID
    role: str
    permissions: Optional[Any] = None
    invited_by: Optional[uuid.UUID] = None
    invited_at: Optional[datetime] = None
    joined_at: Optional[datetime] = None
    is_active: bool

    model_config = {"from_attributes": True}


class ProjectInvitationResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    email: str
    role: str
    invited_by: uuid.UUID
    expires_at: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
