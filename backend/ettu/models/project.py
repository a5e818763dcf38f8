"""
ETTU Backend — Project SQLAlchemy Models
==========================================

What:  ORM rows for `projects`, `project_members` and `project_invitations`.
How:   status / visibility are VARCHAR at the storage boundary and decode to
       ProjectStatus / ProjectVisibility in to_response(). technologies is a
       JSON array of strings; anything else stored there is ignored on read.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from ettu.database import Base
from ettu.models.user import JsonType, utcnow
from ettu.schemas.project import ProjectResponse, ProjectStatus, ProjectVisibility

DEFAULT_PROJECT_COLOR = "#3B82F6"


class Project(Base):
    """
    A container for tasks and notes, owned by one user.

    version increments on every update (optimistic concurrency for clients).
    """

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(
        String(7), nullable=False, default=DEFAULT_PROJECT_COLOR,
        server_default=text(f"'{DEFAULT_PROJECT_COLOR}'"),
    )
    icon: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active", server_default=text("'active'")
    )
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default="private", server_default=text("'private'")
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    settings: Mapped[Optional[Any]] = mapped_column(JsonType, nullable=True)
    technologies: Mapped[Optional[Any]] = mapped_column(JsonType, nullable=True)
    repository_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    live_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def status_enum(self) -> ProjectStatus:
        return ProjectStatus.from_storage(self.status)

    @property
    def visibility_enum(self) -> ProjectVisibility:
        return ProjectVisibility.from_storage(self.visibility)

    def technology_names(self) -> List[str]:
        """String entries of the stored technologies array, in order."""
        if not isinstance(self.technologies, list):
            return []
        return [item for item in self.technologies if isinstance(item, str)]

    def to_response(self) -> ProjectResponse:
        return ProjectResponse(
            id=self.id,
            name=self.name,
            description=self.description,
            color=self.color,
            icon=self.icon,
            status=self.status_enum,
            visibility=self.visibility_enum,
            owner_id=self.owner_id,
            settings=self.settings,
            technologies=self.technology_names(),
            repository_url=self.repository_url,
            live_url=self.live_url,
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}', status='{self.status}')>"


class ProjectMember(Base):
    __tablename__ = "project_members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    permissions: Mapped[Optional[Any]] = mapped_column(JsonType, nullable=True)
    invited_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    invited_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    joined_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ProjectInvitation(Base):
    __tablename__ = "project_invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    invited_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
