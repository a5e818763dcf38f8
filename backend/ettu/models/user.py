"""
ETTU Backend — User & Session SQLAlchemy Models
=================================================

What:  ORM rows for the `users` and `user_sessions` tables.
How:   user_type and role are stored as VARCHAR and decoded to UserType /
       UserRole only when building a response, so an unexpected value in the
       database degrades to the default instead of failing the request.

Table Design:
    - email, username, password_hash are nullable: guests have none of them
    - settings: free-form JSON for client preferences
    - user_sessions.token / refresh_token: opaque strings, unique
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from ettu.database import Base
from ettu.schemas.user import UserResponse, UserRole, UserType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JsonType = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    A person using the app, registered or not.

    Lifecycle:
        guest → registered is not possible directly; a guest becomes
        "migrated" when converted, keeping its id and everything it owns.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    username: Mapped[Optional[str]] = mapped_column(String(50), unique=True, nullable=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="guest", server_default=text("'guest'")
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user", server_default=text("'user'")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    profile_picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    theme: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    timezone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    settings: Mapped[Optional[Any]] = mapped_column(JsonType, nullable=True)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def type_enum(self) -> UserType:
        return UserType.from_storage(self.user_type)

    @property
    def role_enum(self) -> UserRole:
        return UserRole.from_storage(self.role)

    def is_guest(self) -> bool:
        return self.type_enum is UserType.GUEST

    def is_registered(self) -> bool:
        """Registered directly or by migrating from a guest account."""
        return self.type_enum in (UserType.REGISTERED, UserType.MIGRATED)

    def can_login(self) -> bool:
        return self.is_registered() and self.password_hash is not None

    def to_response(self) -> UserResponse:
        return UserResponse(
            id=self.id,
            email=self.email,
            username=self.username,
            display_name=self.display_name,
            user_type=self.type_enum,
            role=self.role_enum,
            is_active=self.is_active,
            is_verified=self.is_verified,
            profile_picture=self.profile_picture,
            bio=self.bio,
            location=self.location,
            website=self.website,
            theme=self.theme,
            language=self.language,
            timezone=self.timezone,
            last_login=self.last_login,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, type='{self.user_type}', role='{self.role}')>"


class UserSession(Base):
    """One login: an access token and the refresh token that renews it."""

    __tablename__ = "user_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    refresh_token: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    last_used: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        expires_at = self.expires_at
        # SQLite hands timestamps back without tzinfo; they were stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return (now or utcnow()) >= expires_at
