"""
ETTU Backend — User & Auth Schemas
====================================

What:  API shapes for users, sessions and the auth endpoints.
Why:   The users table stores user_type and role as plain strings; these
       enums are what clients see. Decoding happens in from_storage().

User types:
    guest       provisional identity, no credentials
    registered  signed up with email + password
    migrated    started as a guest, later converted to a registered account
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class UserType(str, Enum):
    GUEST = "guest"
    REGISTERED = "registered"
    MIGRATED = "migrated"

    @classmethod
    def from_storage(cls, value: Optional[str]) -> "UserType":
        """Decode a stored value; unknown strings decode to GUEST."""
        try:
            return cls(value)
        except ValueError:
            return cls.GUEST

    def __str__(self) -> str:
        return self.value


class UserRole(str, Enum):
    USER = "user"
    REVIEWER = "reviewer"
    MODERATOR = "moderator"
    ADMIN = "admin"
    RESTRICTED = "restricted"

    @classmethod
    def from_storage(cls, value: Optional[str]) -> "UserRole":
        """Decode a stored value; unknown strings decode to USER."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER

    def __str__(self) -> str:
        return self.value


class UserResponse(BaseModel):
    """
    What:  Public view of a user.
    Never includes password_hash or the free-form settings blob.
    """
    id: uuid.UUID
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    user_type: UserType
    role: UserRole
    is_active: bool
    is_verified: bool
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    theme: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CreateUserRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    password: Optional[str] = None
    user_type: UserType


class UpdateUserRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    theme: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    settings: Optional[Any] = None


class UserSessionResponse(BaseModel):
    """A login session. Tokens are opaque strings."""
    id: uuid.UUID
    user_id: uuid.UUID
    token: str
    refresh_token: str
    expires_at: datetime
    created_at: datetime
    last_used: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    """Either email or username identifies the account."""
    email: Optional[str] = None
    username: Optional[str] = None
    password: str


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    refresh_token: str
    expires_at: datetime


class RegisterRequest(BaseModel):
    email: str
    username: str
    display_name: str
    password: str = Field(repr=False)


class GuestToUserMigrationRequest(BaseModel):
    """Converts the guest identified by guest_id into a registered account."""
    guest_id: uuid.UUID
    email: str
    username: str
    display_name: str
    password: str = Field(repr=False)
