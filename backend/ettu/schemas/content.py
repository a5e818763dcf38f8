"""
ETTU Backend — Note, Snippet & Task Schemas
=============================================

What:  API shapes for the content owned by projects and users.
Why:   These are plain records with no enum fields, so the ORM rows
       validate straight into them (from_attributes).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# ── Notes ─────────────────────────────────────────────────────────────────

class NoteResponse(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CreateNoteRequest(BaseModel):
    title: str
    content: str
    project_id: uuid.UUID


class UpdateNoteRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


# ── Snippets ──────────────────────────────────────────────────────────────

class SnippetResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    code: str
    language: str
    is_public: bool
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CreateSnippetRequest(BaseModel):
    title: str
    description: Optional[str] = None
    code: str
    language: str
    is_public: bool


class UpdateSnippetRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    language: Optional[str] = None
    is_public: Optional[bool] = None


# ── Tasks ─────────────────────────────────────────────────────────────────
# Placeholder shape: tasks have no status or scheduling fields yet.

class TaskResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
