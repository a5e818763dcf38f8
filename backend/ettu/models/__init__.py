"""
ETTU Backend — SQLAlchemy Models
==================================

Importing this package registers every table with Base.metadata, which is
what Alembic's env.py needs for --autogenerate.
"""

from ettu.models.note import Note, Snippet, Task
from ettu.models.project import Project, ProjectInvitation, ProjectMember
from ettu.models.user import User, UserSession

__all__ = [
    "Note",
    "Project",
    "ProjectInvitation",
    "ProjectMember",
    "Snippet",
    "Task",
    "User",
    "UserSession",
]
