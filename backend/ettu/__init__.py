"""
ETTU Backend — Application Package Initializer
================================================

What: Marks the `ettu` directory as a Python package.
Why:  Enables module imports like `from ettu.config import get_settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a layered scaffold for a personal productivity tool
    (projects, tasks, notes, snippets, users):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP wiring, placeholders
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy rows + Pydantic shapes
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Pooled async engine, migrations
    └─────────────────────────────────────┘

    Configuration, logging and error handling sit beside these layers and
    are shared by all of them.
"""

__version__ = "0.1.0"
