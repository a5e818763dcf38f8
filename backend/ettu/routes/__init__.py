"""
ETTU Backend — API Routes Package
===================================

Route Inventory:
    - health.py:    GET  /health
    - metrics.py:   GET  /metrics                     (placeholder)
    - (here):       GET  /api/v1/status
    - auth.py:      POST /api/v1/auth/{login,register,logout,refresh,guest,migrate}
    - users.py:     GET  /api/v1/users/{me,profile}
    - projects.py:  GET/POST /api/v1/projects/, GET /api/v1/projects/{id}
    - tasks.py:     GET  /api/v1/tasks/
    - notes.py:     GET  /api/v1/notes/
    - snippets.py:  GET  /api/v1/snippets/, GET /api/v1/public/snippets

Everything under /api/v1 except /status is a placeholder answering static text.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ettu.routes import auth, notes, projects, snippets, tasks, users
from ettu.schemas.common import ErrorResponse

API_PREFIX = "/api/v1"


def build_api_router() -> APIRouter:
    """Assemble every versioned route group under /api/v1."""
    api = APIRouter(
        prefix=API_PREFIX,
        responses={
            403: {"model": ErrorResponse, "description": "Feature disabled"},
            429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
            500: {"model": ErrorResponse, "description": "Internal error"},
        },
    )

    @api.get("/status", response_class=PlainTextResponse, tags=["Status"])
    async def api_status() -> str:
        return "API is running"

    api.include_router(auth.router)
    api.include_router(users.router)
    api.include_router(projects.router)
    api.include_router(tasks.router)
    api.include_router(notes.router)
    api.include_router(snippets.router)
    api.include_router(snippets.public_router)
    return api
