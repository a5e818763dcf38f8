"""
ETTU Backend — Project Routes
===============================

/api/v1/projects: list, create, and fetch one project. Placeholders.

The list route already parses pagination (page, limit, sort, order) so the
query-string contract is fixed before the handler gains a real query.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ettu.schemas.common import PaginationParams, pagination_params

router = APIRouter(prefix="/projects", tags=["Projects"], default_response_class=PlainTextResponse)


@router.get("/")
async def list_projects(pagination: PaginationParams = Depends(pagination_params)) -> str:
    return "List projects endpoint - not implemented"


@router.post("/")
async def create_project() -> str:
    return "Create project endpoint - not implemented"


@router.get("/{project_id}")
async def get_project(project_id: str) -> str:
    """Any id is accepted until the lookup exists; parse_uuid will validate it then."""
    return "Get project endpoint - not implemented"
