"""/api/v1/tasks: placeholder listing."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ettu.schemas.common import PaginationParams, pagination_params

router = APIRouter(prefix="/tasks", tags=["Tasks"], default_response_class=PlainTextResponse)


@router.get("/")
async def list_tasks(pagination: PaginationParams = Depends(pagination_params)) -> str:
    return "List tasks endpoint - not implemented"
