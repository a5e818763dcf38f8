"""/api/v1/notes: placeholder listing."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ettu.schemas.common import PaginationParams, pagination_params

router = APIRouter(prefix="/notes", tags=["Notes"], default_response_class=PlainTextResponse)


@router.get("/")
async def list_notes(pagination: PaginationParams = Depends(pagination_params)) -> str:
    return "List notes endpoint - not implemented"
