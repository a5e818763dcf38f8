"""
ETTU Backend — Snippet Routes
===============================

/api/v1/snippets        the caller's own snippets
/api/v1/public/snippets snippets any visitor may read; 403 when PUBLIC_SNIPPETS=false

Both are placeholders.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ettu.dependencies import require_feature
from ettu.schemas.common import PaginationParams, pagination_params

router = APIRouter(prefix="/snippets", tags=["Snippets"], default_response_class=PlainTextResponse)

public_router = APIRouter(
    prefix="/public",
    tags=["Public"],
    default_response_class=PlainTextResponse,
    dependencies=[Depends(require_feature("public_snippets"))],
)


@router.get("/")
async def list_snippets(pagination: PaginationParams = Depends(pagination_params)) -> str:
    return "List snippets endpoint - not implemented"


@public_router.get("/snippets")
async def list_public_snippets(pagination: PaginationParams = Depends(pagination_params)) -> str:
    return "List public snippets endpoint - not implemented"
