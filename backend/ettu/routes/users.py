"""
ETTU Backend — User Routes
============================

/api/v1/users: the current user and their profile. Placeholders.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(prefix="/users", tags=["Users"], default_response_class=PlainTextResponse)


@router.get("/me")
async def get_current_user() -> str:
    return "Get current user endpoint - not implemented"


@router.get("/profile")
async def get_user_profile() -> str:
    return "Get user profile endpoint - not implemented"
