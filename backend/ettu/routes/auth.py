"""
ETTU Backend — Auth Routes
============================

What:  /api/v1/auth: login, register, logout, token refresh, guest creation,
       and guest-to-user migration.
State: Placeholders. Each answers 200 with static text; no credentials are
       checked and no tokens are issued. The request/response shapes these
       endpoints will use live in ettu.schemas.user.

Feature flags:
    REGISTRATION_ENABLED=false  → /register answers 403
    GUEST_MODE=false            → /guest and /migrate answer 403
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ettu.dependencies import require_feature

router = APIRouter(prefix="/auth", tags=["Auth"], default_response_class=PlainTextResponse)


@router.post("/login")
async def login() -> str:
    return "Login endpoint - not implemented"


@router.post("/register", dependencies=[Depends(require_feature("registration_enabled"))])
async def register() -> str:
    return "Register endpoint - not implemented"


@router.post("/logout")
async def logout() -> str:
    return "Logout endpoint - not implemented"


@router.post("/refresh")
async def refresh_token() -> str:
    return "Refresh token endpoint - not implemented"


@router.post("/guest", dependencies=[Depends(require_feature("guest_mode"))])
async def create_guest() -> str:
    return "Create guest endpoint - not implemented"


@router.post("/migrate", dependencies=[Depends(require_feature("guest_mode"))])
async def migrate_guest_to_user() -> str:
    return "Migrate guest to user endpoint - not implemented"
