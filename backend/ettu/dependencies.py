"""
ETTU Backend — Shared FastAPI Dependencies
============================================

What:  Small Depends() helpers used across routers.
Why:   Routes read settings from the running app (app.state.settings) rather
       than a module global, so a test app built with its own Settings is
       fully isolated.
"""

from typing import Callable

from fastapi import Request

from ettu.config import Settings
from ettu.exceptions import FeatureDisabledError

# Flags that gate whole route groups
FEATURE_FLAGS = {"guest_mode", "registration_enabled", "public_snippets"}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_feature(flag: str) -> Callable[[Request], None]:
    """
    Build a dependency that rejects the request with 403 when `flag` is off.

    Example:
        @router.post("/guest", dependencies=[Depends(require_feature("guest_mode"))])
    """
    if flag not in FEATURE_FLAGS:
        raise ValueError(f"Unknown feature flag: {flag}")

    def dependency(request: Request) -> None:
        if not getattr(get_app_settings(request), flag):
            raise FeatureDisabledError(flag)

    return dependency
