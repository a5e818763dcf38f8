"""
ETTU Backend — Shared Response Envelopes
==========================================

What:  Pydantic models shared by every resource: the success/error envelope,
       pagination parameters, the paginated list wrapper, and the error and
       health bodies.
Why:   Clients parse one envelope shape regardless of which resource they call.

Pagination rules:
    page   defaults to 1 (values below 1 count as 1)
    limit  defaults to 20, capped at 100 (values below 1 count as 1)
    offset = (page - 1) * limit
    sort   defaults to "created_at"; order defaults to "desc"
"""

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
DEFAULT_SORT = "created_at"
DEFAULT_ORDER = "desc"


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform wrapper for JSON payloads.

    Example:
        ApiResponse.ok(project)          → {"success": true, "data": {...}}
        ApiResponse.fail("Bad input")    → {"success": false, "error": "Bad input"}
    """
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def ok_with_message(cls, data: T, message: str) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse[T]":
        return cls(success=False, error=error)


class PaginationParams(BaseModel):
    """
    What:  Page-number pagination parameters with their defaults applied.
    How:   Missing values take the defaults; out-of-range values are clamped,
           never rejected, so a client asking for limit=500 gets 100 items.
    """
    page: int = Field(default=DEFAULT_PAGE, description="1-based page number")
    limit: int = Field(default=DEFAULT_LIMIT, description=f"Items per page (max {MAX_LIMIT})")
    sort: str = Field(default=DEFAULT_SORT, description="Field to sort by")
    order: str = Field(default=DEFAULT_ORDER, description="asc or desc")

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page(cls, v: Optional[int]) -> int:
        if v is None:
            return DEFAULT_PAGE
        return max(int(v), 1)

    @field_validator("limit", mode="before")
    @classmethod
    def clamp_limit(cls, v: Optional[int]) -> int:
        if v is None:
            return DEFAULT_LIMIT
        return min(max(int(v), 1), MAX_LIMIT)

    @field_validator("sort", mode="before")
    @classmethod
    def default_sort(cls, v: Optional[str]) -> str:
        return v or DEFAULT_SORT

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v: Optional[str]) -> str:
        return "asc" if v and v.lower() == "asc" else DEFAULT_ORDER

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def pagination_params(
    page: Optional[int] = Query(default=None, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description=f"Items per page (max {MAX_LIMIT})"),
    sort: Optional[str] = Query(default=None, description="Field to sort by"),
    order: Optional[str] = Query(default=None, description="asc or desc"),
) -> PaginationParams:
    """FastAPI dependency reading pagination from the query string."""
    return PaginationParams(page=page, limit=limit, sort=sort, order=order)


class PaginatedResponse(BaseModel, Generic[T]):
    """
    What:  Pagination envelope for list endpoints.
    total_pages is the ceiling of total / limit (0 when there are no items).
    """
    items: List[T]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], total: int, page: int, limit: int) -> "PaginatedResponse[T]":
        total_pages = -(-total // limit) if limit > 0 else 0
        return cls(items=items, total=total, page=page, limit=limit, total_pages=total_pages)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "feature_disabled",
            "message": "The 'guest_mode' feature is disabled",
            "details": {"feature": "guest_mode"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Body of GET /health.

    database values:
        connected       pool answered SELECT 1
        disconnected    pool exists but the probe failed (HTTP 503)
        not_configured  server runs in database-less mode
    """
    status: str = Field(description="healthy or unhealthy")
    timestamp: datetime = Field(description="When the check ran (UTC)")
    version: str = Field(description="Application version")
    environment: str = Field(description="Deployment environment")
    database: str = Field(description="connected, disconnected or not_configured")
    uptime_seconds: float = Field(description="Seconds since the process started serving")
    error: Optional[str] = Field(default=None, description="Probe failure, when unhealthy")
