# gst_invoice/api/v1/envelope.py
"""
Response envelope shared by every v1 endpoint, success or failure.

    {
        "status": "ok" | "error",
        "data": <payload>,
        "message": <optional string>,
        "errors": <optional list of detail dicts>
    }

Routes return ``ok(...)`` / ``paginated(...)``; failures are raised as
``HTTPException`` and rendered into the same shape by the handlers
installed with ``register_error_handlers``.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("api.v1.envelope")

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


class PaginatedData(BaseModel, Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int
    has_more: bool


class PaginationParams(BaseModel):
    """History table paging (use as Depends)."""

    limit: int = Field(default=20, ge=1, le=100, description="Rows per page")
    offset: int = Field(default=0, ge=0, description="Rows to skip")


def ok(data: Any = None, message: str | None = None) -> dict:
    return ApiResponse(status="ok", data=data, message=message).model_dump()


def error(message: str, errors: list[dict[str, Any]] | None = None) -> dict:
    return ApiResponse(status="error", message=message, errors=errors).model_dump()


def paginated(items: list, total: int, limit: int, offset: int) -> dict:
    page = PaginatedData(
        items=items,
        total=total,
        limit=limit,
        offset=offset,
        has_more=(offset + limit) < total,
    )
    return ApiResponse(status="ok", data=page).model_dump()


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------

def _detail_to_error(detail: Any) -> tuple[str, list[dict[str, Any]] | None]:
    """HTTPException.detail may be a plain string or a dict with a ``message``."""
    if isinstance(detail, dict):
        return str(detail.get("message", "Request failed")), [detail]
    return str(detail), None


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message, errors = _detail_to_error(exc.detail)
    if exc.status_code >= 500:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error(message, errors),
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(p) for p in e.get("loc", ())), "message": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(status_code=422, content=error("Invalid request body", errors))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
