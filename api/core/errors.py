"""
App-wide error rendering.

Every failure body has the shape {"success": false, "error": "<message>"}.
Services raise `HTTPException`; a dict `detail` must carry an "error" key and
its other keys are merged into the body.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_body(detail: Any) -> dict[str, Any]:
    if isinstance(detail, dict):
        body = {"success": False, "error": str(detail.get("error") or "Error")}
        body.update({k: v for (k, v) in detail.items() if k != "error"})
        return body
    return {"success": False, "error": str(detail)}


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Invalid request.",
            "details": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": str(err.get("msg") or "")}
                for err in exc.errors()
            ],
        },
    )


async def store_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
    logger.exception("store_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body(str(exc) or "Database error."))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body(str(exc) or "Internal server error."))


def install(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(asyncpg.PostgresError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
