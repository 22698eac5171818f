# -*- coding: utf-8 -*-
"""Error taxonomy and the JSON error envelope.

Every failure leaves the API as ``{"error": {"message": ..., "details": [...]}}``.
Storage failures are logged with their traceback and reported generically.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[List[Dict[str, Any]]] = None) -> None:
        self.message = message or self.default_message
        self.details = details or []
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, details=[{"field": field, "message": message}])


class AuthError(AppError):
    status_code = 401
    default_message = "Not authenticated"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 400
    default_message = "Already exists"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


def error_body(message: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    err: Dict[str, Any] = {"message": message}
    if details:
        err["details"] = details
    return {"error": err}


def _field_name(loc: Any) -> str:
    # ("body", "calories") -> "calories"; ("query", "start_date") -> "start_date"
    parts = [str(p) for p in (loc or ()) if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [{"field": _field_name(e.get("loc")), "message": e.get("msg", "invalid")} for e in exc.errors()]
    return JSONResponse(status_code=400, content=error_body("Validation failed", details))


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=getattr(exc, "headers", None))


async def _sqlite_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=error_body(InternalError.default_message))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(sqlite3.Error, _sqlite_error_handler)
