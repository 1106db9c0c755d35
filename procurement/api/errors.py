# procurement/api/errors.py
from __future__ import annotations

import logging
from typing import List, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from procurement.core.errors import (
    InfrastructureError,
    NotEnoughPrivileges,
    NotFound,
    OrganizationNotFound,
    ParseError,
    ProcurementError,
    UserNotFound,
)

logger = logging.getLogger(__name__)

# first match wins; subclasses before their bases
STATUS_BY_ERROR: List[Tuple[Type[ProcurementError], int]] = [
    (UserNotFound, 401),
    (OrganizationNotFound, 401),
    (NotFound, 404),
    (NotEnoughPrivileges, 403),
    (InfrastructureError, 500),
]


def status_for(exc: ProcurementError) -> int:
    if isinstance(exc, ParseError):
        return 401 if exc.user_caused else 400
    for cls, status in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 500


def error_response(status: int, reason: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"reason": reason})


async def procurement_error_handler(request: Request, exc: ProcurementError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        # storage detail stays in the logs
        return error_response(status, "internal error")
    return error_response(status, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors and errors[0].get("type") == "json_invalid":
        return error_response(400, "invalid json")
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    return error_response(400, f"{where}: {first.get('msg', 'invalid request')}")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProcurementError, procurement_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
