from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.my_list import (
    AlreadyInList,
    ContentNotFound,
    InternalError,
    InvalidCursor,
    LimitOutOfRange,
    MyListError,
    NotInList,
)
from server.models.schemas import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)

# Domain errors never carry transport details; the status mapping lives here.
_STATUS_BY_ERROR: dict[type[MyListError], int] = {
    ContentNotFound: 404,
    AlreadyInList: 409,
    NotInList: 404,
    InvalidCursor: 400,
    LimitOutOfRange: 400,
    InternalError: 500,
}


def status_for(exc: MyListError) -> int:
    for cls in type(exc).__mro__:
        status = _STATUS_BY_ERROR.get(cls)  # type: ignore[arg-type]
        if status is not None:
            return status
    return 500


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_my_list_error(request: Request, exc: MyListError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request failed: %s %s -> %s (%s)",
        request.method,
        request.url.path,
        status_code,
        exc.code,
    )
    return error_response(status_code, exc.code, exc.message)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return error_response(400, "validation_error", details or "Invalid request")


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(404, "not_found", f"Route {request.method} {request.url.path} not found")
    if exc.status_code == 405:
        return error_response(405, "method_not_allowed", f"Method {request.method} not allowed")
    return error_response(exc.status_code, "http_error", str(exc.detail))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s %s", request.method, request.url.path)
    return error_response(500, "internal_error", "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MyListError, _handle_my_list_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)
