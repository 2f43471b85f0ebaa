"""Unified error handling — every failure becomes exactly one response.

| error                                   | status | body                |
|-----------------------------------------|--------|---------------------|
| ValidationError, RequestValidationError | 422    | {"error": messages} |
| NotFoundError                           | 404    | empty               |
| ForbiddenError                          | 401    | empty               |
| AuthenticationError                     | 401    | {"error": message}  |
| ConflictError                           | 409    | {"error": message}  |
| UnknownError, anything else             | 500    | {"error": message}  |
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from artgallery.services import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

log = structlog.get_logger(__name__)

_STATUS_MAP: dict[type[ServiceError], int] = {
    NotFoundError: 404,
    ForbiddenError: 401,
    ConflictError: 409,
    ValidationError: 422,
    AuthenticationError: 401,
}

# these statuses carry no body
_EMPTY_BODY: tuple[type[ServiceError], ...] = (NotFoundError, ForbiddenError)


def status_for(exc: ServiceError) -> int:
    """Return the HTTP status for *exc*, walking its MRO; 500 if unmapped."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            return _STATUS_MAP[cls]
    return 500


async def _service_error_handler(_request: Request, exc: ServiceError) -> Response:
    status = status_for(exc)
    if isinstance(exc, _EMPTY_BODY):
        log.info("request.rejected", status_code=status, reason=str(exc))
        return Response(status_code=status)
    if status == 500:
        log.error("request.store_failure", error=str(exc), exc_info=exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=status, content={"error": str(exc)}, headers=headers)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return JSONResponse(
        status_code=422,
        content={"error": "; ".join(messages)},
    )


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    log.error("request.unhandled", error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
