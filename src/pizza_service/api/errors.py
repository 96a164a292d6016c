"""
pizza_service.api.errors

Exception handlers rendering service errors as `{"message": ...}` bodies.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pizza_service.errors import InfrastructureError, ServiceError, ValidationError
from pizza_service.observability.logging import get_logger

log = get_logger(__name__)


def _render(err: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if err.status_code == 401 else None
    return JSONResponse(
        status_code=err.status_code, content={"message": err.message}, headers=headers
    )


async def _service_error(_: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("service_error", error=exc.message, error_type=type(exc).__name__)
    return _render(exc)


async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request_invalid", errors=len(exc.errors()))
    return _render(ValidationError("invalid request"))


async def _database_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Not retried; the request fails and the process keeps serving.
    log.error("database_error", error_type=type(exc).__name__, exc_info=exc)
    return _render(InfrastructureError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, _request_validation_error  # type: ignore[arg-type]
    )
    app.add_exception_handler(SQLAlchemyError, _database_error)  # type: ignore[arg-type]
