"""Maps domain and store failures to HTTP responses."""

import logging
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from brincapark.domain.errors import (
    DomainError,
    InvalidTransitionError,
    ReservationNotFoundError,
    ReservationsClosedError,
    SlotConflictError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ReservationNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    SlotConflictError: status.HTTP_409_CONFLICT,
    ReservationsClosedError: status.HTTP_409_CONFLICT,
}

STORE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def _status_for(exc: DomainError) -> int:
    for error_cls in type(exc).__mro__:
        if error_cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_cls]
    return status.HTTP_400_BAD_REQUEST


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    content = {"error": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError):
        content["fields"] = exc.errors
    headers = {"WWW-Authenticate": "X-Admin-Key"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=_status_for(exc), content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request-shape errors share the 400 body of domain validation errors."""
    fields: dict[str, str] = {}
    for error in exc.errors():
        fields.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "valor inválido"))
    return await domain_error_handler(request, ValidationError(fields))


async def store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Store unavailable",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "STORE_UNAVAILABLE",
            "message": "La base de datos no está disponible; intente de nuevo más tarde",
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Error interno del servidor",
            "error_id": error_id,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    for error_cls in STORE_ERRORS:
        app.add_exception_handler(error_cls, store_unavailable_handler)
    app.add_exception_handler(Exception, global_exception_handler)
