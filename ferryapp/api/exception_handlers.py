"""
Exception handlers for the FastAPI application.

Kernel errors are mapped to HTTP responses in one table. Every error body
has the shape ``{"error": "<message>"}``; request validation failures add
``errores`` with one entry per field.

Usage:
    from ferryapp.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ferryapp.kernel.errors import (
    Conflict,
    Forbidden,
    HashingError,
    IdentityError,
    NotFound,
    PersistenceError,
    Unauthorized,
    ValidationError,
)
from ferryapp.logging_config import get_logger

logger = get_logger(__name__)

ERROR_STATUS: dict[type[IdentityError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    HashingError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_SERVER_ERROR = "Error interno del servidor"


def status_for(exc: IdentityError) -> int:
    """HTTP status for an error kind; unknown kinds are server errors."""
    for kind in type(exc).__mro__:
        if kind in ERROR_STATUS:
            return ERROR_STATUS[kind]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _base_headers(request: Request) -> dict[str, str]:
    headers = {}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    return headers


async def identity_error_handler(request: Request, exc: IdentityError) -> JSONResponse:
    """Render a kernel error."""
    status_code = status_for(exc)
    headers = _base_headers(request)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Bearer"

    if status_code >= 500:
        logger.error(
            "Internal failure: %s",
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
        content = {"error": exc.public_message or GENERIC_SERVER_ERROR}
    else:
        content = {"error": exc.client_message}

    if isinstance(exc, ValidationError) and exc.fields:
        content["campos"] = exc.fields

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Keep framework-raised HTTP errors (404 route, 405 method) in the same shape."""
    headers = _base_headers(request)
    if exc.headers:
        headers.update(exc.headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are client errors (400)."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors.append({
            "campo": field,
            "mensaje": error["msg"],
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Formato JSON invalido", "errores": errors},
        headers=_base_headers(request),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected: log it, answer with a generic 500."""
    logger.exception("Unhandled exception: %s", exc)
    content = {"error": GENERIC_SERVER_ERROR}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        content["request_id"] = req_id
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_base_headers(request),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on the application."""
    app.add_exception_handler(IdentityError, identity_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
