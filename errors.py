# errors.py
"""
Error taxonomy for the CAR MART API and the FastAPI handlers that turn it
into the `{message, errors?}` envelope.

Stores and the purchase coordinator raise these; routers never build error
responses by hand.
"""
import logging
from typing import List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from Services.responses import error

logger = logging.getLogger(__name__)

ErrorDetail = Optional[Union[str, List[str]]]


class CarMartError(Exception):
    """Base exception for every failure the API reports to a client."""

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: ErrorDetail = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_response(self) -> dict:
        return error(self.message, self.errors)


class ValidationError(CarMartError):
    """Payload failed field checks; `errors` holds one message per failure."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, errors: List[str], message: str = "Validation Error"):
        super().__init__(message, errors)


class BadRequest(CarMartError):
    http_status = status.HTTP_400_BAD_REQUEST


class InvalidIdentifier(BadRequest):
    def __init__(self, message: str = "Invalid Id Format"):
        super().__init__(message)


class ChassisImmutableError(BadRequest):
    def __init__(self, message: str = "Chasis No cannot be updated"):
        super().__init__(message)


class EmptyPayloadError(BadRequest):
    def __init__(self, message: str = "Payload cannot be empty"):
        super().__init__(message)


class InvalidImageError(BadRequest):
    pass


class Unauthorized(CarMartError):
    http_status = status.HTTP_401_UNAUTHORIZED


class NotFound(CarMartError):
    http_status = status.HTTP_404_NOT_FOUND


class Conflict(CarMartError):
    http_status = status.HTTP_409_CONFLICT


class InternalError(CarMartError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_error(e: dict) -> str:
    # Field validators raise messages that already name their field
    if e["type"] == "invalid_field":
        return e["msg"]
    field = ".".join(str(loc) for loc in e["loc"] if loc not in ("body", "query"))
    return f"{field}: {e['msg']}" if field else e["msg"]


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CarMartError)
    async def carmart_error_handler(request: Request, exc: CarMartError):
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__, request.method, request.url.path, exc.message,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error("Validation Error", [format_validation_error(e) for e in exc.errors()]),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Can't find {request.url.path}"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Error processing request {request.url.path}: {exc}", exc_info=True)
        wrapped = InternalError(str(exc) or "Some error occurred while processing the request")
        return JSONResponse(status_code=wrapped.http_status, content=wrapped.to_response())
