"""
Global exception handlers for the API layer.

Each handler turns an application exception into a BaseResult envelope so
clients see the same shape for failures as for successes. Endpoints and
controller helpers let these exceptions propagate.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from webcommon.core.exceptions import (
    AppException,
    BindingError,
    EmptyPayloadError,
    RepositoryError,
    TypeMismatchError,
    ValidationError,
)
from webcommon.schemas.common import BaseResult
from webcommon.utils.logger import get_logger

logger = get_logger(__name__)


def _envelope_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=BaseResult.fail(status_code, message).model_dump(),
    )


async def validation_exception_handler(
        request: Request, exc: ValidationError
) -> JSONResponse:
    """
    Handle ValidationError, including unparseable dates from the binder.
    Maps to HTTP 400 Bad Request.

    Pydantic request validation is still handled by FastAPI itself (422).
    """
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def empty_payload_exception_handler(
        request: Request, exc: EmptyPayloadError
) -> JSONResponse:
    """Maps to HTTP 400 Bad Request."""
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def type_mismatch_exception_handler(
        request: Request, exc: TypeMismatchError
) -> JSONResponse:
    """A payload of the wrong type is a server-side bug; maps to HTTP 500."""
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def binding_exception_handler(
        request: Request, exc: BindingError
) -> JSONResponse:
    """Maps to HTTP 500 Internal Server Error."""
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def repository_exception_handler(
        request: Request, exc: RepositoryError
) -> JSONResponse:
    """
    Handle RepositoryError that the service layer did not translate.
    Maps to HTTP 500; database details stay in the log.
    """
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal database error occurred"
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Fallback for any AppException without a more specific handler.
    Maps to HTTP 500 Internal Server Error.
    """
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return _envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


# Exception types and their handlers, registered at once in main.py
EXCEPTION_HANDLERS = {
    ValidationError: validation_exception_handler,
    EmptyPayloadError: empty_payload_exception_handler,
    TypeMismatchError: type_mismatch_exception_handler,
    BindingError: binding_exception_handler,
    RepositoryError: repository_exception_handler,
    AppException: app_exception_handler,
}
