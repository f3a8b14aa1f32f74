"""Exception handlers rendering errors in the gateway's JSON envelope"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recharge_gateway.api.dependencies import get_request_id
from recharge_gateway.domain.exceptions import DomainException, ValidationError
from recharge_gateway.infrastructure.observability.metrics import validation_rejection_counter

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error_code: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error_code": error_code, **extra},
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Validation errors, unknown transactions and simulated failures"""
    if isinstance(exc, ValidationError):
        validation_rejection_counter.labels(error_code=exc.error_code).inc()
    logger.warning(
        f"{type(exc).__name__}: {exc.message}",
        extra={"request_id": get_request_id(request), "error_code": exc.error_code, "path": request.url.path},
    )
    return error_response(exc.status_code, exc.message, exc.error_code, **exc.extra)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON bodies or non-integer query parameters"""
    in_query = any(err.get("loc", ("",))[0] == "query" for err in exc.errors())
    error_code = "INVALID_QUERY_PARAMETERS" if in_query else "INVALID_REQUEST_BODY"
    validation_rejection_counter.labels(error_code=error_code).inc()
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", error_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes and methods surface as ENDPOINT_NOT_FOUND"""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, "Endpoint not found", "ENDPOINT_NOT_FOUND")
    return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else: log with traceback, answer with a generic message"""
    logger.error(
        f"Unexpected error: {exc}",
        exc_info=exc,
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR")
