"""
FastAPI exception handlers for structured error responses.

Maps relay and upstream exceptions to HTTP status codes. Every body has
an `error` key; diagnostic fields are added per exception type.
"""

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

from phish_relay.relay.exceptions import (
    InvalidInputError,
    RequestTooLargeError,
    ServiceUnavailableError,
    UpstreamStatusError,
)
from phish_relay.validation.exceptions import UpstreamFormatError, UpstreamSchemaError

logger = structlog.get_logger(__name__)


async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError) -> JSONResponse:
    """
    Missing API key or no bound model.

    Maps to 503 Service Unavailable; the request is rejected, not queued.
    """
    logger.warning("Service unavailable", reason=type(exc).__name__, error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": exc.message},
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """
    Caller sent a body of the wrong shape.

    Maps to 400 Bad Request. Client mistakes are not logged as errors.
    """
    logger.info("Invalid request body", error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message},
    )


async def upstream_format_error_handler(request: Request, exc: UpstreamFormatError) -> JSONResponse:
    """
    Model returned text that is not JSON.

    Maps to 502 Bad Gateway with the first 1000 characters of the raw text.
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": exc.message, "raw": exc.raw_excerpt},
    )


async def upstream_schema_error_handler(request: Request, exc: UpstreamSchemaError) -> JSONResponse:
    """
    Model returned JSON without an array `results`.

    Maps to 502 Bad Gateway echoing the parsed value.
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": exc.message, "parsed": exc.parsed},
    )


async def upstream_status_handler(request: Request, exc: UpstreamStatusError) -> JSONResponse:
    """
    Diagnostic upstream call failed with an HTTP status; forward it.
    """
    logger.warning("Upstream call failed", status_code=exc.status_code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "body": exc.body},
    )


async def request_too_large_handler(request: Request, exc: RequestTooLargeError) -> JSONResponse:
    """Body above MAX_BODY_BYTES; maps to 413."""
    logger.info("Request body too large", error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={"error": exc.message},
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Anything else (network errors, upstream HTTP errors on generation, bugs).

    Maps to 500 Internal Server Error with the error message.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "details": str(exc)},
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ServiceUnavailableError: service_unavailable_handler,
    InvalidInputError: invalid_input_handler,
    UpstreamFormatError: upstream_format_error_handler,
    UpstreamSchemaError: upstream_schema_error_handler,
    UpstreamStatusError: upstream_status_handler,
    RequestTooLargeError: request_too_large_handler,
    Exception: generic_error_handler,
}
