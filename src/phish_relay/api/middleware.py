"""FastAPI middleware for request tracing, body size limits and uncaught errors."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from phish_relay.api.error_handlers import generic_error_handler, request_too_large_handler
from phish_relay.relay.exceptions import RequestTooLargeError

logger = structlog.get_logger(__name__)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Add a request ID to every request.

    - Binds request_id/method/path to structlog contextvars
    - Adds an X-Request-ID response header
    - Logs request completion with duration
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = str(uuid.uuid4())

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed",
                exc_info=exc,
                duration_ms=round(duration_ms, 2),
            )
            raise

        finally:
            # Prevent context leaking into other requests
            structlog.contextvars.clear_contextvars()


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds max_body_bytes."""

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                return await request_too_large_handler(
                    request,
                    RequestTooLargeError(
                        f"Request body exceeds {self.max_body_bytes} bytes"
                    ),
                )
        return await call_next(request)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn uncaught exceptions into the generic 500 body.

    Must be added before CORSMiddleware and RequestTracingMiddleware so the
    500 response still carries their headers.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await generic_error_handler(request, exc)
