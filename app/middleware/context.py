"""
Request context middleware for observability.

Injects request_id and correlation_id into every request for:
- Log correlation (find all logs for a request)
- Error tracking (group errors by request)

Also writes one access log line per request with method, path, status
and duration.

Headers:
- X-Request-ID: Unique ID for this request (generated if not provided)
- X-Correlation-ID: ID spanning multiple services (passed through)
"""

import re
import time
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.api.errors import internal_error_response
from app.core.context import (
    set_request_id,
    set_correlation_id,
    generate_request_id,
    clear_context,
)
from app.core.errors import capture_exception

logger = structlog.get_logger(__name__)

# Request ID validation to prevent log injection attacks
MAX_ID_LENGTH = 64
SAFE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_\-]+$")


def _validate_id(value: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize request/correlation IDs.

    Returns None if invalid (will use generated ID instead).
    Protects against:
    - Log injection (control characters, newlines)
    - Excessive length causing log bloat
    - Special characters that could break log parsing
    """
    if not value:
        return None
    if len(value) > MAX_ID_LENGTH:
        return None
    if not SAFE_ID_PATTERN.match(value):
        return None
    return value


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that manages request context and access logging.

    Features:
    - Extracts X-Request-ID from headers or generates one
    - Extracts X-Correlation-ID for tracing across services
    - Binds context to structlog for automatic log enrichment
    - Adds request_id to response headers for client debugging
    - Logs every request except health checks
    - Turns unexpected exceptions into the generic 500 envelope
    - Cleans up context after request completes
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        provided_id = _validate_id(request.headers.get("X-Request-ID"))
        request_id = provided_id or generate_request_id()
        set_request_id(request_id)

        request.state.request_id = request_id

        correlation_id = _validate_id(request.headers.get("X-Correlation-ID"))
        if correlation_id:
            set_correlation_id(correlation_id)

        # Every log message from here on includes request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            correlation_id=correlation_id,
            path=request.url.path,
            method=request.method,
        )

        start_time = time.perf_counter()
        status_code = 500  # Default to error in case of exception

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Answer here, inside CORS and security headers, not in ServerErrorMiddleware
                capture_exception(exc, context={"path": request.url.path, "method": request.method})
                response = internal_error_response()
            status_code = response.status_code

            response.headers["X-Request-ID"] = request_id
            if correlation_id:
                response.headers["X-Correlation-ID"] = correlation_id

            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            if not request.url.path.startswith("/health"):
                logger.info(
                    "request completed",
                    status_code=status_code,
                    duration_ms=round(duration_ms, 2),
                )

            # Clean up context to prevent leaking to next request
            clear_context()
            structlog.contextvars.clear_contextvars()
