"""
Exception handlers mapping errors to the API's JSON error envelope.

    400 {"statusCode": 400, "error": "Bad Request", "messages": [...]}
    404 {"statusCode": 404, "error": "Not Found", "message": "..."}
    500 {"statusCode": 500, "error": "Internal Server Error", "message": "..."}
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import InvalidInputError, NotFoundError, capture_exception

VALUE_ERROR_PREFIX = "Value error, "

# Wire names shown to clients in validation messages
FIELD_LABELS = {
    "message": "Message",
    "visitorId": "Visitor ID",
    "message_id": "Message ID",
    "slug": "Slug",
}


def error_response(status_code: int, error: str, **body: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, "error": error, **body},
    )


def internal_error_response() -> JSONResponse:
    """Generic 500 envelope. Never carries exception details."""
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        message="An unexpected error occurred.",
    )


def _validation_message(error: dict) -> str:
    """Turn a pydantic error into a readable sentence."""
    field = str(error["loc"][-1]) if error.get("loc") else "request"
    label = FIELD_LABELS.get(field, f"{field[:1].upper()}{field[1:]}")
    if error.get("type") == "missing":
        return f"{label} is required."
    message = str(error.get("msg", "Invalid value."))
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX):]
    return f"{label}: {message}"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Bad Request",
        messages=[_validation_message(e) for e in exc.errors()],
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request", messages=[exc.message])


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Not Found", message=exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same envelope."""
    phrase = {404: "Not Found", 405: "Method Not Allowed"}.get(exc.status_code, "Error")
    return error_response(exc.status_code, phrase, message=str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort for failures outside RequestContextMiddleware.

    Route errors are caught inside the middleware stack so the 500 still gets
    CORS, security headers and X-Request-ID; this only sees errors raised by
    the outer middleware itself.
    """
    capture_exception(exc, context={"path": request.url.path, "method": request.method})
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidInputError, invalid_input_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
