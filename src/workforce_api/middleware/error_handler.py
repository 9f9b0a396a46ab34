"""Global error handling to prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workforce_api.config import Settings, get_settings
from workforce_api.exceptions import (
    ForbiddenError,
    InvalidRecordError,
    LoadSupersededError,
    NotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
    UnauthenticatedError,
    WorkforceAPIError,
)
from workforce_api.utils.secure_logging import describe_error

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Request superseded",
    422: "Invalid input data",
    500: "Internal server error",
    502: "Invalid record in directory store",
    503: "Service temporarily unavailable",
    504: "Directory store timed out",
}

# Error messages that are safe to pass through
# These don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Authentication required",
    "Access denied",
    "Resource not found",
    "Employee not found",
    "Project not found",
    "Invoice not found",
    "Directory store unavailable",
    "Directory store not configured",
    "Directory store timed out",
    "Invalid record in directory store",
    "Request superseded",
]

# Most specific class first
ERROR_STATUS_CODES: list[tuple[type[WorkforceAPIError], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (LoadSupersededError, status.HTTP_409_CONFLICT),
    (InvalidRecordError, status.HTTP_502_BAD_GATEWAY),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StoreTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
]


def _get_settings(request: Request) -> Settings:
    context = getattr(request.app.state, "context", None)
    return context.settings if context is not None else get_settings()


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run before the CORS middleware can add headers, so
    allowed origins are echoed here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in _get_settings(request).cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def status_code_for(exc: WorkforceAPIError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    for pattern in ALLOWED_ERROR_PATTERNS:
        if pattern.lower() in message_lower:
            return True
    return False


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str):
        if is_safe_error_message(detail):
            return detail
    elif isinstance(detail, list):
        # Validation errors - extract safe field information
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])

    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


async def workforce_exception_handler(request: Request, exc: WorkforceAPIError) -> JSONResponse:
    """Handle domain errors with their mapped status codes.

    Args:
        request: FastAPI request
        exc: Domain error

    Returns:
        JSONResponse with sanitized error
    """
    status_code = status_code_for(exc)
    cors_headers = _get_cors_headers(request)

    if status_code >= 500:
        logger.warning("Request %s failed: %s", request.url.path, describe_error(exc))
    else:
        logger.info("Request %s rejected: %s", request.url.path, describe_error(exc))

    content: dict[str, Any] = {"detail": sanitize_error_detail(exc.message, status_code)}
    if _get_settings(request).debug and exc.details:
        content["details"] = exc.details

    headers = dict(cors_headers)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Bearer"

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    cors_headers = _get_cors_headers(request)

    if _get_settings(request).debug:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": sanitize_error_detail(exc.detail, exc.status_code)},
        headers=cors_headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    cors_headers = _get_cors_headers(request)

    logger.warning("Validation error for %s: %d error(s)", request.url.path, len(exc.errors()))

    if _get_settings(request).debug:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": sanitize_error_detail(exc.errors(), status.HTTP_422_UNPROCESSABLE_ENTITY)
        },
        headers=cors_headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    settings = _get_settings(request)
    cors_headers = _get_cors_headers(request)

    logger.error("Unhandled exception for %s: %s", request.url.path, describe_error(exc), exc_info=True)

    if settings.debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
        headers=cors_headers,
    )
