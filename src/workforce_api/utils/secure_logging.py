"""Secure logging utilities to prevent information disclosure."""

import logging
import re
from functools import lru_cache

from workforce_api.config import get_settings
from workforce_api.exceptions import WorkforceAPIError

MAX_LOGGED_MESSAGE_LENGTH = 200


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging in production.

    Removes potentially sensitive information like:
    - File system paths
    - Store URLs (which carry project ids and API keys)
    - Email addresses
    - API keys/tokens

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)

    # URLs first: their path segments would otherwise be taken for file paths
    error_msg = re.sub(r"(http|https)://[^\s'\"]+", "[URL]", error_msg)

    # Remove file paths (Unix and Windows)
    error_msg = re.sub(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?", "[PATH]", error_msg)

    # Remove email addresses
    error_msg = re.sub(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+", "[EMAIL]", error_msg)

    # Remove potential API keys/tokens (long alphanumeric strings)
    error_msg = re.sub(r"[a-zA-Z0-9_\-]{32,}", "[TOKEN]", error_msg)

    if len(error_msg) > MAX_LOGGED_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_LOGGED_MESSAGE_LENGTH - 3] + "..."

    return error_msg


def describe_error(error: Exception) -> str:
    """Describe an error as "<ClassName>: <message>" safe for logs.

    Domain errors carry curated messages and are passed through; anything
    else is sanitized unless running in debug mode.
    """
    if isinstance(error, WorkforceAPIError) or is_debug_mode():
        message = str(error)
    else:
        message = sanitize_exception_message(error)
    return f"{type(error).__name__}: {message}"


def log_failure(
    logger: logging.Logger,
    message: str,
    error: Exception,
    level: int = logging.WARNING,
) -> None:
    """Log a failed operation with detail appropriate to the environment.

    In debug mode the traceback is attached; otherwise only the sanitized
    description is logged.

    Args:
        logger: The logger instance to use
        message: Generic description of what failed (no sensitive data)
        error: The exception that caused the failure
        level: Logging level
    """
    logger.log(level, "%s: %s", message, describe_error(error), exc_info=is_debug_mode())
