"""Request ID generation utilities."""

import uuid


def generate_request_id() -> str:
    """Generate a unique request ID for tracing.

    Returns:
        A UUID4 hex string identifying one HTTP request in the logs.
    """
    return uuid.uuid4().hex
