"""Domain-specific exceptions for the workforce API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers. All failures
originate at the directory store or identity boundary; the aggregation
code is pure and raises none of these itself.
"""

from typing import Any


class WorkforceAPIError(Exception):
    """Base exception for all workforce API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(WorkforceAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: str | None = None) -> None:
        message = "Employee not found"
        details = {"employee_id": employee_id} if employee_id else {}
        super().__init__(message, details)


class ProjectNotFoundError(NotFoundError):
    """Raised when a project cannot be found."""

    def __init__(self, project_id: str | None = None) -> None:
        message = "Project not found"
        details = {"project_id": project_id} if project_id else {}
        super().__init__(message, details)


class InvoiceNotFoundError(NotFoundError):
    """Raised when an invoice cannot be found."""

    def __init__(self, invoice_id: str | None = None) -> None:
        message = "Invoice not found"
        details = {"invoice_id": invoice_id} if invoice_id else {}
        super().__init__(message, details)


# =============================================================================
# Directory Store Errors (502 / 503 / 504)
# =============================================================================


class StoreUnavailableError(WorkforceAPIError):
    """Raised when the directory store is unreachable or not configured."""

    def __init__(self, message: str = "Directory store unavailable", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class StoreTimeoutError(WorkforceAPIError):
    """Raised when a directory store call exceeds its timeout."""

    def __init__(self, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__("Directory store timed out", details)


class InvalidRecordError(WorkforceAPIError):
    """Raised when a stored record cannot be parsed into a domain model.

    Status, priority and role values outside their enumerations end up here
    instead of being silently defaulted.
    """

    def __init__(self, collection: str, record_id: str | None = None, reason: str | None = None) -> None:
        details: dict[str, Any] = {"collection": collection}
        if record_id:
            details["record_id"] = record_id
        if reason:
            details["reason"] = reason
        super().__init__("Invalid record in directory store", details)


# =============================================================================
# Identity Errors (401)
# =============================================================================


class UnauthenticatedError(WorkforceAPIError):
    """Raised when an operation needs a current identity and there is none."""

    def __init__(self) -> None:
        super().__init__("Authentication required")


# =============================================================================
# Permission Errors (403)
# =============================================================================


class ForbiddenError(WorkforceAPIError):
    """Raised when the current identity's role does not allow an operation."""

    def __init__(self, role: str | None = None, required: list[str] | None = None) -> None:
        details: dict[str, Any] = {}
        if role:
            details["role"] = role
        if required:
            details["required_roles"] = required
        super().__init__("Access denied", details)


# =============================================================================
# Workspace Load Errors (409)
# =============================================================================


class LoadSupersededError(WorkforceAPIError):
    """Raised to the caller of a load that a newer load has replaced."""

    def __init__(self, generation: int, latest_generation: int) -> None:
        super().__init__(
            "Request superseded",
            {"generation": generation, "latest_generation": latest_generation},
        )
