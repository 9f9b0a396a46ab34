"""Hosted document store (Firestore REST) directory store."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel, to_snake

from workforce_api.config import Settings
from workforce_api.exceptions import (
    EmployeeNotFoundError,
    InvalidRecordError,
    InvoiceNotFoundError,
    NotFoundError,
    ProjectNotFoundError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project
from workforce_api.repositories.base import (
    EMPLOYEES_COLLECTION,
    INVOICES_COLLECTION,
    PROJECTS_COLLECTION,
    DirectoryStore,
)
from workforce_api.utils.secure_logging import sanitize_exception_message

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

PAGE_SIZE = 300

# Legacy invoice documents carry paid state as free text
PAID_TEXT_VALUES = frozenset({"true", "paid", "done"})
PAID_STATUS_VALUES = frozenset({"paid", "completed", "done"})


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, (list, tuple, set, frozenset)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {key: encode_value(item) for key, item in value.items()}}}
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def decode_value(typed: dict[str, Any]) -> Any:
    """Decode a Firestore typed value into a Python value."""
    if "nullValue" in typed:
        return None
    if "booleanValue" in typed:
        return bool(typed["booleanValue"])
    if "integerValue" in typed:
        return int(typed["integerValue"])
    if "doubleValue" in typed:
        return float(typed["doubleValue"])
    if "stringValue" in typed:
        return typed["stringValue"]
    if "arrayValue" in typed:
        return [decode_value(item) for item in typed["arrayValue"].get("values", [])]
    if "mapValue" in typed:
        return decode_fields(typed["mapValue"].get("fields", {}))
    raise ValueError(f"Unsupported value type: {sorted(typed)}")


def encode_fields(record: BaseModel) -> dict[str, Any]:
    """Encode a record as camelCase Firestore document fields."""
    data = record.model_dump(mode="json")
    return {to_camel(key): encode_value(value) for key, value in data.items()}


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Decode Firestore document fields into a plain dict."""
    return {key: decode_value(value) for key, value in fields.items()}


def document_id(document: dict[str, Any]) -> str:
    """Get the trailing id segment of a document resource name."""
    return document.get("name", "").rsplit("/", 1)[-1]


def _read_paid(data: dict[str, Any]) -> bool:
    paid = data.get("paid")
    if isinstance(paid, bool):
        return paid
    if isinstance(paid, str):
        return paid.strip().lower() in PAID_TEXT_VALUES
    status = data.get("status")
    if isinstance(status, str):
        return status.strip().lower() in PAID_STATUS_VALUES
    return False


def _read_millis(value: Any) -> Any:
    """Accept numeric strings for timestamp fields written by older clients."""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return value


def parse_document(model: type[T], collection: str, document: dict[str, Any]) -> T:
    """Parse a Firestore document into a domain model.

    Args:
        model: Domain model class
        collection: Collection name, used in error details
        document: Raw Firestore document

    Returns:
        Parsed record

    Raises:
        InvalidRecordError: If the document does not validate (e.g. an
            unrecognised status value)
    """
    record_id = document_id(document)
    try:
        raw = decode_fields(document.get("fields", {}))
        data = {to_snake(key): value for key, value in raw.items()}
        if not data.get("id"):
            data["id"] = record_id
        for key, value in list(data.items()):
            if key.endswith(("_at", "_date")):
                data[key] = _read_millis(value) if value is not None else 0
        if model is Invoice:
            data["paid"] = _read_paid(data)
            data.pop("status", None)
        data = {key: value for key, value in data.items() if value is not None}
        return model.model_validate(data)
    except (ValidationError, ValueError) as e:
        raise InvalidRecordError(collection, record_id, sanitize_exception_message(e)) from e


class FirestoreDirectoryStore(DirectoryStore):
    """Directory store backed by the Firestore REST API."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        bearer_token: str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            settings: Application settings (project, database, key, timeout)
            client: Optional preconfigured client, e.g. with a mock transport
            bearer_token: Optional ID token forwarded as Authorization header
        """
        self.settings = settings
        self.bearer_token = bearer_token
        self._client = client or httpx.AsyncClient(timeout=settings.store_timeout_seconds)

    @property
    def is_configured(self) -> bool:
        """Check if a project id is configured."""
        return bool(self.settings.firestore_project_id)

    def _get_headers(self) -> dict[str, str]:
        """Get API request headers."""
        headers = {"Accept": "application/json"}
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        return headers

    def _params(self, **extra: Any) -> dict[str, Any]:
        params = {key: value for key, value in extra.items() if value is not None}
        if self.settings.firestore_api_key:
            params["key"] = self.settings.firestore_api_key
        return params

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and translate transport failures.

        Returns the response for 2xx and 404 statuses; everything else raises.
        """
        if not self.is_configured:
            raise StoreUnavailableError(
                "Directory store not configured",
                {"missing": "FIRESTORE_PROJECT_ID"},
            )

        url = f"{self.settings.firestore_documents_url}/{path}"
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._get_headers(),
                timeout=self.settings.store_timeout_seconds,
            )
        except httpx.TimeoutException as e:
            logger.warning("Directory store %s timed out", operation)
            raise StoreTimeoutError(operation) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Directory store %s failed: %s", operation, sanitize_exception_message(e)
            )
            raise StoreUnavailableError(details={"operation": operation}) from e

        if response.status_code == 404 or response.is_success:
            return response

        logger.warning("Directory store %s returned HTTP %d", operation, response.status_code)
        raise StoreUnavailableError(
            details={"operation": operation, "status_code": response.status_code}
        )

    async def _list(self, model: type[T], collection: str) -> list[T]:
        records: list[T] = []
        page_token: str | None = None
        while True:
            response = await self._request(
                "GET",
                collection,
                f"list_{collection}",
                params=self._params(pageSize=PAGE_SIZE, pageToken=page_token),
            )
            if response.status_code == 404:
                break
            payload = response.json()
            for document in payload.get("documents", []):
                records.append(parse_document(model, collection, document))
            page_token = payload.get("nextPageToken")
            if not page_token:
                break
        logger.info("Fetched %d %s", len(records), collection)
        return records

    async def _get(self, model: type[T], collection: str, record_id: str) -> T | None:
        response = await self._request(
            "GET", f"{collection}/{record_id}", f"get_{collection}", params=self._params()
        )
        if response.status_code == 404:
            return None
        return parse_document(model, collection, response.json())

    async def _write(
        self,
        collection: str,
        record: BaseModel,
        must_exist: bool,
        not_found: type[NotFoundError],
    ) -> None:
        params = self._params()
        if must_exist:
            params["currentDocument.exists"] = "true"
        response = await self._request(
            "PATCH",
            f"{collection}/{record.id}",
            f"write_{collection}",
            params=params,
            json={"fields": encode_fields(record)},
        )
        if response.status_code == 404:
            raise not_found(record.id)

    async def _delete(
        self,
        collection: str,
        record_id: str,
        not_found: type[NotFoundError],
    ) -> None:
        params = self._params()
        params["currentDocument.exists"] = "true"
        response = await self._request(
            "DELETE", f"{collection}/{record_id}", f"delete_{collection}", params=params
        )
        if response.status_code == 404:
            raise not_found(record_id)
        logger.info("Deleted %s/%s", collection, record_id)

    async def list_employees(self) -> list[Employee]:
        return await self._list(Employee, EMPLOYEES_COLLECTION)

    async def get_employee(self, employee_id: str) -> Employee | None:
        return await self._get(Employee, EMPLOYEES_COLLECTION, employee_id)

    async def create_employee(self, employee: Employee) -> Employee:
        await self._write(EMPLOYEES_COLLECTION, employee, False, EmployeeNotFoundError)
        logger.info("Employee created: %s", employee.id)
        return employee

    async def update_employee(self, employee: Employee) -> None:
        await self._write(EMPLOYEES_COLLECTION, employee, True, EmployeeNotFoundError)
        logger.info("Employee updated: %s", employee.id)

    async def delete_employee(self, employee_id: str) -> None:
        await self._delete(EMPLOYEES_COLLECTION, employee_id, EmployeeNotFoundError)

    async def list_projects(self) -> list[Project]:
        return await self._list(Project, PROJECTS_COLLECTION)

    async def get_project(self, project_id: str) -> Project | None:
        return await self._get(Project, PROJECTS_COLLECTION, project_id)

    async def create_project(self, project: Project) -> Project:
        await self._write(PROJECTS_COLLECTION, project, False, ProjectNotFoundError)
        logger.info("Project created: %s", project.id)
        return project

    async def update_project(self, project: Project) -> None:
        await self._write(PROJECTS_COLLECTION, project, True, ProjectNotFoundError)
        logger.info("Project updated: %s", project.id)

    async def delete_project(self, project_id: str) -> None:
        await self._delete(PROJECTS_COLLECTION, project_id, ProjectNotFoundError)

    async def list_invoices(self) -> list[Invoice]:
        return await self._list(Invoice, INVOICES_COLLECTION)

    async def get_invoice(self, invoice_id: str) -> Invoice | None:
        return await self._get(Invoice, INVOICES_COLLECTION, invoice_id)

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        await self._write(INVOICES_COLLECTION, invoice, False, InvoiceNotFoundError)
        logger.info("Invoice created: %s", invoice.id)
        return invoice

    async def update_invoice(self, invoice: Invoice) -> None:
        await self._write(INVOICES_COLLECTION, invoice, True, InvoiceNotFoundError)
        logger.info("Invoice updated: %s", invoice.id)

    async def delete_invoice(self, invoice_id: str) -> None:
        await self._delete(INVOICES_COLLECTION, invoice_id, InvoiceNotFoundError)

    async def close(self) -> None:
        await self._client.aclose()
