"""Invoice DTOs."""

from pydantic import BaseModel

from workforce_api.models.domain.invoice import Invoice


class InvoiceListResponse(BaseModel):
    """Invoice list response DTO."""

    items: list[Invoice]
    total: int
    paid_total: float
    outstanding_total: float
