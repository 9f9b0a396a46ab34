"""Invoices router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from workforce_api.dependencies import get_finance_service, require_managing_director
from workforce_api.models.domain.identity import Identity
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.dto.invoice import InvoiceListResponse
from workforce_api.services.finance_service import FinanceService

router = APIRouter()


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> InvoiceListResponse:
    """List invoices with paid and outstanding totals."""
    invoices = await finance_service.list_invoices()
    return InvoiceListResponse(
        items=invoices,
        total=len(invoices),
        paid_total=sum(invoice.amount for invoice in invoices if invoice.paid),
        outstanding_total=sum(invoice.amount for invoice in invoices if not invoice.paid),
    )


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice: Invoice,
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> Invoice:
    """Create an invoice."""
    return await finance_service.create_invoice(invoice)


@router.get("/{invoice_id}", response_model=Invoice)
async def get_invoice(
    invoice_id: str,
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> Invoice:
    """Get one invoice."""
    return await finance_service.get_invoice(invoice_id)


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(
    invoice_id: str,
    invoice: Invoice,
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> Invoice:
    """Replace an invoice."""
    return await finance_service.update_invoice(invoice_id, invoice)


@router.post("/{invoice_id}/paid", response_model=Invoice)
async def mark_invoice_paid(
    invoice_id: str,
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> Invoice:
    """Mark an invoice as paid."""
    return await finance_service.mark_paid(invoice_id)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str,
    current_user: Annotated[Identity, Depends(require_managing_director)],
    finance_service: Annotated[FinanceService, Depends(get_finance_service)],
) -> None:
    """Delete an invoice."""
    await finance_service.delete_invoice(invoice_id)
