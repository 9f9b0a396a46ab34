"""Invoice record service."""

import logging
import uuid

from workforce_api.exceptions import InvoiceNotFoundError
from workforce_api.models.domain.invoice import Invoice
from workforce_api.repositories.base import DirectoryStore
from workforce_api.utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)


class FinanceService:
    """Service for invoice operations.

    Invoices do not feed the workspace aggregate, so mutations here leave
    the workspace cache alone.
    """

    def __init__(self, store: DirectoryStore, clock: Clock = now_millis) -> None:
        """Initialize service with the directory store."""
        self.store = store
        self.clock = clock

    async def list_invoices(self) -> list[Invoice]:
        """List all invoices in store order."""
        return await self.store.list_invoices()

    async def get_invoice(self, invoice_id: str) -> Invoice:
        """Get an invoice by id.

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        invoice = await self.store.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Create an invoice.

        A missing id is generated and the issue time defaults to now.
        """
        record = invoice.model_copy(
            update={
                "id": invoice.id or str(uuid.uuid4()),
                "issued_at": invoice.issued_at if invoice.issued_at > 0 else self.clock(),
            }
        )
        created = await self.store.create_invoice(record)
        logger.info("Created invoice %s", created.id)
        return created

    async def update_invoice(self, invoice_id: str, invoice: Invoice) -> Invoice:
        """Replace an invoice.

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        record = invoice.model_copy(update={"id": invoice_id})
        await self.store.update_invoice(record)
        logger.info("Updated invoice %s", invoice_id)
        return record

    async def mark_paid(self, invoice_id: str) -> Invoice:
        """Mark an invoice as paid.

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        invoice = await self.get_invoice(invoice_id)
        record = invoice.model_copy(update={"paid": True})
        await self.store.update_invoice(record)
        logger.info("Invoice %s marked paid", invoice_id)
        return record

    async def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice.

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        await self.store.delete_invoice(invoice_id)
        logger.info("Deleted invoice %s", invoice_id)
