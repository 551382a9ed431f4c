"""
Module: billing_kernel.selectors.invoice_selector
Responsibility: Read snapshots of stored invoices for rendering and reporting.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Totals are returned exactly as stored; nothing is recomputed here.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from billing_kernel.domain.dtos import (
    CustomerInfo,
    InvoiceInfo,
    InvoiceLineInfo,
    InvoiceStatus,
)
from billing_kernel.exceptions import InvoiceNotFoundError
from billing_kernel.models.invoice import Invoice
from billing_kernel.selectors.base import BaseSelector


def to_invoice_info(invoice: Invoice) -> InvoiceInfo:
    customer = invoice.customer
    return InvoiceInfo(
        id=invoice.id,
        invoice_no=invoice.invoice_no,
        issue_date=invoice.issue_date,
        customer=CustomerInfo(
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            address=customer.address,
            state=customer.state,
            state_code=customer.state_code,
            gstin=customer.gstin,
        ),
        lines=tuple(
            InvoiceLineInfo(
                srl=line.srl,
                description=line.description,
                quantity=line.quantity,
                rate=line.rate,
                discount_percent=line.discount_percent,
                tax_percent=line.tax_percent,
                amount=line.amount,
            )
            for line in invoice.lines
        ),
        subtotal=invoice.subtotal,
        discount_amount=invoice.discount_amount,
        tax_amount=invoice.tax_amount,
        total=invoice.total,
        paid_amount=invoice.paid_amount,
        status=InvoiceStatus(invoice.status),
        sac_code=invoice.sac_code,
        booking_date=invoice.booking_date,
        event_date=invoice.event_date,
        start_time=invoice.start_time,
        end_time=invoice.end_time,
        venue=invoice.venue,
        ref_name=invoice.ref_name,
        manager=invoice.manager,
        remarks=invoice.remarks,
    )


class InvoiceSelector(BaseSelector[Invoice]):
    """Selector for invoices and their lines."""

    def get_invoice(self, invoice_id: UUID) -> InvoiceInfo:
        """
        Load one invoice with its customer and lines.

        Raises:
            InvoiceNotFoundError: If no invoice has this id.
        """
        stmt = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .options(selectinload(Invoice.lines))
        )
        invoice = self.session.scalars(stmt).first()
        if invoice is None:
            raise InvoiceNotFoundError(str(invoice_id))
        return to_invoice_info(invoice)

    def last_invoice_no(self) -> str | None:
        """Highest allocated invoice number, or None when none exist."""
        stmt = select(Invoice.invoice_no).order_by(Invoice.invoice_no.desc()).limit(1)
        return self.session.scalar(stmt)

    def list_for_customer(self, customer_id: UUID) -> list[InvoiceInfo]:
        stmt = (
            select(Invoice)
            .where(Invoice.customer_id == customer_id)
            .options(selectinload(Invoice.lines))
            .order_by(Invoice.issue_date, Invoice.invoice_no)
        )
        return [to_invoice_info(invoice) for invoice in self.session.scalars(stmt)]
