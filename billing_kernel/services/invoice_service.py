"""
InvoiceService -- create invoices and replace their lines with stored totals.

Responsibility:
    Runs line items through the line calculator and totals aggregator,
    then persists lines and totals together so that stored totals are
    always the aggregate of the stored lines.  Allocates invoice numbers
    (``INV-000001``, ``INV-000002``, ...) from a locked sequence counter.

Architecture position:
    Kernel > Services -- imperative shell around billing_engines.totals.

Invariants enforced:
    - Totals are recomputed from scratch on every line change; they are
      never patched incrementally.
    - A line change can never push the total below what has already been
      received against the invoice.
    - Invoice status is re-derived from paid vs total after every change.

Failure modes:
    - EmptyInvoiceError: zero line items.
    - InvalidAmountError: bad quantity / rate / percent, or a new total
      below the paid amount.
    - CustomerNotFoundError / InvoiceNotFoundError: unknown ids.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from billing_engines.line_items import InvoiceLineItem
from billing_engines.totals import InvoiceTotals, compute_totals
from billing_kernel.domain.dtos import InvoiceInfo, InvoiceStatus
from billing_kernel.exceptions import (
    CustomerNotFoundError,
    InvalidAmountError,
    InvoiceNotFoundError,
)
from billing_kernel.logging_config import get_logger
from billing_kernel.models.invoice import DEFAULT_SAC_CODE, Invoice, InvoiceLine
from billing_kernel.models.party import Customer
from billing_kernel.selectors.invoice_selector import InvoiceSelector, to_invoice_info
from billing_kernel.services.base import BaseService
from billing_kernel.services.sequence_service import SequenceService

logger = get_logger("services.invoice")

INVOICE_NO_PREFIX = "INV-"
INVOICE_NO_WIDTH = 6


def format_invoice_no(value: int) -> str:
    """``7 -> "INV-000007"``."""
    return f"{INVOICE_NO_PREFIX}{value:0{INVOICE_NO_WIDTH}d}"


def parse_invoice_no(invoice_no: str) -> int | None:
    """Numeric part of an ``INV-`` number, or None for foreign formats."""
    if not invoice_no.startswith(INVOICE_NO_PREFIX):
        return None
    digits = invoice_no[len(INVOICE_NO_PREFIX):]
    return int(digits) if digits.isdigit() else None


@dataclass(frozen=True)
class BookingDetails:
    """Event booking fields printed on the invoice. All optional."""

    booking_date: date | None = None
    event_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    venue: str | None = None
    ref_name: str | None = None
    manager: str | None = None


class InvoiceService(BaseService[Invoice]):
    """
    Service for creating invoices and replacing their lines.

    Contract:
        Every write goes through ``compute_totals``; the stored subtotal,
        discount, tax and total are exactly its output.

    Non-goals:
        - Does NOT post payments; receipts go through LedgerPostingService.
    """

    def _last_stored_invoice_number(self) -> int | None:
        last = InvoiceSelector(self.session).last_invoice_no()
        return parse_invoice_no(last) if last else None

    def _allocate_invoice_no(self) -> str:
        value = SequenceService(self.session).next_value(
            SequenceService.INVOICE, start_after=self._last_stored_invoice_number
        )
        return format_invoice_no(value)

    @staticmethod
    def _build_lines(
        items: Sequence[InvoiceLineItem],
        actor_id: UUID,
    ) -> list[InvoiceLine]:
        return [
            InvoiceLine(
                srl=srl,
                description=item.description,
                quantity=item.quantity,
                rate=item.rate,
                discount_percent=item.discount_percent,
                tax_percent=item.tax_percent,
                amount=item.amount,
                created_by_id=actor_id,
            )
            for srl, item in enumerate(items, start=1)
        ]

    @staticmethod
    def _apply_totals(invoice: Invoice, totals: InvoiceTotals) -> None:
        invoice.subtotal = totals.subtotal
        invoice.discount_amount = totals.discount_amount
        invoice.tax_amount = totals.tax_amount
        invoice.total = totals.total
        invoice.status = InvoiceStatus.for_amounts(totals.total, invoice.paid_amount).value

    def create_invoice(
        self,
        customer_id: UUID,
        items: Sequence[InvoiceLineItem],
        actor_id: UUID,
        issue_date: date | None = None,
        booking: BookingDetails | None = None,
        sac_code: str = DEFAULT_SAC_CODE,
        remarks: str | None = None,
    ) -> InvoiceInfo:
        """
        Create an invoice with its lines and computed totals.

        Args:
            customer_id: Existing customer.
            items: Line items, in print order.
            actor_id: Who is creating the invoice.
            issue_date: Defaults to the clock's today.
            booking: Booking fields printed on the document.

        Returns:
            InvoiceInfo snapshot of the stored invoice.
        """
        totals = compute_totals(items)

        customer = self._require(Customer, customer_id, CustomerNotFoundError)

        booking = booking or BookingDetails()
        invoice = Invoice(
            invoice_no=self._allocate_invoice_no(),
            customer=customer,
            issue_date=issue_date or self._clock.today(),
            booking_date=booking.booking_date,
            event_date=booking.event_date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            venue=booking.venue,
            ref_name=booking.ref_name,
            manager=booking.manager,
            paid_amount=0,
            sac_code=sac_code,
            remarks=remarks,
            created_by_id=actor_id,
        )
        invoice.lines = self._build_lines(items, actor_id)
        self._apply_totals(invoice, totals)

        self.session.add(invoice)
        self.session.flush()

        logger.info(
            "invoice_created",
            extra={
                "invoice_id": str(invoice.id),
                "invoice_no": invoice.invoice_no,
                "line_count": len(items),
                "total": invoice.total,
            },
        )
        return to_invoice_info(invoice)

    def update_invoice_lines(
        self,
        invoice_id: UUID,
        items: Sequence[InvoiceLineItem],
        actor_id: UUID,
    ) -> InvoiceInfo:
        """
        Replace all lines of an invoice and recompute its totals from scratch.

        Raises:
            InvalidAmountError: If the new total is below the paid amount.
        """
        totals = compute_totals(items)
        invoice = self._require(Invoice, invoice_id, InvoiceNotFoundError, lock=True)

        if totals.total < invoice.paid_amount:
            raise InvalidAmountError(
                "total",
                totals.total,
                f"below amount already received ({invoice.paid_amount})",
            )

        # Flush the removals first so the (invoice_id, srl) slots are free
        invoice.lines.clear()
        self.session.flush()

        invoice.lines.extend(self._build_lines(items, actor_id))
        self._apply_totals(invoice, totals)
        invoice.touch(actor_id)
        self.session.flush()

        logger.info(
            "invoice_lines_replaced",
            extra={
                "invoice_id": str(invoice.id),
                "invoice_no": invoice.invoice_no,
                "line_count": len(items),
                "total": invoice.total,
            },
        )
        return to_invoice_info(invoice)

    def create_customer(
        self,
        name: str,
        actor_id: UUID,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        state: str | None = None,
        state_code: str | None = None,
        gstin: str | None = None,
    ) -> UUID:
        customer = Customer(
            name=name,
            phone=phone,
            email=email,
            address=address,
            state=state,
            state_code=state_code,
            gstin=gstin,
            created_by_id=actor_id,
        )
        self.session.add(customer)
        self.session.flush()
        return customer.id
