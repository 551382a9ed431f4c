"""
RenderInput -- the fully resolved, display-ready snapshot of one invoice.

Responsibility:
    Converts a stored invoice (minor units, dates, Decimals) into strings
    ready to print: money as two-decimal major units, dates as dd/mm/yyyy,
    absent optional fields as None.  The template only places values; it
    never does arithmetic.

Invariants enforced:
    - Totals come from the stored invoice.  The only derivation here is
      the CGST/SGST split of the stored tax and the amount in words.
    - The item-table total row equals the invoice total.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from billing_config.schema import CompanyProfile
from billing_engines.amount_words import amount_in_words
from billing_engines.totals import InvoiceTotals, split_gst
from billing_kernel.domain.dtos import InvoiceInfo
from billing_kernel.domain.money import format_major

DATE_FORMAT = "%d/%m/%Y"


def format_date(value: date | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None


def format_quantity(value: Decimal) -> str:
    """``Decimal("2.000") -> "2"``, ``Decimal("1.500") -> "1.5"``."""
    return format(value.normalize(), "f")


def format_percent(value: Decimal) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class RenderLineItem:
    srl: int
    description: str
    quantity: str
    rate: str
    amount: str


@dataclass(frozen=True)
class RenderInput:
    """
    Everything the invoice template prints.

    Money fields are major-unit strings with exactly two decimals.
    Optional fields are ``None`` when absent; the template shows "N/A"
    or "-" for them.
    """

    # Issuer
    company_name: str
    company_tagline: str
    company_state: str
    company_state_code: str
    company_gstin: str | None
    company_address: str | None
    company_phone: str | None

    # Document
    invoice_no: str
    issue_date: str

    # Customer
    customer_name: str
    customer_address: str | None
    customer_phone: str | None
    customer_state: str | None
    customer_state_code: str | None
    customer_gstin: str | None

    # Booking
    ref_name: str | None
    booking_date: str | None
    event_date: str | None
    start_time: str | None
    end_time: str | None
    venue: str | None
    manager: str | None

    items: tuple[RenderLineItem, ...]
    items_total: str

    # Tax summary
    sac_code: str
    subtotal: str
    discount_amount: str
    taxable_amount: str
    cgst_percent: str
    sgst_percent: str
    cgst_amount: str
    sgst_amount: str
    total_amount: str
    amount_in_words: str

    # Payment summary
    advance_amount: str
    balance_amount: str
    remarks: str | None

    terms: tuple[str, ...] = ()


def build_render_input(invoice: InvoiceInfo, company: CompanyProfile) -> RenderInput:
    """Resolve a stored invoice and the issuer profile into a RenderInput."""
    totals = InvoiceTotals(
        subtotal=invoice.subtotal,
        discount_amount=invoice.discount_amount,
        tax_amount=invoice.tax_amount,
        total=invoice.total,
    )
    gst = split_gst(totals)
    customer = invoice.customer

    items = tuple(
        RenderLineItem(
            srl=line.srl,
            description=line.description,
            quantity=format_quantity(line.quantity),
            rate=format_major(line.rate),
            amount=format_major(line.amount),
        )
        for line in invoice.lines
    )

    return RenderInput(
        company_name=company.name,
        company_tagline=company.tagline,
        company_state=company.state,
        company_state_code=company.state_code,
        company_gstin=company.gstin,
        company_address=company.address,
        company_phone=company.phone,
        invoice_no=invoice.invoice_no,
        issue_date=format_date(invoice.issue_date),
        customer_name=customer.name,
        customer_address=customer.address,
        customer_phone=customer.phone,
        customer_state=customer.state,
        customer_state_code=customer.state_code,
        customer_gstin=customer.gstin,
        ref_name=invoice.ref_name,
        booking_date=format_date(invoice.booking_date),
        event_date=format_date(invoice.event_date),
        start_time=invoice.start_time,
        end_time=invoice.end_time,
        venue=invoice.venue,
        manager=invoice.manager,
        items=items,
        items_total=format_major(totals.total),
        sac_code=invoice.sac_code,
        subtotal=format_major(totals.subtotal),
        discount_amount=format_major(totals.discount_amount),
        taxable_amount=format_major(totals.taxable_amount),
        cgst_percent=format_percent(gst.cgst_percent),
        sgst_percent=format_percent(gst.sgst_percent),
        cgst_amount=format_major(gst.cgst_amount),
        sgst_amount=format_major(gst.sgst_amount),
        total_amount=format_major(totals.total),
        amount_in_words=amount_in_words(totals.total),
        advance_amount=format_major(invoice.paid_amount),
        balance_amount=format_major(invoice.balance_amount),
        remarks=invoice.remarks,
        terms=company.terms,
    )
