"""
Fixtures for rendering tests.

Provides an in-process stand-in for Playwright so strategy and renderer
behaviour (fallback order, timeouts, handle cleanup) can be exercised
without a browser.  Each fake handle counts how often it was closed.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from billing_config.schema import CompanyProfile, RendererSettings
from billing_kernel.domain.dtos import (
    CustomerInfo,
    InvoiceInfo,
    InvoiceLineInfo,
    InvoiceStatus,
)

PDF_BYTES = b"%PDF-1.7 fake"


class FakePage:
    def __init__(self, pdf=PDF_BYTES, pdf_delay=0.0, pdf_error=None, close_error=None):
        self._pdf = pdf
        self._pdf_delay = pdf_delay
        self._pdf_error = pdf_error
        self._close_error = close_error
        self.content = None
        self.set_content_kwargs = None
        self.pdf_kwargs = None
        self.close_count = 0

    async def set_content(self, html, **kwargs):
        self.content = html
        self.set_content_kwargs = kwargs

    async def pdf(self, **kwargs):
        self.pdf_kwargs = kwargs
        if self._pdf_delay:
            await asyncio.sleep(self._pdf_delay)
        if self._pdf_error is not None:
            raise self._pdf_error
        return self._pdf

    async def close(self):
        self.close_count += 1
        if self._close_error is not None:
            raise self._close_error


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.viewport = None
        self.close_count = 0

    async def new_page(self, viewport=None):
        self.viewport = viewport
        return self.page

    async def close(self):
        self.close_count += 1


class FakeChromium:
    def __init__(self, browser, launch_error=None):
        self.browser = browser
        self.launch_error = launch_error
        self.launch_kwargs = None

    async def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    """A fake Playwright session; call ``factory`` where ``async_playwright`` would go."""

    def __init__(self, page=None, launch_error=None):
        self.page = page or FakePage()
        self.browser = FakeBrowser(self.page)
        self.chromium = FakeChromium(self.browser, launch_error)
        self.sessions = 0

    @asynccontextmanager
    async def _session(self):
        self.sessions += 1
        yield self

    def factory(self):
        return self._session()


@pytest.fixture
def renderer_settings():
    """Fast settings: no grace period, short timeouts, managed binary configured."""
    return RendererSettings(
        content_timeout_ms=1000,
        pdf_timeout_ms=200,
        launch_timeout_ms=1000,
        grace_period_ms=0,
        managed_executable_path="/opt/chromium/chromium",
    )


@pytest.fixture
def company():
    return CompanyProfile(
        name="HUMJOLI EVENTS",
        gstin="27ADOPA7853Q1ZR",
        terms=("Once Order taken will not be cancelled",),
    )


@pytest.fixture
def invoice_info():
    """Stored invoice: 1000.00 + 5 x 150.00, 18% tax, 300.00 received."""
    return InvoiceInfo(
        id=uuid4(),
        invoice_no="INV-000007",
        issue_date=date(2025, 1, 10),
        customer=CustomerInfo(name="Asha Patil", phone="9800000000"),
        lines=(
            InvoiceLineInfo(1, "Mandap decoration", Decimal("1.000"), 100000, Decimal("0"), Decimal("18"), 118000),
            InvoiceLineInfo(2, "Safa (Pagdi)", Decimal("5.000"), 15000, Decimal("0"), Decimal("18"), 88500),
        ),
        subtotal=175000,
        discount_amount=0,
        tax_amount=31500,
        total=206500,
        paid_amount=30000,
        status=InvoiceStatus.SEMI_PAID,
        sac_code="998314",
        event_date=date(2025, 2, 14),
        start_time="18:00",
        venue="Lawns, Baner",
    )
