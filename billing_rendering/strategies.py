"""
Rendering strategies -- ways of turning invoice HTML into an A4 PDF with
headless Chromium (Playwright).

Responsibility:
    Each strategy launches a fresh browser, loads the HTML, waits a short
    grace period for fonts and layout, prints the page to PDF and closes
    everything it opened.  Strategies differ only in how the browser is
    launched and how long content loading may block:

        ManagedBinaryStrategy  bundled Chromium at a configured path,
                               hardened flags for serverless hosts
        LocalBrowserStrategy   Playwright's locally installed Chromium
        MinimalStrategy        bare launch, no load-state wait

Invariants enforced:
    - Page and browser are each closed exactly once on every exit path:
      success, error, timeout and cancellation.
    - Content loading and PDF generation are bounded by the configured
      timeouts.
    - No state survives between calls.

Failure modes:
    - RenderStrategyFailedError: strategy unusable (no executable
      configured) or the browser returned an empty document.
    - Any Playwright error or ``asyncio.TimeoutError`` propagates to the
      renderer, which moves on to the next strategy.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from playwright.async_api import Browser, Playwright, async_playwright

from billing_config.schema import RendererSettings
from billing_kernel.exceptions import RenderStrategyFailedError
from billing_kernel.logging_config import get_logger

logger = get_logger("rendering.strategies")

# Roughly A4 at 96 dpi
VIEWPORT = {"width": 800, "height": 1130}

# Returns an async context manager yielding a Playwright instance
PlaywrightFactory = Callable[[], Any]


class RenderStrategy(ABC):
    """
    One way of producing a PDF from HTML.

    Contract:
        ``render(html)`` returns non-empty PDF bytes or raises.  Subclasses
        only decide how the browser is launched (``launch``) and the load
        state to wait for (``wait_until``).
    """

    name: str = "strategy"
    wait_until: str = "domcontentloaded"

    def __init__(
        self,
        settings: RendererSettings,
        playwright_factory: PlaywrightFactory | None = None,
    ):
        self.settings = settings
        self._playwright_factory = playwright_factory or async_playwright

    @abstractmethod
    async def launch(self, playwright: Playwright) -> Browser:
        """Start a new headless browser."""

    def pdf_options(self) -> dict[str, Any]:
        margin = self.settings.margin
        return {
            "format": self.settings.page_format,
            "print_background": True,
            "display_header_footer": False,
            "margin": {"top": margin, "right": margin, "bottom": margin, "left": margin},
        }

    async def render(self, html: str) -> bytes:
        settings = self.settings
        async with self._playwright_factory() as playwright:
            browser = await self.launch(playwright)
            try:
                page = await browser.new_page(viewport=VIEWPORT)
                try:
                    await page.set_content(
                        html,
                        wait_until=self.wait_until,
                        timeout=settings.content_timeout_ms,
                    )
                    if settings.grace_period_ms:
                        await asyncio.sleep(settings.grace_period_ms / 1000)
                    pdf = await asyncio.wait_for(
                        page.pdf(**self.pdf_options()),
                        timeout=settings.pdf_timeout_ms / 1000,
                    )
                finally:
                    await _close(page, self.name, "page")
            finally:
                await _close(browser, self.name, "browser")

        if not pdf:
            raise RenderStrategyFailedError(self.name, "browser returned an empty document")
        return pdf


async def _close(handle: Any, strategy: str, kind: str) -> None:
    """Close a page or browser; a failing close must not hide the render outcome."""
    try:
        await handle.close()
    except Exception:
        logger.warning(
            "render_handle_close_failed",
            extra={"strategy_name": strategy, "handle": kind},
            exc_info=True,
        )


class ManagedBinaryStrategy(RenderStrategy):
    """Bundled Chromium build at ``managed_executable_path``."""

    name = "managed_binary"

    async def launch(self, playwright: Playwright) -> Browser:
        executable = self.settings.managed_executable_path
        if not executable:
            raise RenderStrategyFailedError(self.name, "no managed Chromium executable configured")
        return await playwright.chromium.launch(
            executable_path=executable,
            args=list(self.settings.managed_args),
            headless=True,
            timeout=self.settings.launch_timeout_ms,
        )


class LocalBrowserStrategy(RenderStrategy):
    """Chromium installed locally by ``playwright install chromium``."""

    name = "local_browser"

    async def launch(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(
            args=["--no-sandbox", "--disable-setuid-sandbox"],
            headless=True,
            timeout=self.settings.launch_timeout_ms,
        )


class MinimalStrategy(RenderStrategy):
    """Last resort: default launch, print as soon as the document is committed."""

    name = "minimal"
    wait_until = "commit"

    async def launch(self, playwright: Playwright) -> Browser:
        return await playwright.chromium.launch(headless=True)


STRATEGY_TYPES: dict[str, type[RenderStrategy]] = {
    ManagedBinaryStrategy.name: ManagedBinaryStrategy,
    LocalBrowserStrategy.name: LocalBrowserStrategy,
    MinimalStrategy.name: MinimalStrategy,
}


def build_strategies(
    settings: RendererSettings,
    playwright_factory: PlaywrightFactory | None = None,
) -> list[RenderStrategy]:
    """Strategies in ``settings.strategy_order``."""
    return [STRATEGY_TYPES[name](settings, playwright_factory) for name in settings.strategy_order]
