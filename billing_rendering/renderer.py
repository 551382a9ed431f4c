"""
DocumentRenderer -- drive the strategy chain until one yields a PDF.

Responsibility:
    Renders a RenderInput to HTML once, then tries each strategy in order.
    The first success wins.  Every failure is logged and recorded; when
    all strategies fail the caller gets one RenderStrategyExhaustedError
    listing them, chained from the last underlying error.

Invariants enforced:
    - Strategies are tried sequentially, never concurrently.
    - Cancellation is not a strategy failure: it propagates immediately.
    - The renderer holds no browser state between calls.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from billing_config import get_settings
from billing_config.schema import RendererSettings
from billing_kernel.exceptions import RenderStrategyExhaustedError
from billing_kernel.logging_config import LogContext, get_logger
from billing_rendering.render_input import RenderInput
from billing_rendering.strategies import PlaywrightFactory, RenderStrategy, build_strategies
from billing_rendering.template import render_invoice_html

logger = get_logger("rendering.renderer")


class DocumentRenderer:
    """
    Invoice PDF renderer with strategy fallback.

    Usage:
        renderer = DocumentRenderer(get_settings().renderer)
        pdf = renderer.render_sync(build_render_input(invoice, company))
    """

    def __init__(
        self,
        settings: RendererSettings | None = None,
        strategies: Sequence[RenderStrategy] | None = None,
        playwright_factory: PlaywrightFactory | None = None,
    ):
        self.settings = settings or get_settings().renderer
        if strategies is None:
            strategies = build_strategies(self.settings, playwright_factory)
        self.strategies = list(strategies)

    async def render_html(self, html: str) -> bytes:
        """Turn HTML into PDF bytes using the first strategy that succeeds."""
        failures: list[tuple[str, str]] = []
        last_error: Exception | None = None

        for attempt, strategy in enumerate(self.strategies, start=1):
            with LogContext.bind(strategy=strategy.name):
                try:
                    pdf = await strategy.render(html)
                except Exception as exc:
                    failures.append((strategy.name, f"{type(exc).__name__}: {exc}"))
                    last_error = exc
                    logger.warning(
                        "render_strategy_failed",
                        extra={"attempt": attempt, "error_type": type(exc).__name__},
                        exc_info=True,
                    )
                    continue

                logger.info(
                    "render_strategy_succeeded",
                    extra={"attempt": attempt, "pdf_bytes": len(pdf)},
                )
                return pdf

        logger.error(
            "render_strategies_exhausted",
            extra={"attempted": [name for name, _ in failures]},
        )
        raise RenderStrategyExhaustedError(failures) from last_error

    async def render(self, render_input: RenderInput) -> bytes:
        """Render one invoice to PDF bytes."""
        return await self.render_html(render_invoice_html(render_input))

    def render_sync(self, render_input: RenderInput) -> bytes:
        """Blocking wrapper for callers without an event loop."""
        return asyncio.run(self.render(render_input))
