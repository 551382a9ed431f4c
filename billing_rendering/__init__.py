"""
Invoice document rendering: RenderInput -> HTML (Jinja2) -> A4 PDF
(headless Chromium via Playwright, with strategy fallback).
"""

from billing_rendering.render_input import RenderInput, RenderLineItem, build_render_input
from billing_rendering.renderer import DocumentRenderer
from billing_rendering.strategies import (
    LocalBrowserStrategy,
    ManagedBinaryStrategy,
    MinimalStrategy,
    RenderStrategy,
    build_strategies,
)
from billing_rendering.template import render_invoice_html

__all__ = [
    "RenderInput",
    "RenderLineItem",
    "build_render_input",
    "render_invoice_html",
    "DocumentRenderer",
    "RenderStrategy",
    "ManagedBinaryStrategy",
    "LocalBrowserStrategy",
    "MinimalStrategy",
    "build_strategies",
]
