"""
Invoice HTML template.

Renders a ``RenderInput`` into the fixed A4 invoice layout with Jinja2.
Autoescaping is on: every customer-supplied string is HTML-escaped.
"""

import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

from billing_rendering.render_input import RenderInput

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
INVOICE_TEMPLATE = "invoice.html"


def na(value):
    """Absent optional field -> "N/A"."""
    return "N/A" if value in (None, "") else value


def dash(value):
    return "-" if value in (None, "") else value


env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)
env.filters["na"] = na
env.filters["dash"] = dash


def render_invoice_html(doc: RenderInput) -> str:
    """HTML for one invoice. Pure: the same input always yields the same HTML."""
    return env.get_template(INVOICE_TEMPLATE).render(doc=doc)
