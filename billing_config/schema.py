"""
Settings schema.

Frozen dataclasses that the YAML settings file is parsed into.  Every
field has a default matching ``defaults.yaml`` so a partial override file
only needs the keys it changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Names accepted in ``renderer.strategy_order``, in default fallback order
KNOWN_STRATEGIES: tuple[str, ...] = ("managed_binary", "local_browser", "minimal")

MANAGED_BROWSER_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--single-process",
)


@dataclass(frozen=True)
class RendererSettings:
    """Headless-browser PDF rendering knobs. Timeouts are milliseconds."""

    strategy_order: tuple[str, ...] = KNOWN_STRATEGIES
    content_timeout_ms: int = 15_000
    pdf_timeout_ms: int = 30_000
    launch_timeout_ms: int = 30_000
    grace_period_ms: int = 500
    page_format: str = "A4"
    margin: str = "10mm"
    managed_executable_path: str | None = None
    managed_args: tuple[str, ...] = MANAGED_BROWSER_ARGS


@dataclass(frozen=True)
class CompanyProfile:
    """Issuer identity printed on every invoice."""

    name: str = "HUMJOLI EVENTS"
    tagline: str = "Professional Event Management Services"
    address: str | None = None
    phone: str | None = None
    state: str = "Maharashtra"
    state_code: str = "27"
    gstin: str | None = None
    terms: tuple[str, ...] = ()


@dataclass(frozen=True)
class CycleSettings:
    cycle_length_days: int = 31


@dataclass(frozen=True)
class BillingSettings:
    """Root settings object returned by ``get_settings()``."""

    renderer: RendererSettings = field(default_factory=RendererSettings)
    company: CompanyProfile = field(default_factory=CompanyProfile)
    cycles: CycleSettings = field(default_factory=CycleSettings)
    checksum: str = ""
