"""
billing_config -- single public entrypoint for billing settings.

Responsibility:
    Provides the one way to obtain settings at runtime through
    ``get_settings()``: renderer knobs, the issuing company's profile and
    the salary cycle length.

Architecture position:
    Configuration.  Sits beside ``billing_kernel``; the kernel never
    imports from here.  Callers read settings and pass plain values into
    kernel services and the renderer.

Failure modes:
    - ``FileNotFoundError`` -- an explicit settings path does not exist.
    - ``InvalidConfigError`` -- a value fails validation.

Audit relevance:
    Every call emits a ``BILLING_CONFIG_TRACE`` log entry with the
    checksum of the effective settings, environment override included.
"""

from __future__ import annotations

import os
from pathlib import Path

from billing_config.loader import load_yaml_file, merge_settings, parse_settings
from billing_config.schema import (
    KNOWN_STRATEGIES,
    BillingSettings,
    CompanyProfile,
    CycleSettings,
    RendererSettings,
)
from billing_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"

CHROMIUM_EXECUTABLE_ENV = "BILLING_CHROMIUM_EXECUTABLE"


def get_settings(path: Path | str | None = None) -> BillingSettings:
    """
    Load settings: ``defaults.yaml`` overlaid with ``path`` when given.

    The ``BILLING_CHROMIUM_EXECUTABLE`` environment variable, when set and
    non-empty, replaces ``renderer.managed_executable_path``.
    """
    data = load_yaml_file(DEFAULTS_PATH)
    if path is not None:
        data = merge_settings(data, load_yaml_file(Path(path)))
    else:
        data = merge_settings(data, {})

    executable = os.environ.get(CHROMIUM_EXECUTABLE_ENV)
    if executable:
        # Applied before parsing so the checksum covers the effective value
        data = merge_settings(data, {"renderer": {"managed_executable_path": executable}})

    settings = parse_settings(data)

    _logger.info(
        "BILLING_CONFIG_TRACE",
        extra={
            "trace_type": "BILLING_CONFIG_TRACE",
            "source": str(path) if path is not None else "defaults",
            "checksum": settings.checksum,
            "executable_from_env": bool(executable),
            "strategy_order": list(settings.renderer.strategy_order),
            "cycle_length_days": settings.cycles.cycle_length_days,
        },
    )
    return settings


__all__ = [
    "get_settings",
    "BillingSettings",
    "RendererSettings",
    "CompanyProfile",
    "CycleSettings",
    "KNOWN_STRATEGIES",
    "CHROMIUM_EXECUTABLE_ENV",
]
