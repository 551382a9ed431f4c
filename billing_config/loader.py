"""
Settings loader (``billing_config.loader``).

Responsibility
--------------
Reads YAML settings files and parses them into the frozen dataclasses of
``billing_config.schema``.  Callers go through
``billing_config.get_settings()``; this module is its implementation.

Invariants enforced
-------------------
* An override file is merged section by section over ``defaults.yaml``.
* Unknown strategy names, non-positive timeouts and a non-positive cycle
  length raise ``InvalidConfigError`` naming the offending key.
* ``compute_checksum`` is deterministic for identical merged data.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from billing_config.schema import (
    KNOWN_STRATEGIES,
    BillingSettings,
    CompanyProfile,
    CycleSettings,
    RendererSettings,
)
from billing_kernel.exceptions import InvalidConfigError

SECTIONS = ("renderer", "company", "cycles")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; an empty file yields ``{}``."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigError(str(path), "top level must be a mapping")
    return data


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``override`` on ``base`` one section deep."""
    merged = {name: dict(base.get(name) or {}) for name in SECTIONS}
    for name, values in override.items():
        if name not in SECTIONS:
            raise InvalidConfigError(name, f"unknown section, expected one of {SECTIONS}")
        if not isinstance(values, dict):
            raise InvalidConfigError(name, "section must be a mapping")
        merged[name].update(values)
    return merged


def _positive_int(section: str, data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfigError(f"{section}.{key}", f"must be a positive integer, got {value!r}")
    return value


def _non_negative_int(section: str, data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigError(f"{section}.{key}", f"must be a non-negative integer, got {value!r}")
    return value


def parse_renderer(data: dict[str, Any]) -> RendererSettings:
    defaults = RendererSettings()

    order = tuple(data.get("strategy_order") or defaults.strategy_order)
    unknown = [name for name in order if name not in KNOWN_STRATEGIES]
    if unknown:
        raise InvalidConfigError(
            "renderer.strategy_order",
            f"unknown strategies {unknown}, expected names from {KNOWN_STRATEGIES}",
        )
    if len(set(order)) != len(order):
        raise InvalidConfigError("renderer.strategy_order", "strategies must not repeat")

    return RendererSettings(
        strategy_order=order,
        content_timeout_ms=_positive_int(
            "renderer", data, "content_timeout_ms", defaults.content_timeout_ms
        ),
        pdf_timeout_ms=_positive_int("renderer", data, "pdf_timeout_ms", defaults.pdf_timeout_ms),
        launch_timeout_ms=_positive_int(
            "renderer", data, "launch_timeout_ms", defaults.launch_timeout_ms
        ),
        grace_period_ms=_non_negative_int(
            "renderer", data, "grace_period_ms", defaults.grace_period_ms
        ),
        page_format=str(data.get("page_format", defaults.page_format)),
        margin=str(data.get("margin", defaults.margin)),
        managed_executable_path=data.get("managed_executable_path"),
        managed_args=tuple(data.get("managed_args") or defaults.managed_args),
    )


def parse_company(data: dict[str, Any]) -> CompanyProfile:
    defaults = CompanyProfile()
    state_code = data.get("state_code", defaults.state_code)
    return CompanyProfile(
        name=data.get("name", defaults.name),
        tagline=data.get("tagline", defaults.tagline),
        address=data.get("address"),
        phone=data.get("phone"),
        state=data.get("state", defaults.state),
        state_code=str(state_code) if state_code is not None else defaults.state_code,
        gstin=data.get("gstin"),
        terms=tuple(str(term) for term in data.get("terms") or ()),
    )


def parse_cycles(data: dict[str, Any]) -> CycleSettings:
    return CycleSettings(
        cycle_length_days=_positive_int(
            "cycles", data, "cycle_length_days", CycleSettings().cycle_length_days
        ),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON form of the merged settings."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_settings(data: dict[str, Any]) -> BillingSettings:
    return BillingSettings(
        renderer=parse_renderer(data.get("renderer") or {}),
        company=parse_company(data.get("company") or {}),
        cycles=parse_cycles(data.get("cycles") or {}),
        checksum=compute_checksum(data),
    )
