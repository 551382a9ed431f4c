"""
Pure domain layer.

This module contains pure data transfer objects, the money model and the
clock abstraction, with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O (SystemClock is the one sanctioned time boundary)

All domain objects are immutable and deterministic.
"""

from billing_kernel.domain.clock import IST, Clock, DeterministicClock, SystemClock
from billing_kernel.domain.dtos import (
    CycleStatus,
    CycleStatusInfo,
    EntryType,
    InvoiceStatus,
    LedgerEntryInfo,
    LedgerEntryRecord,
    TargetType,
)
from billing_kernel.domain.money import (
    MinorAmount,
    format_major,
    from_major,
    round_half_up,
    to_major,
)

__all__ = [
    # Money
    "MinorAmount",
    "round_half_up",
    "to_major",
    "from_major",
    "format_major",
    # DTOs
    "EntryType",
    "TargetType",
    "InvoiceStatus",
    "CycleStatus",
    "LedgerEntryRecord",
    "LedgerEntryInfo",
    "CycleStatusInfo",
    # Clock
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "IST",
]
