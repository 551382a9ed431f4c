"""
Billing Kernel

Money math and ledger posting core for an event-services back office:
- Integer minor-unit money with a single rounding rule
- Guarded ledger postings against invoice, vendor and salary balances
- Atomic transactions with per-target serialization
- Structured logging and typed errors
"""

__version__ = "0.1.0"
