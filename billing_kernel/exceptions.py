"""
Typed Exception Hierarchy for the Billing Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Money math and ledger postings must fail precisely. Callers catch by type
and read structured attributes; they never parse message strings.

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        service.post_entry(request)
    except OverpaymentError as e:
        return {"error": e.code, "max_allowed": e.limit}

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from BillingError:

    BillingError (base)
    |
    +-- AmountError
    |   +-- InvalidAmountError
    |
    +-- InvoiceError
    |   +-- EmptyInvoiceError
    |   +-- InvoiceNotFoundError
    |   +-- CustomerNotFoundError
    |   +-- TotalsMismatchError
    |
    +-- LedgerError
    |   +-- OverpaymentError
    |   +-- CounterpartyRequiredError
    |   +-- EntryBeforeJoiningError
    |   +-- VendorNotFoundError
    |   +-- EmployeeNotFoundError
    |
    +-- RenderError
    |   +-- RenderStrategyFailedError
    |   +-- RenderStrategyExhaustedError
    |
    +-- ConfigError
        +-- InvalidConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                        | When Raised
-----------|-----------------------------|-------------------------------------------
Amount     | INVALID_AMOUNT              | Non-finite, negative, or out-of-range input
-----------|-----------------------------|-------------------------------------------
Invoice    | EMPTY_INVOICE               | Zero line items
           | INVOICE_NOT_FOUND           | Invoice ID doesn't exist
           | CUSTOMER_NOT_FOUND          | Customer ID doesn't exist
           | TOTALS_MISMATCH             | Aggregated total != sum of line amounts
-----------|-----------------------------|-------------------------------------------
Ledger     | OVERPAYMENT                 | Posting exceeds remaining/due/balance
           | COUNTERPARTY_REQUIRED       | DEBIT without vendor or employee target
           | VENDOR_NOT_FOUND            | Vendor ID doesn't exist
           | EMPLOYEE_NOT_FOUND          | Employee ID doesn't exist
-----------|-----------------------------|-------------------------------------------
Render     | RENDER_STRATEGY_FAILED      | One strategy unusable or produced no bytes
           | RENDER_STRATEGY_EXHAUSTED   | Every rendering strategy failed
-----------|-----------------------------|-------------------------------------------
Config     | INVALID_CONFIG              | Settings file fails validation

===============================================================================
RETRY POLICY
===============================================================================

AmountError, InvoiceError and LedgerError are deterministic: the same input
fails the same way, so they are never retried automatically. RenderError is
environment dependent; the renderer already retries across its strategies
and only surfaces exhaustion, which the caller may retry as a whole.
"""


class BillingError(Exception):
    """
    Base exception for all billing kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BILLING_ERROR"


# Amount-related exceptions


class AmountError(BillingError):
    """Base exception for amount-related errors."""

    code: str = "AMOUNT_ERROR"


class InvalidAmountError(AmountError):
    """
    Malformed or out-of-range numeric input to Money/Line-Item computation.

    Raised at the boundary; values are never clamped or coerced.
    """

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {value!r} ({reason})")


# Invoice-related exceptions


class InvoiceError(BillingError):
    """Base exception for invoice-related errors."""

    code: str = "INVOICE_ERROR"


class EmptyInvoiceError(InvoiceError):
    """Invoice has no line items."""

    code: str = "EMPTY_INVOICE"

    def __init__(self, invoice_ref: str | None = None):
        self.invoice_ref = invoice_ref
        if invoice_ref:
            super().__init__(f"Invoice {invoice_ref} has no line items")
        else:
            super().__init__("Invoice must have at least one line item")


class InvoiceNotFoundError(InvoiceError):
    """Invoice with given ID was not found."""

    code: str = "INVOICE_NOT_FOUND"

    def __init__(self, invoice_id: str):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice not found: {invoice_id}")


class CustomerNotFoundError(InvoiceError):
    """Customer with given ID was not found."""

    code: str = "CUSTOMER_NOT_FOUND"

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Customer not found: {customer_id}")


class TotalsMismatchError(InvoiceError):
    """
    Aggregated total disagrees with the independently summed line amounts.

    Indicates a defect in the calculator, not bad input.
    """

    code: str = "TOTALS_MISMATCH"

    def __init__(self, aggregated_total: int, summed_amounts: int):
        self.aggregated_total = aggregated_total
        self.summed_amounts = summed_amounts
        super().__init__(
            f"Invoice total {aggregated_total} != sum of line amounts {summed_amounts}"
        )


# Ledger-related exceptions


class LedgerError(BillingError):
    """Base exception for ledger posting errors."""

    code: str = "LEDGER_ERROR"


class OverpaymentError(LedgerError):
    """
    Ledger posting exceeds the target's remaining balance.

    ``limit`` is the computed remaining/due/balance amount (minor units) so
    the caller can present a corrected value.
    """

    code: str = "OVERPAYMENT"

    def __init__(
        self,
        target_type: str,
        limit: int,
        requested: int,
        target_id: str | None = None,
    ):
        self.target_type = target_type
        self.target_id = target_id
        self.limit = limit
        self.requested = requested
        super().__init__(
            f"Amount {requested} exceeds {target_type} limit of {limit}"
            + (f" for {target_id}" if target_id else "")
        )


class CounterpartyRequiredError(LedgerError):
    """DEBIT posting has no resolved vendor or employee target."""

    code: str = "COUNTERPARTY_REQUIRED"

    def __init__(self, entry_type: str):
        self.entry_type = entry_type
        super().__init__(
            f"{entry_type} posting requires exactly one vendor or employee target"
        )


class EntryBeforeJoiningError(LedgerError):
    """
    Salary DEBIT dated before the employee's joining date.

    Such an entry falls outside every obligation cycle and would never be
    counted as salary paid.
    """

    code: str = "ENTRY_BEFORE_JOINING"

    def __init__(self, employee_id: str, entry_date: str, joining_date: str):
        self.employee_id = employee_id
        self.entry_date = entry_date
        self.joining_date = joining_date
        super().__init__(
            f"Salary entry dated {entry_date} precedes joining date {joining_date}"
        )


class VendorNotFoundError(LedgerError):
    """Vendor with given ID was not found."""

    code: str = "VENDOR_NOT_FOUND"

    def __init__(self, vendor_id: str):
        self.vendor_id = vendor_id
        super().__init__(f"Vendor not found: {vendor_id}")


class EmployeeNotFoundError(LedgerError):
    """Employee with given ID was not found."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


# Rendering-related exceptions


class RenderError(BillingError):
    """Base exception for document rendering errors."""

    code: str = "RENDER_ERROR"


class RenderStrategyFailedError(RenderError):
    """A single rendering strategy could not produce a document."""

    code: str = "RENDER_STRATEGY_FAILED"

    def __init__(self, strategy: str, reason: str):
        self.strategy = strategy
        self.reason = reason
        super().__init__(f"Render strategy {strategy} failed: {reason}")


class RenderStrategyExhaustedError(RenderError):
    """
    Every rendering strategy failed.

    ``failures`` holds ``(strategy_name, error_message)`` pairs in attempt
    order. The last underlying exception is chained as ``__cause__``.
    """

    code: str = "RENDER_STRATEGY_EXHAUSTED"

    def __init__(self, failures: list[tuple[str, str]]):
        self.failures = failures
        attempted = ", ".join(name for name, _ in failures) or "none"
        super().__init__(f"All rendering strategies failed (attempted: {attempted})")


# Configuration-related exceptions


class ConfigError(BillingError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidConfigError(ConfigError):
    """Settings file failed validation."""

    code: str = "INVALID_CONFIG"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}: {reason}")
