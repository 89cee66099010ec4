# =============================================================================
# core/models/invoice.py - Invoice Schemas
# =============================================================================
# These models define the contract for invoice form submissions:
# - InvoiceStatus: Enum for invoice states
# - InvoiceForm: Fields submitted when creating or editing an invoice
# - Invoice: A row of the invoices table as returned to clients
# - ActionState: What a form action hands back to the caller
#
# Form fields arrive as untyped strings keyed by their HTML names
# (customerId, amount, status). Amounts are entered in dollars and stored
# in integer cents.
# =============================================================================

from datetime import date
from decimal import ROUND_DOWN, Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Largest amount (in dollars) a single invoice may carry
MAX_INVOICE_AMOUNT = Decimal("1000000")


class InvoiceStatus(str, Enum):
    """
    Possible states for an invoice.

    - pending: Issued, not yet paid
    - paid: Settled
    """
    PENDING = "pending"
    PAID = "paid"


class InvoiceForm(BaseModel):
    """
    Schema for the invoice create/edit form.

    Example:
        {
            "customerId": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
            "amount": "15.50",
            "status": "pending"
        }
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    # Messages shown next to each field when it fails validation.
    # "<field>.<error type>" overrides the plain "<field>" entry.
    error_messages: ClassVar[dict[str, str]] = {
        "customerId": "Please select a customer.",
        "amount": "Please enter an amount greater than $0.",
        "amount.less_than_equal": "Amount must not exceed $1,000,000.",
        "amount.value_error": "Please enter an amount of at least $0.01.",
        "status": "Please select an invoice status.",
    }

    customer_id: str = Field(
        ...,
        alias="customerId",
        min_length=1,
        description="Customer the invoice is billed to"
    )

    # Dollars, coerced from the form string
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_INVOICE_AMOUNT,
        description="Invoice amount in dollars"
    )

    status: InvoiceStatus = Field(
        ...,
        description="Invoice status (pending or paid)"
    )

    @field_validator("amount")
    @classmethod
    def amount_has_whole_cent(cls, value: Decimal) -> Decimal:
        """Reject positive amounts that truncate to 0 cents."""
        if (value * 100).to_integral_value(rounding=ROUND_DOWN) < 1:
            raise ValueError("Amount must be at least one cent")
        return value

    @property
    def amount_in_cents(self) -> int:
        """Dollar amount converted to integer cents, sub-cent digits truncated."""
        return int((self.amount * 100).to_integral_value(rounding=ROUND_DOWN))

    def to_row(self) -> dict[str, Any]:
        """Column values for the invoices table (without id or date)."""
        return {
            "customer_id": self.customer_id,
            "amount": self.amount_in_cents,
            "status": self.status.value,
        }


class Invoice(BaseModel):
    """
    Schema for returning invoice rows to clients.

    Example:
        {
            "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
            "customer_id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
            "amount": 1550,
            "status": "pending",
            "date": "2026-10-16"
        }
    """

    id: UUID
    customer_id: UUID
    amount: int = Field(..., description="Amount in cents")
    status: InvoiceStatus
    date: date


class ActionState(BaseModel):
    """
    Result of a form action.

    An empty state (no message, no errors) means the action succeeded and
    the caller was redirected. Field errors are keyed by form field name.
    """

    message: str | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors and self.message is None
