# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - invoice.py: Invoice form, invoice rows and action results
# - auth.py: Login credentials and sessions
#
# These models define the "contract" between API and clients.
# =============================================================================

from .invoice import (
    MAX_INVOICE_AMOUNT,
    ActionState,
    Invoice,
    InvoiceForm,
    InvoiceStatus,
)
from .auth import (
    AuthSession,
    LoginCredentials,
    LoginResult,
)

__all__ = [
    # Invoice
    "MAX_INVOICE_AMOUNT",
    "ActionState",
    "Invoice",
    "InvoiceForm",
    "InvoiceStatus",
    # Auth
    "AuthSession",
    "LoginCredentials",
    "LoginResult",
]
