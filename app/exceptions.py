# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a hint on
# how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class InvoiceDeskException(Exception):
    """
    Base exception for the InvoiceDesk API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "INVOICEDESK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Invoice Exceptions
# =============================================================================

class InvalidInvoiceIdError(InvoiceDeskException):
    """Raised when an invoice id is not a well-formed UUID."""

    def __init__(self, invoice_id: str):
        super().__init__(
            message="Invalid ID format",
            code="INVALID_INVOICE_ID",
            status_code=400,
            suggestion="Invoice ids are hyphenated UUIDs (8-4-4-4-12 hex digits)",
            details={"invoice_id": invoice_id}
        )


class InvoiceDatabaseError(InvoiceDeskException):
    """Raised when the invoices table rejects a statement."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            code="INVOICE_DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def invoicedesk_exception_handler(
    request: Request,
    exc: InvoiceDeskException
) -> JSONResponse:
    """
    Convert InvoiceDeskException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
