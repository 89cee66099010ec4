# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService, CredentialsProvider, SupabaseCredentialsProvider
from .effects import ActionEffects, RequestEffects
from .invoice_service import InvoiceService

__all__ = [
    "AuthService",
    "CredentialsProvider",
    "SupabaseCredentialsProvider",
    "ActionEffects",
    "RequestEffects",
    "InvoiceService",
]
