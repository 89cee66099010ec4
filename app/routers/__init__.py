# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - invoices.py: Invoice form actions, listing and JSON delete
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import invoices

__all__ = [
    "health",
    "invoices",
]
