# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for invoice and auth calls
# - route_cache.py: Redis-backed cache of route payloads
# - monitoring.py: Timing/error logging decorator
# - utils.py: UUID and form helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.route_cache import RouteCache
from lib.monitoring import with_monitoring
from lib.utils import is_valid_uuid, normalize_uuid, serialized_size

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Cache
    "RouteCache",
    # Monitoring
    "with_monitoring",
    # Utils
    "is_valid_uuid",
    "normalize_uuid",
    "serialized_size",
]
