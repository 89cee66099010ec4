# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the InvoiceDesk API:
# - test_validation.py: Payload size, id format and form field checks
# - test_models.py: Pydantic model behaviour (cents conversion, credentials)
# - test_invoice_service.py: Create/update/delete actions with mocked Supabase
# - test_auth_service.py: Login error mapping with fake providers
# - test_supabase_client.py: Query building against a mocked Supabase client
# - test_route_cache.py: Redis route cache with a mocked Redis client
# - test_api.py: HTTP layer (routes, middleware, exception handlers)
#
# Run tests with: poetry run pytest
# =============================================================================
