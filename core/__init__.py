# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for form and row validation
# - validation.py: Payload size, id format and form field checks
# - services/: Invoice and login actions
#
# Code in this package never touches Request or Response objects.
# This keeps the logic testable and reusable.
# =============================================================================
