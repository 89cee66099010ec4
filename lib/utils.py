# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
from urllib.parse import urlencode
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

# Canonical hyphenated form only (8-4-4-4-12). uuid.UUID() alone would also
# accept braces, urn: prefixes and unhyphenated hex.
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        invoice_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        invoice_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def is_valid_uuid(value: object) -> bool:
    """Check that value is a syntactically valid, hyphenated UUID string."""
    if isinstance(value, UUID):
        return True
    return isinstance(value, str) and _UUID_PATTERN.fullmatch(value) is not None


# =============================================================================
# Form Utilities
# =============================================================================

def serialized_size(form: dict[str, object]) -> int:
    """
    Size in bytes of a form submission once urlencoded.

    This is the number used by the payload size guard, so it counts
    exactly what the browser would send as application/x-www-form-urlencoded.
    """
    pairs = [(key, "" if value is None else str(value)) for key, value in form.items()]
    return len(urlencode(pairs).encode("utf-8"))
