# =============================================================================
# core/validation.py - Form Validation
# =============================================================================
# Pure functions that turn a raw form submission into either a typed record
# or a set of per-field error messages:
# - check_payload_size: reject oversized submissions before any parsing
# - check_invoice_id: ids must be hyphenated UUIDs
# - validate_form: run a pydantic schema and collect field messages
#
# None of these functions raise on bad input; they return a result the
# caller inspects.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from lib.utils import is_valid_uuid, serialized_size

T = TypeVar("T", bound=BaseModel)

PAYLOAD_TOO_LARGE_MESSAGE = "Payload too large."
INVALID_ID_MESSAGE = "Invalid ID format"

DEFAULT_MAX_PAYLOAD_BYTES = 1024


@dataclass
class ValidationResult(Generic[T]):
    """
    Tagged outcome of validating a form.

    Exactly one of data (success) or errors/message (failure) is meaningful.
    """

    success: bool
    data: T | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ValidationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        errors: dict[str, list[str]] | None = None,
        message: str | None = None,
    ) -> "ValidationResult[T]":
        return cls(success=False, errors=errors or {}, message=message)


def check_payload_size(
    form: Mapping[str, Any],
    max_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
) -> bool:
    """
    Check that a submission fits in max_bytes once urlencoded.

    Args:
        form: Raw form fields
        max_bytes: Size limit (default 1 KB)

    Returns:
        True if the submission is within the limit
    """
    return serialized_size(dict(form)) <= max_bytes


def check_invoice_id(invoice_id: Any) -> bool:
    """Check that an invoice id is a well-formed UUID."""
    return is_valid_uuid(invoice_id)


def _field_message(schema: type[BaseModel], error: dict[str, Any]) -> tuple[str, str]:
    """Map one pydantic error to (field name, user-facing message)."""
    loc = error.get("loc") or ("__root__",)
    field_name = str(loc[0])
    messages: dict[str, str] = getattr(schema, "error_messages", {})

    message = (
        messages.get(f"{field_name}.{error.get('type')}")
        or messages.get(field_name)
        or error.get("msg", "Invalid value.")
    )
    return field_name, message


def validate_form(schema: type[T], form: Mapping[str, Any]) -> ValidationResult[T]:
    """
    Validate raw form values against a pydantic schema.

    Args:
        schema: Model class; may define an `error_messages` ClassVar
        form: Field name -> raw (string) value

    Returns:
        ValidationResult with the parsed model, or per-field messages

    Example:
        result = validate_form(InvoiceForm, {"customerId": "", "amount": "0"})
        result.errors
        # {"customerId": ["Please select a customer."],
        #  "amount": ["Please enter an amount greater than $0."],
        #  "status": ["Please select an invoice status."]}
    """
    try:
        return ValidationResult.ok(schema.model_validate(dict(form)))
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            field_name, message = _field_message(schema, error)
            field_errors = errors.setdefault(field_name, [])
            if message not in field_errors:
                field_errors.append(message)
        return ValidationResult.fail(errors=errors)


def validate_submission(
    schema: type[T],
    form: Mapping[str, Any],
    max_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
) -> ValidationResult[T]:
    """
    Size guard followed by schema validation.

    Oversized submissions fail with PAYLOAD_TOO_LARGE_MESSAGE and the schema
    is never consulted.
    """
    if not check_payload_size(form, max_bytes):
        return ValidationResult.fail(message=PAYLOAD_TOO_LARGE_MESSAGE)
    return validate_form(schema, form)
