# =============================================================================
# core/services/invoice_service.py - Invoice Form Actions
# =============================================================================
# Handles invoice create/update/delete submissions.
# Each action is one linear pipeline:
#   validate -> (reject | one statement -> revalidate listing -> respond)
#
# Database errors are logged with context and reported to the caller as a
# fixed "Database Error: ..." message. Raw errors never reach the caller.
# =============================================================================

import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping

from app.config import settings
from app.exceptions import InvalidInvoiceIdError, InvoiceDatabaseError, InvoiceDeskException
from core.models.invoice import ActionState, InvoiceForm
from core.services.effects import ActionEffects
from core.validation import (
    INVALID_ID_MESSAGE,
    PAYLOAD_TOO_LARGE_MESSAGE,
    check_invoice_id,
    check_payload_size,
    validate_form,
    validate_submission,
)
from lib.monitoring import with_monitoring
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

CREATE_MISSING_FIELDS = "Missing Fields. Failed to Create Invoice."
UPDATE_MISSING_FIELDS = "Missing Fields. Failed to Update Invoice."
CREATE_FAILED = "Database Error: Failed to Create Invoice."
UPDATE_FAILED = "Database Error: Failed to Update Invoice."
DELETE_FAILED = "Database Error: Failed to Delete Invoice."
DELETED = "Deleted Invoice."


def _today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


class InvoiceService:
    """
    Service for invoice form actions.

    Dependencies are injected so the actions stay framework agnostic:
    - effects: cache invalidation and redirect (see core.services.effects)
    - db: Supabase wrapper (class with insert/update/delete_invoice)
    - log: observability sink, defaults to this module's logger

    Example:
        service = InvoiceService(effects=RequestEffects(route_cache))
        state = service.create_invoice(
            {"customerId": "3958dc9e-...", "amount": "15.50", "status": "pending"}
        )
    """

    def __init__(
        self,
        effects: ActionEffects,
        db: Any = SupabaseClient,
        log: logging.Logger | None = None,
        invoices_route: str | None = None,
        max_payload_bytes: int | None = None,
    ):
        self.effects = effects
        self.db = db
        self.log = log or logger
        self.invoices_route = invoices_route or settings.INVOICES_ROUTE
        self.max_payload_bytes = max_payload_bytes or settings.max_payload_size_bytes

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @with_monitoring("createInvoice")
    def create_invoice(self, form: Mapping[str, Any]) -> ActionState:
        """
        Create an invoice from a form submission.

        On success the listing route is revalidated, a redirect to it is
        requested and an empty ActionState is returned.

        Args:
            form: Raw fields customerId, amount, status

        Returns:
            ActionState (empty on success)
        """
        result = validate_submission(InvoiceForm, form, self.max_payload_bytes)
        if not result.success:
            return ActionState(
                message=result.message or CREATE_MISSING_FIELDS,
                errors=result.errors,
            )

        invoice = result.data
        row = {**invoice.to_row(), "date": _today().isoformat()}

        try:
            self.db.insert_invoice(row)
        except SupabaseClientError as e:
            self.log.error(
                f"Failed to create invoice for customer {invoice.customer_id}: {e}"
            )
            return ActionState(message=CREATE_FAILED)

        self.log.info(
            f"Created invoice for customer {invoice.customer_id} ({row['amount']} cents)"
        )
        self.effects.revalidate_path(self.invoices_route)
        self.effects.redirect(self.invoices_route)
        return ActionState()

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @with_monitoring("updateInvoice")
    def update_invoice(self, invoice_id: Any, form: Mapping[str, Any]) -> ActionState:
        """
        Update an existing invoice in place.

        The size guard runs first, then the id is checked before any form
        field; a malformed id never reaches the database.

        Args:
            invoice_id: Invoice UUID taken from the route path
            form: Raw fields customerId, amount, status

        Returns:
            ActionState (empty on success)
        """
        if not check_payload_size(form, self.max_payload_bytes):
            return ActionState(message=PAYLOAD_TOO_LARGE_MESSAGE)

        if not check_invoice_id(invoice_id):
            return ActionState(message=INVALID_ID_MESSAGE)

        result = validate_form(InvoiceForm, form)
        if not result.success:
            return ActionState(message=UPDATE_MISSING_FIELDS, errors=result.errors)

        try:
            self.db.update_invoice(invoice_id, result.data.to_row())
        except SupabaseClientError as e:
            self.log.error(f"Failed to update invoice {invoice_id}: {e}")
            return ActionState(message=UPDATE_FAILED)

        self.log.info(f"Updated invoice {invoice_id}")
        self.effects.revalidate_path(self.invoices_route)
        self.effects.redirect(self.invoices_route)
        return ActionState()

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def _delete(self, invoice_id: Any) -> None:
        """
        Delete an invoice, raising on a bad id or a database failure.

        Raises:
            InvalidInvoiceIdError: If invoice_id is not a well-formed UUID
            InvoiceDatabaseError: If the delete statement fails
        """
        if not check_invoice_id(invoice_id):
            raise InvalidInvoiceIdError(str(invoice_id))

        try:
            self.db.delete_invoice(invoice_id)
        except SupabaseClientError as e:
            self.log.error(f"Failed to delete invoice {invoice_id}: {e}")
            raise InvoiceDatabaseError(DELETE_FAILED, operation="delete") from e

        self.log.info(f"Deleted invoice {invoice_id}")
        self.effects.revalidate_path(self.invoices_route)

    @with_monitoring("deleteInvoice")
    def delete_invoice(self, invoice_id: Any) -> ActionState:
        """
        Delete an invoice and report the outcome as a message.

        No redirect is requested. Deleting a well-formed id that matches no
        row still reports success.
        """
        try:
            self._delete(invoice_id)
        except InvoiceDeskException as e:
            return ActionState(message=e.message)
        return ActionState(message=DELETED)

    @with_monitoring("deleteInvoiceStrict")
    def delete_invoice_or_raise(self, invoice_id: Any) -> None:
        """
        Delete an invoice for callers that expect exceptions.

        Same mutation as delete_invoice(); failures surface as
        InvalidInvoiceIdError or InvoiceDatabaseError.
        """
        self._delete(invoice_id)
