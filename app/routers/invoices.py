# =============================================================================
# app/routers/invoices.py - Invoice Form Endpoints
# =============================================================================
# Form actions for the invoices dashboard plus the cached listing.
# All endpoints require authentication.
#
# Successful create/update answer with a 303 redirect to the listing.
# Failed actions answer with the ActionState as JSON.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from app.auth import get_current_user
from app.config import settings
from app.dependencies import FormDep, InvoiceServiceDep, RouteCacheDep, SupabaseDep
from core.models.invoice import ActionState, Invoice
from core.services.invoice_service import DELETED
from core.validation import INVALID_ID_MESSAGE, PAYLOAD_TOO_LARGE_MESSAGE

# Form actions, mounted under the invoices listing route
router = APIRouter(dependencies=[Depends(get_current_user)])

# JSON API variant that raises instead of returning a message
api_router = APIRouter(dependencies=[Depends(get_current_user)])

InvoiceIdPath = Annotated[str, Path(description="Invoice UUID")]


def _status_for(state: ActionState) -> int:
    """HTTP status for a failed action."""
    if state.message == PAYLOAD_TOO_LARGE_MESSAGE:
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    if state.message == INVALID_ID_MESSAGE:
        return status.HTTP_400_BAD_REQUEST
    if state.errors:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _action_response(state: ActionState, location: str | None) -> Response:
    if state.ok and location:
        return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(status_code=_status_for(state), content=state.model_dump())


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Invoice])
async def list_invoices(db: SupabaseDep, route_cache: RouteCacheDep):
    """
    List invoices, newest first.

    Served from the route cache until a mutation revalidates it. A listing
    read while a mutation lands is returned but not cached.
    """
    cached = route_cache.get(settings.INVOICES_ROUTE)
    if cached is not None:
        return cached

    generation = route_cache.generation(settings.INVOICES_ROUTE)
    invoices = db.fetch_invoices()
    route_cache.set(settings.INVOICES_ROUTE, invoices, generation=generation)
    return invoices


@router.post("")
async def create_invoice(form: FormDep, service: InvoiceServiceDep):
    """
    Create an invoice from form fields customerId, amount (dollars), status.
    """
    state = service.create_invoice(form)
    return _action_response(state, service.effects.location)


@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: InvoiceIdPath,
    form: FormDep,
    service: InvoiceServiceDep,
):
    """
    Update an invoice. The id comes from the path, the fields from the form.
    """
    state = service.update_invoice(invoice_id, form)
    return _action_response(state, service.effects.location)


@router.post("/{invoice_id}/delete")
async def delete_invoice(invoice_id: InvoiceIdPath, service: InvoiceServiceDep):
    """
    Delete an invoice and return a status message (no redirect).
    """
    state = service.delete_invoice(invoice_id)
    if state.message != DELETED:
        return JSONResponse(status_code=_status_for(state), content=state.model_dump())
    return state


@api_router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice_strict(invoice_id: InvoiceIdPath, service: InvoiceServiceDep):
    """
    Delete an invoice.

    Errors are raised and rendered by the InvoiceDeskException handler
    (400 for a malformed id, 500 for a database failure).
    """
    service.delete_invoice_or_raise(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
